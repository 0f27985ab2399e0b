"""One-call analysis of a journey graph.

Runs day inference, the clean layout and marker synthesis on a snapshot
and collects what the editor sidebar and the scheduler need.
"""

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field

from journeygraph.analysis.day_inference import infer_days
from journeygraph.analysis.day_markers import MarkerSet, synthesize_markers
from journeygraph.analysis.layout import plan_layout
from journeygraph.config import LayoutSettings
from journeygraph.models import DayAssignment, JourneyGraph, LayoutResult
from journeygraph.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class JourneyAnalysis:
    """Everything derived from one journey snapshot."""

    days: DayAssignment
    nodes_by_day: dict[int, list[str]]
    layout: LayoutResult
    markers: MarkerSet
    entry_nodes: list[str] = field(default_factory=list)
    stale_hints: list[str] = field(default_factory=list)


def nodes_by_day(graph: JourneyGraph, days: DayAssignment) -> dict[int, list[str]]:
    """Node ids grouped by day, days ascending, graph order inside a day."""
    grouped: dict[int, list[str]] = {}
    for node in graph.nodes:
        if node.id in days:
            grouped.setdefault(days[node.id], []).append(node.id)
    return {day: grouped[day] for day in sorted(grouped)}


def day_one_entry_nodes(graph: JourneyGraph) -> list[str]:
    """Entry nodes that start on day 1: roots with no day hint or a hint of 1."""
    return [
        node.id
        for node in graph.root_nodes()
        if node.explicit_day is None or node.explicit_day == 1
    ]


def stale_day_hints(graph: JourneyGraph, days: DayAssignment) -> list[str]:
    """Nodes whose stored day hint is missing or disagrees with ``days``."""
    return [
        node.id
        for node in graph.nodes
        if node.id in days and node.explicit_day != days[node.id]
    ]


def analyze_graph(
    graph: JourneyGraph,
    collapsed_days: Iterable[int] = (),
    settings: LayoutSettings | None = None,
) -> JourneyAnalysis:
    """Run the full pipeline on a graph snapshot.

    Markers are positioned against the planned layout, matching what the
    editor shows right after a clean layout.
    """
    settings = settings or LayoutSettings()
    days = infer_days(graph)
    layout = plan_layout(graph, days, settings)
    markers = synthesize_markers(graph, days, collapsed_days, positions=layout, settings=settings)

    analysis = JourneyAnalysis(
        days=days,
        nodes_by_day=nodes_by_day(graph, days),
        layout=layout,
        markers=markers,
        entry_nodes=day_one_entry_nodes(graph),
        stale_hints=stale_day_hints(graph, days),
    )
    logger.info(
        "analyzed journey: %d node(s), %d day(s), %d marker(s)",
        len(graph.nodes),
        len(analysis.nodes_by_day),
        len(markers.marker_nodes),
    )
    return analysis


def analysis_to_dict(analysis: JourneyAnalysis) -> dict:
    """Convert a JourneyAnalysis to a JSON-serializable dict."""
    return {
        "days": dict(analysis.days),
        # json object keys must be strings
        "nodes_by_day": {str(day): ids for day, ids in analysis.nodes_by_day.items()},
        "layout": {
            node_id: position.model_dump() for node_id, position in analysis.layout.items()
        },
        "markers": {
            "marker_nodes": [
                {**asdict(marker), "position": marker.position.model_dump()}
                for marker in analysis.markers.marker_nodes
            ],
            "marker_edges": [asdict(edge) for edge in analysis.markers.marker_edges],
        },
        "entry_nodes": list(analysis.entry_nodes),
        "stale_hints": list(analysis.stale_hints),
    }
