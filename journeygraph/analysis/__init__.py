"""Day inference, layout and marker analysis for journey graphs."""

from journeygraph.analysis.day_inference import (
    day_increment,
    infer_days,
)
from journeygraph.analysis.layout import (
    apply_layout,
    group_by_day,
    plan_layout,
)
from journeygraph.analysis.day_markers import (
    DayMarkerEdge,
    DayMarkerNode,
    MarkerCache,
    MarkerSet,
    synthesize_markers,
)
from journeygraph.analysis.journey_summary import (
    JourneyAnalysis,
    analysis_to_dict,
    analyze_graph,
    day_one_entry_nodes,
    nodes_by_day,
    stale_day_hints,
)
from journeygraph.analysis.analyze_journey import (
    format_analysis,
    load_journey_record,
)

__all__ = [
    # day inference
    "day_increment",
    "infer_days",
    # layout
    "apply_layout",
    "group_by_day",
    "plan_layout",
    # markers
    "DayMarkerEdge",
    "DayMarkerNode",
    "MarkerCache",
    "MarkerSet",
    "synthesize_markers",
    # pipeline
    "JourneyAnalysis",
    "analysis_to_dict",
    "analyze_graph",
    "day_one_entry_nodes",
    "nodes_by_day",
    "stale_day_hints",
    # cli helpers
    "format_analysis",
    "load_journey_record",
]
