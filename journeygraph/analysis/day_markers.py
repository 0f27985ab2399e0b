"""Synthetic end-of-day markers for the journey canvas.

Markers are visual only. Their ids carry the ``day-marker-`` prefix so the
persistence layer can drop them before a journey is saved.
"""

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from journeygraph.config import LayoutSettings
from journeygraph.models import DayAssignment, JourneyGraph, JourneyNode, Position
from journeygraph.utils.identifiers import marker_edge_id, marker_node_id


@dataclass
class DayMarkerNode:
    """Marker placed under the last node of a day."""

    id: str
    day: int
    position: Position
    is_start: bool = False


@dataclass
class DayMarkerEdge:
    """Edge from a day's last node to its marker."""

    id: str
    source_node_id: str
    target_node_id: str


@dataclass
class MarkerSet:
    """Markers produced for one graph snapshot."""

    marker_nodes: list[DayMarkerNode] = field(default_factory=list)
    marker_edges: list[DayMarkerEdge] = field(default_factory=list)


def _position_of(node: JourneyNode, positions: Mapping[str, Position] | None) -> Position:
    if positions is not None and node.id in positions:
        return positions[node.id]
    return node.position


def _last_node_of_day(
    graph: JourneyGraph,
    day_nodes: list[JourneyNode],
    positions: Mapping[str, Position] | None,
) -> JourneyNode:
    """Pick the node that ends a day.

    Prefers nodes without an outgoing edge inside the same day; among those
    (or among all nodes, when every node has one) the lowest on the canvas
    wins, earliest in graph order on ties.
    """
    in_day = {node.id for node in day_nodes}
    terminal = [
        node
        for node in day_nodes
        if not any(target in in_day for target in graph.successor_ids(node.id))
    ]
    candidates = terminal or day_nodes
    return max(candidates, key=lambda node: _position_of(node, positions).y)


def synthesize_markers(
    graph: JourneyGraph,
    days: DayAssignment,
    collapsed_days: Iterable[int] = (),
    positions: Mapping[str, Position] | None = None,
    settings: LayoutSettings | None = None,
) -> MarkerSet:
    """Build one end-of-day marker node and edge per visible day.

    Args:
        graph: the journey snapshot.
        days: day of every node.
        collapsed_days: days folded in the sidebar; they get no marker.
        positions: optional positions (e.g. a planned layout) overriding the
            positions stored on the nodes.
        settings: provides the vertical marker offset.
    """
    settings = settings or LayoutSettings()
    collapsed = set(collapsed_days)

    by_day: dict[int, list[JourneyNode]] = {}
    for node in graph.nodes:
        if node.id in days:
            by_day.setdefault(days[node.id], []).append(node)

    markers = MarkerSet()
    for day in sorted(by_day):
        if day in collapsed:
            continue
        last = _last_node_of_day(graph, by_day[day], positions)
        anchor = _position_of(last, positions)
        marker_id = marker_node_id(day)
        markers.marker_nodes.append(DayMarkerNode(
            id=marker_id,
            day=day,
            position=Position(x=anchor.x, y=anchor.y + settings.marker_offset),
        ))
        markers.marker_edges.append(DayMarkerEdge(
            id=marker_edge_id(day),
            source_node_id=last.id,
            target_node_id=marker_id,
        ))
    return markers


class MarkerCache:
    """Remembers the markers of the last snapshot seen.

    Recomputes only when node ids, positions, days, edges or collapsed days
    change. Every call returns a fresh copy of the cached markers.
    """

    def __init__(self, settings: LayoutSettings | None = None) -> None:
        self.settings = settings or LayoutSettings()
        self._key: tuple | None = None
        self._markers: MarkerSet | None = None
        self.hits = 0
        self.misses = 0

    def _make_key(
        self,
        graph: JourneyGraph,
        days: DayAssignment,
        collapsed_days: Iterable[int],
        positions: Mapping[str, Position] | None,
    ) -> tuple:
        node_part = []
        for node in graph.nodes:
            position = _position_of(node, positions)
            node_part.append((node.id, position.x, position.y, days.get(node.id)))
        edge_part = tuple((e.source_node_id, e.target_node_id) for e in graph.edges)
        return (tuple(node_part), edge_part, frozenset(collapsed_days))

    def get(
        self,
        graph: JourneyGraph,
        days: DayAssignment,
        collapsed_days: Iterable[int] = (),
        positions: Mapping[str, Position] | None = None,
    ) -> MarkerSet:
        collapsed_days = tuple(collapsed_days)
        key = self._make_key(graph, days, collapsed_days, positions)
        if key == self._key and self._markers is not None:
            self.hits += 1
            return copy.deepcopy(self._markers)

        self.misses += 1
        self._markers = synthesize_markers(
            graph, days, collapsed_days, positions=positions, settings=self.settings
        )
        self._key = key
        return copy.deepcopy(self._markers)

    def clear(self) -> None:
        self._key = None
        self._markers = None
