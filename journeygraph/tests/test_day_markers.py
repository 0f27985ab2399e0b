"""Tests for end-of-day marker synthesis."""

from journeygraph.analysis.day_inference import infer_days
from journeygraph.analysis.day_markers import MarkerCache, synthesize_markers
from journeygraph.analysis.layout import plan_layout
from journeygraph.config import LayoutSettings
from journeygraph.models import ActionNode, Edge, JourneyGraph, Position, TimeDelayNode, TimeDelayUnit
from journeygraph.utils.identifiers import edge_id, is_marker_id


def _edge(source: str, target: str) -> Edge:
    return Edge(id=edge_id(source, target), source_node_id=source, target_node_id=target)


def _at(node_id: str, x: float, y: float) -> ActionNode:
    return ActionNode(id=node_id, position=Position(x=x, y=y))


def _two_day_graph() -> JourneyGraph:
    return JourneyGraph(
        nodes=[
            ActionNode(id="A"),
            TimeDelayNode(id="D1", delay_unit=TimeDelayUnit.DAYS, delay_value=1),
            ActionNode(id="B"),
        ],
        edges=[_edge("A", "D1"), _edge("D1", "B")],
    )


class TestSynthesizeMarkers:
    """Test marker placement and selection of a day's last node."""

    def test_one_marker_per_day(self):
        graph = _two_day_graph()
        days = infer_days(graph)
        layout = plan_layout(graph, days)
        markers = synthesize_markers(graph, days, positions=layout)

        assert [m.day for m in markers.marker_nodes] == [1, 2]
        day_one, day_two = markers.marker_nodes
        # D1 only links to day 2, so it ends day 1
        assert markers.marker_edges[0].source_node_id == "D1"
        assert day_one.position == Position(x=400, y=450)
        assert markers.marker_edges[1].source_node_id == "B"
        assert day_two.position == Position(x=900, y=250)

    def test_marker_ids_and_flags(self):
        graph = _two_day_graph()
        markers = synthesize_markers(graph, infer_days(graph))
        for marker, edge in zip(markers.marker_nodes, markers.marker_edges):
            assert is_marker_id(marker.id)
            assert is_marker_id(edge.id)
            assert edge.target_node_id == marker.id
            assert marker.is_start is False

    def test_collapsed_days_are_skipped(self):
        graph = _two_day_graph()
        markers = synthesize_markers(graph, infer_days(graph), collapsed_days={1})
        assert [m.day for m in markers.marker_nodes] == [2]
        assert [e.source_node_id for e in markers.marker_edges] == ["B"]

    def test_lowest_terminal_node_wins(self):
        graph = JourneyGraph(nodes=[_at("high", 0, 100), _at("low", 0, 400), _at("mid", 0, 200)])
        markers = synthesize_markers(graph, infer_days(graph))
        assert markers.marker_edges[0].source_node_id == "low"
        assert markers.marker_nodes[0].position == Position(x=0, y=550)

    def test_terminal_preferred_over_lower_node(self):
        """A node with an in-day successor loses to a terminal node above it."""
        graph = JourneyGraph(
            nodes=[_at("bottom", 0, 900), _at("end", 0, 100)],
            edges=[_edge("bottom", "end")],
        )
        markers = synthesize_markers(graph, {"bottom": 1, "end": 1})
        assert markers.marker_edges[0].source_node_id == "end"

    def test_cycle_falls_back_to_lowest_node(self):
        graph = JourneyGraph(
            nodes=[_at("A", 0, 50), _at("B", 0, 80)],
            edges=[_edge("A", "B"), _edge("B", "A")],
        )
        markers = synthesize_markers(graph, {"A": 1, "B": 1})
        assert markers.marker_edges[0].source_node_id == "B"

    def test_ties_go_to_first_node(self):
        graph = JourneyGraph(nodes=[_at("first", 0, 100), _at("second", 50, 100)])
        markers = synthesize_markers(graph, infer_days(graph))
        assert markers.marker_edges[0].source_node_id == "first"

    def test_positions_override_node_positions(self):
        graph = JourneyGraph(nodes=[_at("A", 0, 500), _at("B", 0, 100)])
        positions = {"A": Position(x=10, y=0), "B": Position(x=20, y=300)}
        markers = synthesize_markers(graph, infer_days(graph), positions=positions)
        assert markers.marker_edges[0].source_node_id == "B"
        assert markers.marker_nodes[0].position == Position(x=20, y=450)

    def test_custom_offset(self):
        graph = JourneyGraph(nodes=[_at("A", 5, 10)])
        markers = synthesize_markers(
            graph, infer_days(graph), settings=LayoutSettings(marker_offset=40)
        )
        assert markers.marker_nodes[0].position == Position(x=5, y=50)

    def test_empty_graph(self):
        markers = synthesize_markers(JourneyGraph(), {})
        assert markers.marker_nodes == []
        assert markers.marker_edges == []


class TestMarkerCache:
    """Test memoization of marker synthesis."""

    def test_reuses_markers_for_same_snapshot(self):
        cache = MarkerCache()
        graph = _two_day_graph()
        days = infer_days(graph)

        first = cache.get(graph, days)
        second = cache.get(graph, days)

        assert second == first
        assert cache.hits == 1
        assert cache.misses == 1

    def test_returned_markers_can_be_modified(self):
        cache = MarkerCache()
        graph = _two_day_graph()
        days = infer_days(graph)

        first = cache.get(graph, days)
        first.marker_nodes.clear()
        first.marker_edges.pop()
        second = cache.get(graph, days)

        assert cache.hits == 1
        assert [m.day for m in second.marker_nodes] == [1, 2]
        assert len(second.marker_edges) == 2

    def test_recomputes_when_positions_change(self):
        cache = MarkerCache()
        graph = _two_day_graph()
        days = infer_days(graph)
        cache.get(graph, days)

        moved = cache.get(graph, days, positions={"B": Position(x=0, y=999)})

        assert cache.misses == 2
        assert moved.marker_nodes[1].position.y == 999 + 150

    def test_recomputes_when_collapsed_days_change(self):
        cache = MarkerCache()
        graph = _two_day_graph()
        days = infer_days(graph)
        cache.get(graph, days)

        collapsed = cache.get(graph, days, collapsed_days=[2])

        assert cache.misses == 2
        assert [m.day for m in collapsed.marker_nodes] == [1]

    def test_clear(self):
        cache = MarkerCache()
        graph = _two_day_graph()
        days = infer_days(graph)
        cache.get(graph, days)
        cache.clear()
        cache.get(graph, days)
        assert cache.misses == 2
