"""Clean layout: one column per day, nodes stacked top to bottom.

Columns are ordered by ascending day. Inside a column, nodes are placed by
a breadth-first walk that only follows edges between nodes of the same day.
"""

from collections import deque

from journeygraph.config import LayoutSettings
from journeygraph.errors import LayoutIncompleteError
from journeygraph.models import DayAssignment, JourneyGraph, JourneyNode, LayoutResult, Position
from journeygraph.utils.logging import get_logger

logger = get_logger(__name__)


def group_by_day(graph: JourneyGraph, days: DayAssignment) -> dict[int, list[JourneyNode]]:
    """Group nodes by day, ascending, keeping graph order inside a day.

    Nodes missing from ``days`` are grouped under day 1.
    """
    groups: dict[int, list[JourneyNode]] = {}
    for node in graph.nodes:
        day = days.get(node.id)
        if day is None:
            logger.warning("node %s has no day assigned, laying it out in day 1", node.id)
            day = 1
        groups.setdefault(day, []).append(node)
    return {day: groups[day] for day in sorted(groups)}


def _layout_day(
    graph: JourneyGraph,
    day_nodes: list[JourneyNode],
    x: float,
    settings: LayoutSettings,
    positions: LayoutResult,
) -> None:
    in_day = {node.id for node in day_nodes}
    spacing = settings.vertical_spacing

    roots = [
        node
        for node in day_nodes
        if not any(e.source_node_id in in_day for e in graph.incoming_edges(node.id))
    ]
    if not roots:
        roots = [day_nodes[0]]

    y_by_id: dict[str, float] = {}
    queue: deque[str] = deque()
    for index, root in enumerate(roots):
        y_by_id[root.id] = settings.start_y + index * spacing
        queue.append(root.id)

    while queue:
        node_id = queue.popleft()
        parent_y = y_by_id[node_id]
        offset = 0
        for child_id in graph.successor_ids(node_id):
            if child_id not in in_day or child_id in y_by_id:
                continue
            offset += 1
            y_by_id[child_id] = parent_y + offset * spacing
            queue.append(child_id)

    for node in day_nodes:
        if node.id in y_by_id:
            continue
        # disconnected inside the day: stack below whatever is there
        y_by_id[node.id] = max(y_by_id.values()) + spacing

    for node in day_nodes:
        positions[node.id] = Position(x=x, y=y_by_id[node.id])


def _missing_nodes(graph: JourneyGraph, layout: LayoutResult) -> list[str]:
    return [node.id for node in graph.nodes if node.id not in layout]


def plan_layout(
    graph: JourneyGraph,
    days: DayAssignment,
    settings: LayoutSettings | None = None,
) -> LayoutResult:
    """Arrange nodes into side-by-side day columns.

    Args:
        graph: the journey snapshot.
        days: day of every node, usually from infer_days.
        settings: layout geometry; defaults to LayoutSettings().

    Returns:
        A position for every node of the graph.

    Raises:
        LayoutIncompleteError: if any node ended up without a position.
    """
    settings = settings or LayoutSettings()
    positions: LayoutResult = {}

    for column_index, (day, day_nodes) in enumerate(group_by_day(graph, days).items()):
        x = settings.column_center(column_index)
        _layout_day(graph, day_nodes, x, settings, positions)
        logger.debug("day %d: %d node(s) in column %d", day, len(day_nodes), column_index)

    missing = _missing_nodes(graph, positions)
    if missing:
        logger.critical("CRITICAL: layout lost %d node(s): %s", len(missing), missing)
        raise LayoutIncompleteError(missing)

    return {node.id: positions[node.id] for node in graph.nodes}


def apply_layout(graph: JourneyGraph, layout: LayoutResult) -> JourneyGraph:
    """Return a copy of the graph with node positions taken from the layout.

    The layout is applied all-or-nothing: if it misses any node, nothing is
    applied and LayoutIncompleteError is raised.
    """
    missing = _missing_nodes(graph, layout)
    if missing:
        logger.critical(
            "CRITICAL: refusing to apply layout, %d node(s) would be lost: %s",
            len(missing),
            missing,
        )
        raise LayoutIncompleteError(missing)

    nodes = [
        node.model_copy(update={"position": layout[node.id].model_copy()})
        for node in graph.nodes
    ]
    return JourneyGraph(nodes=nodes, edges=[edge.model_copy() for edge in graph.edges])
