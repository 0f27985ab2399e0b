"""Infer which journey day every node belongs to.

Days are propagated forward from the root nodes. A TIME_DELAY node whose
unit is DAYS marks the end of its own day; the nodes after it start
``delay_value`` days later. Explicit day hints always win and re-seed the
propagation from their own day.

When a node is reachable along paths that arrive at different days, the
path processed first by the FIFO queue decides its day.
"""

import math
from collections import deque

from journeygraph.models import DayAssignment, JourneyGraph, JourneyNode, NodeKind, TimeDelayUnit
from journeygraph.utils.logging import get_logger

logger = get_logger(__name__)

FIRST_DAY = 1


def day_increment(node: JourneyNode) -> int:
    """Number of days a node pushes its successors forward.

    Only TIME_DELAY nodes with a DAYS unit advance the day. Missing,
    non-finite or negative delay values count as 0.
    """
    if node.kind != NodeKind.TIME_DELAY or node.delay_unit != TimeDelayUnit.DAYS:
        return 0
    value = node.delay_value
    if value is None or not math.isfinite(value) or value < 0:
        return 0
    return int(value)


def _propagate(
    graph: JourneyGraph,
    seeds: list[tuple[str, int]],
    days: DayAssignment,
    visited: set[str],
) -> None:
    """Breadth-first day propagation from the given (node_id, day) seeds."""
    queue: deque[tuple[str, int]] = deque(seeds)

    while queue:
        node_id, day = queue.popleft()
        if node_id in visited:
            continue
        visited.add(node_id)

        node = graph.node_by_id(node_id)
        if node is None:
            continue

        if node.explicit_day is not None:
            # explicit hints are seeds, never overwritten
            day = node.explicit_day
        days[node_id] = day

        next_day = day + day_increment(node)
        for next_id in graph.successor_ids(node_id):
            if next_id not in visited:
                queue.append((next_id, next_day))


def infer_days(graph: JourneyGraph) -> DayAssignment:
    """Compute the day of every node in the graph.

    Args:
        graph: the journey snapshot to analyze.

    Returns:
        Mapping of node id to day (>= 1), covering every node once, in
        graph node order. An empty graph yields an empty mapping.
    """
    days: DayAssignment = {}

    # explicit override pass
    for node in graph.nodes:
        if node.explicit_day is not None:
            days[node.id] = node.explicit_day

    visited: set[str] = set()

    root_seeds = [
        (node.id, node.explicit_day if node.explicit_day is not None else FIRST_DAY)
        for node in graph.root_nodes()
    ]
    _propagate(graph, root_seeds, days, visited)

    # explicit hints that no root reaches (e.g. inside a rootless cycle)
    explicit_seeds = [
        (node.id, node.explicit_day)
        for node in graph.nodes
        if node.explicit_day is not None and node.id not in visited
    ]
    if explicit_seeds:
        _propagate(graph, explicit_seeds, days, visited)

    unreached = [node.id for node in graph.nodes if node.id not in visited]
    if unreached:
        logger.debug("assigning day %d to %d unreached node(s)", FIRST_DAY, len(unreached))
        for node_id in unreached:
            days[node_id] = FIRST_DAY

    result = {node.id: days[node.id] for node in graph.nodes}
    logger.debug(
        "inferred %d day(s) for %d node(s)", len(set(result.values())), len(result)
    )
    return result
