"""Translate backend journey records into journey graphs and back.

The backend stores a node's outgoing links in several places depending on
its type:

- ``connections.nextNodeId``: legacy single output
- ``connections.outputs``: outcome -> next node id
- ``config.branches[].nextNodeId`` and ``config.defaultBranch``: CONDITION
- ``config.paths[].nextNodeId``: WEIGHTED_PATH

All of them become Edge objects here. Day-marker ids are UI-only and are
dropped wherever they appear.
"""

import math
from typing import Any

from journeygraph.models import (
    ActionNode,
    Branch,
    ConditionNode,
    DayAssignment,
    Edge,
    JourneyGraph,
    JourneyNode,
    JourneyNodeRecord,
    JourneyRecord,
    NodeKind,
    Position,
    TimeDelayNode,
    TimeDelayUnit,
    WeightedPath,
    WeightedPathNode,
)
from journeygraph.utils.identifiers import edge_id, is_marker_id
from journeygraph.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OUTLET = "default"


def _parse_day_hint(value: Any) -> int | None:
    # bool is an int subclass; a True hint is not day 1
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 1 else None


def _parse_delay_value(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _parse_delay_unit(value: Any) -> TimeDelayUnit | None:
    if not isinstance(value, str):
        return None
    try:
        return TimeDelayUnit(value.upper())
    except ValueError:
        return None


def _list_of_dicts(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _day_hint(record: JourneyNodeRecord) -> int | None:
    """Stored day hint, from ``config.day`` or else ``metadata.day``."""
    for source in (record.config, record.metadata):
        raw = (source or {}).get("day")
        if raw is None:
            continue
        day = _parse_day_hint(raw)
        if day is not None:
            return day
        logger.warning("ignoring invalid day hint %r on node %s", raw, record.id)
    return None


def node_from_record(record: JourneyNodeRecord) -> JourneyNode:
    """Build the typed node for one backend node record."""
    config = record.config or {}
    day_hint = _day_hint(record)

    common = {
        "id": record.id,
        "explicit_day": day_hint,
        "position": Position(x=record.position_x, y=record.position_y),
        "node_type": record.type,
    }

    if record.type == NodeKind.TIME_DELAY:
        return TimeDelayNode(
            **common,
            delay_unit=_parse_delay_unit(config.get("delayUnit")),
            delay_value=_parse_delay_value(config.get("delayValue")),
        )
    if record.type == NodeKind.CONDITION:
        branches = [
            Branch(id=str(b["id"]), label=b.get("label"))
            for b in _list_of_dicts(config.get("branches"))
            if b.get("id") is not None
        ]
        return ConditionNode(
            **common,
            branches=branches,
            has_default=isinstance(config.get("defaultBranch"), dict),
        )
    if record.type == NodeKind.WEIGHTED_PATH:
        paths = []
        for p in _list_of_dicts(config.get("paths")):
            if p.get("id") is None:
                continue
            percentage = p.get("percentage")
            if isinstance(percentage, bool) or not isinstance(percentage, (int, float)):
                percentage = None
            paths.append(WeightedPath(id=str(p["id"]), label=p.get("label"), percentage=percentage))
        return WeightedPathNode(**common, paths=paths)
    return ActionNode(**common)


def _record_links(record: JourneyNodeRecord) -> list[tuple[str, str | None]]:
    """(target id, outlet) pairs for every link stored on a node record."""
    links: list[tuple[str, str | None]] = []
    connections = record.connections
    if connections is not None:
        if connections.next_node_id:
            links.append((connections.next_node_id, None))
        for outcome, target in (connections.outputs or {}).items():
            if isinstance(target, str) and target:
                links.append((target, outcome))

    config = record.config or {}
    if record.type == NodeKind.CONDITION:
        for branch in _list_of_dicts(config.get("branches")):
            target = branch.get("nextNodeId")
            if isinstance(target, str) and target:
                outlet = branch.get("id")
                links.append((target, str(outlet) if outlet is not None else None))
        default_branch = config.get("defaultBranch")
        if isinstance(default_branch, dict):
            target = default_branch.get("nextNodeId")
            if isinstance(target, str) and target:
                links.append((target, DEFAULT_OUTLET))
    elif record.type == NodeKind.WEIGHTED_PATH:
        for path in _list_of_dicts(config.get("paths")):
            target = path.get("nextNodeId")
            if isinstance(target, str) and target:
                outlet = path.get("id")
                links.append((target, str(outlet) if outlet is not None else None))
    return links


def graph_from_record(record: JourneyRecord) -> JourneyGraph:
    """Build a JourneyGraph from a backend journey record.

    Marker nodes, links into markers and repeated links are dropped.
    Links to unknown nodes are kept as edges; the graph ignores them.
    """
    nodes: list[JourneyNode] = []
    edges: list[Edge] = []
    seen: set[tuple[str, str, str | None]] = set()

    for node_record in record.nodes:
        if is_marker_id(node_record.id):
            continue
        nodes.append(node_from_record(node_record))

        for target, outlet in _record_links(node_record):
            if is_marker_id(target):
                continue
            triple = (node_record.id, target, outlet)
            if triple in seen:
                continue
            seen.add(triple)
            edges.append(Edge(
                id=edge_id(node_record.id, target, outlet),
                source_node_id=node_record.id,
                target_node_id=target,
                source_outlet=outlet,
            ))

    graph = JourneyGraph(nodes=nodes, edges=edges)
    dangling = graph.dangling_edges()
    if dangling:
        logger.warning(
            "journey %s has %d link(s) to unknown nodes; they are ignored",
            record.id,
            len(dangling),
        )
    return graph


def strip_marker_references(record: JourneyRecord) -> JourneyRecord:
    """Copy of the record without day-marker nodes or links into them."""
    cleaned = record.model_copy(deep=True)
    cleaned.nodes = [node for node in cleaned.nodes if not is_marker_id(node.id)]

    for node in cleaned.nodes:
        connections = node.connections
        if connections is not None:
            if is_marker_id(connections.next_node_id):
                connections.next_node_id = None
            if connections.outputs:
                connections.outputs = {
                    outcome: target
                    for outcome, target in connections.outputs.items()
                    if not is_marker_id(target)
                }

        config = node.config or {}
        for key in ("branches", "paths"):
            for item in _list_of_dicts(config.get(key)):
                if is_marker_id(item.get("nextNodeId")):
                    item.pop("nextNodeId")
        default_branch = config.get("defaultBranch")
        if isinstance(default_branch, dict) and is_marker_id(default_branch.get("nextNodeId")):
            default_branch.pop("nextNodeId")
    return cleaned


def apply_day_hints(record: JourneyRecord, days: DayAssignment) -> tuple[JourneyRecord, list[str]]:
    """Write inferred days into each node's ``config.day``.

    Returns:
        The updated copy and the ids of nodes whose hint changed.
    """
    updated = record.model_copy(deep=True)
    changed: list[str] = []
    for node in updated.nodes:
        day = days.get(node.id)
        if day is None:
            continue
        current = node.config.get("day") if node.config else None
        if isinstance(current, bool) or current != day:
            node.config = {**(node.config or {}), "day": day}
            changed.append(node.id)
    if changed:
        logger.info("updated day hints on %d node(s) of journey %s", len(changed), record.id)
    return updated, changed
