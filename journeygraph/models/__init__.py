"""Core data models for journeygraph."""

from journeygraph.models.journey_node import (
    ActionNode,
    Branch,
    ConditionNode,
    Edge,
    JourneyNode,
    NodeKind,
    Position,
    TimeDelayNode,
    TimeDelayUnit,
    WeightedPath,
    WeightedPathNode,
)
from journeygraph.models.journey_graph import JourneyGraph
from journeygraph.models.journey_record import (
    JourneyNodeRecord,
    JourneyRecord,
    NodeConnections,
)

DayAssignment = dict[str, int]
LayoutResult = dict[str, Position]

__all__ = [
    # Nodes and edges
    "ActionNode",
    "Branch",
    "ConditionNode",
    "Edge",
    "JourneyNode",
    "NodeKind",
    "Position",
    "TimeDelayNode",
    "TimeDelayUnit",
    "WeightedPath",
    "WeightedPathNode",
    # Graph
    "JourneyGraph",
    "DayAssignment",
    "LayoutResult",
    # Backend records
    "JourneyNodeRecord",
    "JourneyRecord",
    "NodeConnections",
]
