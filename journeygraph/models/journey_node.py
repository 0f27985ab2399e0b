"""Node and edge models for a journey graph.

A node's payload depends on its kind, so nodes are modeled as a tagged
union discriminated on ``kind``.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class NodeKind(str, Enum):
    """Structural role of a node in the journey."""

    ACTION = "ACTION"
    CONDITION = "CONDITION"
    WEIGHTED_PATH = "WEIGHTED_PATH"
    TIME_DELAY = "TIME_DELAY"


class TimeDelayUnit(str, Enum):
    """Units a TIME_DELAY node can wait in."""

    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"


class Position(BaseModel):
    """Canvas coordinates of a node."""

    x: float = 0
    y: float = 0


class _NodeBase(BaseModel):
    model_config = {"extra": "forbid"}

    id: str
    explicit_day: int | None = Field(default=None, ge=1)
    position: Position = Field(default_factory=Position)
    node_type: str | None = None  # backend type, e.g. SEND_SMS


class ActionNode(_NodeBase):
    """A node with a single implicit outlet (send SMS, call, webhook, ...)."""

    kind: Literal["ACTION"] = "ACTION"


class Branch(BaseModel):
    """one outlet of a condition node."""

    id: str
    label: str | None = None


class ConditionNode(_NodeBase):
    """Routes a contact down one of several branches."""

    kind: Literal["CONDITION"] = "CONDITION"
    branches: list[Branch] = Field(default_factory=list)
    has_default: bool = False


class WeightedPath(BaseModel):
    """one outlet of a weighted path node."""

    id: str
    label: str | None = None
    percentage: float | None = None


class WeightedPathNode(_NodeBase):
    """Splits contacts across paths by percentage."""

    kind: Literal["WEIGHTED_PATH"] = "WEIGHTED_PATH"
    paths: list[WeightedPath] = Field(default_factory=list)


class TimeDelayNode(_NodeBase):
    """Waits before continuing; a DAYS delay ends the current day."""

    kind: Literal["TIME_DELAY"] = "TIME_DELAY"
    delay_unit: TimeDelayUnit | None = None
    delay_value: float | None = None


JourneyNode = Annotated[
    Union[ActionNode, ConditionNode, WeightedPathNode, TimeDelayNode],
    Field(discriminator="kind"),
]


class Edge(BaseModel):
    """A directed connection between two nodes.

    ``source_outlet`` names the branch/path (or "default") for CONDITION and
    WEIGHTED_PATH sources; it is None for single-outlet nodes.
    """

    model_config = {"extra": "forbid"}

    id: str
    source_node_id: str
    target_node_id: str
    source_outlet: str | None = None
