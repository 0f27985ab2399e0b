"""Journey records as served by the backend CRUD API.

Field names follow the backend's camelCase payload. Unknown fields are
kept so a record can be round-tripped back to the backend unchanged.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NodeConnections(BaseModel):
    """Outgoing links stored on a node.

    ``next_node_id`` is the legacy single output; ``outputs`` maps an
    outcome (success, failed, completed, ...) to the next node id.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    next_node_id: str | None = Field(default=None, alias="nextNodeId")
    outputs: dict[str, str | None] | None = None


class JourneyNodeRecord(BaseModel):
    """One node of a journey record."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    type: str
    config: dict[str, Any] = Field(default_factory=dict)
    position_x: float = Field(default=0, alias="positionX")
    position_y: float = Field(default=0, alias="positionY")
    connections: NodeConnections | None = None
    metadata: dict[str, Any] | None = None


class JourneyRecord(BaseModel):
    """A journey with its nodes, as loaded from the backend."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str | None = None
    name: str | None = None
    description: str | None = None
    status: str | None = None
    nodes: list[JourneyNodeRecord] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the backend's camelCase shape."""
        return self.model_dump(by_alias=True, exclude_none=True)
