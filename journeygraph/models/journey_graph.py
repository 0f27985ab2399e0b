"""Graph model for a journey snapshot.

A JourneyGraph is built once per analysis pass and treated as read-only.
Edges that point at missing nodes are kept but never returned by the
traversal queries.
"""

from typing import Self

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from journeygraph.models.journey_node import Edge, JourneyNode


class JourneyGraph(BaseModel):
    """Nodes and directed edges of one journey."""

    model_config = {"extra": "forbid"}

    nodes: list[JourneyNode] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    _by_id: dict[str, JourneyNode] = PrivateAttr(default_factory=dict)
    _outgoing: dict[str, list[Edge]] = PrivateAttr(default_factory=dict)
    _incoming: dict[str, list[Edge]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> Self:
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"duplicate node id: {node.id}")
            seen.add(node.id)
        return self

    def model_post_init(self, __context) -> None:
        self._by_id = {node.id: node for node in self.nodes}
        self._outgoing = {node.id: [] for node in self.nodes}
        self._incoming = {node.id: [] for node in self.nodes}
        for edge in self.edges:
            # dangling references are simply absent from the indexes
            if edge.source_node_id not in self._by_id or edge.target_node_id not in self._by_id:
                continue
            self._outgoing[edge.source_node_id].append(edge)
            self._incoming[edge.target_node_id].append(edge)

    def __len__(self) -> int:
        return len(self.nodes)

    def node_by_id(self, node_id: str) -> JourneyNode | None:
        return self._by_id.get(node_id)

    def node_ids(self) -> list[str]:
        return [node.id for node in self.nodes]

    def outgoing_edges(self, node_id: str) -> list[Edge]:
        """Edges leaving a node whose target exists, in edge order."""
        return list(self._outgoing.get(node_id, []))

    def incoming_edges(self, node_id: str) -> list[Edge]:
        """Edges entering a node whose source exists, in edge order."""
        return list(self._incoming.get(node_id, []))

    def root_nodes(self) -> list[JourneyNode]:
        """Nodes with no incoming edge, in node order."""
        return [node for node in self.nodes if not self._incoming[node.id]]

    def successor_ids(self, node_id: str) -> list[str]:
        """Distinct targets of a node's outgoing edges, regardless of outlet."""
        result: list[str] = []
        for edge in self._outgoing.get(node_id, []):
            if edge.target_node_id not in result:
                result.append(edge.target_node_id)
        return result

    def dangling_edges(self) -> list[Edge]:
        """Edges whose source or target is not a node of this graph."""
        return [
            edge
            for edge in self.edges
            if edge.source_node_id not in self._by_id or edge.target_node_id not in self._by_id
        ]
