"""Adapters between backend journey records and journey graphs."""

from journeygraph.adapters.journey_ingest import (
    apply_day_hints,
    graph_from_record,
    node_from_record,
    strip_marker_references,
)

__all__ = [
    "apply_day_hints",
    "graph_from_record",
    "node_from_record",
    "strip_marker_references",
]
