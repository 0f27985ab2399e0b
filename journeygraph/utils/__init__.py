"""Utility functions for journeygraph."""

from journeygraph.utils.identifiers import (
    MARKER_PREFIX,
    edge_id,
    is_marker_id,
    marker_edge_id,
    marker_node_id,
)
from journeygraph.utils.logging import get_logger

__all__ = [
    "MARKER_PREFIX",
    "edge_id",
    "is_marker_id",
    "marker_edge_id",
    "marker_node_id",
    "get_logger",
]
