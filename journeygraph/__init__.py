"""Journey Graph Analyzer - day inference and layout for marketing journeys."""

__version__ = "0.1.0"

from journeygraph.models import (
    Edge,
    JourneyGraph,
    JourneyNode,
    JourneyRecord,
    NodeKind,
    Position,
    TimeDelayUnit,
)
from journeygraph.analysis import (
    JourneyAnalysis,
    MarkerSet,
    analyze_graph,
    apply_layout,
    infer_days,
    plan_layout,
    synthesize_markers,
)
from journeygraph.adapters import graph_from_record, strip_marker_references
from journeygraph.errors import JourneyGraphError, JourneyLoaderError, LayoutIncompleteError
from journeygraph.sdk import JourneyLoader

__all__ = [
    # Models
    "Edge",
    "JourneyGraph",
    "JourneyNode",
    "JourneyRecord",
    "NodeKind",
    "Position",
    "TimeDelayUnit",
    # Analysis
    "JourneyAnalysis",
    "MarkerSet",
    "analyze_graph",
    "apply_layout",
    "infer_days",
    "plan_layout",
    "synthesize_markers",
    # Ingestion
    "graph_from_record",
    "strip_marker_references",
    # Errors
    "JourneyGraphError",
    "JourneyLoaderError",
    "LayoutIncompleteError",
    # High-level APIs
    "JourneyLoader",
]
