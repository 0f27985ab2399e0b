"""API routes for journey graph analysis.

Every endpoint is stateless: the request carries the journey record and
the response carries what was derived from it.
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from journeygraph.adapters.journey_ingest import (
    apply_day_hints,
    graph_from_record,
    strip_marker_references,
)
from journeygraph.analysis.day_inference import infer_days
from journeygraph.analysis.day_markers import synthesize_markers
from journeygraph.analysis.journey_summary import analysis_to_dict, analyze_graph, nodes_by_day
from journeygraph.analysis.layout import plan_layout
from journeygraph.config import LayoutSettings
from journeygraph.errors import LayoutIncompleteError
from journeygraph.models import JourneyGraph, JourneyRecord

router = APIRouter()


class JourneyAnalysisRequest(BaseModel):
    """request body carrying a journey and the sidebar's collapsed days."""

    model_config = ConfigDict(populate_by_name=True)

    journey: JourneyRecord
    collapsed_days: list[int] = Field(default_factory=list, alias="collapsedDays")


class SanitizeRequest(BaseModel):
    """request body for preparing a journey to be saved."""

    model_config = ConfigDict(populate_by_name=True)

    journey: JourneyRecord
    refresh_day_hints: bool = Field(default=True, alias="refreshDayHints")


def _settings() -> LayoutSettings:
    return LayoutSettings.from_env()


def _graph_of(journey: JourneyRecord) -> JourneyGraph:
    """Build the graph, rejecting records the graph model refuses (e.g. repeated node ids)."""
    try:
        return graph_from_record(journey)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/journeys/analyze")
def analyze_journey(request: JourneyAnalysisRequest) -> dict:
    """Days, clean layout, markers, entry nodes and stale hints in one call."""
    graph = _graph_of(request.journey)
    try:
        analysis = analyze_graph(graph, request.collapsed_days, _settings())
    except LayoutIncompleteError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return analysis_to_dict(analysis)


@router.post("/journeys/days")
def journey_days(request: JourneyAnalysisRequest) -> dict:
    """Day of every node, and the sidebar grouping."""
    graph = _graph_of(request.journey)
    days = infer_days(graph)
    return {
        "days": days,
        "nodes_by_day": {str(day): ids for day, ids in nodes_by_day(graph, days).items()},
    }


@router.post("/journeys/layout")
def journey_layout(request: JourneyAnalysisRequest) -> dict:
    """Clean layout positions for every node."""
    graph = _graph_of(request.journey)
    days = infer_days(graph)
    try:
        layout = plan_layout(graph, days, _settings())
    except LayoutIncompleteError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {
        "layout": {node_id: position.model_dump() for node_id, position in layout.items()},
    }


@router.post("/journeys/markers")
def journey_markers(request: JourneyAnalysisRequest) -> dict:
    """End-of-day markers for the journey as currently positioned."""
    graph = _graph_of(request.journey)
    days = infer_days(graph)
    markers = synthesize_markers(graph, days, request.collapsed_days, settings=_settings())
    return {
        "marker_nodes": [
            {**asdict(marker), "position": marker.position.model_dump()}
            for marker in markers.marker_nodes
        ],
        "marker_edges": [asdict(edge) for edge in markers.marker_edges],
    }


@router.post("/journeys/sanitize")
def sanitize_journey(request: SanitizeRequest) -> dict:
    """Strip UI-only markers and optionally refresh the config.day hints.

    The returned journey is safe to hand to the backend for saving.
    """
    cleaned = strip_marker_references(request.journey)
    changed: list[str] = []
    if request.refresh_day_hints:
        days = infer_days(_graph_of(cleaned))
        cleaned, changed = apply_day_hints(cleaned, days)
    return {
        "journey": cleaned.to_payload(),
        "updated_node_ids": changed,
    }
