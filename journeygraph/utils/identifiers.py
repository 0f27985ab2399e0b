"""ID helpers for synthetic day-marker elements and graph edges."""

# ids with this prefix are UI-only and must never be persisted
MARKER_PREFIX = "day-marker-"


def marker_node_id(day: int) -> str:
    """ID of the end-of-day marker node for a day."""
    return f"{MARKER_PREFIX}{day}"


def marker_edge_id(day: int) -> str:
    """ID of the edge leading into a day's marker node."""
    return f"{MARKER_PREFIX}edge-{day}"


def is_marker_id(value: object) -> bool:
    """True when the id belongs to a synthetic day marker.

    Non-string values (raw backend fields) are never marker ids.
    """
    return isinstance(value, str) and value.startswith(MARKER_PREFIX)


def edge_id(source: str, target: str, outlet: str | None = None) -> str:
    """Deterministic edge id for a source/target/outlet triple."""
    base = f"{source}->{target}"
    return f"{base}:{outlet}" if outlet else base
