"""Exceptions raised by journeygraph."""


class JourneyGraphError(Exception):
    """Base class for journeygraph errors."""
    pass


class LayoutIncompleteError(JourneyGraphError):
    """A layout did not position every node and must not be applied."""

    def __init__(self, missing_node_ids: list[str]) -> None:
        self.missing_node_ids = missing_node_ids
        super().__init__(
            f"layout is missing {len(missing_node_ids)} node(s): {', '.join(missing_node_ids)}"
        )


class JourneyLoaderError(JourneyGraphError):
    """Exception raised when loading a journey from the backend fails."""
    pass
