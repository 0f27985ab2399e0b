"""Environment-driven settings for journeygraph.

Values are read once at import time after loading a local .env file.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()  # load environment variables from .env file

LOG_LEVEL = os.getenv("JOURNEYGRAPH_LOG_LEVEL", "INFO")

# backend CRUD API the loader reads journeys from
JOURNEY_API_URL = os.getenv("JOURNEY_API_URL", "http://localhost:3001/api")
JOURNEY_API_TOKEN = os.getenv("JOURNEY_API_TOKEN") or None
JOURNEY_API_TIMEOUT = float(os.getenv("JOURNEY_API_TIMEOUT", "10"))

# comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


class LayoutSettings(BaseModel):
    """Geometry used by the clean layout and the day markers."""

    model_config = {"extra": "forbid"}

    start_x: float = 200
    start_y: float = 100
    column_width: float = 400
    column_spacing: float = 100
    vertical_spacing: float = 200
    marker_offset: float = 150  # distance between a day's last node and its marker

    @classmethod
    def from_env(cls) -> "LayoutSettings":
        """Build settings, letting JOURNEYGRAPH_* variables override defaults."""
        defaults = cls()
        return cls(
            start_x=_env_float("JOURNEYGRAPH_START_X", defaults.start_x),
            start_y=_env_float("JOURNEYGRAPH_START_Y", defaults.start_y),
            column_width=_env_float("JOURNEYGRAPH_COLUMN_WIDTH", defaults.column_width),
            column_spacing=_env_float("JOURNEYGRAPH_COLUMN_SPACING", defaults.column_spacing),
            vertical_spacing=_env_float("JOURNEYGRAPH_VERTICAL_SPACING", defaults.vertical_spacing),
            marker_offset=_env_float("JOURNEYGRAPH_MARKER_OFFSET", defaults.marker_offset),
        )

    def column_center(self, column_index: int) -> float:
        """X center of the column at the given index."""
        step = self.column_width + self.column_spacing
        return self.start_x + column_index * step + self.column_width / 2
