"""SDK for loading journeys from the backend."""

from journeygraph.sdk.journey_loader import JourneyLoader

__all__ = [
    "JourneyLoader",
]
