"""FastAPI application exposing journey graph analysis."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journeygraph import __version__
from journeygraph.config import CORS_ORIGINS
from journeygraph.server.journey_routes import router as journey_router

app = FastAPI(
    title="Journey Graph API",
    description="Day inference, clean layout and day markers for journey graphs",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(journey_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
        "endpoints": {
            "analyze": "/api/journeys/analyze",
            "days": "/api/journeys/days",
            "layout": "/api/journeys/layout",
            "markers": "/api/journeys/markers",
            "sanitize": "/api/journeys/sanitize",
        },
    }


def main() -> None:
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
