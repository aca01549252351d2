"""
FastAPI Application Entry Point for DrawPoker.

This module creates and configures the FastAPI application with:
- HTTP routes for the table state and game commands
- CORS middleware for a local presentation client
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drawpoker import __version__
from drawpoker.server.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="DrawPoker",
        description="Heads-up fixed-limit 5-Card Draw against a computer opponent",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    logger.info("DrawPoker app created")
    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "drawpoker.server.app:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
