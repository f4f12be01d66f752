#!/usr/bin/env python3
"""Run the Canvas3D API server."""

import logging
import os
import sys
from pathlib import Path

# Keep pygame quiet on import; only its math and clock are used
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from canvas3d.config import get
from canvas3d.core import Canvas
from canvas3d.logging_setup import setup_logging
from canvas3d.services import CodeGenerator

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)


def main():
    """Run the API server."""
    # Get API configuration
    host = get("api.host", "127.0.0.1")
    port = get("api.port", 8000)

    # Render loop owns its own thread; requests hand work to it
    canvas = Canvas(generator=CodeGenerator.from_config())
    canvas.engine.start_in_thread()

    logger.info(f"Starting Canvas3D API on {host}:{port}")
    logger.info("API documentation available at:")
    logger.info(f"  - Swagger UI: http://{host}:{port}/docs")
    logger.info(f"  - ReDoc: http://{host}:{port}/redoc")

    # Import here to avoid circular imports
    import uvicorn
    from canvas3d.api import app, set_canvas

    set_canvas(canvas)

    # Run server
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info",
        access_log=True,
    )


if __name__ == "__main__":
    main()
