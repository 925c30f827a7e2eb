"""Main application entry point.

Runs FastAPI (port 8000) with the NiceGUI dashboard mounted at ``/``.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles API routes, NiceGUI handles the UI.
    """
    import uvicorn
    from nicegui import ui

    from insightstream.api.app import create_app
    from insightstream.ui.dashboard_page import dashboard_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="InsightStream AI",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "insightstream-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting InsightStream on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "INFO").lower(),
    )


if __name__ == "__main__":
    main()
