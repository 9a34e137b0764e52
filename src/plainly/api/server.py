"""
ASGI Entry Point for the Plainly API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory runs
so that `OPENAI_API_KEY` is visible to the settings loader.

Usage
-----
Run via the module entry point:
    $ python -m plainly.api.server

Or via uvicorn directly:
    $ uvicorn plainly.api.server:app --reload
"""

from __future__ import annotations

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from plainly.api.app import create_app
from plainly.core.settings import get_logger, load_settings

load_dotenv(dotenv_path=Path(".env"))

app = create_app()

logger = get_logger(__name__)


def main(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the API server locally."""
    load_settings.cache_clear()
    settings = load_settings()
    if settings.openai_api_key:
        logger.info("OPENAI_API_KEY loaded (%s...)", settings.openai_api_key[:8])
    else:
        logger.warning("OPENAI_API_KEY missing; /api/explain will answer 500")

    uvicorn.run(
        "plainly.api.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
