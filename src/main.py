# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ASGI entry point.

Run with:
    python -m src.main
or:
    uvicorn src.main:app --host 0.0.0.0 --port 5000
"""

import uvicorn

from src.api import create_app
from src.core.config import get_settings
from src.utils.logging import setup_logging

settings = get_settings()
setup_logging(settings)

app = create_app(settings)


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        "src.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        log_config=None,
    )


if __name__ == "__main__":
    run()
