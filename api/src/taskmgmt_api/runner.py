"""API runner entrypoint.

Usage:
  python -m taskmgmt_api.runner
  taskmgmt-api

Reads TASKMGMT_* settings from the environment (see taskmgmt_shared.settings)
and serves the app with uvicorn on HOST:PORT (default 0.0.0.0:8000). Runs
until interrupted (SIGINT/SIGTERM).
"""

import logging
import os
import sys

import uvicorn
from taskmgmt_shared.settings import ServiceSettings

from taskmgmt_api.app import create_app

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """CLI entrypoint: load settings and start serving."""
    try:
        settings = ServiceSettings.from_env()
    except (RuntimeError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    logger.info(f"Starting TaskManagement API on {host}:{port}")
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
