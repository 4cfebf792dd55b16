"""
Alliance entrypoint.

Run with:
  python -m alliance
"""

import logging
import os

import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main() -> None:
    host = os.getenv("ALLIANCE_HOST", "0.0.0.0")
    port = int(os.getenv("ALLIANCE_PORT", "8000"))
    reload = os.getenv("ALLIANCE_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    uvicorn.run("alliance.main:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    main()
