"""
Start the wound metrics API with uvicorn.

``python run.py`` serves ``woundmetrics.main:app`` straight from the
checkout; the ``backend`` directory is put on the import path first.
``WOUNDMETRICS_HOST`` and ``WOUNDMETRICS_PORT`` override the bind
address, which defaults to 0.0.0.0:8000.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn

logger = logging.getLogger("woundmetrics.run")

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))
    from woundmetrics.main import app  # type: ignore

    host = os.getenv("WOUNDMETRICS_HOST", DEFAULT_HOST)
    port = int(os.getenv("WOUNDMETRICS_PORT", str(DEFAULT_PORT)))
    logger.info("Serving wound metrics API on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
