"""
Points API — Logging Configuration
====================================

What:  Configures the root logger once for the whole process.
Who:   Called by the ASGI lifespan (main.py) and at Lambda cold start
       (handlers.py).

Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Lambda forwards stdout to CloudWatch Logs line by line.
"""

import logging
import sys

from points_api.config import settings

_configured = False


def setup_logging(force: bool = False) -> None:
    """
    Configure stdout logging at settings.log_level.

    Repeated calls are no-ops unless force=True, so a warm Lambda container
    does not stack handlers.
    """
    global _configured
    if _configured and not force:
        return

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # botocore logs every request/credential lookup at DEBUG/INFO
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    _configured = True
