from __future__ import annotations

import logging
import os


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    # Env override, e.g. for batch runs from cron
    level_name = os.getenv("UTA_LOG_LEVEL")
    if level_name:
        try:
            level = getattr(logging, level_name.upper())
        except AttributeError:
            pass

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # requests logs every connection through urllib3; only show it when debugging
    logging.getLogger("urllib3").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
