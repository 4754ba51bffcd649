from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """
    Route log records to stderr for CLI scripts (INFO by default, DEBUG with --verbose).
    """

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)
    # urllib3 connection chatter is noise at DEBUG for a per-title loop.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
