from __future__ import annotations

import logging
import sys
from typing import TextIO


_HANDLER_NAME = "gqlrest"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", *, stream: TextIO | None = None) -> logging.Logger:
    """Attach one stream handler to the `gqlrest` logger tree.

    The root logger and uvicorn's loggers are left alone. Calling it again replaces the handler.
    """
    pkg_logger = logging.getLogger("gqlrest")
    for h in list(pkg_logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            pkg_logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level.upper())
    pkg_logger.propagate = False
    return pkg_logger
