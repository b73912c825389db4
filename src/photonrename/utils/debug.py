"""Logging setup for PhotonRename.

Every module logs through ``logging.getLogger(__name__)`` under the
``photonrename`` namespace; this module attaches the single handler to that
namespace. Debug output is controlled by the PHOTONRENAME_DEBUG environment
variable or the CLI's --verbose flag.
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("PHOTONRENAME_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure the package logger once and return it."""
    global _logger
    logger = logging.getLogger("photonrename")
    if _logger is None and not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.WARNING)
    _logger = logger
    if verbose or DEBUG_ON:
        logger.setLevel(logging.DEBUG)
    return logger
