"""Utility modules for photonrename."""

from photonrename.utils.config import resolve_rename_config, resolve_setting
from photonrename.utils.debug import setup_logger
from photonrename.utils.json import DateTimeEncoder

__all__ = [
    "DateTimeEncoder",
    "resolve_rename_config",
    "resolve_setting",
    "setup_logger",
]
