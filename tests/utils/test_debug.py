"""Tests for the logging setup helper."""

import importlib
import logging

from photonrename.utils import debug as dbg


def test_setup_logger_attaches_single_handler():
    logger = dbg.setup_logger()
    handlers = list(logger.handlers)

    again = dbg.setup_logger()

    assert again is logger
    assert logger.name == "photonrename"
    assert logger.handlers == handlers


def test_verbose_enables_debug():
    logger = dbg.setup_logger(verbose=True)
    try:
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(logging.WARNING)


def test_debug_env_var(monkeypatch):
    monkeypatch.setenv("PHOTONRENAME_DEBUG", "1")
    importlib.reload(dbg)
    try:
        assert dbg.DEBUG_ON
        assert dbg.setup_logger().level == logging.DEBUG
    finally:
        monkeypatch.delenv("PHOTONRENAME_DEBUG")
        importlib.reload(dbg)
        logging.getLogger("photonrename").setLevel(logging.WARNING)
