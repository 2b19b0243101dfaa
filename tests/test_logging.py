# tests/test_logging.py

from __future__ import annotations

import logging

from gedcom_matcher.logging import get_logger, set_debug


def test_module_loggers_live_under_the_package_logger():
    log = get_logger("restore.notes")

    assert log.name == "gedcom_matcher.restore.notes"
    assert log.propagate
    assert get_logger("gedcom_matcher.restore.notes") is log


def test_set_debug_switches_levels_both_ways():
    log = get_logger("gedcom_matcher.tests.debug")
    try:
        set_debug(True)
        assert log.level == logging.DEBUG
    finally:
        set_debug(False)
    assert log.level == logging.INFO
