"""Tests for CLI logging setup."""

import logging

import pytest

from wiki_search.cli.ui.logging import setup_logging


@pytest.fixture
def root_logger(fresh_config):
    root = logging.getLogger()
    package = logging.getLogger("wiki_search")
    handlers, level, package_level = root.handlers[:], root.level, package.level
    yield root
    package.setLevel(package_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_configured_level_without_verbose_flag(root_logger, fresh_config):
    fresh_config.update({"log_level": "info"})
    setup_logging(0)
    assert root_logger.level == logging.INFO


def test_default_level_is_warning(root_logger, fresh_config):
    fresh_config.update({"log_level": "WARNING", "debug": False})
    setup_logging(0)
    assert root_logger.level == logging.WARNING


def test_debug_setting(root_logger, fresh_config):
    fresh_config.update({"log_level": "ERROR", "debug": True})
    setup_logging(0)
    assert root_logger.level == logging.DEBUG


@pytest.mark.parametrize("verbosity, level", [(1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)])
def test_verbose_flag_overrides_setting(root_logger, fresh_config, verbosity, level):
    fresh_config.update({"log_level": "ERROR"})
    setup_logging(verbosity)
    assert root_logger.level == level
    assert logging.getLogger("wiki_search").level == level
