"""Pytest configuration and shared fixtures for tool-result-view tests."""

import logging

import pytest
from textual.theme import BUILTIN_THEMES

import tool_result_view.io.logging_setup
from tool_result_view.tui.rendering import set_theme


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Keep settings and logs out of the real home directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("TOOL_RESULT_VIEW_LOG_FILE", str(tmp_path / "logs" / "test.log"))
    monkeypatch.delenv("TOOL_RESULT_VIEW_LOG_LEVEL", raising=False)
    monkeypatch.setattr(tool_result_view.io.logging_setup, "_RUNTIME", None)
    yield
    # configure() detaches the package logger from root; undo it for caplog.
    logger = logging.getLogger(tool_result_view.io.logging_setup.LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _init_theme():
    """Initialize rendering theme for all tests."""
    set_theme(BUILTIN_THEMES["textual-dark"])
