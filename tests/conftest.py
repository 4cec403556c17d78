"""Shared test fixtures and configuration.

Keeps every test away from the real platform directories: logs, config
and the session log all land in the test's tmp_path.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Point the application logger at tmp_path and reset its singleton."""
    import pomo_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("pomo_cli").handlers.clear()
    with patch("pomo_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logger_mod._logger = None
    logging.getLogger("pomo_cli").handlers.clear()


@pytest.fixture()
def isolated_config(tmp_path):
    """Route ConfigManager's config/data dirs into tmp_path."""
    import pomo_cli.config as config_mod

    config_mod._config_manager = None
    with patch("pomo_cli.config.user_config_dir", return_value=str(tmp_path / "config")):
        with patch("pomo_cli.config.user_data_dir", return_value=str(tmp_path / "data")):
            yield tmp_path
    config_mod._config_manager = None


class FakeClock:
    """Deterministic clock that moves one second per call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.now = start or datetime(2024, 3, 15, 9, 0, 0)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tmp_path):
    from pomo_cli.models.focus.history import SessionStore

    return SessionStore(db_path=tmp_path / "focus_history.db")
