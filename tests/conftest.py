# tests/conftest.py

"""Shared pytest fixtures for all tracker tests."""

import logging
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path) -> Generator[None, None, None]:
    """Point data/log dirs at a temp dir and pin the day time zone."""
    with patch.multiple(
        Settings,
        TIMEZONE="Asia/Shanghai",
        DATA_DIR=tmp_path / "data",
        STORAGE_DIR=tmp_path / "data" / "storage",
        FEEDS_DIR=tmp_path / "data" / "feeds",
        LOGS_DIR=tmp_path / "logs",
    ):
        yield
    project_logger = logging.getLogger("appstore_discounts")
    for handler in project_logger.handlers:
        handler.close()
    project_logger.handlers.clear()
