"""Fixtures for CLI tests."""

from pathlib import Path
from unittest.mock import patch

import pytest

from trackselect.config import AppConfig


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep CLI invocations from replacing the test logging handlers."""
    with patch("trackselect.cli.configure_logging") as mock:
        yield mock


@pytest.fixture
def renderers_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "renderers"
    directory.mkdir()
    return directory


@pytest.fixture
def cli_obj(renderers_dir: Path) -> dict:
    """Context object with a ready-made config, bypassing config loading."""
    return {"config": AppConfig(renderers_dir=renderers_dir)}
