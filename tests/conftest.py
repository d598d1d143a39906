"""Shared test fixtures for Track Select."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from trackselect.config.loader import clear_config_cache


@pytest.fixture
def ffprobe_fixtures_dir() -> Path:
    """Return the path to the ffprobe fixtures directory."""
    return Path(__file__).parent / "fixtures" / "ffprobe"


@pytest.fixture
def anime_dual_audio_fixture(ffprobe_fixtures_dir: Path) -> dict:
    """ffprobe output of an episode with Japanese and English audio."""
    return json.loads((ffprobe_fixtures_dir / "anime_dual_audio.json").read_text())


@pytest.fixture
def movie_dts_fixture(ffprobe_fixtures_dir: Path) -> dict:
    """ffprobe output of a movie with a French AC-3 and a DTS track."""
    return json.loads((ffprobe_fixtures_dir / "movie_dts.json").read_text())


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path):
    """Keep tests away from the user's configuration.

    Removes TRACKSELECT_* variables, points the data directory at a
    temporary directory and clears the config file cache.
    """
    data_dir = tmp_path / ".trackselect"
    data_dir.mkdir()
    env = {k: v for k, v in os.environ.items() if not k.startswith("TRACKSELECT_")}
    env["TRACKSELECT_DATA_DIR"] = str(data_dir)

    clear_config_cache()
    with patch.dict(os.environ, env, clear=True):
        yield data_dir
    clear_config_cache()
