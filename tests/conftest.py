"""Shared fixtures."""

from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory):
    """Point the settings file at a throwaway directory."""
    config_dir = tmp_path_factory.mktemp("config")
    with patch("diskprobe.config.CONFIG_DIR", config_dir), patch(
        "diskprobe.config.CONFIG_FILE", config_dir / "config.json"
    ):
        yield config_dir
