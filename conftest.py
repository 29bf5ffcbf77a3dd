"""
Shared pytest fixtures for bootframe
"""
import json
import logging

import pytest

from bootframe.core.config import Config
from bootframe.core.framework import Framework
from bootframe.utils.logger import close_handlers


@pytest.fixture(autouse=True)
def isolated_workdir(tmp_path, monkeypatch):
    """Run every test in an empty working directory, as Production"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Config, "DEBUG", False)
    monkeypatch.setattr(Config, "SETTINGS_PATH", None)
    monkeypatch.setattr(Config, "ENV_PREFIX", "")
    yield tmp_path


@pytest.fixture(autouse=True)
def reset_framework():
    """Start without an active construction and close log files afterwards"""
    Framework.reset()
    yield
    Framework.reset()
    close_handlers(logging.getLogger(Config.APP_LOGGER_NAME))


@pytest.fixture
def write_settings(isolated_workdir):
    """Write a settings JSON file into the working directory"""
    def write(name, data):
        path = isolated_workdir / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return write
