"""
Tests for the environment probe
"""
from types import SimpleNamespace

import pytest

from bootframe.core import environment as environment_module
from bootframe.core.config import Config
from bootframe.core.environment import FrameworkEnvironment


@pytest.fixture
def no_dev_mode(monkeypatch):
    """Pretend the interpreter was not started with -X dev"""
    monkeypatch.setattr(environment_module, "sys", SimpleNamespace(flags=SimpleNamespace(dev_mode=False)))


class TestFrameworkEnvironment:
    """Development / Production detection"""
    
    def test_production_without_debug_marker(self, no_dev_mode):
        env = FrameworkEnvironment()
        assert env.is_development is False
        assert env.label == "Production"
    
    def test_development_with_debug_setting(self, no_dev_mode, monkeypatch):
        monkeypatch.setattr(Config, "DEBUG", True)
        env = FrameworkEnvironment()
        assert env.is_development is True
        assert env.label == "Development"
    
    def test_development_with_interpreter_dev_mode(self, monkeypatch):
        monkeypatch.setattr(environment_module, "sys", SimpleNamespace(flags=SimpleNamespace(dev_mode=True)))
        assert FrameworkEnvironment().label == "Development"
    
    def test_missing_dev_mode_flag_defaults_to_production(self, monkeypatch):
        monkeypatch.setattr(environment_module, "sys", SimpleNamespace(flags=SimpleNamespace()))
        assert FrameworkEnvironment().label == "Production"
    
    def test_explicit_override_wins(self, monkeypatch):
        monkeypatch.setattr(Config, "DEBUG", True)
        assert FrameworkEnvironment(debug=False).label == "Production"
        assert FrameworkEnvironment(debug=True).label == "Development"
