"""
Tests for configuration assembly and snapshots
"""
import pytest

from bootframe.core.config import Config
from bootframe.core.configuration import (
    ConfigurationBuilder,
    ConfigurationSnapshot,
    JsonFileSource,
    assemble_configuration,
    flatten,
)
from bootframe.core.environment import FrameworkEnvironment
from bootframe.core.errors import ConfigurationFileError

PRODUCTION = FrameworkEnvironment(debug=False)
DEVELOPMENT = FrameworkEnvironment(debug=True)


class TestFlatten:
    """Nested JSON to colon-delimited keys"""
    
    def test_nested_objects_and_arrays(self):
        flat = flatten({
            "Logging": {"LogFileLocation": "/var/log/app.log", "Level": {"Default": "Debug"}},
            "Hosts": ["a", "b"],
        })
        assert flat == {
            "Logging:LogFileLocation": "/var/log/app.log",
            "Logging:Level:Default": "Debug",
            "Hosts:0": "a",
            "Hosts:1": "b",
        }
    
    def test_scalars_rendered_as_json_text(self):
        flat = flatten({"Enabled": True, "Off": False, "Port": 8080, "Ratio": 0.5, "Nothing": None})
        assert flat == {"Enabled": "true", "Off": "false", "Port": "8080", "Ratio": "0.5", "Nothing": ""}


class TestConfigurationSnapshot:
    """Immutable, case-insensitive lookups"""
    
    def test_case_insensitive_lookup(self):
        snapshot = ConfigurationSnapshot({"Logging:LogFileLocation": "/tmp/x.log"})
        assert snapshot["logging:logfilelocation"] == "/tmp/x.log"
        assert "LOGGING:LOGFILELOCATION" in snapshot
        assert list(snapshot) == ["Logging:LogFileLocation"]
    
    def test_missing_key(self):
        snapshot = ConfigurationSnapshot()
        assert snapshot.get("Missing") is None
        with pytest.raises(KeyError):
            snapshot["Missing"]
    
    def test_get_section(self):
        snapshot = ConfigurationSnapshot({
            "Logging:LogFileLocation": "/tmp/x.log",
            "Logging:Level": "Debug",
            "LoggingOther": "no",
        })
        section = snapshot.get_section("logging")
        assert dict(section) == {"LogFileLocation": "/tmp/x.log", "Level": "Debug"}
    
    def test_typed_getters(self):
        snapshot = ConfigurationSnapshot({"Feature:Enabled": "True", "Port": "8080"})
        assert snapshot.get_bool("Feature:Enabled") is True
        assert snapshot.get_bool("Feature:Missing", default=True) is True
        assert snapshot.get_int("Port") == 8080
        assert snapshot.get_int("Missing", 5) == 5


class TestConfigurationBuilder:
    """Source layering"""
    
    def test_later_sources_override_earlier(self):
        snapshot = (
            ConfigurationBuilder()
            .add_mapping({"A": "1", "B": "1"})
            .add_mapping({"a": "2"})
            .build()
        )
        assert snapshot["A"] == "2"
        assert snapshot["B"] == "1"
        assert len(snapshot) == 2
    
    def test_environment_variables_map_double_underscore(self, monkeypatch):
        monkeypatch.setenv("Logging__LogFileLocation", "/env.log")
        snapshot = ConfigurationBuilder().add_environment_variables().build()
        assert snapshot["Logging:LogFileLocation"] == "/env.log"
    
    def test_environment_variable_prefix_is_stripped(self, monkeypatch):
        monkeypatch.setenv("MYAPP_Feature__Name", "prefixed")
        monkeypatch.setenv("Feature__Name", "plain")
        snapshot = ConfigurationBuilder().add_environment_variables("MYAPP_").build()
        assert snapshot["Feature:Name"] == "prefixed"
    
    def test_missing_optional_file_is_skipped(self, isolated_workdir):
        snapshot = ConfigurationBuilder(isolated_workdir).add_json_file("nope.json").build()
        assert len(snapshot) == 0
    
    def test_missing_required_file_fails(self, isolated_workdir):
        builder = ConfigurationBuilder(isolated_workdir).add_json_file("nope.json", optional=False)
        with pytest.raises(ConfigurationFileError):
            builder.build()
    
    def test_malformed_file_fails(self, isolated_workdir):
        (isolated_workdir / "bad.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationFileError):
            JsonFileSource(isolated_workdir / "bad.json").load()
    
    def test_undecodable_file_fails(self, isolated_workdir):
        (isolated_workdir / "appsettings.json").write_bytes(b'{"A": "\xff\xfe"}')
        with pytest.raises(ConfigurationFileError, match="not valid UTF-8"):
            assemble_configuration(PRODUCTION)
    
    def test_non_object_root_fails(self, write_settings):
        path = write_settings("list.json", [1, 2, 3])
        with pytest.raises(ConfigurationFileError):
            JsonFileSource(path).load()
    
    def test_empty_file_is_empty(self, isolated_workdir):
        (isolated_workdir / "empty.json").write_text("", encoding="utf-8")
        assert JsonFileSource(isolated_workdir / "empty.json").load() == {}


class TestAssembleConfiguration:
    """Default layering: env vars < appsettings.json < appsettings.<Env>.json < customization"""
    
    def test_precedence(self, write_settings, monkeypatch):
        monkeypatch.setenv("Shared__Key", "env")
        monkeypatch.setenv("Only__Env", "env")
        write_settings("appsettings.json", {"Shared": {"Key": "base"}, "Only": {"Base": "base"}})
        write_settings("appsettings.Production.json", {"Shared": {"Key": "override"}})
        
        snapshot = assemble_configuration(PRODUCTION)
        
        assert snapshot["Shared:Key"] == "override"
        assert snapshot["Only:Base"] == "base"
        assert snapshot["Only:Env"] == "env"
    
    def test_base_file_beats_environment_variables(self, write_settings, monkeypatch):
        monkeypatch.setenv("Shared__Key", "env")
        write_settings("appsettings.json", {"Shared": {"Key": "base"}})
        assert assemble_configuration(PRODUCTION)["Shared:Key"] == "base"
    
    def test_only_environment_file_present(self, write_settings):
        write_settings("appsettings.Production.json", {"Logging": {"LogFileLocation": "/tmp/x.log"}})
        snapshot = assemble_configuration(PRODUCTION)
        assert snapshot["Logging:LogFileLocation"] == "/tmp/x.log"
    
    def test_environment_file_follows_label(self, write_settings):
        write_settings("appsettings.Production.json", {"Mode": "prod"})
        write_settings("appsettings.Development.json", {"Mode": "dev"})
        assert assemble_configuration(PRODUCTION)["Mode"] == "prod"
        assert assemble_configuration(DEVELOPMENT)["Mode"] == "dev"
    
    def test_customization_runs_last(self, write_settings):
        write_settings("appsettings.Production.json", {"Mode": "prod"})
        
        def configure(builder):
            builder.add_mapping({"Mode": "custom"})
        
        assert assemble_configuration(PRODUCTION, configure)["Mode"] == "custom"
    
    def test_explicit_base_path(self, tmp_path_factory):
        directory = tmp_path_factory.mktemp("settings")
        (directory / "appsettings.json").write_text('{"From": "elsewhere"}', encoding="utf-8")
        assert assemble_configuration(PRODUCTION, base_path=directory)["From"] == "elsewhere"
    
    def test_settings_path_setting(self, tmp_path_factory, monkeypatch):
        directory = tmp_path_factory.mktemp("configured")
        (directory / "appsettings.json").write_text('{"From": "setting"}', encoding="utf-8")
        monkeypatch.setattr(Config, "SETTINGS_PATH", str(directory))
        assert assemble_configuration(PRODUCTION)["From"] == "setting"
