"""
Configuration assembly
Layers environment variables, settings JSON files and in-memory mappings
into one immutable snapshot of colon-delimited keys

Precedence is the order sources are added: later sources override earlier
ones key by key.
"""
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .config import Config
from .environment import FrameworkEnvironment
from .errors import ConfigurationFileError
from ..utils.logger import get_logger

logger = get_logger(__name__)

KEY_DELIMITER = ":"


def _to_text(value: Any) -> str:
    """Render a JSON scalar the way it is written in the file"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten(data: Any, prefix: str = "") -> Dict[str, str]:
    """
    Flatten nested dicts/lists into colon-delimited keys

    {"Logging": {"Level": "Debug"}, "Hosts": ["a", "b"]} becomes
    {"Logging:Level": "Debug", "Hosts:0": "a", "Hosts:1": "b"}
    """
    flat: Dict[str, str] = {}
    if isinstance(data, Mapping):
        items = [(str(k), v) for k, v in data.items()]
    elif isinstance(data, (list, tuple)):
        items = [(str(i), v) for i, v in enumerate(data)]
    else:
        flat[prefix] = _to_text(data)
        return flat

    for key, value in items:
        full_key = f"{prefix}{KEY_DELIMITER}{key}" if prefix else key
        if isinstance(value, (Mapping, list, tuple)):
            flat.update(flatten(value, full_key))
        else:
            flat[full_key] = _to_text(value)
    return flat


# ============================================================================
# Snapshot
# ============================================================================

class ConfigurationSnapshot(Mapping):
    """
    Immutable, case-insensitive mapping of configuration keys to strings

    Missing keys raise KeyError on indexing; use get() for optional values.
    """

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        # casefolded key -> (key as last written, value)
        self._values: Dict[str, Tuple[str, str]] = {}
        for key, value in (values or {}).items():
            self._values[key.casefold()] = (key, value)

    def __getitem__(self, key: str) -> str:
        return self._values[key.casefold()][1]

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._values

    def get_section(self, key: str) -> "ConfigurationSnapshot":
        """Sub-snapshot of every key under `key:`, with the prefix removed"""
        prefix = f"{key}{KEY_DELIMITER}".casefold()
        return ConfigurationSnapshot({
            original[len(prefix):]: value
            for folded, (original, value) in self._values.items()
            if folded.startswith(prefix)
        })

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        return value.strip().lower() in ("true", "1", "yes")

    def get_int(self, key: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(key)
        if value is None or not value.strip():
            return default
        return int(value)

    def __repr__(self) -> str:
        return f"ConfigurationSnapshot({len(self)} keys)"


# ============================================================================
# Sources
# ============================================================================

class ConfigurationSource(ABC):
    """A provider of flat configuration values"""

    @abstractmethod
    def load(self) -> Dict[str, str]:
        """Return this source's values as flat colon-delimited keys"""
        pass


class EnvironmentVariablesSource(ConfigurationSource):
    """Process environment variables; `__` in a name becomes `:`"""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix

    def load(self) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for name, value in os.environ.items():
            if self.prefix:
                if not name.upper().startswith(self.prefix.upper()):
                    continue
                name = name[len(self.prefix):]
            if not name:
                continue
            values[name.replace("__", KEY_DELIMITER)] = value
        return values


class JsonFileSource(ConfigurationSource):
    """A JSON settings file whose root is an object"""

    def __init__(self, path: Union[str, Path], optional: bool = True):
        self.path = Path(path)
        self.optional = optional

    def load(self) -> Dict[str, str]:
        if not self.path.is_file():
            if self.optional:
                logger.debug(f"Optional settings file not found, skipping: {self.path}")
                return {}
            raise ConfigurationFileError(str(self.path), "file not found")

        try:
            with open(self.path, "r", encoding="utf-8-sig") as f:
                text = f.read()
        except OSError as e:
            if self.optional:
                logger.warning(f"Could not read optional settings file {self.path}: {e}")
                return {}
            raise ConfigurationFileError(str(self.path), str(e)) from e
        except UnicodeDecodeError as e:
            raise ConfigurationFileError(str(self.path), f"not valid UTF-8 ({e})") from e

        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationFileError(str(self.path), f"invalid JSON ({e})") from e
        if not isinstance(data, dict):
            raise ConfigurationFileError(str(self.path), "top-level JSON value must be an object")

        logger.debug(f"Loaded settings file {self.path}")
        return flatten(data)


class MappingSource(ConfigurationSource):
    """In-memory values, nested or already flat"""

    def __init__(self, data: Mapping[str, Any]):
        self.data = data

    def load(self) -> Dict[str, str]:
        if isinstance(self.data, ConfigurationSnapshot):
            return dict(self.data)
        return flatten(self.data)


# ============================================================================
# Builder
# ============================================================================

class ConfigurationBuilder:
    """Mutable, ordered list of configuration sources"""

    def __init__(self, base_path: Optional[Union[str, Path]] = None):
        self.sources: List[ConfigurationSource] = []
        self.base_path = Path(base_path) if base_path is not None else None

    def set_base_path(self, base_path: Union[str, Path]) -> "ConfigurationBuilder":
        """Directory relative JSON file paths are resolved against"""
        self.base_path = Path(base_path)
        return self

    def add_source(self, source: ConfigurationSource) -> "ConfigurationBuilder":
        self.sources.append(source)
        return self

    def add_environment_variables(self, prefix: str = "") -> "ConfigurationBuilder":
        return self.add_source(EnvironmentVariablesSource(prefix))

    def add_json_file(self, path: Union[str, Path], optional: bool = True) -> "ConfigurationBuilder":
        path = Path(path)
        if not path.is_absolute():
            path = (self.base_path or Path.cwd()) / path
        return self.add_source(JsonFileSource(path, optional=optional))

    def add_mapping(self, data: Mapping[str, Any]) -> "ConfigurationBuilder":
        return self.add_source(MappingSource(data))

    def build(self) -> ConfigurationSnapshot:
        """Load every source in order and merge them into a snapshot"""
        merged: Dict[str, str] = {}
        spelled: Dict[str, str] = {}
        for source in self.sources:
            for key, value in source.load().items():
                folded = key.casefold()
                previous = spelled.pop(folded, None)
                if previous is not None:
                    merged.pop(previous, None)
                spelled[folded] = key
                merged[key] = value
        return ConfigurationSnapshot(merged)


def as_snapshot(configuration: Mapping[str, Any]) -> ConfigurationSnapshot:
    """Use a snapshot as is, or flatten any other mapping into one"""
    if isinstance(configuration, ConfigurationSnapshot):
        return configuration
    return ConfigurationBuilder().add_mapping(configuration).build()


def assemble_configuration(
    environment: FrameworkEnvironment,
    configure: Optional[Callable[[ConfigurationBuilder], None]] = None,
    base_path: Optional[Union[str, Path]] = None,
) -> ConfigurationSnapshot:
    """
    Build the default layered configuration

    Order (lowest to highest precedence):
    1. Environment variables (Config.ENV_PREFIX)
    2. <SETTINGS_FILE>.json
    3. <SETTINGS_FILE>.<Environment>.json
    4. Whatever `configure` adds to the builder

    Args:
        environment: Selects the environment-specific settings file
        configure: Custom step that receives the builder before it is finalized
        base_path: Directory of the settings files (default: Config.SETTINGS_PATH, then the working directory)

    Returns:
        The merged, immutable snapshot
    """
    directory = base_path or Config.SETTINGS_PATH or os.getcwd()
    builder = ConfigurationBuilder(base_path=directory)
    builder.add_environment_variables(Config.ENV_PREFIX)
    builder.add_json_file(Config.settings_file_name(), optional=True)
    builder.add_json_file(Config.settings_file_name(environment.label), optional=True)

    if configure is not None:
        configure(builder)

    snapshot = builder.build()
    logger.debug(f"Assembled configuration for {environment.label}: {len(snapshot)} keys from {len(builder.sources)} sources")
    return snapshot
