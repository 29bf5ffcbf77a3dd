"""
Core of bootframe: construction, configuration, services and the framework facade
"""
from .config import Config
from .configuration import ConfigurationBuilder, ConfigurationSnapshot, assemble_configuration
from .construction import DefaultFrameworkConstruction, FrameworkConstruction
from .environment import FrameworkEnvironment
from .errors import (
    AlreadyBuiltError,
    ConfigurationFileError,
    ConfigurationMissingError,
    FrameworkError,
    NotBuiltError,
    NotConstructedError,
    ResolutionError,
)
from .framework import Framework
from .services import Lifetime, ServiceCollection, ServiceDescriptor, ServiceProvider

__all__ = [
    "Config",
    "ConfigurationBuilder",
    "ConfigurationSnapshot",
    "assemble_configuration",
    "DefaultFrameworkConstruction",
    "FrameworkConstruction",
    "FrameworkEnvironment",
    "AlreadyBuiltError",
    "ConfigurationFileError",
    "ConfigurationMissingError",
    "FrameworkError",
    "NotBuiltError",
    "NotConstructedError",
    "ResolutionError",
    "Framework",
    "Lifetime",
    "ServiceCollection",
    "ServiceDescriptor",
    "ServiceProvider",
]
