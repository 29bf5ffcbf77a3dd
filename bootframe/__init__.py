"""
bootframe - application bootstrap: layered configuration, default logging
and a dependency-injection service container behind one fluent construction

    from bootframe import Framework, DefaultFrameworkConstruction

    Framework.construct(DefaultFrameworkConstruction)
    Framework.construction().services.add_singleton(OrderService)
    Framework.build()
"""
from .core import (
    ConfigurationBuilder,
    ConfigurationSnapshot,
    DefaultFrameworkConstruction,
    Framework,
    FrameworkConstruction,
    FrameworkEnvironment,
    Lifetime,
    ServiceCollection,
    ServiceProvider,
)
from .core.errors import (
    AlreadyBuiltError,
    ConfigurationFileError,
    ConfigurationMissingError,
    FrameworkError,
    NotBuiltError,
    NotConstructedError,
    ResolutionError,
)
from .utils.logger import LoggerFactory

__version__ = "0.1.0"

__all__ = [
    "ConfigurationBuilder",
    "ConfigurationSnapshot",
    "DefaultFrameworkConstruction",
    "Framework",
    "FrameworkConstruction",
    "FrameworkEnvironment",
    "Lifetime",
    "ServiceCollection",
    "ServiceProvider",
    "AlreadyBuiltError",
    "ConfigurationFileError",
    "ConfigurationMissingError",
    "FrameworkError",
    "NotBuiltError",
    "NotConstructedError",
    "ResolutionError",
    "LoggerFactory",
]
