"""
Default registrations for a framework construction
Configuration assembly and the default application logger
"""
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from .config import Config
from .configuration import (
    ConfigurationBuilder,
    ConfigurationSnapshot,
    as_snapshot,
    assemble_configuration,
)
from ..utils.logger import LoggerFactory, create_file_logger, get_logger

if TYPE_CHECKING:
    from .construction import FrameworkConstruction

logger = get_logger(__name__)


def add_default_configuration(
    construction: "FrameworkConstruction",
    configure: Optional[Callable[[ConfigurationBuilder], None]] = None
) -> "FrameworkConstruction":
    """
    Configure a construction the default way: environment variables,
    appsettings.json, appsettings.<Environment>.json, then `configure`
    
    The snapshot replaces any previous one and is registered as a
    ConfigurationSnapshot singleton.
    """
    snapshot = assemble_configuration(construction.environment, configure)
    
    construction.services.add_singleton(ConfigurationSnapshot, instance=snapshot)
    construction.use_configuration(snapshot)
    
    return construction


def add_configuration(
    construction: "FrameworkConstruction",
    configuration: Mapping[str, Any]
) -> "FrameworkConstruction":
    """
    Layer `configuration` over the construction's current configuration
    
    Keys in `configuration` win. The merged snapshot is stored and
    registered as the ConfigurationSnapshot singleton.
    """
    snapshot = as_snapshot(configuration)
    if construction.configuration is not None:
        snapshot = (
            ConfigurationBuilder()
            .add_mapping(construction.configuration)
            .add_mapping(snapshot)
            .build()
        )
    
    construction.use_configuration(snapshot)
    construction.services.add_singleton(ConfigurationSnapshot, instance=snapshot)
    
    return construction


def add_default_services(construction: "FrameworkConstruction") -> "FrameworkConstruction":
    """Add all of the default services (currently the default logger)"""
    add_default_logger(construction)
    return construction


def add_default_logger(construction: "FrameworkConstruction") -> "FrameworkConstruction":
    """
    Register the default application logger
    
    Writes to the file at Logging:LogFileLocation (Config.DEFAULT_LOG_FILE
    when the key is missing), rolling daily, minimum level DEBUG. Registers
    a LoggerFactory and the logging.Logger itself as singletons.
    """
    configuration = construction.configuration or ConfigurationSnapshot()
    
    path = configuration.get(Config.LOG_FILE_KEY)
    if not path:
        path = Config.DEFAULT_LOG_FILE
        logger.warning(f"{Config.LOG_FILE_KEY} is not configured, logging to {path}")
    
    app_logger = create_file_logger(
        path,
        name=Config.APP_LOGGER_NAME,
        template=Config.LOG_TEMPLATE,
        level=logging.DEBUG,
    )
    
    construction.services.add_singleton(LoggerFactory, instance=LoggerFactory(app_logger))
    construction.services.add_singleton(logging.Logger, instance=app_logger)
    
    logger.debug(f"Default logger writing to {path}")
    return construction
