"""
Framework construction
Holds the services, configuration and environment of an application
until it is built into a service provider
"""
from typing import Any, Callable, Mapping, Optional, Union

from injector import Injector

from . import defaults
from .configuration import ConfigurationBuilder, ConfigurationSnapshot, as_snapshot
from .environment import FrameworkEnvironment
from .errors import AlreadyBuiltError, ConfigurationMissingError
from .services import ServiceCollection, ServiceProvider
from ..utils.logger import get_logger

logger = get_logger(__name__)


class FrameworkConstruction:
    """
    The construction information used when building the framework
    
    Example:
        construction = FrameworkConstruction()
        construction.add_default_configuration().add_default_services()
        construction.services.add_singleton(OrderService)
        provider = construction.build()
    """
    
    def __init__(self, environment: Optional[FrameworkEnvironment] = None):
        self.services = ServiceCollection()
        self.environment = environment or FrameworkEnvironment()
        self.configuration: Optional[ConfigurationSnapshot] = None
        self.provider: Optional[ServiceProvider] = None
    
    @property
    def is_built(self) -> bool:
        return self.provider is not None
    
    def use_configuration(self, configuration: Mapping[str, Any]) -> "FrameworkConstruction":
        """Replace the configuration snapshot"""
        self.configuration = as_snapshot(configuration)
        return self
    
    def use_hosted_services(self, services: ServiceCollection) -> "FrameworkConstruction":
        """Use a service collection owned by a host instead of our own"""
        if self.is_built:
            raise AlreadyBuiltError("Cannot replace the services of a construction that has already been built")
        self.services = services
        return self
    
    def build(self, provider: Optional[Union[ServiceProvider, Injector]] = None) -> ServiceProvider:
        """
        Finalize the registrations into a service provider
        
        Args:
            provider: A provider (or injector) already built by a host; skips the local build
        
        Returns:
            The service provider
        
        Raises:
            ConfigurationMissingError: If no configuration was set
            AlreadyBuiltError: If the construction was already built
        """
        if self.is_built:
            raise AlreadyBuiltError("The construction has already been built")
        if self.configuration is None:
            raise ConfigurationMissingError()
        
        if provider is None:
            provider = self.services.build_provider()
        elif isinstance(provider, Injector):
            provider = ServiceProvider.from_injector(provider)
        
        self.services.make_read_only()
        self.provider = provider
        logger.debug(f"Construction built ({len(self.services)} registrations, {self.environment.label})")
        return provider
    
    # Chainable shortcuts for the default registrations
    
    def add_default_configuration(
        self,
        configure: Optional[Callable[[ConfigurationBuilder], None]] = None
    ) -> "FrameworkConstruction":
        return defaults.add_default_configuration(self, configure)
    
    def add_configuration(self, configuration: Mapping[str, Any]) -> "FrameworkConstruction":
        return defaults.add_configuration(self, configuration)
    
    def add_default_services(self) -> "FrameworkConstruction":
        return defaults.add_default_services(self)
    
    def add_default_logger(self) -> "FrameworkConstruction":
        return defaults.add_default_logger(self)


class DefaultFrameworkConstruction(FrameworkConstruction):
    """
    A construction with the default configuration and default services
    already added
    """
    
    def __init__(
        self,
        configure: Optional[Callable[[ConfigurationBuilder], None]] = None,
        environment: Optional[FrameworkEnvironment] = None
    ):
        super().__init__(environment)
        self.add_default_configuration(configure).add_default_services()
