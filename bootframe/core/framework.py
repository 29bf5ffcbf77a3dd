"""
Framework facade
The single, process-wide handle to the active construction

The active construction is meant to be set once, early at startup, before
other threads resolve services. Writes are serialized; reads are not.
"""
import logging
import threading
from typing import Optional, Type, TypeVar, Union

from injector import Injector

from .construction import DefaultFrameworkConstruction, FrameworkConstruction
from .errors import NotBuiltError, NotConstructedError
from .services import ServiceProvider
from ..utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_construction: Optional[FrameworkConstruction] = None
_construction_lock = threading.Lock()


class Framework:
    """
    The main entry point into the framework
    
    Example:
        Framework.construct(DefaultFrameworkConstruction)
        Framework.construction().services.add_singleton(OrderService)
        Framework.build()
        
        orders = Framework.service(OrderService)
    """
    
    @staticmethod
    def construct(
        construction: Union[Type[FrameworkConstruction], FrameworkConstruction] = DefaultFrameworkConstruction
    ) -> FrameworkConstruction:
        """
        Make a construction the active one, replacing any previous one
        
        Args:
            construction: A construction class to instantiate, or an instance to use as is
        
        Returns:
            The active construction, for chaining
        """
        global _construction
        if isinstance(construction, type):
            construction = construction()
        with _construction_lock:
            if _construction is not None:
                logger.debug(f"Replacing active construction {type(_construction).__name__}")
            _construction = construction
        logger.debug(f"Active construction is now {type(construction).__name__} ({construction.environment.label})")
        return construction
    
    @staticmethod
    def reset() -> None:
        """Forget the active construction (useful for testing)"""
        global _construction
        with _construction_lock:
            _construction = None
    
    @classmethod
    def _active(cls) -> FrameworkConstruction:
        if _construction is None:
            raise NotConstructedError()
        return _construction
    
    @classmethod
    def is_constructed(cls) -> bool:
        return _construction is not None
    
    @classmethod
    def construction(cls) -> FrameworkConstruction:
        """The active construction"""
        return cls._active()
    
    @classmethod
    def provider(cls) -> ServiceProvider:
        """The service provider of the active construction"""
        construction = cls._active()
        if construction.provider is None:
            raise NotBuiltError()
        return construction.provider
    
    @classmethod
    def build(
        cls,
        provider: Optional[Union[ServiceProvider, Injector]] = None,
        log_started: bool = False
    ) -> ServiceProvider:
        """
        Build the active construction
        
        Args:
            provider: A provider already built by a host (default: build locally)
            log_started: Log a started message on the application logger
        """
        construction = cls._active()
        built = construction.build(provider)
        
        if log_started:
            app_logger = built.get_optional(logging.Logger)
            if app_logger is not None:
                app_logger.info(f"Framework started in {construction.environment.label}...")
        
        return built
    
    @classmethod
    def service(cls, service_type: Type[T]) -> T:
        """
        Shortcut to Framework.provider().get(service_type)
        
        Raises:
            NotConstructedError: If no construction is active (NotBuiltError if it is not built)
            ResolutionError: If the type is not registered
        """
        return cls.provider().get(service_type)
