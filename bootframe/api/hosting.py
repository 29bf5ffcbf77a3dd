"""
FastAPI integration
Shares one service provider between a FastAPI app and the framework
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, Callable, Optional, Type, TypeVar

from fastapi import Depends, FastAPI

from ..core.config import Config
from ..core.construction import DefaultFrameworkConstruction, FrameworkConstruction
from ..core.framework import Framework
from ..core.services import ServiceCollection
from ..utils.logger import close_handlers, get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def configure_hosted_framework(
    app: FastAPI,
    configure: Optional[Callable[[FrameworkConstruction], None]] = None
) -> FrameworkConstruction:
    """
    Set up the framework against the app's own services and configuration
    
    - app.state.services: the host's ServiceCollection (created if absent);
      the construction works on a copy, so the app can start again later
    - app.state.configuration: optional mapping layered over the defaults
    
    Returns:
        The active (not yet built) construction
    """
    services = getattr(app.state, "services", None)
    if not isinstance(services, ServiceCollection):
        services = ServiceCollection()
        app.state.services = services
    
    construction = Framework.construct(DefaultFrameworkConstruction)
    
    # Re-run the defaults on top of the host's registrations
    construction.use_hosted_services(ServiceCollection(list(services)))
    construction.add_default_configuration().add_default_services()
    
    host_configuration = getattr(app.state, "configuration", None)
    if host_configuration is not None:
        construction.add_configuration(host_configuration)
    
    if configure is not None:
        configure(construction)
    
    return construction


def use_framework(
    app: FastAPI,
    configure: Optional[Callable[[FrameworkConstruction], None]] = None
) -> FastAPI:
    """
    Add the framework to a FastAPI application
    
    On startup the framework is constructed against the app (see
    configure_hosted_framework), built, and the provider is stored in
    app.state.provider before the app's own lifespan runs. On shutdown the
    default log file is closed.
    
    Args:
        app: The FastAPI application
        configure: Custom step receiving the construction before it is built
    
    Returns:
        The app, for chaining
    """
    host_lifespan = app.router.lifespan_context
    
    @asynccontextmanager
    async def lifespan(host_app: FastAPI):
        try:
            construction = configure_hosted_framework(host_app, configure)
            host_app.state.provider = Framework.build(log_started=True)
            logger.info(f"Framework started for {host_app.title} ({construction.environment.label})")
            
            async with host_lifespan(host_app) as state:
                yield state
        finally:
            close_handlers(logging.getLogger(Config.APP_LOGGER_NAME))
            logger.info("Framework stopped")
    
    app.router.lifespan_context = lifespan
    return app


def FromServices(service_type: Type[T]) -> Any:
    """
    FastAPI dependency resolving `service_type` from the framework
    
    Example:
        @app.get("/orders")
        def orders(service: OrderService = FromServices(OrderService)):
            ...
    """
    def resolve() -> T:
        return Framework.service(service_type)
    
    return Depends(resolve)
