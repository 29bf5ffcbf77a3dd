"""
Exceptions raised by the framework
"""
from typing import Any, Optional


class FrameworkError(Exception):
    """Base class for every error raised by bootframe"""


class ConfigurationMissingError(FrameworkError):
    """A construction was built before any configuration was set"""
    
    def __init__(self, message: str = "No configuration was set on the construction; call add_default_configuration() or use_configuration() before build()"):
        super().__init__(message)


class AlreadyBuiltError(FrameworkError):
    """Registrations were changed (or build() repeated) after the construction was built"""


class NotConstructedError(FrameworkError):
    """The framework was used before Framework.construct() was called"""
    
    def __init__(self, message: str = "No framework construction is active; call Framework.construct() first"):
        super().__init__(message)


class NotBuiltError(NotConstructedError):
    """A construction is active but has not been built yet"""
    
    def __init__(self, message: str = "The active framework construction has not been built; call Framework.build() first"):
        super().__init__(message)


class ResolutionError(FrameworkError):
    """A requested service type has no registration"""
    
    def __init__(self, service_type: Any, cause: Optional[BaseException] = None):
        self.service_type = service_type
        name = getattr(service_type, "__qualname__", repr(service_type))
        message = f"No service registered for {name}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class ConfigurationFileError(FrameworkError):
    """A settings file exists but could not be used"""
    
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration file {path}: {reason}")
