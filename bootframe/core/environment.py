"""
Environment probe
Tells whether the process runs as Development or Production
"""
import sys
from typing import Optional

from .config import Config


class FrameworkEnvironment:
    """
    Information about the current framework environment
    
    The process is a development environment when the debug marker is set:
    BOOTFRAME_DEBUG (see Config.DEBUG) or the interpreter's development
    mode (python -X dev). Anything else is Production.
    """
    
    DEVELOPMENT = "Development"
    PRODUCTION = "Production"
    
    def __init__(self, debug: Optional[bool] = None):
        """
        Args:
            debug: Force the debug marker on or off (default: probe the process)
        """
        self._debug = debug
    
    @property
    def is_development(self) -> bool:
        """True if we are in a development (debug) environment"""
        if self._debug is not None:
            return self._debug
        return bool(Config.DEBUG or getattr(sys.flags, "dev_mode", False))
    
    @property
    def label(self) -> str:
        """Either "Development" or "Production" """
        return self.DEVELOPMENT if self.is_development else self.PRODUCTION
    
    def __repr__(self) -> str:
        return f"FrameworkEnvironment(label={self.label!r})"
