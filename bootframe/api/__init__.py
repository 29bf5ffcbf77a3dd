"""
Host integration for bootframe
"""
from .hosting import FromServices, configure_hosted_framework, use_framework

__all__ = ["FromServices", "configure_hosted_framework", "use_framework"]
