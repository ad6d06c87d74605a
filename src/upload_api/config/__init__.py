"""
Configuration management for the Upload API.

Contains the Pydantic settings class and the cached settings accessor.
"""

from .settings import Settings, get_settings

__all__ = ['Settings', 'get_settings']
