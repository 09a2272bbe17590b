"""Configuration package."""
from .settings import Settings, get_settings, is_placeholder

__all__ = ["Settings", "get_settings", "is_placeholder"]
