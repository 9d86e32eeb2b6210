"""Configuration management for the fashion catalogue search service."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
