"""Configuration module for the DSC engine."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
