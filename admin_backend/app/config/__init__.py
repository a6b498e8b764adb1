"""Configuration helpers for the mock admin API."""

from .settings import get_settings, Settings

__all__ = ["get_settings", "Settings"]
