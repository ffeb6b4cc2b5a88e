"""Core: configuration and constants."""

from panel_policy.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
