"""
Configuration Module

Application configuration loaded from environment variables.

Usage:
======
    from ocwiki.config.settings import settings

    cookie = settings.SESSION_COOKIE_NAME
    is_dev = settings.is_development
"""

from ocwiki.config.settings import settings, get_settings, Settings

__all__ = [
    "settings",
    "get_settings",
    "Settings",
]
