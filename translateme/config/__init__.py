"""
Configuration package for the TranslateMe backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    ClearPolicy,
    TranslationProviderSettings,
    HistoryStoreSettings,
    settings,
    get_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "ClearPolicy",
    "TranslationProviderSettings",
    "HistoryStoreSettings",
    "settings",
    "get_settings",
]
