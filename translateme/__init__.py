"""TranslateMe backend: text translation with a persisted, clearable history."""

__version__ = "1.0.0"
