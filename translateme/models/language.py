"""Languages offered by the translation picker."""
from enum import Enum


class Language(str, Enum):
    ENGLISH = "en"
    SPANISH = "es"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_display_name(cls, name: str) -> "Language":
        """Map a picker label to its language; unknown labels fall back to English."""
        for language, label in _DISPLAY_NAMES.items():
            if label.lower() == name.strip().lower():
                return language
        return cls.ENGLISH

    @classmethod
    def codes(cls) -> list[str]:
        return [language.value for language in cls]


_DISPLAY_NAMES = {
    Language.ENGLISH: "English",
    Language.SPANISH: "Spanish",
    Language.FRENCH: "French",
    Language.GERMAN: "German",
    Language.ITALIAN: "Italian",
}

DEFAULT_SOURCE_LANGUAGE = Language.ENGLISH
DEFAULT_TARGET_LANGUAGE = Language.SPANISH
