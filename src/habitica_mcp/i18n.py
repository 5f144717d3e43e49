"""Message language selection for Habitica MCP server.

The language is chosen once at startup and carried by a Translator instance
that every formatting call site receives explicitly.
"""

from dataclasses import dataclass

DEFAULT_LANGUAGE = "en"
_CHINESE_PREFIX = "zh"


@dataclass(frozen=True, slots=True)
class Translator:
    """Select between the English and Chinese variant of a message."""

    language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        object.__setattr__(self, "language", (self.language or "").lower())

    @property
    def is_chinese(self) -> bool:
        """Whether the configured language selects the Chinese variants."""
        return self.language.startswith(_CHINESE_PREFIX)

    def t(self, en: str, zh: str) -> str:
        """Return the message variant for the configured language.

        Args:
            en: English text
            zh: Chinese text

        Returns:
            str: ``zh`` when the language tag starts with "zh", otherwise ``en``
        """
        return zh if self.is_chinese else en
