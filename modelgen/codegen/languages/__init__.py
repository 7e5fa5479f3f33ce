"""
Output languages known to the generator.

Each language module exports a TargetLanguage; this module keeps the
name → target lookup.
"""

from typing import Dict, List

from ..core.generator import TargetLanguage
from .go import GO_TARGET

_TARGETS: Dict[str, TargetLanguage] = {"go": GO_TARGET}
_ALIASES: Dict[str, str] = {"golang": "go"}


def get_target(language: str) -> TargetLanguage:
    """
    Get the target for a language name or alias.

    Raises:
        KeyError: If the language is not supported
    """
    key = language.lower()
    key = _ALIASES.get(key, key)
    if key not in _TARGETS:
        raise KeyError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(list_languages())}"
        )
    return _TARGETS[key]


def list_languages() -> List[str]:
    """Get list of supported language names."""
    return sorted(_TARGETS)
