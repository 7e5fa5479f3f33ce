"""
Naming utilities for safe code generation.

Turns raw table and column names into identifiers for the generated
source, and guards generated names against target-language keywords.
"""

from typing import AbstractSet

_LOWER = frozenset("abcdefghijklmnopqrstuvwxyz")
_UPPER = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")


def normalize_identifier(name: str, capitalize_first: bool = True) -> str:
    """
    Convert a raw database name into a capitalized identifier.

    Alphabetic runs become segments whose first letter is upper-cased and
    whose remaining letters are lower-cased, so ``user_ID`` becomes
    ``UserId``. A lower-to-upper transition also starts a segment, which
    keeps already-normalized names stable (``CreatedAt`` stays
    ``CreatedAt``). Digits are copied verbatim; when a digit directly
    follows a separator an underscore is emitted before it. Every other
    character only separates segments.

    Args:
        name: Raw column or table name
        capitalize_first: Whether the first letter of the result is upper-case

    Returns:
        Normalized identifier (empty for empty input)
    """
    out = []
    seg_start = True
    after_separator = False
    prev = ""

    for raw in name or "":
        ch = raw
        if ch in _LOWER or ch in _UPPER:
            if ch in _UPPER and prev in _LOWER:
                seg_start = True
            if seg_start:
                if not out and not capitalize_first:
                    ch = ch.lower()
                else:
                    ch = ch.upper()
                seg_start = False
            else:
                ch = ch.lower()
            out.append(ch)
            after_separator = False
        elif ch in _DIGITS:
            if after_separator:
                out.append("_")
            out.append(ch)
            seg_start = True
            after_separator = False
        else:
            seg_start = True
            after_separator = True
        prev = raw

    return "".join(out)


def lower_first(name: str) -> str:
    """Normalize a name with a lower-case first letter (``userProfile``)."""
    return normalize_identifier(name, capitalize_first=False)


def avoid_reserved(
    name: str, reserved_words: AbstractSet[str], suffix: str = "_"
) -> str:
    """Append ``suffix`` until ``name`` no longer collides with a reserved word."""
    while name in reserved_words:
        name += suffix
    return name
