"""Locate named fields in a shown ``LocalBuildInfo`` text.

The artifact is never parsed as a whole. A field is found by its
``name =`` marker and its value is the bracket-balanced span that follows.

Key rules:
- The first marker wins; later occurrences are ignored
- The span starts at the first opening bracket at or after the marker
- ``(``, ``[`` and ``{`` nest arbitrarily and must close in order
- Brackets inside string and character literals are not counted
"""

import re
from typing import Optional

from .errors import FieldNotFoundError

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())
# Longest body a shown Char can have, the octal escape of U+10FFFF
_MAX_CHAR_BODY = len(r"\o4177777")


def _marker(name: str) -> "re.Pattern[str]":
    return re.compile(r"(?<![\w'])" + re.escape(name) + r"\s*=(?!=)")


def _skip_literal(text: str, index: int) -> Optional[int]:
    """Return the index just past a string/char literal starting at ``index``."""
    quote = text[index]
    if quote == "'":
        # A quote directly after an identifier character is part of a name (foo')
        if index > 0 and (text[index - 1].isalnum() or text[index - 1] in "_'"):
            return None
    elif quote != '"':
        return None
    i = index + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if quote == "'" and i - index > _MAX_CHAR_BODY:
            return None  # not a char literal after all
        i += 1
    if quote == "'":
        return None
    raise ValueError("unterminated string literal")


def extract_parens(text: str, start: int = 0) -> str:
    """Return the balanced bracket span beginning at the first opener at or after ``start``.

    Returns an empty string if there is no opening bracket. Raises
    ValueError if the span is unbalanced or never closes.
    """
    stack: list[str] = []
    begin = -1
    i = start
    while i < len(text):
        ch = text[i]
        if ch in "\"'":
            end = _skip_literal(text, i)
            if end is not None:
                i = end
                continue
        if ch in _OPENERS:
            if not stack:
                begin = i
            stack.append(_OPENERS[ch])
        elif ch in _CLOSERS and stack:
            expected = stack.pop()
            if ch != expected:
                raise ValueError(f"mismatched '{ch}' at offset {i}, expected '{expected}'")
            if not stack:
                return text[begin:i + 1]
        i += 1
    if stack:
        raise ValueError(f"unterminated '{text[begin]}' opened at offset {begin}")
    return ""


def field_value_offset(blob: str, name: str) -> int:
    """Return the offset just past the ``name =`` marker of a field."""
    match = _marker(name).search(blob)
    if match is None:
        raise FieldNotFoundError(name, name in blob)
    return match.end()


def field_value_text(blob: str, name: str) -> str:
    """Return everything after the ``name =`` marker, leading spaces removed."""
    return blob[field_value_offset(blob, name):].lstrip()


def extract_field(blob: str, name: str) -> str:
    """Return the bracketed value of field ``name``.

    Raises FieldNotFoundError with the field name and whether ``name``
    occurs anywhere in ``blob``.
    """
    offset = field_value_offset(blob, name)
    try:
        span = extract_parens(blob, offset)
    except ValueError as e:
        raise FieldNotFoundError(name, True, reason=str(e)) from e
    if not span:
        raise FieldNotFoundError(name, True, reason="no bracketed value follows the field")
    return span
