"""Base64 text normalization and shape validation."""

from __future__ import annotations

import re

_DATA_URI_PREFIX = re.compile(r"^data:([^;]+);base64,")
_DATA_URI = re.compile(r"^data:[^;]+;base64,(.+)$", re.DOTALL)
_WHITESPACE = re.compile(r"\s")
_BASE64_GRAMMAR = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_TRAILING_PADDING = re.compile(r"=+$")


def split_data_uri(text: str) -> tuple[str | None, str]:
    """Split a `data:<mime>;base64,` prefix from the rest of the text.

    Args:
        text (str): Raw text.

    Returns:
        tuple[str | None, str]: Declared MIME type (or None) and the remaining text.
    """
    match = _DATA_URI_PREFIX.match(text)
    if match is None:
        return None, text
    return match.group(1), text[match.end() :]


def clean(text: str) -> str:
    """Turn pasted text into a canonical base64 payload.

    Surrounding whitespace is trimmed, a data URI prefix is dropped, and any
    whitespace left inside the payload (wrapped lines) is removed. Prefixes
    are stripped until none is left so that `clean` is idempotent.

    Args:
        text (str): Raw pasted text.

    Returns:
        str: Cleaned payload.
    """
    cleaned = _WHITESPACE.sub("", text.strip())
    while match := _DATA_URI.match(cleaned):
        cleaned = match.group(1)
    return cleaned


def is_valid(text: str) -> bool:
    """Return whether the text cleans to a well-formed base64 payload.

    Args:
        text (str): Raw pasted text.

    Returns:
        bool: True when the payload is non-empty, matches the base64 grammar and its length is a multiple of 4.
    """
    if not text:
        return False
    cleaned = clean(text)
    if not cleaned:
        return False
    return _BASE64_GRAMMAR.fullmatch(cleaned) is not None and len(cleaned) % 4 == 0


def get_raw_base64(data_url: str) -> str:
    """Return the payload of a data URL, or the input when it is not one."""
    match = _DATA_URI.match(data_url)
    return match.group(1) if match else data_url


def to_data_url(payload: str, mime: str) -> str:
    """Wrap a payload in a base64 data URL."""
    return f"data:{mime};base64,{payload}"


def decoded_size(payload: str) -> int:
    """Return the byte length a cleaned payload decodes to.

    Args:
        payload (str): Cleaned base64 payload.

    Returns:
        int: Decoded size in bytes.
    """
    match = _TRAILING_PADDING.search(payload)
    padding = len(match.group(0)) if match else 0
    return max((len(payload) * 3) // 4 - padding, 0)
