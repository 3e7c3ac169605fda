"""Content-type sniffing for base64 payloads.

Detection never looks at external metadata. Rules are evaluated in priority
order and the first match wins:

1. a declared `data:<mime>;base64,` prefix,
2. the base64 signature table,
3. heuristics on the decoded text,
4. `application/octet-stream`.
"""

from __future__ import annotations

import base64
import binascii
import json
import re

from b64viewer.logging import get_logger
from b64viewer.normalizer import split_data_uri
from b64viewer.typing.models import TypeGuess

logger = get_logger(__name__)

DEFAULT_GUESS = TypeGuess(mime="application/octet-stream", ext="bin")

# Prefixes are base64 text, not raw bytes. Order is significant.
SIGNATURES: tuple[tuple[str, TypeGuess], ...] = (
    ("JVBERi0", TypeGuess(mime="application/pdf", ext="pdf")),
    ("iVBORw0KGgo", TypeGuess(mime="image/png", ext="png")),
    ("/9j/", TypeGuess(mime="image/jpeg", ext="jpg")),
    ("R0lGODlh", TypeGuess(mime="image/gif", ext="gif")),
    ("R0lGODdh", TypeGuess(mime="image/gif", ext="gif")),
    ("UEsDBBQA", TypeGuess(mime="application/zip", ext="zip")),
    ("UEsFBgA", TypeGuess(mime="application/zip", ext="zip")),
    ("PK", TypeGuess(mime="application/zip", ext="zip")),
    ("AAAA", TypeGuess(mime="video/mp4", ext="mp4")),
    ("GkXfo", TypeGuess(mime="video/webm", ext="webm")),
    ("Qk0", TypeGuess(mime="image/bmp", ext="bmp")),
    ("SUkqAA", TypeGuess(mime="image/tiff", ext="tiff")),
    ("TU0AKg", TypeGuess(mime="image/tiff", ext="tiff")),
    ("UklGR", TypeGuess(mime="image/webp", ext="webp")),
)

_JSON = TypeGuess(mime="application/json", ext="json")
_XML = TypeGuess(mime="application/xml", ext="xml")
_HTML = TypeGuess(mime="text/html", ext="html")
_JAVASCRIPT = TypeGuess(mime="application/javascript", ext="js")
_PLAIN_TEXT = TypeGuess(mime="text/plain", ext="txt")

_SCRIPT_MARKERS = ("function", "const ", "let ")
_PRINTABLE = re.compile(r"[\x20-\x7E\s]+", re.ASCII)
_NON_ALNUM = re.compile(r"[^a-z0-9]", re.IGNORECASE)
# Whitespace a browser `trim` removes within the latin-1 range.
_TRIM_CHARACTERS = " \t\n\r\f\v\xa0"


def extension_from_mime(mime: str) -> str:
    """Derive a short extension from a MIME subtype.

    Args:
        mime (str): MIME type, e.g. `image/svg+xml`.

    Returns:
        str: Alphanumeric subtype (`svgxml`), or `bin` when nothing is left.
    """
    _, _, subtype = mime.partition("/")
    return _NON_ALNUM.sub("", subtype) or "bin"


def match_signature(payload: str) -> TypeGuess | None:
    """Return the first signature table entry the payload starts with."""
    for prefix, guess in SIGNATURES:
        if payload.startswith(prefix):
            return guess
    return None


def _decode_text(payload: str) -> str | None:
    if "=" not in payload:
        # Unpadded input is accepted, like a browser `atob`.
        payload += "=" * (-len(payload) % 4)
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
    # One code point per byte, like a binary string.
    return raw.decode("latin-1")


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")  # noqa: TRY003


def _is_json(text: str) -> bool:
    try:
        json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return False
    return True


def guess_from_text(decoded: str) -> TypeGuess | None:
    """Classify decoded text with the textual heuristics.

    Args:
        decoded (str): Decoded payload, one character per byte.

    Returns:
        TypeGuess | None: Guess, or None when no heuristic applies.
    """
    trimmed = decoded.strip(_TRIM_CHARACTERS)

    if trimmed.startswith(("{", "[")) and _is_json(trimmed):
        return _JSON
    if trimmed.startswith(("<?xml", "<")):
        return _XML
    if trimmed.startswith("<!DOCTYPE html") or "<html" in trimmed.lower():
        return _HTML
    if any(marker in trimmed for marker in _SCRIPT_MARKERS):
        return _JAVASCRIPT
    if _PRINTABLE.fullmatch(decoded):
        return _PLAIN_TEXT
    return None


def detect(text: str) -> TypeGuess:
    """Guess the MIME type and extension of a base64 payload.

    Args:
        text (str): Cleaned payload, or a data URL whose declared type is trusted.

    Returns:
        TypeGuess: Best guess; `application/octet-stream` when nothing matches.
    """
    declared, payload = split_data_uri(text)
    if declared is not None:
        guess = TypeGuess(mime=declared, ext=extension_from_mime(declared))
        logger.debug("Type declared by data URI", extra={"mime": guess.mime})
        return guess

    guess = match_signature(payload)
    if guess is not None:
        logger.debug("Type matched by signature", extra={"mime": guess.mime})
        return guess

    decoded = _decode_text(payload)
    if decoded is None:
        logger.debug("Payload is not decodable base64")
        return DEFAULT_GUESS

    guess = guess_from_text(decoded)
    if guess is not None:
        logger.debug("Type matched by text heuristic", extra={"mime": guess.mime})
        return guess

    return DEFAULT_GUESS
