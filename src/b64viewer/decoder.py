"""Decode pasted base64 text into documents and encode files into base64."""

from __future__ import annotations

import base64
import mimetypes
import time
from pathlib import Path

from b64viewer.exceptions import InvalidBase64Error
from b64viewer.logging import get_logger
from b64viewer.normalizer import clean, decoded_size, get_raw_base64, is_valid, split_data_uri, to_data_url
from b64viewer.sniffer import detect, extension_from_mime
from b64viewer.typing.enums import CopyMode
from b64viewer.typing.models import DecodedDocument, StoredFile, TypeGuess

logger = get_logger(__name__)

DEFAULT_MIME = "application/octet-stream"
_SIZE_UNITS = ("B", "KB", "MB", "GB")
_MAX_FILENAME_EXTENSION = 5


def sniff_text(text: str) -> TypeGuess:
    """Classify pasted text, honoring a declared data URI type.

    Args:
        text (str): Raw pasted text.

    Returns:
        TypeGuess: Best guess for the cleaned payload.
    """
    payload = clean(text)
    declared, _ = split_data_uri(text.strip())
    return detect(to_data_url(payload, declared) if declared else payload)


def decode_base64(text: str) -> DecodedDocument:
    """Validate and classify pasted base64 text.

    A declared data URI type wins over sniffing; otherwise the cleaned payload
    is classified from its content.

    Args:
        text (str): Raw pasted text, optionally a data URL.

    Raises:
        InvalidBase64Error: If the text does not clean to a base64 payload.

    Returns:
        DecodedDocument: Classified document ready for preview or download.
    """
    if not is_valid(text):
        raise InvalidBase64Error

    payload = clean(text)
    guess = sniff_text(text)

    document = DecodedDocument(
        payload=payload,
        data_url=to_data_url(payload, guess.mime),
        mime_type=guess.mime,
        extension=guess.ext,
        filename=f"document.{guess.ext}",
        size=decoded_size(payload),
    )
    logger.info(
        "Base64 decoded",
        extra={"mime_type": document.mime_type, "size": document.size},
    )
    return document


def decode_bytes(payload: str) -> bytes:
    """Decode a payload or data URL to raw bytes.

    Args:
        payload (str): Cleaned payload or data URL.

    Raises:
        InvalidBase64Error: If the payload is not valid base64.

    Returns:
        bytes: Decoded content.
    """
    if not is_valid(payload):
        raise InvalidBase64Error
    return base64.b64decode(clean(payload), validate=True)


def encode_bytes(data: bytes, *, name: str, mime: str | None = None) -> StoredFile:
    """Encode raw bytes as a stored file with a base64 data URL."""
    file_type = mime or DEFAULT_MIME
    payload = base64.b64encode(data).decode("ascii")
    return StoredFile(
        name=name,
        type=file_type,
        size=len(data),
        data=to_data_url(payload, file_type),
        timestamp=int(time.time() * 1000),
    )


def encode_file(path: Path) -> StoredFile:
    """Read a file and encode it as a stored file.

    Args:
        path (Path): File to encode.

    Returns:
        StoredFile: Encoded file, typed from its name.
    """
    mime, _ = mimetypes.guess_type(path.name)
    stored = encode_bytes(path.read_bytes(), name=path.name, mime=mime)
    logger.info("File encoded", extra={"input_path": str(path), "size": stored.size})
    return stored


def export_text(stored: StoredFile, mode: CopyMode) -> str:
    """Return the text copied or downloaded for an encoded file."""
    if mode == CopyMode.RAW:
        return get_raw_base64(stored.data)
    return stored.data


def export_filename(stored: StoredFile) -> str:
    """Return the download name of an encoded file's base64 export."""
    return f"{stored.name}.base64.txt"


def format_bytes(size: int) -> str:
    """Format a byte count for humans.

    Args:
        size (int): Byte count.

    Returns:
        str: Size with one decimal at most, e.g. `1.5 KB`.
    """
    if size <= 0:
        return "0 B"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    text = f"{value:.1f}".removesuffix(".0")
    return f"{text} {_SIZE_UNITS[exponent]}"


def get_extension(filename: str, mime: str | None = None) -> str:
    """Pick a file extension from a filename, falling back to its MIME type.

    Args:
        filename (str): File name.
        mime (str | None): Optional MIME type.

    Returns:
        str: Lower-cased extension, `bin` when nothing usable is found.
    """
    from_filename = filename.rsplit(".", 1)[-1].lower()
    if from_filename and len(from_filename) <= _MAX_FILENAME_EXTENSION:
        return from_filename
    if mime:
        return extension_from_mime(mime)
    return "bin"
