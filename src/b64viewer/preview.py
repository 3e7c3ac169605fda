"""Choose how a decoded document is previewed."""

from __future__ import annotations

import base64
import binascii
import json
from typing import TYPE_CHECKING

from b64viewer.exceptions import PreviewError
from b64viewer.typing.enums import FileCategory, PreviewKind

if TYPE_CHECKING:
    from b64viewer.typing.models import DecodedDocument

_TEXT_MIME_TYPES = frozenset({"application/json", "application/xml", "application/javascript"})

_CATEGORY_BY_EXTENSION: dict[str, FileCategory] = {
    "pdf": FileCategory.DOCUMENT,
    "txt": FileCategory.DOCUMENT,
    "png": FileCategory.IMAGE,
    "jpg": FileCategory.IMAGE,
    "jpeg": FileCategory.IMAGE,
    "gif": FileCategory.IMAGE,
    "webp": FileCategory.IMAGE,
    "bmp": FileCategory.IMAGE,
    "tiff": FileCategory.IMAGE,
    "json": FileCategory.JSON,
    "xml": FileCategory.CODE,
    "html": FileCategory.CODE,
    "js": FileCategory.CODE,
    "mp4": FileCategory.VIDEO,
    "webm": FileCategory.VIDEO,
    "mp3": FileCategory.AUDIO,
    "wav": FileCategory.AUDIO,
    "zip": FileCategory.ARCHIVE,
}


def select_preview(mime: str) -> PreviewKind:
    """Return the preview surface for a MIME type.

    Args:
        mime (str): MIME type of the decoded document.

    Returns:
        PreviewKind: Surface to use; `DOWNLOAD` when nothing can show it.
    """
    if mime.startswith("image/"):
        return PreviewKind.IMAGE
    if mime == "application/pdf":
        return PreviewKind.PDF
    if mime.startswith("text/") or mime in _TEXT_MIME_TYPES:
        return PreviewKind.TEXT
    if mime.startswith("video/"):
        return PreviewKind.VIDEO
    if mime.startswith("audio/"):
        return PreviewKind.AUDIO
    return PreviewKind.DOWNLOAD


def text_preview(document: DecodedDocument) -> str:
    """Return the text shown for a text-like document.

    JSON is re-indented when it parses and shown verbatim otherwise.

    Args:
        document (DecodedDocument): Decoded document.

    Raises:
        PreviewError: If the payload cannot be decoded.

    Returns:
        str: Display text.
    """
    try:
        content = base64.b64decode(document.payload, validate=True).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError) as exc:
        raise PreviewError(message="Preview not available for this file type") from exc

    if document.mime_type != "application/json":
        return content
    try:
        return json.dumps(json.loads(content), indent=2, ensure_ascii=False)
    except ValueError:
        return content


def file_category(extension: str) -> FileCategory:
    """Return the icon family for a file extension."""
    return _CATEGORY_BY_EXTENSION.get(extension.lower(), FileCategory.GENERIC)
