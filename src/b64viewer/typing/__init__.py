"""Typing-centric domain modules."""

from b64viewer.typing.enums import CopyMode, FileCategory, PreviewKind, StorageKey
from b64viewer.typing.models import (
    DecodedDocument,
    DocumentPoint,
    EdgeOffsets,
    PdfCoordinates,
    PointerSample,
    RenderedPage,
    StoredFile,
    TypeGuess,
    ViewportTransform,
)
from b64viewer.typing.protocol import PageGeometrySource

__all__ = [
    "CopyMode",
    "DecodedDocument",
    "DocumentPoint",
    "EdgeOffsets",
    "FileCategory",
    "PageGeometrySource",
    "PdfCoordinates",
    "PointerSample",
    "PreviewKind",
    "RenderedPage",
    "StorageKey",
    "StoredFile",
    "TypeGuess",
    "ViewportTransform",
]
