"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}",
            ) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class PreviewKind(_EnumMixin):
    """Preview surface chosen for a decoded document."""

    IMAGE = "image"
    PDF = "pdf"
    TEXT = "text"
    VIDEO = "video"
    AUDIO = "audio"
    DOWNLOAD = "download"


class CopyMode(_EnumMixin):
    """How an encoded file is exported."""

    RAW = "raw"
    DATA_URI = "data_uri"


class StorageKey(_EnumMixin):
    """Session storage slots."""

    ENCODER_FILE = "b64_encoder_file"
    VIEWER_FILE = "b64_viewer_file"
    DECODER_INPUT = "b64_decoder_input"
    ACTIVE_TAB = "b64_active_tab"


class FileCategory(_EnumMixin):
    """Icon family for a file extension."""

    DOCUMENT = "document"
    IMAGE = "image"
    JSON = "json"
    CODE = "code"
    VIDEO = "video"
    AUDIO = "audio"
    ARCHIVE = "archive"
    GENERIC = "generic"
