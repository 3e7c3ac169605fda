"""Base64 document viewer package."""

from b64viewer.exceptions import (
    DependencyError,
    InvalidBase64Error,
    PackageError,
    PreviewError,
    RenderError,
    SettingsError,
)
from b64viewer.geometry import to_document_space
from b64viewer.logging import configure_logging, get_logger
from b64viewer.normalizer import clean, is_valid
from b64viewer.settings import Settings, get_settings
from b64viewer.sniffer import detect

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("b64viewer")

__all__ = [
    "DependencyError",
    "InvalidBase64Error",
    "PackageError",
    "PreviewError",
    "RenderError",
    "Settings",
    "SettingsError",
    "__version__",
    "clean",
    "configure_logging",
    "detect",
    "get_logger",
    "get_settings",
    "is_valid",
    "logger",
    "to_document_space",
]
