"""Structured logging for b64viewer.

Events are rendered by structlog and emitted through stdlib logging, as JSON
lines by default or as plain console lines when `LOG_JSON=false`. Pasted
payloads can be megabytes long, so long string values are shortened before
rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

from b64viewer.settings import Settings, get_settings

if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor

MAX_VALUE_LENGTH = 200

_configured = False


def _rename_event_key(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Store the event text under `message`."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _shorten(value: Any) -> Any:
    if isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
        return f"{value[:MAX_VALUE_LENGTH]}... ({len(value)} chars)"
    if isinstance(value, dict):
        return {key: _shorten(item) for key, item in value.items()}
    return value


def _shorten_long_values(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Truncate long strings, such as base64 payloads, in event fields.

    Args:
        logger: The logger instance (unused).
        method_name: The logging method name (unused).
        event_dict: The event dictionary.

    Returns:
        EventDict: Event with every string field at most `MAX_VALUE_LENGTH` characters plus a length note.
    """
    for key, value in event_dict.items():
        if key != "event":
            event_dict[key] = _shorten(value)
    return event_dict


def _build_handlers(config: Settings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))
    return handlers


def _build_processors(config: Settings) -> list[Processor]:
    renderer: Processor = (
        structlog.processors.JSONRenderer() if config.log_json else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        _shorten_long_values,
        _rename_event_key,
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(*, settings: Settings | None = None, force: bool = False) -> None:
    """Configure structlog and stdlib logging.

    Runs once unless `force` is set, which replaces the handlers installed by
    an earlier call.

    Args:
        settings (Settings | None): Settings to use; loaded when omitted.
        force (bool): Reconfigure even when logging is already set up.
    """
    global _configured  # noqa: PLW0603

    if _configured and not force:
        return

    config = settings or get_settings()
    level = logging.getLevelNamesMapping().get(config.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format="%(message)s", handlers=_build_handlers(config), force=force)
    structlog.configure(
        processors=_build_processors(config),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str = "b64viewer") -> structlog.BoundLogger:
    """Return a package logger, configuring logging on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
