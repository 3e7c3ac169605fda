"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from b64viewer.exceptions import SettingsError

logger = logging.getLogger(__name__)

_RENDER_FORMATS = ("png", "jpeg", "jpg")


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "b64viewer"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    output_dir: str = Field(
        default="results",
        validation_alias="OUTPUT_DIR",
        description="Directory where decoded documents are written.",
    )
    storage_path: str = Field(
        default=".b64viewer/session.json",
        validation_alias="STORAGE_PATH",
        description="JSON file backing the session storage.",
    )

    pdf_default_scale: float = Field(
        default=0.75,
        gt=0,
        validation_alias="PDF_DEFAULT_SCALE",
        description="Initial zoom of the inline PDF viewer.",
    )
    pdf_fullscreen_scale: float = Field(
        default=1.0,
        gt=0,
        validation_alias="PDF_FULLSCREEN_SCALE",
        description="Initial zoom of the fullscreen PDF viewer.",
    )
    pdf_min_scale: float = Field(
        default=0.5,
        gt=0,
        validation_alias="PDF_MIN_SCALE",
        description="Lowest zoom reachable with zoom out.",
    )
    pdf_max_scale: float = Field(
        default=4.0,
        gt=0,
        validation_alias="PDF_MAX_SCALE",
        description="Highest zoom reachable with zoom in.",
    )
    pdf_zoom_step: float = Field(
        default=0.25,
        gt=0,
        validation_alias="PDF_ZOOM_STEP",
        description="Zoom increment per zoom in/out action.",
    )
    pdf_render_format: str = Field(
        default="png",
        validation_alias="PDF_RENDER_FORMAT",
        description="Image format used when rasterizing PDF pages.",
    )

    @model_validator(mode="after")
    def _validate_pdf_zoom(self) -> Settings:
        """Check zoom bounds and render format.

        Raises:
            ValueError: If the zoom range is empty or the format is unsupported.

        Returns:
            Settings: Validated settings.
        """
        if self.pdf_min_scale > self.pdf_max_scale:
            raise ValueError("PDF_MIN_SCALE must not exceed PDF_MAX_SCALE")  # noqa: TRY003
        if self.pdf_render_format.lower() not in _RENDER_FORMATS:
            raise ValueError(  # noqa: TRY003
                f"PDF_RENDER_FORMAT must be one of: {', '.join(_RENDER_FORMATS)}",
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            try:
                ensure_env_file_exists()
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
