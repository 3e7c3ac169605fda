"""Core domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TypeGuess(BaseModel):
    """Best-guess MIME type and file extension for a payload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mime: str
    ext: str


class ViewportTransform(BaseModel):
    """Affine map from page space (points) to canvas space (pixels).

    `pixel_x = a * x + c * y + e` and `pixel_y = b * x + d * y + f`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    a: float
    b: float
    c: float
    d: float
    e: float
    f: float
    scale: float
    width: float
    height: float
    rotation: int = 0
    view_box: tuple[float, float, float, float] | None = None

    @property
    def coefficients(self) -> tuple[float, float, float, float, float, float]:
        """Return the six affine coefficients in PDF matrix order."""
        return (self.a, self.b, self.c, self.d, self.e, self.f)


class PointerSample(BaseModel):
    """Pointer position on the rendered canvas."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pixel_x: float
    pixel_y: float
    page: int = Field(default=1, ge=1)


class DocumentPoint(BaseModel):
    """Point in page space, origin bottom-left, y upward."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    doc_x: float
    doc_y: float
    approximate: bool = False


class EdgeOffsets(BaseModel):
    """Distance from each page edge, in points."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    left: float
    right: float
    top: float
    bottom: float


class PdfCoordinates(BaseModel):
    """Pointer position resolved against the displayed PDF page."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pdf_x: float
    pdf_y: float
    canvas_x: float
    canvas_y: float
    page: int
    page_width: float
    page_height: float
    offsets: EdgeOffsets
    x_percent: float
    y_percent: float
    approximate: bool = False


class DecodedDocument(BaseModel):
    """Document reconstructed from pasted base64 text."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    payload: str
    data_url: str
    mime_type: str
    extension: str
    filename: str
    size: int = Field(ge=0)


class StoredFile(BaseModel):
    """Encoded file kept in session storage."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    size: int = Field(ge=0)
    data: str
    timestamp: int

    @field_validator("data")
    @classmethod
    def _validate_data_url(cls, value: str) -> str:
        """Ensure the payload is a base64 data URL.

        Args:
            value (str): Data URL.

        Raises:
            ValueError: If the value is not a base64 data URL.

        Returns:
            str: Validated data URL.
        """
        if not value.startswith("data:") or ";base64," not in value:
            raise ValueError("Stored file data must be a base64 data URL")  # noqa: TRY003
        return value


class RenderedPage(BaseModel):
    """Rasterized PDF page together with the viewport used to draw it."""

    model_config = ConfigDict(extra="forbid")

    page_number: int
    mime_type: str
    data_base64: str
    transform: ViewportTransform
