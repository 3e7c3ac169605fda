"""PDF viewer session: page navigation, zoom, rendering and point picking."""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Any, Self

try:
    import pymupdf as fitz
except Exception:  # pragma: no cover - optional dependency at runtime
    fitz: Any
    fitz = None

from b64viewer.decoder import decode_bytes
from b64viewer.exceptions import RenderError
from b64viewer.geometry import build_viewport, edge_offsets, page_size, position_percent, to_document_space
from b64viewer.logging import get_logger
from b64viewer.settings import Settings, get_settings
from b64viewer.typing.models import EdgeOffsets, PdfCoordinates, RenderedPage

if TYPE_CHECKING:
    from types import TracebackType

    from b64viewer.typing.models import PointerSample, ViewportTransform
    from b64viewer.typing.protocol import PageGeometrySource

logger = get_logger(__name__)

_MIME_BY_FORMAT = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
}


class FitzDocument:
    """PyMuPDF-backed page geometry and rasterization."""

    def __init__(self, data: bytes) -> None:
        """Open a PDF from memory.

        Args:
            data: PDF bytes.

        Raises:
            RenderError: If PyMuPDF is unavailable or the bytes are not a readable PDF.
        """
        if fitz is None:
            raise RenderError(message="PyMuPDF is required for PDF rendering")
        try:
            self._doc = fitz.open(stream=data, filetype="pdf")
        except Exception as exc:
            raise RenderError(message="Failed to load PDF") from exc
        if len(self._doc) == 0:
            self._doc.close()
            raise RenderError(message="PDF has no pages")

    @property
    def page_count(self) -> int:
        """Number of pages in the document."""
        return len(self._doc)

    def page_box(self, page_number: int) -> tuple[tuple[float, float, float, float], int]:
        """Return the visible page box in PDF user space and the `/Rotate` value.

        PyMuPDF reports the crop box top-down against the media box; it is
        flipped back to y-up and clipped to the media box, which is the area
        `get_pixmap` draws.

        Args:
            page_number: 1-based page number.

        Returns:
            tuple[tuple[float, float, float, float], int]: `(x1, y1, x2, y2)` and rotation.
        """
        page = self._doc.load_page(page_number - 1)
        media = page.mediabox
        crop = page.cropbox
        x1 = max(crop.x0, media.x0)
        x2 = min(crop.x1, media.x1)
        y1 = max(media.y1 - crop.y1, media.y0)
        y2 = min(media.y1 - crop.y0, media.y1)
        return (x1, y1, x2, y2), page.rotation

    def rasterize(self, page_number: int, *, scale: float, image_format: str) -> bytes:
        """Render a page to encoded image bytes."""
        page = self._doc.load_page(page_number - 1)
        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale))
        return pix.tobytes(output=image_format)

    def close(self) -> None:
        """Release the document."""
        self._doc.close()


class PdfViewer:
    """Current page and zoom of a displayed PDF.

    The viewport transform is owned by the viewer and rebuilt whenever the
    page or the zoom changes.
    """

    def __init__(
        self,
        source: PageGeometrySource,
        *,
        scale: float | None = None,
        fullscreen: bool = False,
        settings: Settings | None = None,
    ) -> None:
        self._source = source
        self._settings = settings or get_settings()
        default_scale = self._settings.pdf_fullscreen_scale if fullscreen else self._settings.pdf_default_scale
        self._scale = self._clamp_scale(scale if scale is not None else default_scale)
        self._current_page = 1
        self._viewport: ViewportTransform | None = None
        self._viewport_key: tuple[int, float] | None = None

    @classmethod
    def open(cls, data: bytes, **kwargs: Any) -> Self:
        """Open PDF bytes with PyMuPDF."""
        viewer = cls(FitzDocument(data), **kwargs)
        logger.info("PDF loaded", extra={"pages": viewer.page_count})
        return viewer

    @classmethod
    def from_base64(cls, text: str, **kwargs: Any) -> Self:
        """Open a PDF given as a base64 payload or data URL.

        Raises:
            InvalidBase64Error: If the text is not valid base64.
            RenderError: If the decoded bytes are not a readable PDF.
        """
        return cls.open(decode_bytes(text), **kwargs)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying document when it supports closing."""
        close = getattr(self._source, "close", None)
        if close:
            close()

    @property
    def page_count(self) -> int:
        """Number of pages."""
        return self._source.page_count

    @property
    def current_page(self) -> int:
        """1-based page on display."""
        return self._current_page

    @property
    def scale(self) -> float:
        """Current zoom factor."""
        return self._scale

    @property
    def can_zoom_in(self) -> bool:
        """Whether zoom in would change the scale."""
        return self._scale < self._settings.pdf_max_scale

    @property
    def can_zoom_out(self) -> bool:
        """Whether zoom out would change the scale."""
        return self._scale > self._settings.pdf_min_scale

    def _clamp_scale(self, scale: float) -> float:
        return min(max(scale, self._settings.pdf_min_scale), self._settings.pdf_max_scale)

    def go_to(self, page_number: int) -> int:
        """Show a page, clamped to the document range.

        Args:
            page_number: Requested 1-based page.

        Returns:
            int: Page now on display.
        """
        self._current_page = min(max(page_number, 1), self.page_count)
        return self._current_page

    def next_page(self) -> int:
        """Show the next page, if any."""
        return self.go_to(self._current_page + 1)

    def previous_page(self) -> int:
        """Show the previous page, if any."""
        return self.go_to(self._current_page - 1)

    def zoom_in(self) -> float:
        """Increase the zoom by one step, up to the maximum."""
        self._scale = min(self._scale + self._settings.pdf_zoom_step, self._settings.pdf_max_scale)
        return self._scale

    def zoom_out(self) -> float:
        """Decrease the zoom by one step, down to the minimum."""
        self._scale = max(self._scale - self._settings.pdf_zoom_step, self._settings.pdf_min_scale)
        return self._scale

    def viewport(self, page_number: int | None = None) -> ViewportTransform:
        """Return the page-to-canvas transform at the current zoom.

        Args:
            page_number: Page to describe; defaults to the current page.

        Raises:
            RenderError: If the page is outside the document.

        Returns:
            ViewportTransform: Transform for the page and zoom.
        """
        page = page_number or self._current_page
        if not 1 <= page <= self.page_count:
            raise RenderError(message=f"Page {page} is out of range (1-{self.page_count})")
        key = (page, self._scale)
        if self._viewport is None or self._viewport_key != key:
            view_box, rotation = self._source.page_box(page)
            self._viewport = build_viewport(view_box, self._scale, rotation)
            self._viewport_key = key
        return self._viewport

    def render_page(self, image_format: str | None = None) -> RenderedPage:
        """Rasterize the current page at the current zoom.

        Args:
            image_format: `png`, `jpeg` or `jpg`; defaults to the configured format.

        Raises:
            RenderError: If the format is unsupported or rendering fails.

        Returns:
            RenderedPage: Encoded image and the transform it was drawn with.
        """
        normalized_format = (image_format or self._settings.pdf_render_format).lower()
        if normalized_format not in _MIME_BY_FORMAT:
            raise RenderError(message=f"Unsupported image format: {normalized_format}")

        transform = self.viewport()
        try:
            image_bytes = self._source.rasterize(
                self._current_page,
                scale=self._scale,
                image_format=normalized_format,
            )
        except Exception as exc:  # pragma: no cover - depends on file and fitz internals
            raise RenderError(message=f"Failed to render page {self._current_page}") from exc

        logger.info("PDF page rendered", extra={"page": self._current_page, "scale": self._scale})
        return RenderedPage(
            page_number=self._current_page,
            mime_type=_MIME_BY_FORMAT[normalized_format],
            data_base64=base64.b64encode(image_bytes).decode("ascii"),
            transform=transform,
        )

    def locate(self, pixel_x: float, pixel_y: float, page_number: int | None = None) -> PdfCoordinates:
        """Resolve a canvas pixel to a point on the page.

        Args:
            pixel_x: Canvas x in pixels.
            pixel_y: Canvas y in pixels, from the top.
            page_number: Page under the pointer; defaults to the current page.

        Raises:
            RenderError: If the page is outside the document.

        Returns:
            PdfCoordinates: Page point, edge offsets and relative position.
        """
        page = page_number or self._current_page
        transform = self.viewport(page)
        point = to_document_space(pixel_x, pixel_y, transform)
        page_width, page_height = page_size(transform)
        # Offsets are measured from the visible box, which need not start at 0.
        origin_x, origin_y = (transform.view_box or (0.0, 0.0, 0.0, 0.0))[:2]
        local_x = point.doc_x - origin_x
        local_y = point.doc_y - origin_y
        offsets: EdgeOffsets = edge_offsets(local_x, local_y, page_width, page_height)
        x_percent, y_percent = position_percent(local_x, local_y, page_width, page_height)
        return PdfCoordinates(
            pdf_x=point.doc_x,
            pdf_y=point.doc_y,
            canvas_x=pixel_x,
            canvas_y=pixel_y,
            page=page,
            page_width=page_width,
            page_height=page_height,
            offsets=offsets,
            x_percent=x_percent,
            y_percent=y_percent,
            approximate=point.approximate,
        )

    def locate_sample(self, sample: PointerSample) -> PdfCoordinates:
        """Resolve a pointer sample taken over one of the pages."""
        return self.locate(sample.pixel_x, sample.pixel_y, sample.page)
