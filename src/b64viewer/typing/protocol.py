"""Renderer interfaces."""

from __future__ import annotations

from typing import Protocol


class PageGeometrySource(Protocol):
    """Page geometry supplied by a document renderer."""

    @property
    def page_count(self) -> int:
        """Number of pages in the open document."""

    def page_box(self, page_number: int) -> tuple[tuple[float, float, float, float], int]:
        """Return the view box and intrinsic rotation of a page.

        Args:
            page_number: 1-based page number.

        Returns:
            tuple[tuple[float, float, float, float], int]: `(x1, y1, x2, y2)` in points and rotation in degrees.
        """

    def rasterize(self, page_number: int, *, scale: float, image_format: str) -> bytes:
        """Render a page, with its intrinsic rotation applied, to image bytes.

        Args:
            page_number: 1-based page number.
            scale: Pixels per point.
            image_format: Output image format.

        Returns:
            bytes: Encoded image.
        """
