"""Viewport algebra between PDF page space and canvas pixels.

Page space has its origin at the bottom-left corner with y growing upward,
in points (1/72 inch). Canvas space has its origin at the top-left corner
with y growing downward, in pixels. A viewport transform maps the former to
the latter and may include rotation, so the inverse is a general affine
inverse rather than a flip and scale.
"""

from __future__ import annotations

from b64viewer.typing.models import DocumentPoint, EdgeOffsets, ViewportTransform

DEGENERATE_DETERMINANT = 1e-10

# (a, b, c, d) of the unscaled rotation part, y axis flipped.
_ROTATIONS: dict[int, tuple[int, int, int, int]] = {
    0: (1, 0, 0, -1),
    90: (0, 1, 1, 0),
    180: (-1, 0, 0, 1),
    270: (0, -1, -1, 0),
}


def normalize_rotation(rotation: int) -> int:
    """Normalize a rotation to 0, 90, 180 or 270 degrees.

    Args:
        rotation (int): Rotation in degrees, a multiple of 90.

    Raises:
        ValueError: If the rotation is not a multiple of 90.

    Returns:
        int: Normalized rotation.
    """
    normalized = rotation % 360
    if normalized not in _ROTATIONS:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {rotation}")  # noqa: TRY003
    return normalized


def build_viewport(
    view_box: tuple[float, float, float, float],
    scale: float,
    rotation: int = 0,
) -> ViewportTransform:
    """Build the page-to-canvas transform for a page view box.

    The page is centered on its view box, rotated clockwise by `rotation`,
    flipped vertically and scaled.

    Args:
        view_box (tuple[float, float, float, float]): `(x1, y1, x2, y2)` in points.
        scale (float): Pixels per point.
        rotation (int): Clockwise rotation in degrees.

    Returns:
        ViewportTransform: Transform together with the canvas size.
    """
    x1, y1, x2, y2 = view_box
    rotation = normalize_rotation(rotation)
    rot_a, rot_b, rot_c, rot_d = _ROTATIONS[rotation]

    center_x = (x1 + x2) / 2
    center_y = (y1 + y2) / 2

    if rot_a == 0:
        offset_x = abs(center_y - y1) * scale
        offset_y = abs(center_x - x1) * scale
        width = abs(y2 - y1) * scale
        height = abs(x2 - x1) * scale
    else:
        offset_x = abs(center_x - x1) * scale
        offset_y = abs(center_y - y1) * scale
        width = abs(x2 - x1) * scale
        height = abs(y2 - y1) * scale

    return ViewportTransform(
        a=rot_a * scale,
        b=rot_b * scale,
        c=rot_c * scale,
        d=rot_d * scale,
        e=offset_x - rot_a * scale * center_x - rot_c * scale * center_y,
        f=offset_y - rot_b * scale * center_x - rot_d * scale * center_y,
        scale=scale,
        width=width,
        height=height,
        rotation=rotation,
        view_box=(x1, y1, x2, y2),
    )


def to_pixel_space(doc_x: float, doc_y: float, transform: ViewportTransform) -> tuple[float, float]:
    """Map a page-space point onto the canvas."""
    return (
        transform.a * doc_x + transform.c * doc_y + transform.e,
        transform.b * doc_x + transform.d * doc_y + transform.f,
    )


def to_document_space(pixel_x: float, pixel_y: float, transform: ViewportTransform) -> DocumentPoint:
    """Map a canvas pixel back to page space.

    A near-singular transform falls back to a scale-only inverse that ignores
    rotation and offsets; the result is then flagged as approximate.

    Args:
        pixel_x (float): Horizontal canvas offset in pixels.
        pixel_y (float): Vertical canvas offset in pixels, from the top.
        transform (ViewportTransform): Transform used to draw the page.

    Returns:
        DocumentPoint: Page-space point.
    """
    a, b, c, d, e, f = transform.coefficients
    det = a * d - b * c

    if abs(det) < DEGENERATE_DETERMINANT:
        scale = transform.scale
        if scale == 0:
            return DocumentPoint(doc_x=0.0, doc_y=0.0, approximate=True)
        return DocumentPoint(
            doc_x=pixel_x / scale,
            doc_y=(transform.height - pixel_y) / scale,
            approximate=True,
        )

    dx = pixel_x - e
    dy = pixel_y - f
    return DocumentPoint(
        doc_x=(d * dx - c * dy) / det,
        doc_y=(-b * dx + a * dy) / det,
    )


def page_size(transform: ViewportTransform) -> tuple[float, float]:
    """Return the unrotated page size in points for a viewport."""
    if transform.view_box is not None:
        x1, y1, x2, y2 = transform.view_box
        return abs(x2 - x1), abs(y2 - y1)
    if transform.scale == 0:
        return 0.0, 0.0
    return transform.width / transform.scale, transform.height / transform.scale


def edge_offsets(doc_x: float, doc_y: float, page_width: float, page_height: float) -> EdgeOffsets:
    """Return the distance from a point to each page edge."""
    return EdgeOffsets(
        left=doc_x,
        right=page_width - doc_x,
        top=page_height - doc_y,
        bottom=doc_y,
    )


def position_percent(doc_x: float, doc_y: float, page_width: float, page_height: float) -> tuple[float, float]:
    """Return a point's position as a percentage of page width and height.

    Args:
        doc_x (float): Horizontal position in points.
        doc_y (float): Vertical position in points, from the bottom.
        page_width (float): Page width in points.
        page_height (float): Page height in points.

    Returns:
        tuple[float, float]: Percentages; 0 along a zero-length dimension.
    """
    x_percent = doc_x / page_width * 100 if page_width else 0.0
    y_percent = doc_y / page_height * 100 if page_height else 0.0
    return x_percent, y_percent


def client_to_canvas(
    client_x: float,
    client_y: float,
    *,
    box: tuple[float, float, float, float],
    canvas_size: tuple[float, float],
) -> tuple[float, float]:
    """Convert a pointer position on screen to canvas pixels.

    The canvas may be displayed stretched, so offsets inside its on-screen box
    are rescaled to its intrinsic pixel size.

    Args:
        client_x (float): Pointer x on screen.
        client_y (float): Pointer y on screen.
        box (tuple[float, float, float, float]): On-screen `(left, top, width, height)` of the canvas.
        canvas_size (tuple[float, float]): Intrinsic `(width, height)` of the canvas.

    Returns:
        tuple[float, float]: Canvas pixel position.
    """
    left, top, width, height = box
    canvas_width, canvas_height = canvas_size
    scale_x = canvas_width / width if width else 1.0
    scale_y = canvas_height / height if height else 1.0
    return (client_x - left) * scale_x, (client_y - top) * scale_y
