"""Filter and transform compositing with Pillow.

:class:`Surface` is an off-screen raster with a 2-D drawing context: a
current filter and a current affine transform that ``translate``, ``rotate``
and ``scale`` post-multiply, exactly like a canvas context.  ``draw_image``
filters the source, maps it through the current transform and paints it onto
the surface.

Editor exports use the fixed order::

    filter -> translate(w/2, h/2) -> rotate(theta) -> scale(fh, fv) -> draw(-w/2, -h/2)

so rotation and flip happen around the surface centre, not the image's
top-left corner.  Pixels the image does not cover stay black because JPEG
has no alpha channel.

Filter math
-----------
- brightness: ``ImageEnhance.Brightness`` (linear multiply)
- saturate: ``ImageEnhance.Color``
- invert: blend toward ``ImageOps.invert`` by the inversion fraction
- grayscale: blend toward the luminance image by the grayscale fraction
"""

from __future__ import annotations

import logging
import math

from PIL import Image, ImageEnhance, ImageOps

from imaginator.core.filters import FilterState, TransformState

logger = logging.getLogger(__name__)

# (a, b, c, d, e, f): x' = a*x + b*y + c, y' = d*x + e*y + f
Matrix = tuple[float, float, float, float, float, float]

IDENTITY: Matrix = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0)
BACKGROUND = (0, 0, 0)


def multiply(m1: Matrix, m2: Matrix) -> Matrix:
    """Return ``m1 @ m2`` (``m2`` is applied to points first)."""
    a1, b1, c1, d1, e1, f1 = m1
    a2, b2, c2, d2, e2, f2 = m2
    return (
        a1 * a2 + b1 * d2,
        a1 * b2 + b1 * e2,
        a1 * c2 + b1 * f2 + c1,
        d1 * a2 + e1 * d2,
        d1 * b2 + e1 * e2,
        d1 * c2 + e1 * f2 + f1,
    )


def invert(m: Matrix) -> Matrix:
    a, b, c, d, e, f = m
    det = a * e - b * d
    if det == 0:
        raise ValueError("Transform is not invertible")
    ia, ib, id_, ie = e / det, -b / det, -d / det, a / det
    return (ia, ib, -(ia * c + ib * f), id_, ie, -(id_ * c + ie * f))


def apply_point(m: Matrix, x: float, y: float) -> tuple[float, float]:
    a, b, c, d, e, f = m
    return a * x + b * y + c, d * x + e * y + f


def apply_filters(image: Image.Image, filters: FilterState) -> Image.Image:
    """Apply brightness, saturate, invert and grayscale in that order.

    Channels at their default value are skipped.
    """
    result = image.convert("RGB")

    if filters.brightness != 100:
        result = ImageEnhance.Brightness(result).enhance(filters.brightness / 100)
    if filters.saturation != 100:
        result = ImageEnhance.Color(result).enhance(filters.saturation / 100)
    if filters.inversion:
        result = Image.blend(result, ImageOps.invert(result), filters.inversion / 100)
    if filters.grayscale:
        gray = result.convert("L").convert("RGB")
        result = Image.blend(result, gray, filters.grayscale / 100)

    return result


class Surface:
    """Off-screen RGB raster with a canvas-style drawing context.

    Attributes:
        filter: Filter applied to every subsequent ``draw_image`` (None = no filter)
        operations: Log of the context operations in the order they were issued
    """

    def __init__(self, width: int, height: int) -> None:
        self._image = Image.new("RGB", (width, height), BACKGROUND)
        self._matrix: Matrix = IDENTITY
        self.filter: FilterState | None = None
        self.operations: list[str] = []

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def matrix(self) -> Matrix:
        return self._matrix

    def set_filter(self, filters: FilterState) -> None:
        self.filter = filters
        self.operations.append(f"filter {filters.css()}")

    def translate(self, tx: float, ty: float) -> None:
        self._matrix = multiply(self._matrix, (1.0, 0.0, tx, 0.0, 1.0, ty))
        self.operations.append(f"translate({tx:g}, {ty:g})")

    def rotate(self, radians: float) -> None:
        # Snap so right angles produce exact 0/±1 entries.
        cos = round(math.cos(radians), 12)
        sin = round(math.sin(radians), 12)
        self._matrix = multiply(self._matrix, (cos, -sin, 0.0, sin, cos, 0.0))
        self.operations.append(f"rotate({radians:.6f}rad)")

    def scale(self, sx: float, sy: float) -> None:
        self._matrix = multiply(self._matrix, (sx, 0.0, 0.0, 0.0, sy, 0.0))
        self.operations.append(f"scale({sx:g}, {sy:g})")

    def draw_image(self, image: Image.Image, dx: float, dy: float) -> None:
        """Paint ``image`` with its top-left corner at ``(dx, dy)`` in context space."""
        source = apply_filters(image, self.filter) if self.filter else image.convert("RGB")
        forward = multiply(self._matrix, (1.0, 0.0, dx, 0.0, 1.0, dy))
        inverse = invert(forward)

        layer = source.transform(
            self._image.size,
            Image.Transform.AFFINE,
            inverse,
            resample=Image.Resampling.NEAREST,
            fillcolor=BACKGROUND,
        )
        coverage = Image.new("L", source.size, 255).transform(
            self._image.size,
            Image.Transform.AFFINE,
            inverse,
            resample=Image.Resampling.NEAREST,
            fillcolor=0,
        )
        self._image.paste(layer, (0, 0), coverage)
        self.operations.append(f"draw({dx:g}, {dy:g}, {source.width}, {source.height})")

    def to_image(self) -> Image.Image:
        return self._image.copy()


def composite(
    image: Image.Image,
    filters: FilterState,
    transform: TransformState,
    size: tuple[int, int] | None = None,
) -> Surface:
    """Flatten ``image`` with the editor state onto a new surface.

    Args:
        image: Source image
        filters: Filter state to apply
        transform: Rotation and flip state
        size: Surface size; defaults to the image's natural size

    Returns:
        The drawn surface (call ``to_image()`` for the pixels)
    """
    width, height = size or image.size
    surface = Surface(width, height)

    surface.set_filter(filters)
    surface.translate(width / 2, height / 2)
    if transform.rotation_degrees % 360 != 0:
        surface.rotate(math.radians(transform.rotation_degrees))
    surface.scale(transform.flip_horizontal, transform.flip_vertical)
    surface.draw_image(image, -image.width / 2, -image.height / 2)

    logger.debug(f"Composited {image.size} onto {surface.width}x{surface.height}: {surface.operations}")
    return surface


def render_preview(
    image: Image.Image,
    filters: FilterState,
    transform: TransformState,
    max_size: int,
) -> Image.Image:
    """Render a downscaled preview whose bounds follow the rotation.

    Unlike the export, a quarter-turn swaps the preview's width and height so
    the rotated picture is shown whole.
    """
    thumbnail = image.copy()
    thumbnail.thumbnail((max_size, max_size))

    width, height = thumbnail.size
    if transform.effective_rotation in (90, 270):
        width, height = height, width

    return composite(thumbnail, filters, transform, size=(width, height)).to_image()
