"""
Resize and crop geometry.

Pure functions only: no image data, no I/O. The pipeline feeds them the
decoded header dimensions and hands the results to the codec layer.
"""

from __future__ import annotations

from dataclasses import replace

from pixiedust.core.errors import OutOfBoundsError
from pixiedust.core.models import CropRect, CropSpec, Dimensions, ResizePolicy


def _round_px(value: float) -> int:
    return max(1, int(round(value)))


def fit_dimensions(orig: Dimensions, bound: Dimensions) -> Dimensions:
    """
    Scale `orig` down so it fits inside `bound`, keeping its aspect ratio.

    Images that already fit are returned unchanged (never upscaled).
    orig.height must be > 0; zero-sized images are rejected at decode time.
    """
    if orig.fits_within(bound):
        return orig

    ratio = orig.width / orig.height
    if bound.width / ratio > bound.height:
        # Filling the width would overshoot the height bound.
        return Dimensions(_round_px(bound.height * ratio), bound.height)
    return Dimensions(bound.width, _round_px(bound.width / ratio))


def fill_dimensions(requested: Dimensions) -> Dimensions:
    """FILL ignores the source aspect ratio: the requested size is the target."""
    return requested


def target_dimensions(orig: Dimensions, bound: Dimensions, policy: ResizePolicy) -> Dimensions:
    if policy is ResizePolicy.FILL:
        return fill_dimensions(bound)
    return fit_dimensions(orig, bound)


def select_bound(is_animated: bool, static_bound: Dimensions, animated_bound: Dimensions) -> Dimensions:
    return animated_bound if is_animated else static_bound


def resolve_crop_center(spec: CropSpec, bounds: Dimensions) -> CropSpec:
    """Replace the (0, 0) center with the image center. Other values are literal."""
    if spec.center_unset:
        return replace(spec, center_x=bounds.width // 2, center_y=bounds.height // 2)
    return spec


def compute_crop_rect(spec: CropSpec, bounds: Dimensions) -> CropRect:
    """
    Turn a center-based crop into a rectangle and check it against the image.

    Half sizes use floor division, so an odd width/height gives a rectangle one
    pixel narrower than requested (x1 - x0 == 2 * (width // 2)).

    Raises OutOfBoundsError if any edge falls outside `bounds`, or if a width
    or height of 1 collapses the rectangle to nothing.
    """
    half_w = spec.width // 2
    half_h = spec.height // 2
    rect = CropRect(
        x0=spec.center_x - half_w,
        y0=spec.center_y - half_h,
        x1=spec.center_x + half_w,
        y1=spec.center_y + half_h,
    )

    if rect.x0 < 0 or rect.y0 < 0 or rect.x1 > bounds.width or rect.y1 > bounds.height:
        raise OutOfBoundsError(
            f"Crop {spec.width}x{spec.height} at ({spec.center_x}, {spec.center_y}) "
            f"gives rect {rect.as_box()} outside image {bounds}."
        )
    if rect.x1 <= rect.x0 or rect.y1 <= rect.y0:
        raise OutOfBoundsError(
            f"Crop {spec.width}x{spec.height} gives empty rect {rect.as_box()}; "
            "width and height must be at least 2."
        )
    return rect
