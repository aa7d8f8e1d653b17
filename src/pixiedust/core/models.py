from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Dimensions:
    """Width/height in pixels. Both are expected to be > 0."""
    width: int
    height: int

    def fits_within(self, bound: "Dimensions") -> bool:
        return self.width <= bound.width and self.height <= bound.height

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class CropSpec:
    """
    Crop request expressed as a center point plus a size.

    center_x, center_y == (0, 0) means "use the image center". A crop that is
    literally centered on pixel (0, 0) cannot be requested.
    """
    center_x: int
    center_y: int
    width: int
    height: int

    @property
    def center_unset(self) -> bool:
        return self.center_x == 0 and self.center_y == 0


@dataclass(frozen=True)
class CropRect:
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    def as_box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower), the box order Pillow's crop expects."""
        return (self.x0, self.y0, self.x1, self.y1)


class ResizePolicy(str, Enum):
    FIT = "fit"
    FILL = "fill"


DEFAULT_STATIC_BOUND = Dimensions(1920, 1080)
DEFAULT_ANIMATED_BOUND = Dimensions(800, 600)


@dataclass(frozen=True)
class ProcessingParams:
    """
    Everything one conversion run needs, built once from the command line.

    crop:
        Crop request, or None to skip cropping.
    static_bound / animated_bound:
        Resize bounds. Animated inputs get the smaller bound to keep encode
        time and output size down.
    policy:
        FIT scales down inside the bound keeping aspect ratio. FILL resizes to
        the bound exactly, stretching if needed.
    quality:
        Encoder quality (0-100), passed straight to the WebP encoder.
    encode_timeout:
        Wall-clock seconds the encoder may take before the run fails.
    chain_crop:
        Write the cropped image to crop_output_path first, then re-read it and
        resize from that file.
    """
    input_path: str = ""
    output_path: str = ""
    crop: Optional[CropSpec] = None
    static_bound: Dimensions = DEFAULT_STATIC_BOUND
    animated_bound: Dimensions = DEFAULT_ANIMATED_BOUND
    policy: ResizePolicy = ResizePolicy.FIT
    quality: int = 30
    encode_timeout: float = 30.0
    chain_crop: bool = False
    crop_output_path: Optional[str] = None
