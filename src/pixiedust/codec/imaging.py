"""
Thin wrappers around Pillow (decode/crop/encode) and OpenCV (resampling).

Library exceptions are re-raised as DecodeError / EncodeError so the pipeline
only deals with its own error types.
"""

from __future__ import annotations

import io
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, List

import cv2
import numpy as np
from PIL import Image, ImageOps, ImageSequence

from pixiedust.core.errors import DecodeError, EncodeError
from pixiedust.core.models import CropRect, Dimensions

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "WEBP"
OUTPUT_SUFFIX = ".webp"
DEFAULT_FRAME_DURATION_MS = 100


@dataclass
class DecodedImage:
    """Decoded frames plus the header facts the pipeline needs."""
    frames: List[Image.Image]
    durations: List[int] = field(default_factory=list)
    loop: int = 0

    @property
    def is_animated(self) -> bool:
        return len(self.frames) > 1

    @property
    def size(self) -> Dimensions:
        w, h = self.frames[0].size
        return Dimensions(w, h)


def _normalize_mode(img: Image.Image) -> Image.Image:
    """Convert to RGB, or RGBA when the source carries transparency."""
    if img.mode in ("RGB", "RGBA"):
        return img
    if img.mode in ("LA", "PA") or "transparency" in img.info:
        return img.convert("RGBA")
    return img.convert("RGB")


def decode_image(data: bytes) -> DecodedImage:
    """
    Decode an encoded image held in memory.

    Static images get their EXIF orientation applied. Animated images are
    expanded into full frames with their per-frame durations.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
        if getattr(img, "is_animated", False) and getattr(img, "n_frames", 1) > 1:
            frames: List[Image.Image] = []
            durations: List[int] = []
            for frame in ImageSequence.Iterator(img):
                durations.append(int(frame.info.get("duration", DEFAULT_FRAME_DURATION_MS)))
                frames.append(_normalize_mode(frame.copy()))
            decoded = DecodedImage(frames=frames, durations=durations, loop=int(img.info.get("loop", 0)))
        else:
            single = _normalize_mode(ImageOps.exif_transpose(img))
            decoded = DecodedImage(frames=[single])
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Error decoding image: {exc}") from exc

    size = decoded.size
    if size.width <= 0 or size.height <= 0:
        raise DecodeError(f"Image has no pixels ({size}).")

    logger.debug("Decoded %s image, %d frame(s)", size, len(decoded.frames))
    return decoded


def crop_image(image: DecodedImage, rect: CropRect) -> DecodedImage:
    box = rect.as_box()
    return DecodedImage(
        frames=[f.crop(box) for f in image.frames],
        durations=list(image.durations),
        loop=image.loop,
    )


def _resize_frame(frame: Image.Image, target: Dimensions) -> Image.Image:
    arr = np.array(frame)
    out = cv2.resize(arr, (target.width, target.height), interpolation=cv2.INTER_LANCZOS4)
    return Image.fromarray(out)


def resize_image(image: DecodedImage, target: Dimensions) -> DecodedImage:
    """Resample every frame to exactly `target`. No-op if already that size."""
    if image.size == target:
        return image
    return DecodedImage(
        frames=[_resize_frame(f, target) for f in image.frames],
        durations=list(image.durations),
        loop=image.loop,
    )


def _encode_webp(image: DecodedImage, quality: int) -> bytes:
    buf = io.BytesIO()
    first = image.frames[0]
    if image.is_animated:
        first.save(
            buf,
            format=OUTPUT_FORMAT,
            save_all=True,
            append_images=image.frames[1:],
            duration=image.durations or DEFAULT_FRAME_DURATION_MS,
            loop=image.loop,
            quality=quality,
        )
    else:
        first.save(buf, format=OUTPUT_FORMAT, quality=quality)
    return buf.getvalue()


def encode_image(image: DecodedImage, quality: int, timeout: float) -> bytes:
    """
    Encode to WebP, failing with EncodeError if it takes longer than `timeout`.

    The encoder runs on a daemon thread so an overrunning encode cannot keep the
    process alive once the run has failed.
    """
    outcome: dict[str, Any] = {}

    def worker() -> None:
        try:
            outcome["data"] = _encode_webp(image, quality)
        except Exception as e:
            outcome["error"] = e

    started = time.monotonic()
    t = threading.Thread(target=worker, name="pixiedust-encode", daemon=True)
    t.start()
    t.join(timeout)

    if t.is_alive():
        raise EncodeError(f"Encoding did not finish within {timeout:g}s.")
    if "error" in outcome:
        err = outcome["error"]
        raise EncodeError(f"Error transforming image: {err}") from err

    data: bytes = outcome["data"]
    logger.debug("Encoded %d bytes in %.3fs", len(data), time.monotonic() - started)
    return data
