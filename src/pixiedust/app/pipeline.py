from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List

from pixiedust.app.temp_paths import TempPaths
from pixiedust.codec.imaging import DecodedImage, crop_image, decode_image, encode_image, resize_image
from pixiedust.core.errors import ImageIOError, InvalidParameterError
from pixiedust.core.geometry import compute_crop_rect, resolve_crop_center, select_bound, target_dimensions
from pixiedust.core.models import ProcessingParams
from pixiedust.validation.report import Report, StageResult
from pixiedust.validation.validator import validate_params

logger = logging.getLogger(__name__)


def _read_bytes(path: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ImageIOError(f"Unable to read image {path}: {exc}", stage="read") from exc


def _write_bytes(path: str, data: bytes) -> None:
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise ImageIOError(f"Unable to write output file {path}: {exc}", stage="write") from exc


def _load(path: str, results: List[StageResult]) -> DecodedImage:
    buf = _read_bytes(path)
    results.append(StageResult("read", True, f"Read {len(buf)} bytes from {path}.", {"bytes": len(buf)}))

    image = decode_image(buf)
    size = image.size
    results.append(
        StageResult(
            "decode",
            True,
            f"{size} {'animated' if image.is_animated else 'static'} image.",
            {"width": size.width, "height": size.height, "animated": image.is_animated, "frames": len(image.frames)},
        )
    )
    return image


def run_pipeline(params: ProcessingParams) -> Report:
    """
    Convert params.input_path into a WebP at params.output_path.

    Stages: validate, read, decode, crop (optional), resize, encode, write.
    The first failing stage raises its PixieDustError subclass; nothing is
    retried. In chained mode the intermediate cropped file stays on disk even
    if a later stage fails.
    """
    checked = validate_params(params)
    if not checked.passed:
        problems = "; ".join(f"{r.stage}: {r.message}" for r in checked.failures())
        raise InvalidParameterError(problems)

    results: List[StageResult] = [StageResult("validate", True, "Parameters ok.")]

    image = _load(params.input_path, results)

    if params.crop is not None:
        logger.info("Using crop specified.")
        spec = resolve_crop_center(params.crop, image.size)
        rect = compute_crop_rect(spec, image.size)
        image = crop_image(image, rect)
        results.append(
            StageResult(
                "crop",
                True,
                f"Cropped to {rect.as_box()}.",
                {"rect": rect.as_box(), "center": (spec.center_x, spec.center_y)},
            )
        )

        if params.chain_crop:
            crop_path = params.crop_output_path or str(TempPaths.default().cropped_image)
            _write_bytes(crop_path, encode_image(image, params.quality, params.encode_timeout))
            logger.info("Wrote intermediate crop to %s", crop_path)
            results.append(StageResult("crop-output", True, f"Wrote {crop_path}.", {"path": crop_path}))
            image = _load(crop_path, results)

    bound = select_bound(image.is_animated, params.static_bound, params.animated_bound)
    target = target_dimensions(image.size, bound, params.policy)
    logger.info("Resizing %s -> %s (%s, bound %s)", image.size, target, params.policy.value, bound)
    image = resize_image(image, target)
    results.append(
        StageResult(
            "resize",
            True,
            f"{target} within {bound} ({params.policy.value}).",
            {"bound": (bound.width, bound.height), "target": (target.width, target.height)},
        )
    )

    started = time.monotonic()
    output = encode_image(image, params.quality, params.encode_timeout)
    elapsed = time.monotonic() - started
    results.append(
        StageResult(
            "encode",
            True,
            f"{len(output)} bytes at quality {params.quality}.",
            {"bytes": len(output), "quality": params.quality, "seconds": elapsed},
        )
    )

    _write_bytes(params.output_path, output)
    results.append(StageResult("write", True, f"Saved {params.output_path}.", {"path": params.output_path}))
    logger.info("Image processed and saved to %s", params.output_path)

    return Report(passed=True, results=results)
