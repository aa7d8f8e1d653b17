from __future__ import annotations

import os
from typing import List

from pixiedust.core.models import Dimensions, ProcessingParams
from pixiedust.validation.report import Report, StageResult


def _bound_rule(name: str, bound: Dimensions) -> StageResult:
    ok = bound.width > 0 and bound.height > 0
    msg = f"{bound.width}x{bound.height}."
    if not ok:
        msg += " Width and height must both be > 0."
    return StageResult(
        stage=name,
        passed=ok,
        message=msg,
        metrics={"width": bound.width, "height": bound.height},
    )


def validate_params(params: ProcessingParams) -> Report:
    """
    Check run parameters before any file is read or decoded.

    Quality is not checked here; it goes to the encoder as given.
    """
    results: List[StageResult] = []

    # Rule: Paths
    paths_ok = bool(params.input_path) and bool(params.output_path)
    if not paths_ok:
        paths_msg = "Both an input and an output path are required."
    elif os.path.abspath(params.input_path) == os.path.abspath(params.output_path):
        paths_ok = False
        paths_msg = "Output path must differ from the input path."
    elif params.crop_output_path and os.path.abspath(params.crop_output_path) in (
        os.path.abspath(params.input_path),
        os.path.abspath(params.output_path),
    ):
        paths_ok = False
        paths_msg = "Crop output path must differ from the input and output paths."
    else:
        paths_msg = f"{params.input_path} -> {params.output_path}."
    results.append(
        StageResult(
            stage="Paths",
            passed=paths_ok,
            message=paths_msg,
            metrics={"input": params.input_path, "output": params.output_path},
        )
    )

    # Rules: Crop size + center (only when cropping)
    crop = params.crop
    if crop is not None:
        size_ok = crop.width > 0 and crop.height > 0
        size_msg = f"{crop.width}x{crop.height}."
        if not size_ok:
            size_msg += " Crop width and height must both be > 0."
        results.append(
            StageResult(
                stage="Crop size",
                passed=size_ok,
                message=size_msg,
                metrics={"width": crop.width, "height": crop.height},
            )
        )

        center_ok = crop.center_x >= 0 and crop.center_y >= 0
        if crop.center_unset:
            center_msg = "Image center (0, 0 given)."
        else:
            center_msg = f"({crop.center_x}, {crop.center_y})."
        if not center_ok:
            center_msg += " Crop x/y must be >= 0."
        results.append(
            StageResult(
                stage="Crop center",
                passed=center_ok,
                message=center_msg,
                metrics={"x": crop.center_x, "y": crop.center_y},
            )
        )

    # Rules: resize bounds
    results.append(_bound_rule("Static bound", params.static_bound))
    results.append(_bound_rule("Animated bound", params.animated_bound))

    # Rule: Encode timeout
    timeout_ok = params.encode_timeout > 0
    timeout_msg = f"{params.encode_timeout:g}s."
    if not timeout_ok:
        timeout_msg += " Timeout must be > 0."
    results.append(
        StageResult(
            stage="Encode timeout",
            passed=timeout_ok,
            message=timeout_msg,
            metrics={"seconds": params.encode_timeout},
        )
    )

    passed = all(r.passed for r in results)
    return Report(passed=passed, results=results)


def format_report_text(report: Report, title: str = "PixieDust Report") -> str:
    lines: List[str] = []
    lines.append(title)
    lines.append("-" * max(len(title), 24))
    lines.append(f"Overall: {'PASS' if report.passed else 'FAIL'}")
    lines.append("")
    for r in report.results:
        mark = "ok " if r.passed else "ERR"
        lines.append(f"[{mark}] {r.stage}: {r.message}")
    return "\n".join(lines)
