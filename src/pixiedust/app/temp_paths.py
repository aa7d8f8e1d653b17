from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class TempPaths:
    """
    Where the chained crop-then-resize run writes its intermediate cropped file.

    The file is left in place after the run.
    """
    base_dir: Path
    cropped_image: Path

    @staticmethod
    def default(app_name: str = "pixiedust") -> "TempPaths":
        base = Path(tempfile.gettempdir()) / app_name
        base.mkdir(parents=True, exist_ok=True)
        cropped = base / "cropped.webp"
        return TempPaths(base_dir=base, cropped_image=cropped)
