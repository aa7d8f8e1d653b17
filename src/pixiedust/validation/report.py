from __future__ import annotations

from dataclasses import dataclass
from typing import Any

@dataclass(frozen=True)
class StageResult:
    """
    Outcome of one validation rule or one pipeline stage.
    """
    stage: str
    passed: bool
    message: str
    metrics: dict[str, Any] | None = None

@dataclass(frozen=True)
class Report:
    """
    Ordered results for a parameter check or a full pipeline run.
    """
    passed: bool
    results: list[StageResult]

    def failures(self) -> list[StageResult]:
        return [r for r in self.results if not r.passed]
