from __future__ import annotations


class PixieDustError(Exception):
    """Base error. `stage` names the pipeline step that failed."""

    stage = "pipeline"

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class ImageIOError(PixieDustError):
    """Input could not be read or output could not be written."""
    stage = "io"


class DecodeError(PixieDustError):
    stage = "decode"


class OutOfBoundsError(PixieDustError):
    """Crop rectangle extends past the image edges."""
    stage = "crop"


class EncodeError(PixieDustError):
    """Encoder failed or ran past its time budget."""
    stage = "encode"


class InvalidParameterError(PixieDustError):
    stage = "validate"
