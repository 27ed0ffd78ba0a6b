"""Typed error taxonomy shared by every pipeline stage.

Each failure carries a stable machine-readable ``code`` and a human message.
Stage boundaries re-wrap anything untyped via :func:`wrap_error` so the caller
only ever sees a :class:`VTAError`.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable error codes surfaced to callers."""

    # Environment
    DECODER_MISSING = "decoder-missing"
    PERMISSION_ERROR = "permission-error"
    # Input selection
    NO_VIDEO_FOUND = "no-video-found"
    MULTIPLE_VIDEOS_FOUND = "multiple-videos-found"
    EMPTY_FILE = "empty-file"
    FILE_ACCESS_ERROR = "file-access-error"
    # Duration
    INVALID_DURATION = "invalid-duration"
    DURATION_TOO_LONG = "duration-too-long"
    DURATION_READ_ERROR = "duration-read-error"
    # Extraction / composition I/O
    FRAME_EXTRACTION_ERROR = "frame-extraction-error"
    GRID_COMPOSITION_ERROR = "grid-composition-error"
    # Grid analysis
    API_KEY_MISSING = "api-key-missing"
    FOLDER_ACCESS_ERROR = "folder-access-error"
    NO_IMAGES_FOUND = "no-images-found"
    INVALID_RESPONSE_FORMAT = "invalid-response-format"
    ANALYSIS_ERROR = "analysis-error"
    # Catch-all
    UNKNOWN_ERROR = "unknown-error"


class VTAError(Exception):
    """Base exception for vta."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN_ERROR):
        super().__init__(message)
        self.message = message
        self.code = ErrorCode(code)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class VideoProcessingError(VTAError):
    """Video validation, frame extraction or grid composition error."""
    pass


class DecoderError(VTAError):
    """External decoder invocation failed (non-zero exit or no output)."""
    pass


class GridAnalysisError(VTAError):
    """Vision analysis of the grid images failed."""
    pass


def wrap_error(
    exc: BaseException,
    code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
    message: str = "Unexpected error during video processing",
    error_cls: type[VTAError] = VideoProcessingError,
) -> VTAError:
    """Return ``exc`` if already typed, otherwise a typed error keeping its message."""
    if isinstance(exc, VTAError):
        return exc
    return error_cls(f"{message}: {exc}", code)
