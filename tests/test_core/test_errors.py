"""Tests for the error taxonomy."""

import pytest

from vta.core.errors import (
    DecoderError,
    ErrorCode,
    GridAnalysisError,
    VideoProcessingError,
    VTAError,
    wrap_error,
)


class TestErrorCodes:
    def test_stable_pipeline_codes(self):
        expected = {
            "decoder-missing",
            "permission-error",
            "no-video-found",
            "multiple-videos-found",
            "empty-file",
            "file-access-error",
            "invalid-duration",
            "duration-too-long",
            "duration-read-error",
            "unknown-error",
        }
        assert expected <= {c.value for c in ErrorCode}

    def test_str_includes_code(self):
        err = VideoProcessingError("Video file is empty", ErrorCode.EMPTY_FILE)
        assert str(err) == "[empty-file] Video file is empty"
        assert err.code is ErrorCode.EMPTY_FILE

    def test_code_accepts_string_value(self):
        err = DecoderError("boom", "frame-extraction-error")
        assert err.code is ErrorCode.FRAME_EXTRACTION_ERROR

    def test_hierarchy(self):
        for cls in (VideoProcessingError, DecoderError, GridAnalysisError):
            assert issubclass(cls, VTAError)


class TestWrapError:
    def test_typed_error_passes_through(self):
        original = VideoProcessingError("too long", ErrorCode.DURATION_TOO_LONG)
        assert wrap_error(original) is original

    def test_untyped_error_becomes_unknown(self):
        wrapped = wrap_error(RuntimeError("disk on fire"))
        assert isinstance(wrapped, VideoProcessingError)
        assert wrapped.code is ErrorCode.UNKNOWN_ERROR
        assert "disk on fire" in wrapped.message

    def test_custom_code_and_class(self):
        wrapped = wrap_error(
            ValueError("bad json"), ErrorCode.ANALYSIS_ERROR, "Error analyzing images", GridAnalysisError
        )
        assert isinstance(wrapped, GridAnalysisError)
        assert wrapped.code is ErrorCode.ANALYSIS_ERROR
        assert wrapped.message == "Error analyzing images: bad json"

    def test_is_raisable(self):
        with pytest.raises(VTAError, match="duration-read-error"):
            raise wrap_error(OSError("io"), ErrorCode.DURATION_READ_ERROR)
