"""Tests for S01: Extract Frames step."""

from pathlib import Path

import pytest

from vta.core.contracts import SamplingPlan
from vta.core.errors import DecoderError, ErrorCode, VTAError
from vta.steps.s01_extract_frames._extractor import FrameExtractor, plan_frames
from vta.steps.s01_extract_frames.config import ExtractFramesConfig
from vta.steps.s01_extract_frames.contracts import ExtractFramesInput, ExtractFramesOutput
from vta.steps.s01_extract_frames.step import ExtractFramesStep


class TestExtractFramesContracts:
    def test_input_validation(self):
        inp = ExtractFramesInput(video_path=Path("/tmp/test.mp4"))
        assert inp.video_path == Path("/tmp/test.mp4")
        assert inp.duration_seconds is None
        assert inp.sampling_plan is None

    def test_input_rejects_non_positive_duration(self):
        with pytest.raises(Exception):
            ExtractFramesInput(video_path=Path("/tmp/test.mp4"), duration_seconds=0)

    def test_output_schema(self):
        schema = ExtractFramesOutput.model_json_schema()
        assert "frames_dir" in schema["properties"]
        assert "frame_count" in schema["properties"]
        assert "frame_list" in schema["properties"]

    def test_config_defaults(self):
        cfg = ExtractFramesConfig()
        assert cfg.output_subdir == "frames"
        assert cfg.tail_offset_seconds == 0.1
        assert cfg.image_format == "jpg"

    def test_config_rejects_zero_tail_offset(self):
        with pytest.raises(Exception):
            ExtractFramesConfig(tail_offset_seconds=0)


class TestFrameExtractor:
    def test_plan_frames_names(self, tmp_path: Path):
        frames = plan_frames(10, SamplingPlan(interval_seconds=2, max_frames=16), tmp_path)
        assert [f.path.name for f in frames] == [f"frame_{i:03d}.jpg" for i in range(6)]
        assert [f.index for f in frames] == list(range(6))

    def test_rejects_timestamp_at_end(self, fake_decoder, tmp_path: Path):
        from vta.core.contracts import Frame

        extractor = FrameExtractor(fake_decoder, tmp_path / "v.mp4", duration=10.0)
        with pytest.raises(DecoderError) as info:
            extractor.extract(Frame(index=0, timestamp=10.0, path=tmp_path / "f.jpg"))
        assert info.value.code is ErrorCode.FRAME_EXTRACTION_ERROR
        assert fake_decoder.calls == []


class TestExtractFramesStep:
    def test_validate_missing_video(self, data_root: Path, fake_decoder):
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=fake_decoder)
        inp = ExtractFramesInput(video_path=Path("/nonexistent/video.mp4"))
        assert step.validate_inputs(inp) is False

    def test_ninety_second_video(self, data_root: Path, source_video: Path, fake_decoder):
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=fake_decoder)
        output = step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=90.0))

        assert output.frame_count == 23
        assert output.sampling_plan == SamplingPlan(interval_seconds=4, max_frames=28)
        assert output.frames[0].timestamp == 0
        assert output.frames[-1].timestamp == pytest.approx(89.9)
        assert len(output.frame_list) == 23
        assert output.frame_list == sorted(output.frame_list)
        assert sorted(p.name for p in output.frames_dir.iterdir()) == [
            f"frame_{i:03d}.jpg" for i in range(23)
        ]

    def test_first_and_last_issued_separately(self, data_root: Path, source_video: Path, fake_decoder):
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=fake_decoder)
        step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=90.0))

        assert fake_decoder.timestamps[0] == 0
        assert fake_decoder.timestamps[-1] == pytest.approx(89.9)
        assert len(fake_decoder.calls) == 23

    def test_order_independent_of_completion(self, data_root: Path, source_video: Path, fake_decoder):
        step = ExtractFramesStep(config=ExtractFramesConfig(max_workers=8), data_root=data_root, decoder=fake_decoder)
        output = step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=60.0))

        # Interior frames finished out of order, the output is still by index
        interior_done = [p.name for p in fake_decoder.completed[1:-1]]
        assert interior_done != sorted(interior_done)
        stamps = [f.timestamp for f in sorted(output.frames, key=lambda f: f.path.name)]
        assert all(b > a for a, b in zip(stamps, stamps[1:]))

    def test_duration_probed_when_omitted(self, data_root: Path, source_video: Path, make_decoder):
        decoder = make_decoder(duration=20.0)
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=decoder)
        output = step.execute(ExtractFramesInput(video_path=source_video))
        assert output.frame_count == 11

    def test_purges_stale_frames(self, data_root: Path, source_video: Path, fake_decoder):
        stale = data_root / "frames" / "frame_099.jpg"
        stale.write_bytes(b"old")
        (data_root / "frames" / "notes.txt").write_text("left over")

        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=fake_decoder)
        output = step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=10.0))

        assert not stale.exists()
        assert len(list(output.frames_dir.iterdir())) == output.frame_count == 6

    def test_single_frame_video(self, data_root: Path, source_video: Path, fake_decoder):
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=fake_decoder)
        output = step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=1.5))
        assert output.frame_count == 1
        assert fake_decoder.timestamps == [0.0]

    def test_explicit_plan_wins(self, data_root: Path, source_video: Path, fake_decoder):
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=fake_decoder)
        plan = SamplingPlan(interval_seconds=10, max_frames=4)
        output = step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=90.0, sampling_plan=plan))
        assert output.frame_count == 4

    def test_decoder_failure_propagates(self, data_root: Path, source_video: Path, make_decoder):
        # Call 0 is always the first frame
        decoder = make_decoder(fail_at={0})
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=decoder)
        with pytest.raises(VTAError) as info:
            step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=90.0))
        assert info.value.code is ErrorCode.FRAME_EXTRACTION_ERROR

    def test_interior_failure_aborts_before_last_frame(self, data_root: Path, source_video: Path, make_decoder):
        decoder = make_decoder(fail_at={3})
        step = ExtractFramesStep(config=ExtractFramesConfig(), data_root=data_root, decoder=decoder)
        with pytest.raises(VTAError):
            step.execute(ExtractFramesInput(video_path=source_video, duration_seconds=90.0))
        assert pytest.approx(89.9) not in decoder.timestamps
