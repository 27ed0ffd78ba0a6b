"""Duration bucketing and frame timestamp planning. Pure functions, no I/O."""

from __future__ import annotations

import math

from .contracts import SamplingPlan

# (upper bound in minutes, interval seconds, max frames); last row catches the rest.
SAMPLING_TABLE: tuple[tuple[float, float, int], ...] = (
    (0.5, 2, 16),
    (1.0, 3, 20),
    (2.0, 4, 28),
    (3.0, 5, 32),
    (4.0, 6, 36),
    (math.inf, 7, 40),
)

# Seeking to the exact end of the stream makes the decoder emit nothing.
TAIL_OFFSET_SECONDS = 0.1


def classify_duration(duration_seconds: float) -> SamplingPlan:
    """Map a duration to its sampling plan.

    The caller enforces the upper duration limit before calling.
    """
    minutes = duration_seconds / 60
    for upper, interval, max_frames in SAMPLING_TABLE:
        if minutes <= upper:
            return SamplingPlan(interval_seconds=interval, max_frames=max_frames)
    raise AssertionError("unreachable: sampling table has no catch-all row")


def frame_count(duration_seconds: float, plan: SamplingPlan) -> int:
    """min(floor(duration / interval) + 1, max_frames)."""
    return min(math.floor(duration_seconds / plan.interval_seconds) + 1, plan.max_frames)


def frame_timestamps(
    duration_seconds: float,
    plan: SamplingPlan,
    tail_offset: float = TAIL_OFFSET_SECONDS,
) -> list[float]:
    """Timestamps for every frame, in index order.

    The first frame is pinned to 0 and the last to ``duration - tail_offset``.
    Interior frames are spaced by ``(duration - 1) / (count - 2)``, which is
    what actually sets the cadence; the bucket interval only sizes the count.
    A single-frame plan yields just the frame at 0.
    """
    count = frame_count(duration_seconds, plan)
    if count <= 1:
        return [0.0]

    timestamps = [0.0]
    interior = count - 2
    if interior > 0:
        step = (duration_seconds - 1) / interior
        timestamps.extend((i + 1) * step for i in range(interior))
    timestamps.append(duration_seconds - tail_offset)
    return timestamps


def duration_category(duration_seconds: float) -> str:
    """Human-readable duration bucket logged at the end of a run."""
    minutes = duration_seconds / 60
    if minutes < 1:
        return "Video is less than 1 minute"
    if minutes <= 3:
        return "Video is between 1 and 3 minutes"
    return "Video is between 3 and 5 minutes"
