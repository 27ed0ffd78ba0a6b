"""Compose up to four frames into one fixed-size 2x2 canvas."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from PIL import Image

logger = logging.getLogger(__name__)

QUADRANTS = 4


class GridComposer:
    """Row-major quadrant layout: 0 top-left, 1 top-right, 2 bottom-left, 3 bottom-right.

    Each frame is fitted into its quadrant minus the shared gap with Lanczos
    resampling and is never enlarged past its source size. Unfilled quadrants
    keep the background colour.
    """

    def __init__(
        self,
        width: int = 1920,
        height: int = 1080,
        gap: int = 2,
        background: tuple[int, int, int] = (0, 0, 0),
        quality: int = 100,
    ):
        self.width = width
        self.height = height
        self.gap = gap
        self.background = tuple(background)
        self.quality = quality

    @property
    def cell_size(self) -> tuple[int, int]:
        return self.width // 2, self.height // 2

    @property
    def slot_size(self) -> tuple[int, int]:
        cell_w, cell_h = self.cell_size
        return cell_w - self.gap, cell_h - self.gap

    def position(self, index: int) -> tuple[int, int]:
        """Top-left paste offset (left, top) for quadrant ``index``."""
        cell_w, cell_h = self.cell_size
        half_gap = self.gap // 2
        return (index % 2) * cell_w + half_gap, (index // 2) * cell_h + half_gap

    def fit(self, img: Image.Image) -> Image.Image:
        slot_w, slot_h = self.slot_size
        target = (min(img.width, slot_w), min(img.height, slot_h))
        if target == img.size:
            return img
        return img.resize(target, Image.Resampling.LANCZOS)

    def compose(self, frames: Sequence[Path], output_path: Path) -> Path:
        if not 1 <= len(frames) <= QUADRANTS:
            raise ValueError(f"A grid takes 1 to {QUADRANTS} frames, got {len(frames)}")

        canvas = Image.new("RGB", (self.width, self.height), self.background)
        for index, frame_path in enumerate(frames):
            with Image.open(frame_path) as src:
                tile = self.fit(src.convert("RGB"))
            canvas.paste(tile, self.position(index))

        output_path.parent.mkdir(parents=True, exist_ok=True)
        # subsampling=0 keeps full 4:4:4 chroma
        canvas.save(output_path, "JPEG", quality=self.quality, subsampling=0)
        logger.debug(f"Wrote {output_path.name} from {len(frames)} frame(s)")
        return output_path
