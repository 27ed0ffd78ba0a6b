"""Order-preserving fan-out over a fixed-size thread pool."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


def run_indexed(
    fn: Callable[[int, T], R],
    items: Sequence[T],
    max_workers: int = 4,
) -> list[R]:
    """Call ``fn(index, item)`` for every item concurrently.

    Results land in slot ``index`` regardless of completion order. Every task
    is awaited before returning; if any failed, the failure with the lowest
    index is re-raised.
    """
    if not items:
        return []

    slots: list[R | None] = [None] * len(items)
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items)))) as executor:
        futures: list[Future] = [executor.submit(fn, i, item) for i, item in enumerate(items)]

    first_error: BaseException | None = None
    for i, future in enumerate(futures):
        exc = future.exception()
        if exc is not None:
            logger.debug(f"Task {i} failed: {exc}")
            if first_error is None:
                first_error = exc
            continue
        slots[i] = future.result()

    if first_error is not None:
        raise first_error
    return slots  # type: ignore[return-value]
