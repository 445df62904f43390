"""Execution strategies that spread filter work over disjoint row bands.

Every engine in :mod:`pixcore.filters` describes its work as a task that
processes one contiguous band of output rows. A strategy decides how the
bands are scheduled. Bands never overlap, so tasks that only write their own
rows need no synchronisation; the strategy joins all tasks before returning.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
import os
from typing import Callable, Protocol, TypedDict, TypeVar

from tqdm import tqdm

R = TypeVar("R")


class ExecutionSettings(TypedDict):
    """Typed mapping describing how a strategy schedules row bands."""

    strategy: str
    worker_count: int
    band_count: int | None
    log_enabled: bool


class RowExecutor(Protocol):
    """Protocol describing the contract for execution strategies."""

    def run(self, row_count: int, task: Callable[[range], R]) -> list[R]:
        """Run ``task`` over bands covering ``range(row_count)``.

        Returns:
            Task results ordered by band, top to bottom.
        """

    def settings(self) -> ExecutionSettings:
        """Return a summary of the strategy configuration."""


def split_rows(row_count: int, parts: int) -> list[range]:
    """Split ``range(row_count)`` into at most ``parts`` contiguous bands.

    Band lengths differ by at most one row and earlier bands are the longer
    ones. No band is empty.

    Args:
        row_count: Number of rows to cover.
        parts: Requested number of bands.

    Returns:
        Bands in ascending row order.
    """

    if row_count <= 0:
        return []
    parts = max(1, min(parts, row_count))
    base, extra = divmod(row_count, parts)
    bands: list[range] = []
    start = 0
    for index in range(parts):
        stop = start + base + (1 if index < extra else 0)
        bands.append(range(start, stop))
        start = stop
    return bands


def resolve_worker_count(worker_count: int | None) -> int:
    """Return the effective number of worker threads.

    ``None`` or a non-positive value defaults to roughly 70% of the CPU cores
    reported by :func:`os.cpu_count`, and never less than one.
    """

    if worker_count is not None and worker_count > 0:
        return worker_count
    cpu_count = os.cpu_count() or 1
    recommended = round(cpu_count * 0.7)
    return max(1, min(cpu_count, recommended))


class SequentialExecutor:
    """Run the whole image as a single band on the calling thread."""

    def run(self, row_count: int, task: Callable[[range], R]) -> list[R]:
        return [task(band) for band in split_rows(row_count, 1)]

    def settings(self) -> ExecutionSettings:
        return ExecutionSettings(
            strategy="sequential",
            worker_count=1,
            band_count=1,
            log_enabled=False,
        )


class ThreadedExecutor:
    """Run row bands concurrently on a thread pool."""

    def __init__(
        self,
        worker_count: int | None = None,
        band_count: int | None = None,
        log: bool = False,
    ) -> None:
        """Initialise the strategy with the provided configuration.

        Args:
            worker_count: Maximum number of worker threads. ``None`` defaults
                to roughly 70% of the CPU cores reported by
                :func:`os.cpu_count`.
            band_count: Number of row bands to split an image into. ``None``
                uses one band per worker.
            log: Whether to print a start line and display a progress bar.
        """

        if band_count is not None and band_count <= 0:
            msg = "band_count must be a positive integer"
            raise ValueError(msg)
        self._worker_count = worker_count
        self._band_count = band_count
        self._log_enabled = log

    def run(self, row_count: int, task: Callable[[range], R]) -> list[R]:
        worker_count = resolve_worker_count(self._worker_count)
        bands = split_rows(row_count, self._band_count or worker_count)
        if not bands:
            return []

        if self._log_enabled:
            logical_cores = os.cpu_count() or worker_count
            print(
                "[pixcore] Filtering "
                f"{row_count} rows in {len(bands)} bands | "
                f"workers: {worker_count} / logical cores: {logical_cores}"
            )

        progress_bar = self._create_progress_bar(len(bands))
        results: list[R | None] = [None] * len(bands)

        def _update_progress() -> None:
            if progress_bar is not None:
                progress_bar.update(1)

        try:
            if worker_count <= 1 or len(bands) <= 1:
                for index, band in enumerate(bands):
                    results[index] = task(band)
                    _update_progress()
            else:
                with ThreadPoolExecutor(max_workers=worker_count) as executor:
                    future_to_index = {
                        executor.submit(task, band): index
                        for index, band in enumerate(bands)
                    }
                    for future in as_completed(future_to_index):
                        results[future_to_index[future]] = future.result()
                        _update_progress()
        finally:
            if progress_bar is not None:
                progress_bar.close()

        return results  # type: ignore[return-value]

    def settings(self) -> ExecutionSettings:
        return ExecutionSettings(
            strategy="threaded",
            worker_count=resolve_worker_count(self._worker_count),
            band_count=self._band_count,
            log_enabled=self._log_enabled,
        )

    def _create_progress_bar(self, total: int):
        """Create and return a tqdm progress bar if logging is enabled."""

        if not self._log_enabled or total <= 0:
            return None

        return tqdm(total=total, desc="pixcore", unit="band", leave=False)


def resolve_executor(executor: RowExecutor | None) -> RowExecutor:
    """Return ``executor`` or the default sequential strategy."""

    return SequentialExecutor() if executor is None else executor
