"""Benchmark tools for measuring filter throughput across execution strategies."""

import argparse
import math
from dataclasses import dataclass
from time import perf_counter
from typing import Callable

import numpy as np

from pixcore import (
    ArrayView,
    Buffer,
    RowExecutor,
    SequentialExecutor,
    ThreadedExecutor,
    horizontal_filter,
    map_new,
    separable_filter,
    vertical_filter,
)


@dataclass
class ComparisonResult:
    """Summary of sequential and threaded benchmark timings."""

    label: str
    sequential_seconds: float
    threaded_seconds: float
    notes: str = ""

    def speedup(self) -> float:
        """Return threaded speed-up relative to the sequential run."""

        if self.threaded_seconds <= 0:
            return math.nan
        return self.sequential_seconds / self.threaded_seconds


@dataclass
class BenchmarkDefinition:
    """Describe one filter workload to time."""

    label: str
    run: Callable[[np.ndarray, RowExecutor], None]
    notes: str = ""


def _time(definition: BenchmarkDefinition, image: np.ndarray, executor: RowExecutor, repeat: int) -> float:
    start = perf_counter()
    for _ in range(repeat):
        definition.run(image, executor)
    return (perf_counter() - start) / repeat


def _box_blur(image: np.ndarray, executor: RowExecutor) -> None:
    source = Buffer.from_array(image)
    destination = Buffer.new_like(source)
    separable_filter(source, destination, [1] * 5, [1] * 5, executor=executor)


def _array_view_vertical(image: np.ndarray, executor: RowExecutor) -> None:
    destination = np.zeros_like(image)
    vertical_filter(ArrayView(image), ArrayView(destination), [1, 4, 6, 4, 1], executor=executor)


def _generic_operator(image: np.ndarray, executor: RowExecutor) -> None:
    # custom operators bypass the vectorized path
    source = Buffer.from_array(image)
    destination = Buffer.new_like(source)
    horizontal_filter(
        source,
        destination,
        [1, 1, 1],
        lambda accumulator, element, weight: max(accumulator, element * weight),
        executor=executor,
    )


def _widen(image: np.ndarray, executor: RowExecutor) -> None:
    map_new(Buffer.from_array(image), float, dtype=np.float64, executor=executor)


def main() -> None:
    """Entry point for running the benchmark from the command line."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Width of the synthetic image (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=768,
        help="Height of the synthetic image (default: 768)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed value used to generate the synthetic image (default: 42)",
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=3,
        help="Number of timed runs per workload (default: 3)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=0,
        help=(
            "Maximum number of worker threads for the threaded run. "
            "Use 0 to auto-detect based on available CPUs (default: 0)."
        ),
    )
    parser.add_argument(
        "--log",
        action="store_true",
        help="Print executor progress while the threaded runs execute.",
    )

    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    image = rng.integers(0, 256, size=(args.height, args.width)).astype(np.int64)

    definitions = [
        BenchmarkDefinition(
            label="Separable 5x5 box blur",
            run=_box_blur,
            notes="Buffer storage, vectorized convolution.",
        ),
        BenchmarkDefinition(
            label="Vertical binomial on ArrayView",
            run=_array_view_vertical,
            notes="Foreign NumPy storage written in place.",
        ),
        BenchmarkDefinition(
            label="Horizontal max operator",
            run=_generic_operator,
            notes="Per-pixel path with a custom operator.",
        ),
        BenchmarkDefinition(
            label="Widen to float64",
            run=_widen,
            notes="Point transform into a new buffer.",
        ),
    ]

    sequential = SequentialExecutor()
    threaded = ThreadedExecutor(
        worker_count=args.workers if args.workers > 0 else None,
        log=args.log,
    )
    comparisons = [
        ComparisonResult(
            label=definition.label,
            sequential_seconds=_time(definition, image, sequential, args.repeat),
            threaded_seconds=_time(definition, image, threaded, args.repeat),
            notes=definition.notes,
        )
        for definition in definitions
    ]

    settings = threaded.settings()
    print("Benchmark summary:")
    print(f"  Image size     : {args.width}x{args.height}")
    print(f"  Workers        : {settings['worker_count']}")
    print(f"  Repeats        : {args.repeat}")
    print()
    for comparison in comparisons:
        speedup = comparison.speedup()
        print("=" * 72)
        print(f"Workload         : {comparison.label}")
        print(f"  Notes          : {comparison.notes or '-'}")
        print(f"  Sequential     : {comparison.sequential_seconds:>8.3f} s | baseline")
        if math.isfinite(speedup):
            print(
                "  Threaded       : "
                f"{comparison.threaded_seconds:>8.3f} s | "
                f"speed-up {speedup:>5.2f}x"
            )
        else:
            print(
                "  Threaded       : "
                f"{comparison.threaded_seconds:>8.3f} s | "
                "speed-up   N/A"
            )


if __name__ == "__main__":
    main()
