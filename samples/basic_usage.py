"""Minimal end-to-end example for pixcore buffers and filters."""

from pathlib import Path

import numpy as np

import pixcore as px


def _ensure_directories(base: Path) -> tuple[Path, Path]:
    """Return input/output directories for the sample data."""

    input_dir = base / "input"
    output_dir = base / "output"
    input_dir.mkdir(parents=True, exist_ok=True)
    output_dir.mkdir(parents=True, exist_ok=True)
    return input_dir, output_dir


def _create_sample_image(input_dir: Path) -> Path:
    """Write a noisy gradient to disk for demonstration."""

    rng = np.random.default_rng(7)
    gradient = np.linspace(0, 255, 96, dtype=np.float64)
    noisy = np.tile(gradient, (64, 1)) + rng.normal(0, 20, size=(64, 96))
    image = px.Buffer.from_array(np.clip(noisy, 0, 255).astype(np.uint8))
    path = input_dir / "gradient.png"
    px.write_buffer(str(path), image)
    return path


def main() -> None:
    """Run the basic blur example."""

    base_dir = Path(__file__).resolve().parent
    input_dir, output_dir = _ensure_directories(base_dir)
    input_path = _create_sample_image(input_dir)

    image = px.read_buffer(str(input_path))
    if image is None:
        return

    wide_dtype = px.accumulator_dtype(image.dtype)
    wide = px.map_new(image, wide_dtype.type, dtype=wide_dtype)
    blurred = px.Buffer.new_like(wide)
    px.separable_filter(
        wide,
        blurred,
        [1, 2, 1],
        [1, 2, 1],
        edge=px.EdgeMode.REPLICATE,
        executor=px.ThreadedExecutor(log=True),
    )
    px.update(blurred, lambda value: value // 16)
    result = px.map_new(blurred, px.saturating(np.uint8), dtype=np.uint8)

    destination = output_dir / "gradient_blurred.png"
    px.write_buffer(str(destination), result)
    print(f"Blurred image written to {destination}")

    mirrored = px.mirror_horizontal(result)
    thumbnail = px.resize_nearest(mirrored, (24, 16))
    destination = output_dir / "gradient_thumbnail.png"
    px.write_buffer(str(destination), thumbnail)
    print(f"Mirrored thumbnail written to {destination}")


if __name__ == "__main__":
    main()
