"""Bridge between OpenCV-encoded image files and pixcore buffers.

pixcore itself defines no file formats. Decoding and encoding are delegated
to OpenCV; this module only moves flat pixel data and sizes across. File
bytes are read and written by Python and handed to ``cv2.imdecode`` /
``cv2.imencode``, so paths with non-ASCII characters work on every platform.

Failures are reported on stdout and signalled with ``None`` / ``False``.
"""

import os
from pathlib import Path
from typing import Sequence

import cv2
import numpy as np

from pixcore.image import Buffer, Image, grid_of

PathLike = str | os.PathLike[str]


def read_image(path: PathLike, flags: int = cv2.IMREAD_COLOR) -> np.ndarray | None:
    """Decode an image file into a NumPy array.

    Args:
        path: Path to the image file.
        flags: OpenCV ``IMREAD_*`` flags.

    Returns:
        The decoded array, or ``None`` when the file cannot be read or decoded.
    """

    try:
        data = Path(path).read_bytes()
        decoded = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), flags)
    except (OSError, cv2.error) as exc:
        print(f"[pixcore] Failed to read '{path}': {exc}")
        return None
    if decoded is None:
        print(f"[pixcore] '{path}' is not a decodable image")
    return decoded


def write_image(path: PathLike, img: np.ndarray, params: Sequence[int] = ()) -> bool:
    """Encode ``img`` with the codec selected by the file extension.

    Missing parent directories are created.

    Args:
        path: Destination path.
        img: Array accepted by ``cv2.imencode``.
        params: Flat ``IMWRITE_*`` flag/value pairs.

    Returns:
        ``True`` if the file was written, ``False`` otherwise.
    """

    target = Path(path)
    try:
        encoded_ok, encoded = cv2.imencode(target.suffix, img, list(params))
        if not encoded_ok:
            print(f"[pixcore] OpenCV could not encode '{target}'")
            return False
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(encoded.tobytes())
    except (OSError, cv2.error) as exc:
        print(f"[pixcore] Failed to write '{target}': {exc}")
        return False
    return True


def read_buffer(path: PathLike, flags: int = cv2.IMREAD_GRAYSCALE) -> Buffer | None:
    """Decode a single-channel image file into a :class:`Buffer`.

    Args:
        path: Path to the image file.
        flags: OpenCV ``IMREAD_*`` flags; must yield a 2D image.

    Returns:
        Buffer with the decoded pixels, or ``None`` when decoding fails or
        produces a multi-channel image.
    """

    img = read_image(path, flags)
    if img is None:
        return None
    if img.ndim != 2:
        print(f"[pixcore] '{path}' decoded to {img.ndim} dimensions, expected 2")
        return None
    return Buffer.from_array(img)


def write_buffer(path: PathLike, image: Image, params: Sequence[int] = ()) -> bool:
    """Encode any readable image as a single-channel file.

    Args:
        path: Destination path. The extension selects the codec.
        image: Image to encode; its element type must be supported by the
            codec (``uint8`` for PNG/JPEG, ``uint16`` for PNG/TIFF).
        params: Parameters to pass to ``cv2.imencode``.

    Returns:
        ``True`` if the image was written successfully, ``False`` otherwise.
    """

    grid = grid_of(image)
    array = np.ascontiguousarray(grid) if grid is not None else Buffer.copy_from(image).grid()
    return write_image(path, array, params)
