"""Plain-text PPM (P3) image output.

Layout:

    P3
    <width> <height>
    255
    <R> <G> <B>        one line per pixel, rows top to bottom,
    ...                left to right within a row

Example:
    >>> import sys
    >>> from src.lumen.output.ppm import write_ppm
    >>> image = camera.render(world)
    >>> write_ppm(image, sys.stdout)
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO, Union

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)

MAX_COLOR_VALUE = 255


def _check_image(image: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    array = np.asarray(image)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {array.shape}")
    if array.dtype != np.uint8:
        if np.any(array < 0) or np.any(array > MAX_COLOR_VALUE):
            raise ValueError(f"Channel values must lie in [0, {MAX_COLOR_VALUE}]")
        array = array.astype(np.uint8)
    return array


def iter_ppm_lines(image: npt.ArrayLike) -> Iterator[str]:
    """Yield the lines of the PPM encoding of an 8-bit RGB image."""
    array = _check_image(image)
    height, width, _ = array.shape
    yield "P3"
    yield f"{width} {height}"
    yield str(MAX_COLOR_VALUE)
    for r, g, b in array.reshape(-1, 3).tolist():
        yield f"{r} {g} {b}"


def format_ppm(image: npt.ArrayLike) -> str:
    """Encode an 8-bit RGB image as a PPM string.

    Args:
        image: Array of shape (height, width, 3), rows top to bottom.

    Returns:
        The complete file contents, newline terminated.

    Raises:
        ValueError: If the array is not a (height, width, 3) image with
            values in [0, 255].
    """
    return "\n".join(iter_ppm_lines(image)) + "\n"


def write_ppm(image: npt.ArrayLike, stream: TextIO) -> None:
    """Write an 8-bit RGB image to a text stream as PPM."""
    for line in iter_ppm_lines(image):
        stream.write(line)
        stream.write("\n")


def save_ppm(image: npt.ArrayLike, filepath: Union[str, Path]) -> None:
    """Save an 8-bit RGB image as a PPM file."""
    with open(filepath, "w", encoding="ascii") as f:
        write_ppm(image, f)
    logger.info("Saved PPM image: %s", filepath)
