"""PNG export for rendered images via Pillow.

Example:
    >>> from src.lumen.output.export import save_png
    >>> image = camera.render(world)
    >>> save_png(image, "spheres.png")
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def save_png(image: npt.NDArray[np.uint8], filepath: Union[str, Path]) -> None:
    """Save an 8-bit RGB image as a PNG file.

    Args:
        image: Array of shape (height, width, 3) with dtype uint8.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the array is not an 8-bit RGB image.
    """
    if image.ndim != 3 or image.shape[2] != 3 or image.dtype != np.uint8:
        raise ValueError(
            f"Expected a uint8 image of shape (height, width, 3), got {image.dtype} {image.shape}"
        )

    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)
    logger.info("Saved PNG image: %s", filepath)


def load_image(filepath: Union[str, Path]) -> npt.NDArray[np.uint8]:
    """Load an image file as an 8-bit RGB array of shape (height, width, 3)."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
