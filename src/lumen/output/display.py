"""Matplotlib-based preview of rendered images.

Matplotlib is an optional dependency (the ``preview`` extra) and is only
imported when a preview is requested.

Example:
    >>> from src.lumen.output.display import show_image
    >>> image = camera.render(world)
    >>> show_image(image, title="spheres")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def show_image(
    image: npt.NDArray[np.uint8],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8.0, 8.0),
    block: bool = True,
) -> None:
    """Display a rendered image in a Matplotlib window.

    Args:
        image: Array of shape (height, width, 3) with dtype uint8.
        title: Optional window title. Defaults to the image size.
        figsize: Figure size in inches.
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    height, width = image.shape[:2]

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image)
    ax.set_title(title or f"{width}x{height}")
    ax.axis("off")

    plt.tight_layout()
    plt.show(block=block)
