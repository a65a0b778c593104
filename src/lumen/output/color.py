"""Conversion of accumulated linear radiance to 8-bit display values.

Each channel goes through the same pipeline:

    average   c / samples_per_pixel
    gamma     sqrt(c)          (gamma 2 approximation)
    clamp     [0, 0.999]
    quantize  int(256 * c)

so the output always lies in [0, 255].
"""

import numpy as np
import numpy.typing as npt

# Upper clamp before quantization; 256 * 0.999 truncates to 255
INTENSITY_MAX = 0.999


def linear_to_gamma(linear: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Map linear values to gamma-2 display space. Negative input maps to 0."""
    return np.sqrt(np.maximum(np.asarray(linear, dtype=np.float64), 0.0))


def quantize_image(
    accum: npt.ArrayLike,
    samples_per_pixel: int,
) -> npt.NDArray[np.uint8]:
    """Convert summed linear samples to 8-bit color.

    Args:
        accum: Per-channel sums of samples, any shape ending in 3.
        samples_per_pixel: Number of samples contributing to each sum.

    Returns:
        Array of the same shape with dtype uint8.

    Raises:
        ValueError: If samples_per_pixel is not positive.
    """
    if samples_per_pixel < 1:
        raise ValueError(f"samples_per_pixel must be positive, got {samples_per_pixel}")

    scaled = np.nan_to_num(np.asarray(accum, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
    scaled = scaled * (1.0 / samples_per_pixel)
    gamma = linear_to_gamma(scaled)
    clamped = np.clip(gamma, 0.0, INTENSITY_MAX)
    return (256.0 * clamped).astype(np.uint8)


def quantize_color(
    pixel_color: tuple[float, float, float],
    samples_per_pixel: int,
) -> tuple[int, int, int]:
    """Quantize a single pixel's summed color. See ``quantize_image``."""
    r, g, b = quantize_image(np.array(pixel_color, dtype=np.float64), samples_per_pixel)
    return int(r), int(g), int(b)
