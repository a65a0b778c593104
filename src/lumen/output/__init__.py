"""Output module: color quantization and image files.

Components:
    color: Gamma correction and 8-bit quantization of accumulated radiance
    ppm: Plain-text PPM (P3) pixel stream
    export: PNG export via Pillow
    display: Optional Matplotlib preview
"""

from .color import INTENSITY_MAX, linear_to_gamma, quantize_color, quantize_image
from .export import load_image, save_png
from .ppm import format_ppm, iter_ppm_lines, save_ppm, write_ppm

__all__ = [
    "INTENSITY_MAX",
    "linear_to_gamma",
    "quantize_color",
    "quantize_image",
    "format_ppm",
    "iter_ppm_lines",
    "write_ppm",
    "save_ppm",
    "save_png",
    "load_image",
]
