"""Thin-lens camera: configuration, derived viewport geometry and rendering.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite the view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport sits on the plane of perfect focus, ``focus_dist`` in front of
the camera, and is sized from the vertical field of view. Pixel (0, 0) is the
upper-left pixel; ``pixel_delta_u`` steps right and ``pixel_delta_v`` steps
down. With ``defocus_angle > 0`` ray origins are spread over a disk around
the camera center, which blurs everything off the focus plane.

Lifecycle:
    UNCONFIGURED --initialize()--> INITIALIZED --render()--> RENDERING --> DONE

``configure()`` returns the camera to UNCONFIGURED; the derived geometry is
recomputed by the next ``initialize()`` (``render()`` does this on demand).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.camera.camera import Camera, CameraConfig
    >>> camera = Camera(CameraConfig(image_width=400, aspect_ratio=16.0 / 9.0))
    >>> camera.initialize()
    >>> camera.image_height
    225
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import TYPE_CHECKING, Any, TextIO

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.lumen.core.integrator import accumulate_samples
from src.lumen.core.ray import Ray, make_ray
from src.lumen.core.vec3 import degrees_to_radians, random_in_unit_disk, vec3
from src.lumen.output.color import quantize_image
from src.lumen.output.ppm import write_ppm

if TYPE_CHECKING:
    from src.lumen.scene.hittable_list import HittableList

logger = logging.getLogger(__name__)

# Callback receives (completed_sample_passes, total_sample_passes)
ProgressCallback = Callable[[int, int], None]


def _legal_aspect_ratio(aspect_ratio: float) -> float:
    value = float(aspect_ratio)
    if not math.isfinite(value) or value <= 0.0:
        return 1.0
    return value


@dataclass(frozen=True)
class CameraConfig:
    """User-facing camera configuration.

    Omitted options take neutral defaults; in particular
    ``defocus_angle = 0`` disables depth of field.

    Attributes:
        aspect_ratio: Image width divided by image height.
        image_width: Rendered image width in pixels.
        samples_per_pixel: Number of random samples averaged per pixel.
        max_depth: Maximum number of ray bounces into the scene.
        vfov: Vertical field of view in degrees.
        lookfrom: Camera position in world space.
        lookat: Point the camera is looking at.
        vup: Camera-relative "up" direction.
        defocus_angle: Cone angle in degrees of rays through each pixel.
        focus_dist: Distance from lookfrom to the plane of perfect focus.
    """

    aspect_ratio: float = 1.0
    image_width: int = 100
    samples_per_pixel: int = 10
    max_depth: int = 10
    vfov: float = 90.0
    lookfrom: tuple[float, float, float] = (0.0, 0.0, 0.0)
    lookat: tuple[float, float, float] = (0.0, 0.0, -1.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    defocus_angle: float = 0.0
    focus_dist: float = 10.0

    def normalized(self) -> "CameraConfig":
        """Return a copy with every option clamped to a legal value.

        Counts are clamped to their minimums; a non-positive or non-finite
        aspect ratio falls back to 1.0.
        """
        return replace(
            self,
            aspect_ratio=_legal_aspect_ratio(self.aspect_ratio),
            image_width=max(1, int(self.image_width)),
            samples_per_pixel=max(1, int(self.samples_per_pixel)),
            max_depth=max(0, int(self.max_depth)),
        )

    @property
    def image_height(self) -> int:
        """Image height derived from width and aspect ratio (at least 1)."""
        width = max(1, int(self.image_width))
        return max(1, int(width / _legal_aspect_ratio(self.aspect_ratio)))


class CameraState(IntEnum):
    """Lifecycle state of a Camera."""

    UNCONFIGURED = 0
    INITIALIZED = 1
    RENDERING = 2
    DONE = 3


def _unit(v: npt.NDArray[np.float64], what: str) -> npt.NDArray[np.float64]:
    norm = float(np.linalg.norm(v))
    if norm < 1e-12:
        raise ValueError(f"Cannot build camera basis: {what} is degenerate")
    return v / norm


@ti.data_oriented
class Camera:
    """A configurable camera that turns a scene into an 8-bit RGB image.

    Attributes:
        config: The active configuration (clamped copy of the one supplied).
        state: The current CameraState.
    """

    def __init__(self, config: CameraConfig | None = None) -> None:
        self.config = (config or CameraConfig()).normalized()
        self.state = CameraState.UNCONFIGURED
        self._geometry: dict[str, Any] = {}

        # GPU-side copies of the derived geometry read by get_ray()
        self._center = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._pixel00_loc = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._pixel_delta_u = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._pixel_delta_v = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._defocus_disk_u = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._defocus_disk_v = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._defocus_angle = ti.field(dtype=ti.f32, shape=())

        # Sample accumulation buffer, (height, width) so rows come out top first
        self._accum: Any = None

    # =========================================================================
    # Configuration
    # =========================================================================

    def configure(self, **changes: Any) -> None:
        """Replace configuration options and invalidate the derived geometry.

        Args:
            **changes: CameraConfig field names mapped to new values.

        Raises:
            RuntimeError: If called while a render is in progress.
            TypeError: If an unknown option is given.
        """
        if self.state == CameraState.RENDERING:
            raise RuntimeError("Cannot reconfigure the camera while rendering")
        self.config = replace(self.config, **changes).normalized()
        self.state = CameraState.UNCONFIGURED
        self._geometry = {}

    def initialize(self) -> None:
        """Derive the viewport geometry from the configuration.

        Computes the image height, camera basis, pixel grid and defocus disk,
        and uploads them to the GPU.

        Raises:
            RuntimeError: If the camera is already initialized or rendering.
            ValueError: If the view is degenerate (lookfrom == lookat, or vup
                parallel to the view direction).
        """
        if self.state != CameraState.UNCONFIGURED:
            raise RuntimeError(
                f"Camera is {self.state.name}; call configure() before initializing again"
            )

        cfg = self.config
        image_width = cfg.image_width
        image_height = cfg.image_height

        center = np.array(cfg.lookfrom, dtype=np.float64)
        lookat = np.array(cfg.lookat, dtype=np.float64)
        vup = np.array(cfg.vup, dtype=np.float64)

        # Viewport dimensions on the focus plane
        theta = degrees_to_radians(cfg.vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h * cfg.focus_dist
        viewport_width = viewport_height * (image_width / image_height)

        # Orthonormal camera frame
        w = _unit(center - lookat, "lookfrom - lookat")
        u = _unit(np.cross(vup, w), "vup x w")
        v = np.cross(w, u)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = viewport_width * u
        viewport_v = viewport_height * -v

        pixel_delta_u = viewport_u / image_width
        pixel_delta_v = viewport_v / image_height

        viewport_upper_left = (
            center - cfg.focus_dist * w - viewport_u / 2.0 - viewport_v / 2.0
        )
        pixel00_loc = viewport_upper_left + 0.5 * (pixel_delta_u + pixel_delta_v)

        defocus_radius = cfg.focus_dist * math.tan(
            degrees_to_radians(cfg.defocus_angle / 2.0)
        )
        defocus_disk_u = u * defocus_radius
        defocus_disk_v = v * defocus_radius

        self._geometry = {
            "image_width": image_width,
            "image_height": image_height,
            "center": center,
            "u": u,
            "v": v,
            "w": w,
            "viewport_width": viewport_width,
            "viewport_height": viewport_height,
            "pixel_delta_u": pixel_delta_u,
            "pixel_delta_v": pixel_delta_v,
            "pixel00_loc": pixel00_loc,
            "defocus_disk_u": defocus_disk_u,
            "defocus_disk_v": defocus_disk_v,
        }

        self._center[None] = center.tolist()
        self._pixel00_loc[None] = pixel00_loc.tolist()
        self._pixel_delta_u[None] = pixel_delta_u.tolist()
        self._pixel_delta_v[None] = pixel_delta_v.tolist()
        self._defocus_disk_u[None] = defocus_disk_u.tolist()
        self._defocus_disk_v[None] = defocus_disk_v.tolist()
        self._defocus_angle[None] = cfg.defocus_angle

        if self._accum is None or self._accum.shape != (image_height, image_width):
            self._accum = ti.Vector.field(3, dtype=ti.f32, shape=(image_height, image_width))

        self.state = CameraState.INITIALIZED
        logger.debug(
            "Camera initialized: %dx%d, vfov=%s, focus_dist=%s, defocus_angle=%s",
            image_width,
            image_height,
            cfg.vfov,
            cfg.focus_dist,
            cfg.defocus_angle,
        )

    # =========================================================================
    # Derived Geometry (host side)
    # =========================================================================

    def _derived(self, name: str) -> Any:
        if self.state == CameraState.UNCONFIGURED:
            raise RuntimeError("Camera not initialized. Call initialize() first.")
        return self._geometry[name]

    @property
    def image_width(self) -> int:
        return int(self._derived("image_width"))

    @property
    def image_height(self) -> int:
        return int(self._derived("image_height"))

    @property
    def center(self) -> npt.NDArray[np.float64]:
        return self._derived("center")

    @property
    def basis(self) -> tuple[npt.NDArray[np.float64], ...]:
        """The (u, v, w) camera frame."""
        return self._derived("u"), self._derived("v"), self._derived("w")

    @property
    def pixel00_loc(self) -> npt.NDArray[np.float64]:
        return self._derived("pixel00_loc")

    @property
    def pixel_delta_u(self) -> npt.NDArray[np.float64]:
        return self._derived("pixel_delta_u")

    @property
    def pixel_delta_v(self) -> npt.NDArray[np.float64]:
        return self._derived("pixel_delta_v")

    @property
    def defocus_disk(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """The (u, v) radius vectors of the defocus disk."""
        return self._derived("defocus_disk_u"), self._derived("defocus_disk_v")

    def info(self) -> dict[str, tuple[float, ...]]:
        """Get the derived geometry as plain tuples for debugging.

        Raises:
            RuntimeError: If the camera has not been initialized.
        """
        result = {}
        for name in (
            "center",
            "u",
            "v",
            "w",
            "pixel00_loc",
            "pixel_delta_u",
            "pixel_delta_v",
            "defocus_disk_u",
            "defocus_disk_v",
        ):
            vec = self._derived(name)
            result[name] = (float(vec[0]), float(vec[1]), float(vec[2]))
        result["viewport_size"] = (
            float(self._derived("viewport_width")),
            float(self._derived("viewport_height")),
        )
        return result

    # =========================================================================
    # Ray Generation (Taichi-compatible)
    # =========================================================================

    @ti.func
    def pixel_sample_square(self) -> vec3:
        """Random offset within the footprint of one pixel around its center."""
        px = -0.5 + ti.random(ti.f32)
        py = -0.5 + ti.random(ti.f32)
        return px * self._pixel_delta_u[None] + py * self._pixel_delta_v[None]

    @ti.func
    def defocus_disk_sample(self) -> vec3:
        """Random point on the camera defocus disk."""
        p = random_in_unit_disk()
        return (
            self._center[None]
            + p.x * self._defocus_disk_u[None]
            + p.y * self._defocus_disk_v[None]
        )

    @ti.func
    def get_ray(self, i: ti.i32, j: ti.i32) -> Ray:
        """Generate a randomly jittered camera ray for pixel (i, j).

        Args:
            i: Pixel column (0 = left).
            j: Pixel row (0 = top).

        Returns:
            A Ray from the camera center (or a point on the defocus disk)
            through a random point inside the pixel.
        """
        pixel_center = (
            self._pixel00_loc[None]
            + ti.cast(i, ti.f32) * self._pixel_delta_u[None]
            + ti.cast(j, ti.f32) * self._pixel_delta_v[None]
        )
        pixel_sample = pixel_center + self.pixel_sample_square()

        origin = self._center[None]
        if self._defocus_angle[None] > 0.0:
            origin = self.defocus_disk_sample()

        return make_ray(origin, pixel_sample - origin)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(
        self,
        world: "HittableList",
        stream: TextIO | None = None,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint8]:
        """Render the scene.

        Every pixel accumulates ``samples_per_pixel`` independent samples of
        the radiance estimator; the average is gamma corrected and quantized
        to 8 bits per channel.

        Args:
            world: The scene to render. It must not change during the call.
            stream: Optional text stream that receives the image as plain PPM.
            callback: Optional function called after each sample pass with
                (completed_passes, total_passes).

        Returns:
            Array of shape (image_height, image_width, 3), dtype uint8, rows
            ordered top to bottom.

        Raises:
            RuntimeError: If a render is already in progress.
        """
        if self.state == CameraState.RENDERING:
            raise RuntimeError("Camera is already rendering")
        if self.state == CameraState.UNCONFIGURED:
            self.initialize()

        cfg = self.config
        self.state = CameraState.RENDERING
        logger.info(
            "Rendering %dx%d, %d samples per pixel, max depth %d, %d objects",
            self.image_width,
            self.image_height,
            cfg.samples_per_pixel,
            cfg.max_depth,
            len(world),
        )

        try:
            self._accum.fill(0.0)
            for sample in range(cfg.samples_per_pixel):
                accumulate_samples(self, world, self._accum, cfg.max_depth)
                logger.debug("Sample pass %d/%d done", sample + 1, cfg.samples_per_pixel)
                if callback is not None:
                    callback(sample + 1, cfg.samples_per_pixel)
        except BaseException:
            self.state = CameraState.INITIALIZED
            raise

        image = quantize_image(self._accum.to_numpy(), cfg.samples_per_pixel)
        self.state = CameraState.DONE

        if stream is not None:
            write_ppm(image, stream)

        logger.info("Render finished")
        return image

    def __repr__(self) -> str:
        return f"Camera(state={self.state.name}, config={self.config})"
