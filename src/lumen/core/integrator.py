"""Radiance estimator and sample accumulation.

The color carried back along a camera ray is defined recursively:

    color(ray, depth) = black                                 if depth <= 0
                      = attenuation * color(scattered, depth-1) on scatter
                      = black                                 on absorption
                      = sky(ray.direction)                    on a miss

Taichi functions cannot recurse, so ``ray_color`` unrolls this into a loop
with an explicit depth counter and a running attenuation product. The two
forms agree for every depth.

Scene queries use t in (T_MIN, +inf); the small lower bound keeps a scattered
ray from re-hitting the surface it just left because of round-off.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.core.integrator import trace_radiance
    >>> from src.lumen.scene.hittable_list import HittableList
    >>> # A ray straight up into an empty scene sees the zenith color
    >>> color = trace_radiance(HittableList(), (0, 0, 0), (0, 1, 0), max_depth=10)
"""

import taichi as ti
import taichi.math as tm

from src.lumen.core.ray import Ray, make_ray
from src.lumen.core.vec3 import unit_vector, vec3
from src.lumen.materials.scatter import scatter

# =============================================================================
# Rendering Constants
# =============================================================================

# Self-intersection guard for scattered rays
T_MIN = 0.001
T_MAX = tm.inf

# Sky gradient endpoints (horizon white blending to blue overhead)
SKY_HORIZON_COLOR = (1.0, 1.0, 1.0)
SKY_ZENITH_COLOR = (0.5, 0.7, 1.0)


@ti.func
def background_color(direction: vec3) -> vec3:
    """Vertical white-to-blue gradient seen by rays that escape the scene."""
    unit_direction = unit_vector(direction)
    a = 0.5 * (unit_direction.y + 1.0)
    horizon = vec3(SKY_HORIZON_COLOR[0], SKY_HORIZON_COLOR[1], SKY_HORIZON_COLOR[2])
    zenith = vec3(SKY_ZENITH_COLOR[0], SKY_ZENITH_COLOR[1], SKY_ZENITH_COLOR[2])
    return (1.0 - a) * horizon + a * zenith


@ti.func
def ray_color(ray: Ray, depth: ti.i32, world: ti.template()) -> vec3:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to follow.
        depth: Remaining bounce budget. Zero or less yields black.
        world: The scene aggregate (anything with a ``hit`` Taichi function).

    Returns:
        The estimated RGB radiance.
    """
    color = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)
    current = ray

    # Active flag for path continuation
    active = 1

    ti.loop_config(serialize=True)
    for _ in range(depth):
        if active == 1:
            rec = world.hit(current, T_MIN, T_MAX)

            if rec.hit == 0:
                color = throughput * background_color(current.direction)
                active = 0
            else:
                did_scatter, attenuation, scattered = scatter(current, rec)
                if did_scatter == 0:
                    # Absorbed: the path contributes black
                    active = 0
                else:
                    throughput *= attenuation
                    current = scattered

    # A path still active here ran out of depth and stays black
    return color


@ti.kernel
def accumulate_samples(
    camera: ti.template(),
    world: ti.template(),
    accum: ti.template(),
    max_depth: ti.i32,
):
    """Add one radiance sample to every pixel of the accumulation buffer.

    Args:
        camera: The initialized Camera generating the rays.
        world: The scene aggregate.
        accum: Vector field of shape (height, width) holding running sums.
        max_depth: Bounce budget per sample.
    """
    for j, i in accum:
        ray = camera.get_ray(i, j)
        color = ray_color(ray, max_depth, world)

        # Drop non-finite samples so one bad path cannot poison the pixel
        for c in ti.static(range(3)):
            if tm.isnan(color[c]) or tm.isinf(color[c]):
                color[c] = 0.0

        accum[j, i] += color


@ti.kernel
def _trace_single_ray(
    world: ti.template(),
    origin: vec3,
    direction: vec3,
    max_depth: ti.i32,
) -> vec3:
    return ray_color(make_ray(origin, direction), max_depth, world)


def trace_radiance(
    world,
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    max_depth: int,
) -> tuple[float, float, float]:
    """Evaluate the radiance estimator once for a single ray.

    This is a Python-callable entry point for testing and debugging; images
    are produced by Camera.render().

    Args:
        world: The scene aggregate.
        origin: Ray origin.
        direction: Ray direction (any non-zero length).
        max_depth: Bounce budget.

    Returns:
        Tuple of (R, G, B) linear radiance values.
    """
    color = _trace_single_ray(
        world,
        vec3(origin[0], origin[1], origin[2]),
        vec3(direction[0], direction[1], direction[2]),
        max_depth,
    )
    return (float(color[0]), float(color[1]), float(color[2]))
