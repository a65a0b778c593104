"""Core rendering module.

Components:
    vec3: Vector algebra and random sampling utilities
    ray: Ray data structure
    integrator: Radiance estimator and per-pass sample accumulation

All per-ray code runs inside Taichi kernels; pixels are traced in parallel
and each sample follows one unbroken chain of bounces bounded by the
camera's max_depth.
"""

from .ray import Ray, make_ray, ray_at
from .vec3 import (
    cross,
    degrees_to_radians,
    dot,
    length,
    length_squared,
    near_zero,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_on_hemisphere,
    random_range,
    random_unit_vector,
    reflect,
    refract,
    schlick_reflectance,
    unit_vector,
    vec3,
)

# Note: integrator is NOT imported here; it depends on the materials package.
# Import directly from src.lumen.core.integrator when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "unit_vector",
    "near_zero",
    "reflect",
    "refract",
    "schlick_reflectance",
    "degrees_to_radians",
    "random_range",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_on_hemisphere",
    "random_in_unit_disk",
]
