"""Lambertian (ideal diffuse) scattering.

The scattered direction is the surface normal plus a uniformly random unit
vector, which distributes outgoing rays proportionally to the cosine of the
angle from the normal. When the random vector nearly cancels the normal the
normal itself is used, so the scattered ray is never degenerate.

Example:
    >>> # Use within a Taichi kernel:
    >>> # did_scatter, attenuation, direction = scatter_lambertian(albedo, normal)
"""

import taichi as ti

from src.lumen.core.vec3 import near_zero, random_unit_vector, vec3


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3):
    """Sample a diffuse bounce.

    Args:
        albedo: The diffuse reflectance color (RGB).
        normal: The unit surface normal on the incoming side.

    Returns:
        A tuple of (did_scatter, attenuation, direction). did_scatter is
        always 1: diffuse surfaces never absorb a ray outright.
    """
    direction = normal + random_unit_vector()

    # Catch degenerate scatter direction
    if near_zero(direction):
        direction = normal

    return 1, albedo, direction
