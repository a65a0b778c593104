"""Metal (specular reflective) scattering.

The unit incoming direction is mirrored about the normal and then perturbed
by ``fuzz`` times a random unit vector. A perturbation that pushes the ray
below the surface absorbs it.

The reflection formula is:
    R = I - 2(I . N)N

Example:
    >>> # Use within a Taichi kernel:
    >>> # did_scatter, attenuation, direction = scatter_metal(
    >>> #     albedo, fuzz, incident_dir, normal
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from src.lumen.core.vec3 import random_unit_vector, reflect, unit_vector, vec3


@ti.func
def scatter_metal(albedo: vec3, fuzz: ti.f32, incident_direction: vec3, normal: vec3):
    """Compute the reflected ray direction for a metal surface.

    Args:
        albedo: The reflective color tint (RGB).
        fuzz: Blur radius in [0, 1]. 0 is a perfect mirror.
        incident_direction: The incoming ray direction (any non-zero length).
        normal: The unit surface normal on the incoming side.

    Returns:
        A tuple of (did_scatter, attenuation, direction). did_scatter is 0
        when the fuzzed direction does not leave the surface.
    """
    reflected = reflect(unit_vector(incident_direction), normal)
    direction = reflected + fuzz * random_unit_vector()

    did_scatter = 0
    if tm.dot(direction, normal) > 0.0:
        did_scatter = 1

    return did_scatter, albedo, direction
