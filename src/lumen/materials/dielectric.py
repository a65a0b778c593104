"""Dielectric (glass/water) scattering.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when (n1 / n2) * sin(theta1) > 1

The surface reflects on total internal reflection, or with probability equal
to the Schlick reflectance; otherwise it refracts. Clear glass never absorbs,
so attenuation is always white.

Example:
    >>> # Use within a Taichi kernel:
    >>> # did_scatter, attenuation, direction = scatter_dielectric(
    >>> #     ir, incident_dir, normal, front_face
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from src.lumen.core.vec3 import (
    length_squared,
    reflect,
    refract,
    schlick_reflectance,
    unit_vector,
    vec3,
)


@ti.func
def refraction_ratio(ir: ti.f32, front_face: ti.i32) -> ti.f32:
    """Return eta_incident / eta_transmitted for the side the ray arrives from.

    Entering the material from outside (front face) the ratio is 1 / ir;
    leaving it from inside the ratio is ir.
    """
    ratio = ir
    if front_face == 1:
        ratio = 1.0 / ir
    return ratio


@ti.func
def cannot_refract(ir: ti.f32, incident_direction: vec3, normal: vec3, front_face: ti.i32) -> ti.i32:
    """Return 1 if the ray is totally internally reflected."""
    unit_direction = unit_vector(incident_direction)
    cos_theta = tm.min(-tm.dot(unit_direction, normal), 1.0)
    sin_theta = ti.sqrt(tm.max(1.0 - cos_theta * cos_theta, 0.0))
    result = 0
    if refraction_ratio(ir, front_face) * sin_theta > 1.0:
        result = 1
    return result


@ti.func
def scatter_dielectric(ir: ti.f32, incident_direction: vec3, normal: vec3, front_face: ti.i32):
    """Choose between reflection and refraction at a dielectric boundary.

    Args:
        ir: Index of refraction of the material.
        incident_direction: The incoming ray direction (any non-zero length).
        normal: The unit surface normal on the incoming side.
        front_face: 1 if the ray arrives from outside the material, else 0.

    Returns:
        A tuple of (did_scatter, attenuation, direction). did_scatter is
        always 1 and attenuation is always (1, 1, 1).
    """
    attenuation = vec3(1.0, 1.0, 1.0)
    ratio = refraction_ratio(ir, front_face)

    unit_direction = unit_vector(incident_direction)
    cos_theta = tm.min(-tm.dot(unit_direction, normal), 1.0)
    sin_theta = ti.sqrt(tm.max(1.0 - cos_theta * cos_theta, 0.0))

    direction = vec3(0.0, 0.0, 0.0)
    if ratio * sin_theta > 1.0 or schlick_reflectance(cos_theta, ir) > ti.random(ti.f32):
        direction = reflect(unit_direction, normal)
    else:
        direction = refract(unit_direction, normal, ratio)
        # Near the critical angle refract can still find no solution in f32
        if length_squared(direction) == 0.0:
            direction = reflect(unit_direction, normal)

    return 1, attenuation, direction
