"""Vector algebra and Monte Carlo sampling primitives.

A ``vec3`` is used interchangeably as a position, a direction and an RGB
color. The arithmetic operators (``+``, ``-``, scalar ``*``, component-wise
``*``, ``/`` and unary ``-``) come from Taichi's vector type; this module adds
the named operations the renderer relies on. Everything except
``degrees_to_radians`` is a Taichi function and must be called from inside a
kernel.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.core.vec3 import reflect, vec3
    >>> @ti.kernel
    ... def mirror() -> vec3:
    ...     return reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))
"""

import math

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Per-component magnitude below which a vector counts as degenerate
NEAR_ZERO_EPSILON = 1e-8

# Upper bound on rejection-sampling attempts (expected ~2 for the sphere)
MAX_REJECTION_ATTEMPTS = 100


def degrees_to_radians(degrees: float) -> float:
    """Convert an angle from degrees to radians."""
    return degrees * math.pi / 180.0


# =============================================================================
# Algebra
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product a x b."""
    return tm.cross(a, b)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared Euclidean length of a vector."""
    return tm.dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale a vector to unit length.

    The input must not be the zero vector; every caller in the renderer
    either resamples or falls back before normalizing a degenerate vector.
    """
    return v / length(v)


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Return 1 if every component of v is below 1e-8 in magnitude."""
    s = NEAR_ZERO_EPSILON
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


@ti.func
def reflect(v: vec3, n: vec3) -> vec3:
    """Mirror v about the unit normal n: v - 2 (v . n) n."""
    return v - 2.0 * tm.dot(v, n) * n


@ti.func
def refract(uv: vec3, n: vec3, etai_over_etat: ti.f32) -> vec3:
    """Refract the unit direction uv through a surface with unit normal n.

    Snell's law is split into the components perpendicular and parallel to
    the normal. When the perpendicular part alone already exceeds unit length
    the equation has no solution (total internal reflection) and the zero
    vector is returned.

    Args:
        uv: Incoming unit direction, pointing toward the surface.
        n: Unit normal on the incoming side of the surface.
        etai_over_etat: Ratio of refractive indices eta_incident / eta_transmitted.

    Returns:
        The refracted direction, or the zero vector on total internal reflection.
    """
    cos_theta = tm.min(-tm.dot(uv, n), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * n)
    perp_sq = tm.dot(r_out_perp, r_out_perp)
    result = vec3(0.0, 0.0, 0.0)
    if perp_sq <= 1.0:
        r_out_parallel = -ti.sqrt(1.0 - perp_sq) * n
        result = r_out_perp + r_out_parallel
    return result


@ti.func
def schlick_reflectance(cosine: ti.f32, refractive_index: ti.f32) -> ti.f32:
    """Approximate Fresnel reflectance with Schlick's polynomial."""
    r0 = (1.0 - refractive_index) / (1.0 + refractive_index)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)


# =============================================================================
# Random Sampling
# =============================================================================


@ti.func
def random_range(min_val: ti.f32, max_val: ti.f32) -> vec3:
    """Draw a vector whose components are independent and uniform in [min, max)."""
    span = max_val - min_val
    return vec3(
        min_val + span * ti.random(ti.f32),
        min_val + span * ti.random(ti.f32),
        min_val + span * ti.random(ti.f32),
    )


@ti.func
def random_in_unit_sphere() -> vec3:
    """Draw a point uniformly from the interior of the unit sphere.

    Candidates are drawn from the cube [-1, 1]^3 until one falls strictly
    inside the sphere. Points too close to the origin to be normalized in
    single precision are rejected as well.
    """
    p = vec3(0.0, 0.0, 0.0)
    found = False
    ti.loop_config(serialize=True)
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if not found:
            candidate = random_range(-1.0, 1.0)
            len_sq = length_squared(candidate)
            if 1e-12 < len_sq < 1.0:
                p = candidate
                found = True
    return p


@ti.func
def random_unit_vector() -> vec3:
    """Draw a direction uniformly from the surface of the unit sphere."""
    p = random_in_unit_sphere()
    result = vec3(0.0, 0.0, 1.0)
    if length_squared(p) > 0.0:
        result = unit_vector(p)
    return result


@ti.func
def random_on_hemisphere(normal: vec3) -> vec3:
    """Draw a unit direction on the hemisphere around normal."""
    on_sphere = random_unit_vector()
    result = on_sphere
    if tm.dot(on_sphere, normal) < 0.0:
        result = -on_sphere
    return result


@ti.func
def random_in_unit_disk() -> vec3:
    """Draw a point uniformly from the unit disk in the xy-plane (z = 0)."""
    p = vec3(0.0, 0.0, 0.0)
    found = False
    ti.loop_config(serialize=True)
    for _ in range(MAX_REJECTION_ATTEMPTS):
        if not found:
            candidate = vec3(
                ti.random(ti.f32) * 2.0 - 1.0,
                ti.random(ti.f32) * 2.0 - 1.0,
                0.0,
            )
            if candidate.x * candidate.x + candidate.y * candidate.y < 1.0:
                p = candidate
                found = True
    return p
