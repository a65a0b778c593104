"""Sphere primitive with ray-sphere intersection.

The intersection solves |O + tD - C|^2 = r^2 for t. Expanding gives

    a t^2 + 2 h t + c = 0

with a = D . D, h = D . (O - C) (half of the usual b) and
c = |O - C|^2 - r^2, so the discriminant reduces to h^2 - a c. The nearer
root is tried first and the farther root only when the nearer one falls
outside the open interval (t_min, t_max).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.geometry.sphere import Sphere, hit_sphere
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.lumen.core.ray import Ray, ray_at
from src.lumen.core.vec3 import vec3
from src.lumen.geometry.hittable import HitRecord, face_normal, make_miss_record
from src.lumen.materials.material import Material


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius, carrying its material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The material copied into every hit on this sphere.
    """

    center: vec3
    radius: ti.f32
    material: Material


@ti.func
def hit_sphere(sphere: Sphere, ray: Ray, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
    """Test a ray against a sphere.

    A ray with a zero-length direction never hits anything.

    Args:
        sphere: The sphere to test.
        ray: The ray to test.
        t_min: Exclusive lower bound on the accepted ray parameter.
        t_max: Exclusive upper bound on the accepted ray parameter.

    Returns:
        A HitRecord for the nearest root inside (t_min, t_max). Check the
        hit field to determine if an intersection occurred.
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    half_b = tm.dot(oc, ray.direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    record = make_miss_record()

    if a > 0.0 and discriminant >= 0.0:
        sqrtd = ti.sqrt(discriminant)

        # Find the nearest root that lies in the acceptable range.
        root = (-half_b - sqrtd) / a
        valid = root > t_min and root < t_max
        if not valid:
            root = (-half_b + sqrtd) / a
            valid = root > t_min and root < t_max

        if valid:
            p = ray_at(ray, root)
            outward_normal = (p - sphere.center) / sphere.radius
            front_face, normal = face_normal(ray.direction, outward_normal)
            record = HitRecord(
                hit=1,
                t=root,
                p=p,
                normal=normal,
                front_face=front_face,
                material=sphere.material,
            )

    return record


@ti.func
def make_sphere(center: vec3, radius: ti.f32, material: Material) -> Sphere:
    """Create a sphere inside a Taichi kernel."""
    return Sphere(center=center, radius=radius, material=material)
