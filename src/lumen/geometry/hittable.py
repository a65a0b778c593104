"""Intersection record shared by every primitive.

Any primitive joins the renderer by providing a Taichi function with the
contract

    hit_<shape>(shape, ray, t_min, t_max) -> HitRecord

that reports the nearest intersection strictly inside (t_min, t_max), or a
record with ``hit == 0``. The scene aggregate narrows ``t_max`` as it goes,
so each primitive only ever sees the interval still worth searching.
"""

import taichi as ti
import taichi.math as tm

from src.lumen.core.vec3 import vec3
from src.lumen.materials.material import Material


@ti.dataclass
class HitRecord:
    """Result of a ray-primitive intersection query.

    Attributes:
        hit: 1 if the ray struck the primitive inside the interval, else 0.
            All other fields are only meaningful when hit == 1.
        t: Ray parameter of the intersection.
        p: The intersection point.
        normal: Unit surface normal, always facing against the incoming ray.
        front_face: 1 if the ray arrived from outside the surface, else 0.
        material: Copy of the struck primitive's material.
    """

    hit: ti.i32
    t: ti.f32
    p: vec3
    normal: vec3
    front_face: ti.i32
    material: Material


@ti.func
def face_normal(ray_direction: vec3, outward_normal: vec3):
    """Orient a unit outward normal against the incoming ray.

    Args:
        ray_direction: Direction of the incoming ray.
        outward_normal: Unit normal pointing out of the primitive.

    Returns:
        A tuple of (front_face, normal) where normal points against the ray.
    """
    front_face = 0
    normal = -outward_normal
    if tm.dot(ray_direction, outward_normal) < 0.0:
        front_face = 1
        normal = outward_normal
    return front_face, normal


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        p=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
        material=Material(kind=0, albedo=vec3(0.0, 0.0, 0.0), fuzz=0.0, ir=1.0),
    )
