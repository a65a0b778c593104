"""Geometry module for shape primitives.

Components:
    hittable: HitRecord and the front-face orientation helper
    sphere: Sphere primitive with ray-sphere intersection

Intersection routines are Taichi functions following the pattern:
    record = hit_<shape>(shape, ray, t_min, t_max)
"""

from .hittable import HitRecord, face_normal, make_miss_record
from .sphere import Sphere, hit_sphere, make_sphere

__all__ = [
    "HitRecord",
    "face_normal",
    "make_miss_record",
    "Sphere",
    "hit_sphere",
    "make_sphere",
]
