"""Scene module: the primitive aggregate and ready-made scenes.

Components:
    hittable_list: Owning collection of primitives with nearest-hit queries
    presets: Example scenes paired with matching camera configurations
"""

from .hittable_list import MAX_OBJECTS, HittableList, SphereInfo
from .presets import (
    SCENES,
    create_glass_scene,
    create_material_showcase_scene,
    create_single_sphere_scene,
)

__all__ = [
    "HittableList",
    "SphereInfo",
    "MAX_OBJECTS",
    "SCENES",
    "create_material_showcase_scene",
    "create_glass_scene",
    "create_single_sphere_scene",
]
