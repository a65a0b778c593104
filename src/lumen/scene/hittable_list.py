"""Scene aggregate: an owning collection of primitives with nearest-hit queries.

The aggregate stores its spheres in Taichi fields using a Structure-of-Arrays
layout and keeps a parallel Python-side record of what was added. It is
read-only while a render is in progress.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.materials.material import Lambertian
    >>> from src.lumen.scene.hittable_list import HittableList
    >>> world = HittableList()
    >>> world.add_sphere((0.0, 0.0, -1.0), 0.5, Lambertian((0.7, 0.3, 0.3)))
    0
    >>> # Use world.hit(ray, t_min, t_max) within a Taichi kernel
"""

import logging
from dataclasses import dataclass

import taichi as ti

from src.lumen.geometry.hittable import HitRecord, make_miss_record
from src.lumen.geometry.sphere import Sphere, hit_sphere
from src.lumen.materials.material import Material, MaterialSpec

logger = logging.getLogger(__name__)

# Default number of primitives a scene can hold
MAX_OBJECTS = 1024


@dataclass(frozen=True)
class SphereInfo:
    """Python-side description of one sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The material of the sphere.
    """

    center: tuple[float, float, float]
    radius: float
    material: MaterialSpec


@ti.data_oriented
class HittableList:
    """An ordered, exclusively owned collection of spheres.

    Attributes:
        capacity: Maximum number of primitives this aggregate can hold.
        objects: SphereInfo records in insertion order.
    """

    def __init__(self, capacity: int = MAX_OBJECTS) -> None:
        if capacity < 1:
            raise ValueError(f"Capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.objects: list[SphereInfo] = []

        self._centers = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self._radii = ti.field(dtype=ti.f32, shape=capacity)
        self._material_kinds = ti.field(dtype=ti.i32, shape=capacity)
        self._material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self._material_fuzz = ti.field(dtype=ti.f32, shape=capacity)
        self._material_ir = ti.field(dtype=ti.f32, shape=capacity)
        self._count = ti.field(dtype=ti.i32, shape=())
        self._count[None] = 0

    def __len__(self) -> int:
        return int(self._count[None])

    def add(self, sphere: SphereInfo) -> int:
        """Add a sphere to the scene.

        Args:
            sphere: The sphere to store. Its material is copied.

        Returns:
            The index of the added sphere.

        Raises:
            RuntimeError: If the aggregate is full.
            ValueError: If the radius is not positive.
        """
        if not sphere.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {sphere.radius}")

        idx = int(self._count[None])
        if idx >= self.capacity:
            raise RuntimeError(f"Maximum number of objects ({self.capacity}) exceeded")

        kind, albedo, fuzz, ir = sphere.material.packed()
        self._centers[idx] = list(sphere.center)
        self._radii[idx] = sphere.radius
        self._material_kinds[idx] = kind
        self._material_albedos[idx] = list(albedo)
        self._material_fuzz[idx] = fuzz
        self._material_ir[idx] = ir
        self._count[None] = idx + 1
        self.objects.append(sphere)

        logger.debug(
            "Added sphere %d: center=%s radius=%s material=%s",
            idx,
            sphere.center,
            sphere.radius,
            sphere.material,
        )
        return idx

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: MaterialSpec,
    ) -> int:
        """Add a sphere from its parameters. See ``add``."""
        return self.add(
            SphereInfo(
                center=(float(center[0]), float(center[1]), float(center[2])),
                radius=float(radius),
                material=material,
            )
        )

    def clear(self) -> None:
        """Remove every primitive from the scene."""
        self._count[None] = 0
        self.objects.clear()

    @ti.func
    def get_sphere(self, i: ti.i32) -> Sphere:
        """Rebuild the i-th stored sphere as a kernel struct."""
        return Sphere(
            center=self._centers[i],
            radius=self._radii[i],
            material=Material(
                kind=self._material_kinds[i],
                albedo=self._material_albedos[i],
                fuzz=self._material_fuzz[i],
                ir=self._material_ir[i],
            ),
        )

    @ti.func
    def hit(self, ray, t_min: ti.f32, t_max: ti.f32) -> HitRecord:
        """Find the nearest intersection of ray with any stored primitive.

        The upper bound of the search interval shrinks to the nearest hit
        found so far, so later primitives are tested against a tighter
        interval.

        Args:
            ray: The Ray to test.
            t_min: Exclusive lower bound on the accepted ray parameter.
            t_max: Exclusive upper bound on the accepted ray parameter.

        Returns:
            The nearest HitRecord, or a miss record if nothing was hit.
        """
        closest_so_far = t_max
        result = make_miss_record()

        # Primitives are tested in order; each test depends on the previous one
        ti.loop_config(serialize=True)
        for i in range(self._count[None]):
            rec = hit_sphere(self.get_sphere(i), ray, t_min, closest_so_far)
            if rec.hit == 1:
                closest_so_far = rec.t
                result = rec

        return result

    def __repr__(self) -> str:
        return f"HittableList(objects={len(self)}, capacity={self.capacity})"
