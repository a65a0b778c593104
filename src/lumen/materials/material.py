"""Material value types and their GPU representation.

A material is one of three closed variants:

    Lambertian(albedo)            ideal diffuse reflector
    Metal(albedo, fuzz)           specular reflector with optional blur
    Dielectric(refractive_index)  clear glass-like refractor

On the Python side each variant is an immutable dataclass validated at
construction. Inside kernels every variant is packed into the single
``Material`` struct, tagged by ``kind`` (a ``MaterialType`` value); fields
that a variant does not use hold neutral values.

Materials are copied into every primitive that references them, so the same
Python value can be shared between primitives freely.

Example:
    >>> from src.lumen.materials.material import Dielectric, Lambertian, Metal
    >>> ground = Lambertian(albedo=(0.8, 0.8, 0.0))
    >>> mirror = Metal(albedo=(0.8, 0.8, 0.8), fuzz=0.0)
    >>> glass = Dielectric(refractive_index=1.5)
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

import taichi as ti

from src.lumen.core.vec3 import vec3


class MaterialType(IntEnum):
    """Tag stored in ``Material.kind`` for dispatch in the integrator."""

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


@ti.dataclass
class Material:
    """Tagged material record used inside Taichi kernels.

    Attributes:
        kind: The MaterialType of this record.
        albedo: Reflectance color for Lambertian and Metal (unused by Dielectric).
        fuzz: Reflection blur radius for Metal, in [0, 1].
        ir: Index of refraction for Dielectric.
    """

    kind: ti.i32
    albedo: vec3
    fuzz: ti.f32
    ir: ti.f32


def _validate_albedo(albedo: tuple[float, float, float]) -> tuple[float, float, float]:
    if len(albedo) != 3:
        raise ValueError(f"Albedo must have 3 components, got {len(albedo)}")
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return (float(albedo[0]), float(albedo[1]), float(albedo[2]))


@dataclass(frozen=True)
class Lambertian:
    """Ideal diffuse material.

    Attributes:
        albedo: Fraction of light reflected per RGB channel, each in [0, 1].
    """

    albedo: tuple[float, float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", _validate_albedo(self.albedo))

    @property
    def material_type(self) -> MaterialType:
        return MaterialType.LAMBERTIAN

    def packed(self) -> tuple[int, tuple[float, float, float], float, float]:
        """Return the (kind, albedo, fuzz, ir) layout of the kernel struct."""
        return int(self.material_type), self.albedo, 0.0, 1.0


@dataclass(frozen=True)
class Metal:
    """Specular reflector.

    Attributes:
        albedo: Reflected color tint per RGB channel, each in [0, 1].
        fuzz: Radius of the random perturbation added to the mirror
            direction. Values outside [0, 1] are clamped.
    """

    albedo: tuple[float, float, float]
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", _validate_albedo(self.albedo))
        object.__setattr__(self, "fuzz", min(max(float(self.fuzz), 0.0), 1.0))

    @property
    def material_type(self) -> MaterialType:
        return MaterialType.METAL

    def packed(self) -> tuple[int, tuple[float, float, float], float, float]:
        """Return the (kind, albedo, fuzz, ir) layout of the kernel struct."""
        return int(self.material_type), self.albedo, self.fuzz, 1.0


@dataclass(frozen=True)
class Dielectric:
    """Clear refractive material such as glass or water.

    Attributes:
        refractive_index: Index of refraction relative to the enclosing
            medium. Common values: water 1.33, glass 1.5, diamond 2.4.
            Values below 1 model an air bubble inside a denser medium.
    """

    refractive_index: float = 1.5

    def __post_init__(self) -> None:
        if self.refractive_index <= 0.0:
            raise ValueError(
                f"Refractive index must be positive, got {self.refractive_index}"
            )
        object.__setattr__(self, "refractive_index", float(self.refractive_index))

    @property
    def material_type(self) -> MaterialType:
        return MaterialType.DIELECTRIC

    def packed(self) -> tuple[int, tuple[float, float, float], float, float]:
        """Return the (kind, albedo, fuzz, ir) layout of the kernel struct."""
        return int(self.material_type), (1.0, 1.0, 1.0), 0.0, self.refractive_index


# Closed set of Python-side material values
MaterialSpec = Union[Lambertian, Metal, Dielectric]
