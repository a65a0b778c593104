"""Materials module for light scattering models.

Components:
    material: Material value types (Python) and the tagged kernel struct
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like refraction with Schlick reflectance
    scatter: Dispatch from a hit record to the matching model

Every scatter function returns ``(did_scatter, attenuation, direction)``;
dielectrics and diffuse surfaces always scatter, metals absorb rays whose
fuzzed reflection points into the surface.
"""

from .dielectric import cannot_refract, refraction_ratio, scatter_dielectric
from .lambertian import scatter_lambertian
from .material import (
    Dielectric,
    Lambertian,
    Material,
    MaterialSpec,
    MaterialType,
    Metal,
)
from .metal import scatter_metal
from .scatter import scatter

__all__ = [
    "Material",
    "MaterialType",
    "MaterialSpec",
    "Lambertian",
    "Metal",
    "Dielectric",
    "scatter",
    "scatter_lambertian",
    "scatter_metal",
    "scatter_dielectric",
    "refraction_ratio",
    "cannot_refract",
]
