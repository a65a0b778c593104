"""Material dispatch for scattering at a surface hit.

``scatter`` reads the material tag copied into the hit record and forwards to
the matching model. Absorption is an ordinary outcome reported through
``did_scatter``, never an error.
"""

import taichi as ti

from src.lumen.core.ray import make_ray
from src.lumen.core.vec3 import vec3
from src.lumen.materials.dielectric import scatter_dielectric
from src.lumen.materials.lambertian import scatter_lambertian
from src.lumen.materials.material import MaterialType
from src.lumen.materials.metal import scatter_metal

# Plain integer tags for comparison inside kernels
LAMBERTIAN = int(MaterialType.LAMBERTIAN)
METAL = int(MaterialType.METAL)
DIELECTRIC = int(MaterialType.DIELECTRIC)


@ti.func
def scatter(r_in, rec):
    """Scatter an incoming ray at a surface hit.

    Args:
        r_in: The incoming Ray.
        rec: The HitRecord of the intersection (hit == 1).

    Returns:
        A tuple of (did_scatter, attenuation, scattered) where scattered is
        the outgoing Ray starting at the hit point. When did_scatter is 0 the
        ray was absorbed and the other values carry no meaning.
    """
    material = rec.material

    did_scatter = 0
    attenuation = vec3(0.0, 0.0, 0.0)
    direction = rec.normal

    if material.kind == LAMBERTIAN:
        did_scatter, attenuation, direction = scatter_lambertian(material.albedo, rec.normal)

    elif material.kind == METAL:
        did_scatter, attenuation, direction = scatter_metal(
            material.albedo, material.fuzz, r_in.direction, rec.normal
        )

    elif material.kind == DIELECTRIC:
        did_scatter, attenuation, direction = scatter_dielectric(
            material.ir, r_in.direction, rec.normal, rec.front_face
        )

    return did_scatter, attenuation, make_ray(rec.p, direction)
