"""Lumen: an offline ray-traced image synthesizer built on Taichi.

Given a scene of spheres with materials and a virtual camera, Lumen produces
an image by following camera rays through recursive bounces and averaging
many random samples per pixel.

Subpackages:
    core: Vector math, rays and the radiance estimator
    geometry: Shape primitives and intersection
    materials: Lambertian, metal and dielectric scattering
    scene: Primitive aggregate and example scenes
    camera: Camera configuration, ray generation and the render loop
    output: Gamma/quantization and PPM/PNG output

Example:
    >>> from src.lumen.runtime import init_taichi
    >>> init_taichi(arch="cpu", seed=7)
    >>> from src.lumen.camera import Camera
    >>> from src.lumen.scene import create_material_showcase_scene
    >>> world, config = create_material_showcase_scene()
    >>> image = Camera(config).render(world)
"""

__version__ = "0.1.0"
