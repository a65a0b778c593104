"""Ready-made scenes paired with matching camera configurations.

Each factory returns ``(world, config)``: a freshly built HittableList and a
CameraConfig framing it. Taichi must be initialized first.

Scenes:
    material_showcase: Diffuse, polished metal and brushed metal spheres on
        a large diffuse ground sphere
    glass: Diffuse center sphere flanked by a glass ball with an air bubble
        and a gold metal sphere, shot with depth of field
    single_sphere: One diffuse sphere against the sky, used for checks

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.scene.presets import create_material_showcase_scene
    >>> world, config = create_material_showcase_scene()
    >>> len(world)
    4
"""

from collections.abc import Callable

from src.lumen.camera.camera import CameraConfig
from src.lumen.materials.material import Dielectric, Lambertian, Metal
from src.lumen.scene.hittable_list import HittableList

# =============================================================================
# Scene Parameters
# =============================================================================

GROUND_CENTER = (0.0, -100.5, -1.0)
GROUND_RADIUS = 100.0
GROUND_ALBEDO = (0.8, 0.8, 0.0)

CENTER_SPHERE_ALBEDO = (0.7, 0.3, 0.3)
SILVER_ALBEDO = (0.8, 0.8, 0.8)
SILVER_FUZZ = 0.3
GOLD_ALBEDO = (0.8, 0.6, 0.2)
GOLD_FUZZ = 1.0

GLASS_IOR = 1.5

SPHERE_RADIUS = 0.5
BUBBLE_RADIUS = 0.4


def create_material_showcase_scene() -> tuple[HittableList, CameraConfig]:
    """Create four spheres showing the diffuse and metal materials.

    Layout (all small spheres have radius 0.5 and sit at z = -1):
        center: red-ish diffuse
        left: silver metal, fuzz 0.3
        right: gold metal, fuzz 1.0
        ground: yellow diffuse sphere of radius 100

    Returns:
        Tuple of (world, camera config at 100 spp and max depth 50).
    """
    world = HittableList()
    world.add_sphere((0.0, 0.0, -1.0), SPHERE_RADIUS, Lambertian(CENTER_SPHERE_ALBEDO))
    world.add_sphere(GROUND_CENTER, GROUND_RADIUS, Lambertian(GROUND_ALBEDO))
    world.add_sphere((-1.0, 0.0, -1.0), SPHERE_RADIUS, Metal(SILVER_ALBEDO, fuzz=SILVER_FUZZ))
    world.add_sphere((1.0, 0.0, -1.0), SPHERE_RADIUS, Metal(GOLD_ALBEDO, fuzz=GOLD_FUZZ))

    config = CameraConfig(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=100,
        max_depth=50,
        vfov=90.0,
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        focus_dist=1.0,
    )
    return world, config


def create_glass_scene() -> tuple[HittableList, CameraConfig]:
    """Create a scene with a hollow glass ball, viewed with depth of field.

    The left sphere is glass; inside it sits a smaller sphere whose index
    of refraction is 1 / 1.5, modelling the air bubble that makes the ball
    hollow.

    Returns:
        Tuple of (world, camera config with a 10 degree defocus angle
        focused on the center sphere).
    """
    world = HittableList()
    world.add_sphere(GROUND_CENTER, GROUND_RADIUS, Lambertian(GROUND_ALBEDO))
    world.add_sphere((0.0, 0.0, -1.2), SPHERE_RADIUS, Lambertian((0.1, 0.2, 0.5)))
    world.add_sphere((-1.0, 0.0, -1.0), SPHERE_RADIUS, Dielectric(GLASS_IOR))
    world.add_sphere((-1.0, 0.0, -1.0), BUBBLE_RADIUS, Dielectric(1.0 / GLASS_IOR))
    world.add_sphere((1.0, 0.0, -1.0), SPHERE_RADIUS, Metal(GOLD_ALBEDO, fuzz=0.0))

    config = CameraConfig(
        aspect_ratio=16.0 / 9.0,
        image_width=400,
        samples_per_pixel=100,
        max_depth=50,
        vfov=20.0,
        lookfrom=(-2.0, 2.0, 1.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=10.0,
        focus_dist=3.4,
    )
    return world, config


def create_single_sphere_scene() -> tuple[HittableList, CameraConfig]:
    """Create one diffuse sphere of radius 0.5 at (0, 0, -1) and nothing else.

    The camera looks down -z without depth of field, 1 sample per pixel,
    max depth 1: every ray that hits the sphere is cut off after the first
    bounce and comes back black, every other ray sees the sky.

    Returns:
        Tuple of (world, camera config).
    """
    world = HittableList()
    world.add_sphere((0.0, 0.0, -1.0), SPHERE_RADIUS, Lambertian((0.5, 0.5, 0.5)))

    config = CameraConfig(
        aspect_ratio=1.0,
        image_width=32,
        samples_per_pixel=1,
        max_depth=1,
        vfov=90.0,
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        defocus_angle=0.0,
        focus_dist=1.0,
    )
    return world, config


# Scene factories by name
SCENES: dict[str, Callable[[], tuple[HittableList, CameraConfig]]] = {
    "material_showcase": create_material_showcase_scene,
    "glass": create_glass_scene,
    "single_sphere": create_single_sphere_scene,
}
