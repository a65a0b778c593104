"""Tests for the preset scenes."""

import pytest


class TestPresets:
    """Tests for the scene factories."""

    def test_material_showcase_layout(self):
        from src.lumen.materials.material import Lambertian, Metal
        from src.lumen.scene.presets import create_material_showcase_scene

        world, config = create_material_showcase_scene()
        assert len(world) == 4
        by_center = {info.center: info for info in world.objects}

        ground = by_center[(0.0, -100.5, -1.0)]
        assert ground.radius == 100.0
        assert ground.material == Lambertian((0.8, 0.8, 0.0))
        assert by_center[(0.0, 0.0, -1.0)].material == Lambertian((0.7, 0.3, 0.3))
        assert by_center[(-1.0, 0.0, -1.0)].material == Metal((0.8, 0.8, 0.8), fuzz=0.3)
        assert by_center[(1.0, 0.0, -1.0)].material == Metal((0.8, 0.6, 0.2), fuzz=1.0)

        assert config.samples_per_pixel == 100
        assert config.max_depth == 50

    def test_glass_scene_has_hollow_sphere(self):
        from src.lumen.materials.material import Dielectric
        from src.lumen.scene.presets import create_glass_scene

        world, config = create_glass_scene()
        glass = [info for info in world.objects if isinstance(info.material, Dielectric)]
        assert len(glass) == 2
        outer, inner = sorted(glass, key=lambda info: -info.radius)
        assert outer.center == inner.center
        assert outer.material.refractive_index == pytest.approx(1.5)
        assert inner.material.refractive_index == pytest.approx(1.0 / 1.5)
        assert config.defocus_angle > 0.0

    def test_single_sphere_scene(self):
        from src.lumen.scene.presets import create_single_sphere_scene

        world, config = create_single_sphere_scene()
        assert len(world) == 1
        assert world.objects[0].center == (0.0, 0.0, -1.0)
        assert world.objects[0].radius == 0.5
        assert config.defocus_angle == 0.0

    def test_registry(self):
        from src.lumen.scene.presets import (
            SCENES,
            create_glass_scene,
            create_material_showcase_scene,
            create_single_sphere_scene,
        )

        assert SCENES == {
            "material_showcase": create_material_showcase_scene,
            "glass": create_glass_scene,
            "single_sphere": create_single_sphere_scene,
        }

    def test_cli_choices_match_registry(self):
        from examples.render_spheres import SCENE_NAMES
        from src.lumen.scene.presets import SCENES

        assert set(SCENE_NAMES) == set(SCENES)
