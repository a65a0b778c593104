"""Tests for the HittableList scene aggregate.

Tests cover:
- Adding spheres and bookkeeping
- Validation and capacity limits
- Nearest-hit queries over several primitives
"""

import pytest
import taichi as ti


def _query(world, origin, direction, t_min=0.001, t_max=1e30):
    """Run world.hit for one ray and return (hit, t, kind, front_face)."""
    from src.lumen.core.ray import make_ray
    from src.lumen.core.vec3 import vec3

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    kind = ti.field(dtype=ti.i32, shape=())
    front_face = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(w: ti.template(), o: vec3, d: vec3, lo: ti.f32, hi: ti.f32):
        record = w.hit(make_ray(o, d), lo, hi)
        hit[None] = record.hit
        t_val[None] = record.t
        kind[None] = record.material.kind
        front_face[None] = record.front_face

    test_kernel(world, vec3(*origin), vec3(*direction), t_min, t_max)
    return hit[None], t_val[None], kind[None], front_face[None]


class TestHittableListBookkeeping:
    """Tests for adding and clearing primitives."""

    def test_add_returns_index(self, make_world):
        """Test that add_sphere returns consecutive indices."""
        from src.lumen.materials.material import Lambertian

        world = make_world()
        assert len(world) == 0
        assert world.add_sphere((0, 0, -1), 0.5, Lambertian((0.5, 0.5, 0.5))) == 0
        assert world.add_sphere((0, 1, -1), 0.5, Lambertian((0.5, 0.5, 0.5))) == 1
        assert len(world) == 2
        assert world.objects[1].center == (0.0, 1.0, -1.0)

    def test_add_sphere_info(self, make_world):
        """Test adding a prebuilt SphereInfo."""
        from src.lumen.materials.material import Metal
        from src.lumen.scene.hittable_list import SphereInfo

        world = make_world()
        info = SphereInfo(center=(1.0, 2.0, 3.0), radius=0.25, material=Metal((0.8, 0.8, 0.8)))
        world.add(info)
        assert world.objects == [info]

    def test_clear(self, make_world):
        """Test that clear empties the aggregate."""
        from src.lumen.materials.material import Lambertian

        world = make_world(((0, 0, -1), 0.5, Lambertian((0.5, 0.5, 0.5))))
        world.clear()
        assert len(world) == 0
        assert world.objects == []

    def test_nonpositive_radius_rejected(self, make_world):
        """Test that zero and negative radii raise ValueError."""
        from src.lumen.materials.material import Lambertian

        world = make_world()
        with pytest.raises(ValueError, match="radius"):
            world.add_sphere((0, 0, 0), 0.0, Lambertian((0.5, 0.5, 0.5)))
        with pytest.raises(ValueError, match="radius"):
            world.add_sphere((0, 0, 0), -1.0, Lambertian((0.5, 0.5, 0.5)))
        with pytest.raises(ValueError, match="radius"):
            world.add_sphere((0, 0, 0), float("nan"), Lambertian((0.5, 0.5, 0.5)))
        assert len(world) == 0

    def test_capacity_exceeded(self, make_world):
        """Test that adding past capacity raises RuntimeError."""
        from src.lumen.materials.material import Lambertian

        world = make_world(capacity=2)
        world.add_sphere((0, 0, -1), 0.5, Lambertian((0.5, 0.5, 0.5)))
        world.add_sphere((0, 0, -3), 0.5, Lambertian((0.5, 0.5, 0.5)))
        with pytest.raises(RuntimeError, match="exceeded"):
            world.add_sphere((0, 0, -5), 0.5, Lambertian((0.5, 0.5, 0.5)))
        assert len(world) == 2

    def test_invalid_capacity(self):
        """Test that a capacity below 1 raises ValueError."""
        from src.lumen.scene.hittable_list import HittableList

        with pytest.raises(ValueError):
            HittableList(capacity=0)


class TestHittableListHit:
    """Tests for nearest-hit queries."""

    def test_empty_world_misses(self, make_world):
        """Test that an empty aggregate never reports a hit."""
        hit, _, _, _ = _query(make_world(), (0, 0, 0), (0, 0, -1))
        assert hit == 0

    def test_nearest_of_two_spheres(self, make_world):
        """Test that the nearer sphere wins regardless of insertion order."""
        from src.lumen.materials.material import Lambertian, Metal

        world = make_world(
            ((0.0, 0.0, -5.0), 1.0, Lambertian((0.5, 0.5, 0.5))),
            ((0.0, 0.0, -2.0), 0.5, Metal((0.8, 0.8, 0.8))),
        )
        hit, t, kind, front_face = _query(world, (0, 0, 0), (0, 0, -1))
        assert hit == 1
        assert abs(t - 1.5) < 1e-5
        assert kind == 1  # Metal
        assert front_face == 1

    def test_ray_missing_all(self, make_world):
        """Test a ray pointing away from every sphere."""
        from src.lumen.materials.material import Lambertian

        world = make_world(
            ((0.0, 0.0, -5.0), 1.0, Lambertian((0.5, 0.5, 0.5))),
            ((0.0, 0.0, -2.0), 0.5, Lambertian((0.5, 0.5, 0.5))),
        )
        hit, _, _, _ = _query(world, (0, 0, 0), (0, 0, 1))
        assert hit == 0

    def test_t_max_bounds_search(self, make_world):
        """Test that hits past t_max are ignored."""
        from src.lumen.materials.material import Lambertian

        world = make_world(((0.0, 0.0, -5.0), 1.0, Lambertian((0.5, 0.5, 0.5))))
        hit, _, _, _ = _query(world, (0, 0, 0), (0, 0, -1), t_max=3.0)
        assert hit == 0

    def test_nested_spheres(self, make_world):
        """Test that the inner sphere of a nested pair is hit from inside the outer."""
        from src.lumen.materials.material import Dielectric

        world = make_world(
            ((0.0, 0.0, -1.0), 0.5, Dielectric(1.5)),
            ((0.0, 0.0, -1.0), 0.4, Dielectric(1.0 / 1.5)),
        )
        # Start just inside the outer glass shell
        hit, t, kind, front_face = _query(world, (0, 0, -0.55), (0, 0, -1))
        assert hit == 1
        assert abs(t - 0.05) < 1e-4
        assert kind == 2
        assert front_face == 1

    def test_repr(self, make_world):
        """Test the string representation."""
        assert repr(make_world(capacity=4)) == "HittableList(objects=0, capacity=4)"
