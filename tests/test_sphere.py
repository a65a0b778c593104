"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Interval bounds on the accepted root
- Degenerate (zero-length) ray direction
"""

import pytest
import taichi as ti


def _run_hit(origin, direction, center=(0.0, 0.0, 0.0), radius=1.0, t_min=0.001, t_max=1000.0):
    """Intersect one ray with one sphere and return the record as a dict."""
    from src.lumen.core.ray import make_ray
    from src.lumen.core.vec3 import vec3
    from src.lumen.geometry.sphere import hit_sphere, make_sphere
    from src.lumen.materials.material import Material

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())
    point = ti.Vector.field(3, dtype=ti.f32, shape=())
    normal = ti.Vector.field(3, dtype=ti.f32, shape=())
    front_face = ti.field(dtype=ti.i32, shape=())
    kind = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, c: vec3, r: ti.f32, lo: ti.f32, hi: ti.f32):
        material = Material(kind=2, albedo=vec3(1.0, 1.0, 1.0), fuzz=0.0, ir=1.5)
        sphere = make_sphere(c, r, material)
        record = hit_sphere(sphere, make_ray(o, d), lo, hi)
        hit[None] = record.hit
        t_val[None] = record.t
        point[None] = record.p
        normal[None] = record.normal
        front_face[None] = record.front_face
        kind[None] = record.material.kind

    test_kernel(vec3(*origin), vec3(*direction), vec3(*center), radius, t_min, t_max)
    return {
        "hit": hit[None],
        "t": t_val[None],
        "p": point.to_numpy().tolist(),
        "normal": normal.to_numpy().tolist(),
        "front_face": front_face[None],
        "kind": kind[None],
    }


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_from_outside(self):
        """Test ray hitting sphere head-on from outside."""
        record = _run_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert record["hit"] == 1
        # Should hit at z=1 (front of sphere), so t=4
        assert abs(record["t"] - 4.0) < 1e-5
        assert record["p"] == pytest.approx([0.0, 0.0, 1.0], abs=1e-5)
        # Normal points outward, toward the ray origin
        assert record["normal"] == pytest.approx([0.0, 0.0, 1.0], abs=1e-5)
        assert record["front_face"] == 1

    def test_hit_copies_material(self):
        """Test that the record carries the sphere's material."""
        record = _run_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0))
        assert record["kind"] == 2

    def test_unnormalized_direction(self):
        """Test that t scales with the direction length."""
        record = _run_hit((0.0, 0.0, 5.0), (0.0, 0.0, -2.0))
        assert record["hit"] == 1
        assert abs(record["t"] - 2.0) < 1e-5
        assert record["p"] == pytest.approx([0.0, 0.0, 1.0], abs=1e-5)

    def test_miss(self):
        """Test ray passing beside the sphere."""
        record = _run_hit((0.0, 2.0, 5.0), (0.0, 0.0, -1.0))
        assert record["hit"] == 0

    def test_sphere_behind_ray(self):
        """Test that a sphere behind the origin is not hit."""
        record = _run_hit((0.0, 0.0, 5.0), (0.0, 0.0, 1.0))
        assert record["hit"] == 0

    def test_hit_from_inside(self):
        """Test ray starting at the center reports the back face."""
        record = _run_hit((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert record["hit"] == 1
        assert abs(record["t"] - 1.0) < 1e-5
        assert record["front_face"] == 0
        # Normal is flipped to face against the ray
        assert record["normal"] == pytest.approx([0.0, 0.0, 1.0], abs=1e-5)

    def test_far_root_used_when_near_root_out_of_range(self):
        """Test that the far root is used when the near root is below t_min."""
        record = _run_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0), t_min=4.5)
        assert record["hit"] == 1
        assert abs(record["t"] - 6.0) < 1e-5
        assert record["front_face"] == 0

    def test_interval_is_open(self):
        """Test that a root equal to t_max is rejected."""
        record = _run_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0), t_max=4.0, t_min=0.001)
        assert record["hit"] == 0

    def test_both_roots_outside_interval(self):
        """Test that no hit is reported when both roots lie past t_max."""
        record = _run_hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0), t_max=3.0)
        assert record["hit"] == 0

    def test_zero_direction_never_hits(self):
        """Test that a zero-length direction yields no hit."""
        record = _run_hit((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
        assert record["hit"] == 0

    def test_normal_is_unit_length(self):
        """Test that the normal of an off-center hit is unit length."""
        record = _run_hit((0.3, 0.4, 10.0), (0.0, 0.0, -1.0), center=(0.0, 0.0, 0.0), radius=2.0)
        assert record["hit"] == 1
        n = record["normal"]
        assert abs(sum(c * c for c in n) - 1.0) < 1e-4


class TestFaceNormal:
    """Tests for face_normal orientation."""

    def test_face_normal_orientation(self):
        """Test front_face and flipped normals."""
        from src.lumen.core.vec3 import vec3
        from src.lumen.geometry.hittable import face_normal

        front = ti.field(dtype=ti.i32, shape=2)
        normals = ti.Vector.field(3, dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            outward = vec3(0.0, 1.0, 0.0)
            ff0, n0 = face_normal(vec3(0.0, -1.0, 0.0), outward)
            ff1, n1 = face_normal(vec3(0.0, 1.0, 0.0), outward)
            front[0] = ff0
            front[1] = ff1
            normals[0] = n0
            normals[1] = n1

        test_kernel()
        assert front[0] == 1
        assert front[1] == 0
        values = normals.to_numpy()
        assert values[0].tolist() == pytest.approx([0.0, 1.0, 0.0])
        assert values[1].tolist() == pytest.approx([0.0, -1.0, 0.0])
