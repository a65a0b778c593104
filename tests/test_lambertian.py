"""Unit tests for Lambertian scattering.

Tests cover:
- Diffuse surfaces always scatter
- Attenuation equals albedo
- Scattered directions stay on the normal's side
- Cosine-weighted distribution
"""

import taichi as ti


class TestLambertianScatter:
    """Tests for scatter_lambertian."""

    N = 4000

    def test_always_scatters_with_albedo(self):
        """Test that every sample scatters and carries the albedo."""
        from src.lumen.core.vec3 import vec3
        from src.lumen.materials.lambertian import scatter_lambertian

        scattered = ti.field(dtype=ti.i32, shape=self.N)
        attenuation = ti.Vector.field(3, dtype=ti.f32, shape=self.N)

        @ti.kernel
        def test_kernel():
            for k in scattered:
                did_scatter, att, _ = scatter_lambertian(
                    vec3(0.7, 0.3, 0.3), vec3(0.0, 1.0, 0.0)
                )
                scattered[k] = did_scatter
                attenuation[k] = att

        test_kernel()
        assert (scattered.to_numpy() == 1).all()
        assert abs(attenuation.to_numpy() - [0.7, 0.3, 0.3]).max() < 1e-6

    def test_directions_leave_surface(self):
        """Test that scattered directions are never degenerate or below the surface."""
        from src.lumen.core.vec3 import vec3
        from src.lumen.materials.lambertian import scatter_lambertian

        directions = ti.Vector.field(3, dtype=ti.f32, shape=self.N)

        @ti.kernel
        def test_kernel():
            for k in directions:
                _, _, direction = scatter_lambertian(vec3(0.5, 0.5, 0.5), vec3(0.0, 1.0, 0.0))
                directions[k] = direction

        test_kernel()
        values = directions.to_numpy()
        assert (values[:, 1] >= 0.0).all()
        assert ((values**2).sum(axis=1) > 0.0).all()

    def test_cosine_distribution(self):
        """Test that the mean cosine to the normal matches 2/3.

        For a cosine-weighted hemisphere E[cos(theta)] = 2/3.
        """
        from src.lumen.core.vec3 import unit_vector, vec3
        from src.lumen.materials.lambertian import scatter_lambertian

        cosines = ti.field(dtype=ti.f32, shape=self.N)

        @ti.kernel
        def test_kernel():
            n = vec3(0.0, 0.0, 1.0)
            for k in cosines:
                _, _, direction = scatter_lambertian(vec3(0.5, 0.5, 0.5), n)
                cosines[k] = unit_vector(direction).dot(n)

        test_kernel()
        assert abs(cosines.to_numpy().mean() - 2.0 / 3.0) < 0.03
