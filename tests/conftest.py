"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. The CPU backend and
    a fixed seed keep sampled results reproducible.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def make_world():
    """Factory for small HittableList scenes.

    Each entry is (center, radius, material).
    """

    def _make(*spheres, capacity=16):
        from src.lumen.scene.hittable_list import HittableList

        world = HittableList(capacity=capacity)
        for center, radius, material in spheres:
            world.add_sphere(center, radius, material)
        return world

    return _make
