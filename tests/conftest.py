"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator, common materials, and the two-sphere reference world.
"""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """A freshly seeded generator so every test sees the same stream."""
    return np.random.default_rng(42)


@pytest.fixture
def gray_lambertian():
    """A mid-gray diffuse material."""
    from photonr.materials import LambertianMaterial

    return LambertianMaterial(albedo=(0.5, 0.5, 0.5))


@pytest.fixture
def mirror_metal():
    """A perfect mirror."""
    from photonr.materials import MetalMaterial

    return MetalMaterial(albedo=(0.8, 0.8, 0.8), fuzz=0.0)


@pytest.fixture
def two_sphere_world(gray_lambertian, mirror_metal):
    """Ground sphere plus a small mirror sphere in front of the camera."""
    from photonr.core.ray import vec3
    from photonr.geometry.sphere import Sphere
    from photonr.scene.world import Entity, World

    world = World()
    world.add(Entity(Sphere(vec3(0.0, -100.5, -1.0), 100.0), gray_lambertian))
    world.add(Entity(Sphere(vec3(0.0, 0.0, -1.0), 0.5), mirror_metal))
    return world
