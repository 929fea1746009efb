"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector utilities and random sampling
    integrator: Light transport (fixed-depth Monte Carlo path tracing)

The core module handles the rendering equation integration. Camera ray
generation and the parallel render loop live in the camera package.
"""

from .ray import (
    NEAR_ZERO_EPSILON,
    Ray,
    Vec3,
    dot,
    length,
    length_squared,
    near_zero,
    normalize,
    random_in_unit_sphere,
    random_unit_vector,
    reflect,
    vec3,
)

# Note: integrator is NOT imported here to avoid circular imports.
# Import directly from photonr.core.integrator when needed.

__all__ = [
    "Ray",
    "Vec3",
    "vec3",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "near_zero",
    "random_in_unit_sphere",
    "random_unit_vector",
    "NEAR_ZERO_EPSILON",
]
