"""Path tracing integrator for Monte Carlo light transport.

This module implements the radiance estimate for a single camera ray using
fixed-depth path tracing with material-based scattering.

The path tracer solves the rendering equation by following a ray through the
scene, bouncing off surfaces according to their material properties, and
multiplying the attenuation of every bounce into a running throughput. A path
ends in one of three ways:

    - it escapes the scene and picks up the sky gradient (the only light
      source),
    - a material absorbs it (contributes black),
    - it runs out of bounces (contributes black).

Truncating at a fixed depth darkens the estimate slightly when max_depth is
small; there is no Russian roulette.

Example:
    >>> import numpy as np
    >>> from photonr.core.integrator import ray_color
    >>> from photonr.core.ray import Ray, vec3
    >>> rng = np.random.default_rng(7)
    >>> color = ray_color(rng, Ray(vec3(0, 0, 0), vec3(0, 0, -1)), world, depth=10)
"""

from __future__ import annotations

import numpy as np

from photonr.core.ray import Ray, Vec3, normalize, vec3
from photonr.materials.scatter import scatter_material
from photonr.scene.world import World

# Sky gradient end points: horizon (white) to zenith (sky blue)
SKY_HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
SKY_ZENITH_COLOR = vec3(0.5, 0.7, 1.0)


def sky_color(ray: Ray) -> Vec3:
    """Evaluate the procedural sky for a ray that escaped the scene.

    Linear interpolation between white and sky blue driven by the vertical
    component of the normalized ray direction.

    Args:
        ray: The escaping ray.

    Returns:
        The background radiance (RGB).
    """
    unit_direction = normalize(ray.direction)
    t = 0.5 * (unit_direction[1] + 1.0)
    return (1.0 - t) * SKY_HORIZON_COLOR + t * SKY_ZENITH_COLOR


def ray_color(rng: np.random.Generator, ray: Ray, world: World, depth: int) -> Vec3:
    """Estimate the radiance arriving along a ray.

    Equivalent to the recursive formulation

        ray_color(ray, 0)     = black
        ray_color(ray, depth) = attenuation * ray_color(scattered, depth - 1)
                                if the hit material scatters, black if it
                                absorbs, sky_color(ray) on a miss

    written as a loop so that large depths do not hit the interpreter's
    recursion limit.

    Args:
        rng: The generator owned by the calling worker.
        ray: The ray to trace.
        world: The scene to trace against.
        depth: Maximum number of rays (primary plus scattered) to trace.

    Returns:
        The estimated linear radiance (RGB). Not clamped.
    """
    throughput = vec3(1.0, 1.0, 1.0)

    for _ in range(depth):
        result = world.hit(ray)
        if result is None:
            return throughput * sky_color(ray)

        intersection, material = result
        scattered = scatter_material(material, rng, ray, intersection)
        if scattered is None:
            # Absorbed by the surface
            return vec3(0.0, 0.0, 0.0)

        attenuation, ray = scattered
        throughput = throughput * attenuation

    # Out of bounces
    return vec3(0.0, 0.0, 0.0)
