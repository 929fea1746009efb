"""Lambertian (ideal diffuse) material implementation.

This module implements the Lambertian BRDF, which models ideal diffuse
reflection where incident light is scattered in all directions weighted by the
cosine of the angle from the surface normal.

Scatter directions are drawn as normal + random_unit_vector(). Offsetting a
point drawn uniformly on the unit sphere by the normal yields a cosine-weighted
distribution over the hemisphere, so the BRDF * cos / pdf weight reduces to
the albedo:

    (albedo / pi) * cos(theta) / (cos(theta) / pi) = albedo

Example:
    >>> import numpy as np
    >>> from photonr.materials.lambertian import LambertianMaterial, scatter_lambertian
    >>> material = LambertianMaterial(albedo=(0.8, 0.3, 0.3))
    >>> rng = np.random.default_rng(0)
    >>> attenuation, scattered = scatter_lambertian(material, rng, ray_in, intersection)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from photonr.core.ray import Ray, Vec3, near_zero, random_unit_vector
from photonr.geometry.sphere import Intersection
from photonr.materials.material import MaterialType, validate_albedo


@dataclass(frozen=True, eq=False)
class LambertianMaterial:
    """Lambertian (ideal diffuse) material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.
    """

    material_type: ClassVar[MaterialType] = MaterialType.LAMBERTIAN

    albedo: Vec3 = field(default_factory=lambda: np.full(3, 0.5))

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))


def scatter_lambertian(
    material: LambertianMaterial,
    rng: np.random.Generator,
    ray_in: Ray,
    intersection: Intersection,
) -> tuple[Vec3, Ray]:
    """Sample a scattered ray for a Lambertian surface.

    A Lambertian surface always scatters; it never absorbs the path.

    Args:
        material: The diffuse material that was hit.
        rng: The generator owned by the calling worker.
        ray_in: The incoming ray.
        intersection: The hit record on the surface.

    Returns:
        A tuple of (attenuation, scattered_ray). The attenuation equals the
        albedo.
    """
    normal = intersection.normal
    scatter_direction = normal + random_unit_vector(rng)

    # The unit vector can land almost exactly opposite the normal
    if near_zero(scatter_direction):
        scatter_direction = normal

    scattered = Ray(ray_in.point_at(intersection.toi), scatter_direction)
    return material.albedo, scattered
