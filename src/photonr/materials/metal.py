"""Metal (specular reflective) material implementation.

This module implements the metal BSDF, which models specular reflection with
optional fuzz. Perfect metals (fuzz=0) produce mirror-like reflections, while
fuzzier metals scatter reflected rays within a cone around the mirror
direction.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal. The fuzzed
direction is R + fuzz * random_unit_vector(); when it dips below the surface
the path is absorbed.

Example:
    >>> import numpy as np
    >>> from photonr.materials.metal import MetalMaterial, scatter_metal
    >>> chrome = MetalMaterial(albedo=(0.8, 0.8, 0.8), fuzz=0.3)
    >>> result = scatter_metal(chrome, np.random.default_rng(0), ray_in, intersection)
    >>> if result is not None:
    ...     attenuation, scattered = result
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from photonr.core.ray import Ray, Vec3, dot, random_unit_vector, reflect
from photonr.geometry.sphere import Intersection
from photonr.materials.material import MaterialType, validate_albedo


@dataclass(frozen=True, eq=False)
class MetalMaterial:
    """Metal (specular reflective) material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
            Represents the color tint of reflected light.
        fuzz: The reflection perturbation magnitude in [0, 1].
            0 = perfect mirror, 1 = maximum fuzziness.
    """

    material_type: ClassVar[MaterialType] = MaterialType.METAL

    albedo: Vec3 = field(default_factory=lambda: np.full(3, 0.8))
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))
        fuzz = float(self.fuzz)
        if not (0.0 <= fuzz <= 1.0):
            raise ValueError(
                f"Fuzz = {self.fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )
        object.__setattr__(self, "fuzz", fuzz)


def scatter_metal(
    material: MetalMaterial,
    rng: np.random.Generator,
    ray_in: Ray,
    intersection: Intersection,
) -> tuple[Vec3, Ray] | None:
    """Compute the scattered ray for a metal surface.

    Reflects the incoming direction about the surface normal, then perturbs
    the result by fuzz times a random unit vector. The random vector is drawn
    even for a perfect mirror so the generator stream does not depend on
    material parameters.

    Args:
        material: The metal material that was hit.
        rng: The generator owned by the calling worker.
        ray_in: The incoming ray.
        intersection: The hit record on the surface.

    Returns:
        A tuple of (attenuation, scattered_ray), or None if the scattered
        direction does not leave the surface (the path is absorbed).
    """
    normal = intersection.normal
    reflected = reflect(ray_in.direction, normal)
    scatter_direction = reflected + material.fuzz * random_unit_vector(rng)

    # Absorb rays scattered into (or along) the surface
    if not dot(scatter_direction, normal) > 0.0:
        return None

    scattered = Ray(ray_in.point_at(intersection.toi), scatter_direction)
    return material.albedo, scattered

