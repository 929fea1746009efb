"""Material dispatch.

Materials form a closed set of variants. ``scatter_material`` matches on the
variant's ``material_type`` tag and forwards to the matching scatter function,
so adding a variant means extending ``MaterialType``, the ``Material`` alias
and the dispatch below together.
"""

from __future__ import annotations

from typing import Union

import numpy as np

from photonr.core.ray import Ray, Vec3
from photonr.geometry.sphere import Intersection
from photonr.materials.lambertian import LambertianMaterial, scatter_lambertian
from photonr.materials.material import MaterialType
from photonr.materials.metal import MetalMaterial, scatter_metal

Material = Union[LambertianMaterial, MetalMaterial]


def scatter_material(
    material: Material,
    rng: np.random.Generator,
    ray_in: Ray,
    intersection: Intersection,
) -> tuple[Vec3, Ray] | None:
    """Dispatch to the appropriate material scattering function.

    Args:
        material: The material of the hit surface.
        rng: The generator owned by the calling worker.
        ray_in: The incoming ray.
        intersection: The hit record on the surface.

    Returns:
        A tuple of (attenuation, scattered_ray), or None if the ray was
        absorbed.

    Raises:
        TypeError: If the material is not one of the known variants.
    """
    material_type = getattr(material, "material_type", None)

    if material_type == MaterialType.LAMBERTIAN:
        return scatter_lambertian(material, rng, ray_in, intersection)
    elif material_type == MaterialType.METAL:
        return scatter_metal(material, rng, ray_in, intersection)

    raise TypeError(f"Unknown material: {material!r}")
