"""Scene-level intersection testing.

This module provides the World container: an insertion-ordered list of
entities, each pairing a sphere with a (shared) material. A world query scans
every entity and returns the closest hit together with the hit entity's
material, so the integrator never has to look the entity up again.

The world is built once before rendering and is only read afterwards, which
makes it safe to hand to any number of render workers.

Example:
    >>> from photonr.core.ray import Ray, vec3
    >>> from photonr.geometry.sphere import Sphere
    >>> from photonr.materials import LambertianMaterial
    >>> from photonr.scene.world import Entity, World
    >>> world = World()
    >>> world.add(Entity(Sphere(vec3(0, 0, -1), 0.5), LambertianMaterial((0.5, 0.5, 0.5))))
    >>> result = world.hit(Ray(vec3(0, 0, 0), vec3(0, 0, -1)))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from photonr.core.ray import Ray
from photonr.geometry.sphere import Intersection, Sphere, hit_sphere
from photonr.materials.scatter import Material

# Maximum trace distance; anything farther counts as a miss
MAX_TOI = 1000.0

# Hits this close to the ray origin are self-intersections (shadow acne)
TOI_EPSILON = float(np.finfo(np.float32).eps)


@dataclass(frozen=True, eq=False)
class Entity:
    """A sphere paired with the material it is made of.

    Attributes:
        sphere: The geometry, owned by this entity.
        material: The material, possibly shared with other entities.
    """

    sphere: Sphere
    material: Material

    def hit(self, ray: Ray) -> Intersection | None:
        """Intersect the ray with this entity's sphere.

        Returns:
            The intersection, or None on a miss or a hit at the ray origin.
        """
        intersection = hit_sphere(ray, self.sphere, MAX_TOI)
        if intersection is None or abs(intersection.toi) <= TOI_EPSILON:
            return None
        return intersection


class World:
    """Insertion-ordered collection of entities with nearest-hit queries."""

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._entities: list[Entity] = list(entities)

    def add(self, entity: Entity) -> int:
        """Add an entity to the world.

        Returns:
            The index of the added entity.
        """
        self._entities.append(entity)
        return len(self._entities) - 1

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def hit(self, ray: Ray) -> tuple[Intersection, Material] | None:
        """Find the closest intersection of the ray with the world.

        Tests every entity and keeps the hit with the smallest toi strictly
        below the closest one so far. On an exact tie the earlier entity
        wins.

        Args:
            ray: The ray to trace.

        Returns:
            Tuple of (intersection, material) for the closest hit, or None if
            the ray escapes.
        """
        closest_toi = MAX_TOI
        result = None

        for entity in self._entities:
            intersection = entity.hit(ray)
            if intersection is not None and intersection.toi < closest_toi:
                closest_toi = intersection.toi
                result = (intersection, entity.material)

        return result

    def __repr__(self) -> str:
        return f"World(entities={len(self._entities)})"
