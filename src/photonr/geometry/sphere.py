"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere dataclass and an intersection function using the
robust quadratic formula from Ray Tracing Gems to avoid floating-point
artifacts.

The test is performed in the sphere's local frame: the ray origin is
translated by the sphere center, so the sphere sits at the origin and only the
radius matters. Spheres are solid; a ray starting inside reports the exit
point.

Example:
    >>> from photonr.core.ray import Ray, vec3
    >>> from photonr.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0.0, 0.0, -1.0), radius=0.5)
    >>> ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, -1.0))
    >>> hit = hit_sphere(ray, sphere, 1000.0)
    >>> hit.toi
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from photonr.core.ray import Ray, Vec3, dot


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
    """

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        if not (self.radius > 0.0 and math.isfinite(self.radius)):
            raise ValueError(f"Sphere radius must be positive and finite, got {self.radius}")


@dataclass(frozen=True, eq=False)
class Intersection:
    """Record of a ray-surface intersection.

    Attributes:
        toi: Time of impact, the ray parameter at the hit point. Only
            comparable with other hits of the same ray.
        normal: The outward unit surface normal at the hit point.
    """

    toi: float
    normal: Vec3


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant)) avoids catastrophic cancellation
    q = -(h + math.copysign(sqrt_d, h))

    if abs(q) < 1e-300:
        # Tangent ray through the local origin; fall back to the textbook form
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


def hit_sphere(ray: Ray, sphere: Sphere, max_toi: float) -> Intersection | None:
    """Test for ray-sphere intersection using the robust quadratic formula.

    The ray-sphere intersection is found by solving:
        |oc + t * direction|^2 = radius^2,  oc = origin - center

    which expands to a*t^2 + 2*h*t + c = 0 with:
        a = dot(direction, direction)
        h = dot(direction, oc)
        c = dot(oc, oc) - radius^2

    Args:
        ray: The ray to test. The direction need not be normalized.
        sphere: The sphere to test intersection against.
        max_toi: Largest ray parameter considered a hit.

    Returns:
        The nearest positive-toi Intersection not beyond max_toi, or None.
    """
    # Ray origin expressed in the sphere's local frame
    oc = ray.origin - sphere.center
    direction = ray.direction

    a = dot(direction, direction)
    h = dot(direction, oc)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = h * h - a * c
    if discriminant < 0.0 or a == 0.0:
        return None

    t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

    toi = t0 if t0 > 0.0 else t1
    if toi <= 0.0 or toi > max_toi:
        return None

    # Outward normal: points from center to hit point
    local_point = oc + toi * direction
    return Intersection(toi=toi, normal=local_point / sphere.radius)
