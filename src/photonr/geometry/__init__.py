"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Ray-object intersection follows the pattern:
    intersection = hit_shape(ray, shape, max_toi)  # Intersection or None
"""

from .sphere import Intersection, Sphere, hit_sphere

__all__ = [
    "Sphere",
    "Intersection",
    "hit_sphere",
]
