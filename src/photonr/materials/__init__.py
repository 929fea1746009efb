"""Materials module for surface scattering models.

Components:
    material: Material type tags and shared parameter validation
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    scatter: Dispatch over the closed set of material variants

Each material is an immutable dataclass; many entities may share one
instance. Scattering consumes randomness only from the generator passed in by
the caller.
"""

from .lambertian import LambertianMaterial, scatter_lambertian
from .material import MaterialType, validate_albedo
from .metal import MetalMaterial, scatter_metal
from .scatter import Material, scatter_material

__all__ = [
    "Material",
    "MaterialType",
    "validate_albedo",
    "scatter_material",
    # Lambertian
    "LambertianMaterial",
    "scatter_lambertian",
    # Metal
    "MetalMaterial",
    "scatter_metal",
]
