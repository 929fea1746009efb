"""Shared material definitions.

Holds the material type tags and the parameter validation used by every
material variant.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import IntEnum

import numpy as np

from photonr.core.ray import Vec3


class MaterialType(IntEnum):
    """Enumeration of supported material types.

    Used for material dispatch in the path tracer to determine which
    scattering function to call.
    """

    LAMBERTIAN = 0
    METAL = 1


def validate_albedo(albedo: Sequence[float] | Vec3) -> Vec3:
    """Convert an albedo to a float64 vector, checking energy conservation.

    Args:
        albedo: The reflectance color as an (R, G, B) sequence.

    Returns:
        The albedo as a NumPy vector.

    Raises:
        ValueError: If the albedo does not have three components, or any
            component is non-finite or outside [0, 1].
    """
    values = np.asarray(albedo, dtype=np.float64)
    if values.shape != (3,):
        raise ValueError(f"Albedo must have 3 components, got shape {values.shape}")

    for i, component in enumerate(values):
        if not math.isfinite(component) or component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    return values
