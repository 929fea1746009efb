"""Camera module for view set-up, ray generation and rendering.

Components:
    pinhole: Pinhole camera at the origin looking down -Z, jittered primary
        rays and the row-parallel render loop

Ray generation uses pixel coordinates:
    i in [0, image_width): left to right
    j in [0, image_height): top to bottom
"""

from .pinhole import (
    Camera,
    CameraConfig,
    ProgressCallback,
    compute_image_height,
)

__all__ = [
    "Camera",
    "CameraConfig",
    "ProgressCallback",
    "compute_image_height",
]
