"""Preview module for output conversion and export.

Components:
    export: Gamma correction, byte quantization and PNG export (Pillow)

Example:
    >>> from photonr.preview import save_png
    >>> save_png(camera.render(world), camera.image_width, camera.image_height, "out.png")
"""

from photonr.preview.export import (
    BYTE_SCALE,
    channel_to_byte,
    color_to_bytes,
    image_to_array,
    linear_to_gamma,
    save_png,
)

__all__ = [
    "BYTE_SCALE",
    "linear_to_gamma",
    "channel_to_byte",
    "color_to_bytes",
    "image_to_array",
    "save_png",
]
