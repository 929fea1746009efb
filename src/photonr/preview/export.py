"""Tone mapping and image export for rendered images.

This module turns averaged linear radiance into display-ready bytes and
persists the resulting RGB8 buffer.

Tone mapping pipeline, applied independently per channel:
    1. gamma correction with gamma 2.0 (square root),
    2. scale by 255.999 and truncate to an integer.

Channels above 1.0 saturate at 255 and NaN maps to 0, matching a saturating
float-to-byte cast. Non-finite values are the caller's to report; this module
only converts them.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from photonr.preview.export import save_png
    >>> data = camera.render(world)
    >>> save_png(data, camera.image_width, camera.image_height, "image.png")
"""

from __future__ import annotations

import math
from os import PathLike

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from photonr.core.ray import Vec3

# Scale that maps [0, 1) onto the 256 byte values after truncation
BYTE_SCALE = 255.999


def linear_to_gamma(value: float) -> float:
    """Apply gamma-2 encoding to a linear channel value.

    Negative values (which the integrator never produces) map to 0.
    """
    if math.isnan(value):
        return value
    return math.sqrt(value) if value > 0.0 else 0.0


def channel_to_byte(value: float) -> int:
    """Quantize a gamma-encoded channel to a byte with saturation.

    Args:
        value: Gamma-encoded channel value, nominally in [0, 1].

    Returns:
        int(value * 255.999) clamped to [0, 255]; NaN gives 0.
    """
    scaled = value * BYTE_SCALE
    if math.isnan(scaled) or scaled <= 0.0:
        return 0
    if scaled >= 255.0:
        return 255
    return int(scaled)


def color_to_bytes(color: Vec3) -> bytes:
    """Convert an averaged linear color to three RGB8 bytes."""
    return bytes(channel_to_byte(linear_to_gamma(float(c))) for c in color)


def image_to_array(data: bytes, width: int, height: int) -> npt.NDArray[np.uint8]:
    """View an RGB8 buffer as an array of shape (height, width, 3).

    Raises:
        ValueError: If the buffer length does not match the dimensions.
    """
    expected = 3 * width * height
    if len(data) != expected:
        raise ValueError(
            f"Buffer holds {len(data)} bytes, expected {expected} for {width}x{height} RGB"
        )
    return np.frombuffer(data, dtype=np.uint8).reshape(height, width, 3)


def save_png(data: bytes, width: int, height: int, filepath: str | PathLike[str]) -> None:
    """Save an RGB8 buffer as a PNG file.

    Args:
        data: Row-major, top-to-bottom RGB bytes.
        width: Image width in pixels.
        height: Image height in pixels.
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the buffer length does not match the dimensions.
    """
    image = image_to_array(data, width, height)
    pil_image = PILImage.fromarray(image)
    pil_image.save(filepath)
