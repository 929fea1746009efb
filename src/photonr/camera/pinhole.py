"""Pinhole camera model and the parallel render loop.

This module implements a pinhole camera fixed at the origin and looking down
the -Z axis, together with the scanline renderer that drives the integrator.

The camera derives its viewport geometry once at construction:
- focal length 1, viewport height 2, viewport width scaled by the actual
  width/height ratio of the image,
- pixel_delta_u / pixel_delta_v: world-space step from one pixel to the next
  (v points down so row 0 is the top of the image),
- pixel00_loc: center of the top-left pixel.

Rendering splits the image into rows. Each row is an independent unit of work
with its own random generator, spawned from a single SeedSequence, so a fixed
seed reproduces the same bytes no matter how many worker processes share the
rows.

Example:
    >>> from photonr.camera.pinhole import Camera
    >>> camera = Camera(aspect_ratio=16.0 / 9.0, image_width=400)
    >>> camera.image_height
    225
    >>> data = camera.render(world, seed=42)
    >>> len(data) == 3 * camera.image_width * camera.image_height
    True
"""

from __future__ import annotations

import logging
import math
import os
import time
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any

import numpy as np

from photonr.core.integrator import ray_color
from photonr.core.ray import Ray, Vec3, vec3
from photonr.preview.export import color_to_bytes
from photonr.scene.world import World

logger = logging.getLogger(__name__)

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]

# Non-finite pixels reported by a row: (column, averaged color)
PixelAnomalies = list[tuple[int, tuple[float, float, float]]]

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class CameraConfig:
    """Configuration for the render camera.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        image_width: Image width in pixels.
        samples_per_pixel: Number of jittered rays averaged per pixel.
        max_depth: Maximum number of rays traced per path.
    """

    aspect_ratio: float = 16.0 / 9.0
    image_width: int = 400
    samples_per_pixel: int = 10
    max_depth: int = 10


def compute_image_height(aspect_ratio: float, image_width: int) -> int:
    """Image height for a width and aspect ratio, never less than 1 pixel."""
    return max(1, round(image_width / aspect_ratio))


class Camera:
    """Pinhole camera with derived viewport geometry.

    The camera is immutable after construction and is shared read-only by all
    render workers.

    Attributes:
        aspect_ratio: Requested width / height ratio.
        image_width: Image width in pixels.
        image_height: Image height in pixels.
        samples_per_pixel: Samples averaged per pixel.
        max_depth: Maximum rays traced per path.
    """

    def __init__(
        self,
        aspect_ratio: float = 16.0 / 9.0,
        image_width: int = 400,
        samples_per_pixel: int = 10,
        max_depth: int = 10,
    ) -> None:
        """Validate the parameters and set up the viewport.

        Raises:
            ValueError: If the aspect ratio is not a positive finite number,
                the width or sample count is below 1, or max_depth is
                negative.
        """
        if not (math.isfinite(aspect_ratio) and aspect_ratio > 0.0):
            raise ValueError(f"Aspect ratio must be positive and finite, got {aspect_ratio}")
        if image_width < 1:
            raise ValueError(f"Image width must be at least 1 pixel, got {image_width}")
        if samples_per_pixel < 1:
            raise ValueError(f"Samples per pixel must be at least 1, got {samples_per_pixel}")
        if max_depth < 0:
            raise ValueError(f"Max depth must be non-negative, got {max_depth}")

        self.aspect_ratio = float(aspect_ratio)
        self.image_width = int(image_width)
        self.image_height = compute_image_height(self.aspect_ratio, self.image_width)
        self.samples_per_pixel = int(samples_per_pixel)
        self.max_depth = int(max_depth)

        width = float(self.image_width)
        height = float(self.image_height)

        self.center = vec3(0.0, 0.0, 0.0)

        # Viewport dimensions at unit focal length
        focal_length = 1.0
        viewport_height = 2.0
        viewport_width = viewport_height * (width / height)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = vec3(viewport_width, 0.0, 0.0)
        viewport_v = vec3(0.0, -viewport_height, 0.0)

        self.pixel_delta_u = viewport_u / width
        self.pixel_delta_v = viewport_v / height

        viewport_upper_left = (
            self.center - vec3(0.0, 0.0, focal_length) - viewport_u / 2.0 - viewport_v / 2.0
        )
        self.pixel00_loc = viewport_upper_left + 0.5 * (self.pixel_delta_u + self.pixel_delta_v)

    @classmethod
    def from_config(cls, config: CameraConfig) -> Camera:
        """Create a camera from a CameraConfig."""
        return cls(
            aspect_ratio=config.aspect_ratio,
            image_width=config.image_width,
            samples_per_pixel=config.samples_per_pixel,
            max_depth=config.max_depth,
        )

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def get_ray(self, rng: np.random.Generator, i: int, j: int) -> Ray:
        """Generate a jittered ray through pixel (i, j).

        The sample point is offset uniformly within [-0.5, 0.5) of a pixel
        step along each axis (box filter anti-aliasing).

        Args:
            rng: The generator owned by the calling worker.
            i: Pixel column (0 = left).
            j: Pixel row (0 = top).

        Returns:
            A ray from the camera center through the jittered sample point.
        """
        offset_u = rng.random() - 0.5
        offset_v = rng.random() - 0.5
        pixel_sample = (
            self.pixel00_loc
            + (i + offset_u) * self.pixel_delta_u
            + (j + offset_v) * self.pixel_delta_v
        )
        return Ray(self.center, pixel_sample - self.center)

    def sample_pixel(self, world: World, rng: np.random.Generator, i: int, j: int) -> Vec3:
        """Average samples_per_pixel radiance samples for pixel (i, j)."""
        accumulated = vec3(0.0, 0.0, 0.0)
        for _ in range(self.samples_per_pixel):
            ray = self.get_ray(rng, i, j)
            accumulated = accumulated + ray_color(rng, ray, world, self.max_depth)
        return accumulated / self.samples_per_pixel

    # =========================================================================
    # Rendering
    # =========================================================================

    def _trace_row(
        self, world: World, j: int, rng: np.random.Generator
    ) -> tuple[bytes, PixelAnomalies]:
        """Render row j, collecting non-finite pixels instead of logging them."""
        data = bytearray()
        anomalies: PixelAnomalies = []
        for i in range(self.image_width):
            color = self.sample_pixel(world, rng, i, j)
            if not np.all(np.isfinite(color)):
                anomalies.append((i, (float(color[0]), float(color[1]), float(color[2]))))
            data += color_to_bytes(color)
        return bytes(data), anomalies

    def render_row(self, world: World, j: int, rng: np.random.Generator) -> bytes:
        """Render a single row of the image.

        Args:
            world: The scene to render.
            j: Row index (0 = top).
            rng: Random generator dedicated to this row.

        Returns:
            The 3 * image_width RGB bytes of the row.
        """
        data, anomalies = self._trace_row(world, j, rng)
        _report_anomalies(j, anomalies)
        return data

    def render(
        self,
        world: World,
        *,
        workers: int | None = None,
        seed: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> bytes:
        """Render the world to an RGB8 buffer.

        Rows are distributed over a pool of worker processes. Each row draws
        from its own generator, spawned from SeedSequence(seed), and rows are
        reassembled by index so the layout never depends on completion order.

        Args:
            world: The scene to render. Must not be modified while rendering.
            workers: Number of worker processes. None uses every CPU; 1
                renders in the calling process.
            seed: Seed for reproducible output. None draws fresh entropy, so
                only the noise pattern differs between runs.
            callback: Optional progress callback, called after each finished
                row with (rows_completed, total_rows). Advisory only.

        Returns:
            Row-major, top-to-bottom, left-to-right RGB bytes of length
            3 * image_width * image_height.

        Raises:
            ValueError: If workers is less than 1.
        """
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {workers}")
        workers = min(workers, self.image_height)

        logger.info(
            "Generating image: size %d x %d, %d samples per pixel, max depth %d, %d worker(s)",
            self.image_width,
            self.image_height,
            self.samples_per_pixel,
            self.max_depth,
            workers,
        )

        row_seeds = np.random.SeedSequence(seed).spawn(self.image_height)
        rows: list[bytes] = [b""] * self.image_height
        total = self.image_height
        completed = 0
        start_time = time.perf_counter()

        def _row_done(j: int, data: bytes, anomalies: PixelAnomalies) -> None:
            nonlocal completed
            rows[j] = data
            _report_anomalies(j, anomalies)
            completed += 1
            logger.debug(
                "Rows completed: %d/%d (%.1f%%)", completed, total, 100.0 * completed / total
            )
            if callback is not None:
                callback(completed, total)

        if workers == 1:
            for j, row_seed in enumerate(row_seeds):
                data, anomalies = self._trace_row(world, j, np.random.default_rng(row_seed))
                _row_done(j, data, anomalies)
        else:
            with ProcessPoolExecutor(
                max_workers=workers,
                initializer=_init_worker,
                initargs=(self, world),
            ) as executor:
                futures = [
                    executor.submit(_render_row_in_worker, j, row_seed)
                    for j, row_seed in enumerate(row_seeds)
                ]
                for future in as_completed(futures):
                    _row_done(*future.result())

        elapsed = time.perf_counter() - start_time
        logger.info("Done in %d milliseconds", int(elapsed * 1000))
        return b"".join(rows)

    # =========================================================================
    # Utility Functions
    # =========================================================================

    def get_camera_info(self) -> dict[str, Any]:
        """Get the camera parameters and derived geometry for debugging."""

        def _as_tuple(v: Vec3) -> tuple[float, float, float]:
            return (float(v[0]), float(v[1]), float(v[2]))

        return {
            "aspect_ratio": self.aspect_ratio,
            "image_width": self.image_width,
            "image_height": self.image_height,
            "samples_per_pixel": self.samples_per_pixel,
            "max_depth": self.max_depth,
            "center": _as_tuple(self.center),
            "pixel00_loc": _as_tuple(self.pixel00_loc),
            "pixel_delta_u": _as_tuple(self.pixel_delta_u),
            "pixel_delta_v": _as_tuple(self.pixel_delta_v),
        }

    def __repr__(self) -> str:
        return (
            f"Camera(image_width={self.image_width}, image_height={self.image_height}, "
            f"samples_per_pixel={self.samples_per_pixel}, max_depth={self.max_depth})"
        )


def _report_anomalies(j: int, anomalies: PixelAnomalies) -> None:
    for i, color in anomalies:
        logger.warning("Non-finite color %s at pixel (%d, %d)", color, i, j)


# =============================================================================
# Worker Process Entry Points
# =============================================================================

# Camera and world of the current worker process (set by the initializer)
_worker_camera: Camera | None = None
_worker_world: World | None = None


def _init_worker(camera: Camera, world: World) -> None:
    """Receive the read-only scene once per worker process."""
    global _worker_camera, _worker_world
    _worker_camera = camera
    _worker_world = world


def _render_row_in_worker(
    j: int, row_seed: np.random.SeedSequence
) -> tuple[int, bytes, PixelAnomalies]:
    """Render row j inside a worker process.

    Returns:
        Tuple of (row index, row bytes, non-finite pixels).
    """
    if _worker_camera is None or _worker_world is None:
        raise RuntimeError("Worker not initialized. The pool must use _init_worker().")
    data, anomalies = _worker_camera._trace_row(_worker_world, j, np.random.default_rng(row_seed))
    return j, data, anomalies
