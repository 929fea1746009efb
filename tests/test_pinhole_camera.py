"""Unit tests for the pinhole camera.

Tests cover:
- Image height computation
- Parameter validation
- Derived viewport geometry
- Jittered ray generation
- Single-row rendering and anomaly logging
- Camera info and configuration
"""

import logging

import numpy as np
import pytest


class TestImageHeight:
    """Tests for compute_image_height."""

    def test_default_dimensions(self):
        """Test 400 wide at 16:9 gives 225 rows."""
        from photonr.camera.pinhole import compute_image_height

        assert compute_image_height(16.0 / 9.0, 400) == 225

    def test_square(self):
        """Test a square aspect ratio keeps width and height equal."""
        from photonr.camera.pinhole import compute_image_height

        assert compute_image_height(1.0, 64) == 64

    def test_never_below_one(self):
        """Test that extreme aspect ratios still give one row."""
        from photonr.camera.pinhole import compute_image_height

        assert compute_image_height(1000.0, 10) == 1


class TestCameraValidation:
    """Tests for Camera parameter validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"aspect_ratio": 0.0},
            {"aspect_ratio": -1.0},
            {"aspect_ratio": float("inf")},
            {"aspect_ratio": float("nan")},
            {"image_width": 0},
            {"samples_per_pixel": 0},
            {"max_depth": -1},
        ],
    )
    def test_invalid_parameters(self, kwargs):
        """Test that invalid parameters raise ValueError."""
        from photonr.camera.pinhole import Camera

        with pytest.raises(ValueError):
            Camera(**kwargs)

    def test_zero_depth_allowed(self):
        """Test that max_depth 0 is a valid (all black) configuration."""
        from photonr.camera.pinhole import Camera

        assert Camera(max_depth=0).max_depth == 0


class TestCameraGeometry:
    """Tests for derived viewport geometry."""

    def test_defaults(self):
        """Test default camera dimensions."""
        from photonr.camera.pinhole import Camera

        camera = Camera()
        assert camera.image_width == 400
        assert camera.image_height == 225
        assert camera.samples_per_pixel == 10
        assert camera.max_depth == 10

    def test_pixel_deltas(self):
        """Test pixel steps span the 2-unit-tall viewport, v pointing down."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=2.0, image_width=200)

        assert camera.image_height == 100
        assert np.allclose(camera.pixel_delta_u, [4.0 / 200, 0.0, 0.0])
        assert np.allclose(camera.pixel_delta_v, [0.0, -2.0 / 100, 0.0])

    def test_pixel00_location(self):
        """Test the top-left pixel center sits half a step inside the corner."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=2.0, image_width=200)

        assert np.allclose(camera.pixel00_loc, [-2.0 + 0.01, 1.0 - 0.01, -1.0])

    def test_viewport_uses_actual_ratio(self):
        """Test the viewport width follows the rounded image size."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=16.0 / 9.0, image_width=400)
        viewport_width = camera.pixel_delta_u[0] * camera.image_width

        assert viewport_width == pytest.approx(2.0 * 400 / 225)

    def test_from_config(self):
        """Test creating a camera from CameraConfig."""
        from photonr.camera.pinhole import Camera, CameraConfig

        camera = Camera.from_config(
            CameraConfig(aspect_ratio=1.0, image_width=32, samples_per_pixel=4, max_depth=3)
        )

        assert camera.image_width == 32
        assert camera.image_height == 32
        assert camera.samples_per_pixel == 4
        assert camera.max_depth == 3


class TestRayGeneration:
    """Tests for jittered camera rays."""

    def test_rays_start_at_center(self, rng):
        """Test every camera ray starts at the origin."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=1.0, image_width=10)
        ray = camera.get_ray(rng, 3, 7)
        assert np.allclose(ray.origin, [0.0, 0.0, 0.0])

    def test_jitter_stays_within_pixel(self, rng):
        """Test that samples land within half a pixel of the pixel center."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=1.0, image_width=10)
        i, j = 4, 6
        center = camera.pixel00_loc + i * camera.pixel_delta_u + j * camera.pixel_delta_v
        half_u = 0.5 * abs(camera.pixel_delta_u[0])
        half_v = 0.5 * abs(camera.pixel_delta_v[1])

        for _ in range(200):
            ray = camera.get_ray(rng, i, j)
            target = ray.point_at(1.0)
            assert abs(target[0] - center[0]) <= half_u
            assert abs(target[1] - center[1]) <= half_v
            assert target[2] == pytest.approx(-1.0)

    def test_jitter_varies(self, rng):
        """Test that repeated rays through one pixel differ."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=1.0, image_width=10)
        a = camera.get_ray(rng, 0, 0)
        b = camera.get_ray(rng, 0, 0)
        assert not np.array_equal(a.direction, b.direction)


class TestRenderRow:
    """Tests for rendering a single row."""

    def test_row_length(self, rng, two_sphere_world):
        """Test a row holds three bytes per pixel."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=2.0, image_width=16, samples_per_pixel=1, max_depth=3)
        data = camera.render_row(two_sphere_world, 0, rng)
        assert len(data) == 3 * 16

    def test_depth_zero_row_is_black(self, rng, two_sphere_world):
        """Test that max_depth 0 renders pure black."""
        from photonr.camera.pinhole import Camera

        camera = Camera(aspect_ratio=2.0, image_width=8, samples_per_pixel=2, max_depth=0)
        assert camera.render_row(two_sphere_world, 0, rng) == bytes(3 * 8)

    def test_sky_row_without_geometry(self, rng):
        """Test an empty world renders a blue-tinted sky with saturated blue."""
        from photonr.camera.pinhole import Camera
        from photonr.scene.world import World

        camera = Camera(aspect_ratio=2.0, image_width=8, samples_per_pixel=1, max_depth=1)
        data = camera.render_row(World(), 0, rng)

        pixels = np.frombuffer(data, dtype=np.uint8).reshape(-1, 3)
        assert np.all(pixels[:, 2] == 255)
        assert np.all(pixels[:, 0] < pixels[:, 2])

    def test_non_finite_pixels_are_logged(self, rng, caplog):
        """Test that NaN radiance is logged and written as black."""
        from photonr.camera.pinhole import Camera
        from photonr.core.ray import vec3
        from photonr.scene.world import World

        class _NanCamera(Camera):
            def sample_pixel(self, world, rng, i, j):
                return vec3(float("nan"), 0.25, 0.25)

        camera = _NanCamera(aspect_ratio=2.0, image_width=4, samples_per_pixel=1, max_depth=1)

        with caplog.at_level(logging.WARNING, logger="photonr.camera.pinhole"):
            data = camera.render_row(World(), 0, rng)

        pixels = np.frombuffer(data, dtype=np.uint8).reshape(-1, 3)
        assert np.all(pixels[:, 0] == 0)
        assert np.all(pixels[:, 1] == 127)
        assert sum("Non-finite color" in r.message for r in caplog.records) == 4


class TestCameraInfo:
    """Tests for camera introspection."""

    def test_camera_info(self):
        """Test get_camera_info reports parameters and geometry."""
        from photonr.camera.pinhole import Camera

        info = Camera(aspect_ratio=2.0, image_width=200).get_camera_info()

        assert info["image_width"] == 200
        assert info["image_height"] == 100
        assert info["center"] == (0.0, 0.0, 0.0)
        assert info["pixel_delta_v"][1] == pytest.approx(-0.02)
        assert set(info) >= {"samples_per_pixel", "max_depth", "pixel00_loc", "pixel_delta_u"}

    def test_repr(self):
        """Test repr includes the image size."""
        from photonr.camera.pinhole import Camera

        text = repr(Camera(aspect_ratio=1.0, image_width=8, samples_per_pixel=2, max_depth=3))
        assert "image_width=8" in text
        assert "image_height=8" in text
