#!/usr/bin/env python3
"""Render a JSON scene to a PNG image.

This script loads a scene description, sets up the camera, renders the image
on all available cores and saves the result as a PNG.

Usage:
    python -m examples.render_scene [options]

Options:
    -s, --samples-per-pixel N   Rays per pixel (default: 10)
    -a, --aspect-ratio R        Image aspect ratio (default: 16/9)
    -w, --width W               Image width in pixels (default: 400)
    -m, --max-depth D           Max rays traced per path (default: 10)
    -d, --dump-info             Display camera information
    --scene PATH                Scene file (default: scene.json)
    --output PATH               Output file path (default: image.png)
    --seed SEED                 Seed for reproducible noise
    --workers N                 Worker processes (default: all CPUs)
    --quiet                     Suppress progress output

Example:
    python -m examples.render_scene --scene examples/scene.json -w 200 -s 20
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a JSON scene to a PNG image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-s",
        "--samples-per-pixel",
        type=int,
        default=10,
        metavar="N",
        help="Number of rays per pixel (default: 10)",
    )
    parser.add_argument(
        "-a",
        "--aspect-ratio",
        type=float,
        default=16.0 / 9.0,
        metavar="R",
        help="Image aspect ratio (default: 16/9)",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=400,
        metavar="W",
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "-m",
        "--max-depth",
        type=int,
        default=10,
        metavar="D",
        help="Max number of rays traced per path (default: 10)",
    )
    parser.add_argument(
        "-d",
        "--dump-info",
        action="store_true",
        help="Display camera information",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default="scene.json",
        help="Scene file (default: scene.json)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.png",
        help="Output file path (default: image.png)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for reproducible noise (default: random)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker processes (default: all CPUs)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    scene_path: str = "scene.json",
    output_path: str = "image.png",
    width: int = 400,
    aspect_ratio: float = 16.0 / 9.0,
    samples_per_pixel: int = 10,
    max_depth: int = 10,
    seed: int | None = None,
    workers: int | None = None,
    dump_info: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a scene file and save it as a PNG.

    Args:
        scene_path: JSON scene description.
        output_path: Output file path (PNG).
        width: Image width in pixels.
        aspect_ratio: Image width / height.
        samples_per_pixel: Rays averaged per pixel.
        max_depth: Maximum rays traced per path.
        seed: Seed for reproducible output, or None.
        workers: Worker process count, or None for all CPUs.
        dump_info: If True, print the camera geometry before rendering.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    from photonr.camera.pinhole import Camera, CameraConfig
    from photonr.preview.export import save_png
    from photonr.scene.description import build_world, load_scene

    config = CameraConfig(
        aspect_ratio=aspect_ratio,
        image_width=width,
        samples_per_pixel=samples_per_pixel,
        max_depth=max_depth,
    )
    camera = Camera.from_config(config)

    if dump_info:
        for key, value in camera.get_camera_info().items():
            print(f"  {key}: {value}")

    # Scene errors surface here, before any rendering work starts
    world = build_world(load_scene(scene_path))

    if not quiet:
        print(f"Generating image: size {camera.image_width} x {camera.image_height}")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} scanlines ({progress_pct:.1f}%)",
                end="",
                flush=True,
            )

    data = camera.render(world, workers=workers, seed=seed, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(data, camera.image_width, camera.image_height, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.ERROR if args.quiet else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        render_scene(
            scene_path=args.scene,
            output_path=args.output,
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            samples_per_pixel=args.samples_per_pixel,
            max_depth=args.max_depth,
            seed=args.seed,
            workers=args.workers,
            dump_info=args.dump_info,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
