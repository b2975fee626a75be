#!/usr/bin/env python3
"""Render the three-sphere scene.

This script renders the preset row of red diffuse spheres to a PNG file. It
builds the scene, configures the camera and streams the image to disk,
printing progress at most once per second.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH         Image width in pixels (default: 400)
    --height HEIGHT       Image height in pixels (default: width / (16/9))
    --samples SAMPLES     Samples per pixel axis; S^2 rays per pixel (default: 20)
    --bounces BOUNCES     Maximum ray bounces (default: 4)
    --shading MODE        diffuse, normals or albedo (default: diffuse)
    --albedo-tint         Multiply each bounce by the surface albedo
    --gamma GAMMA         Display gamma for 8-bit output (default: 1.0)
    --seed SEED           Seed for bounce sampling (default: random)
    --scene FILE          JSON scene file instead of the preset
    --output OUTPUT       Output file path (default: result.png)
    --quiet               Suppress progress output

Example:
    python examples/render_spheres.py --width 200 --samples 4
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from stratray.camera.camera import CameraConfig
from stratray.core.integrator import DEFAULT_MAX_BOUNCES, SHADING_MODES
from stratray.core.renderer import Renderer, RenderSettings
from stratray.output.png import DEFAULT_OUTPUT, PngSink
from stratray.scene.presets import create_sphere_row_scene
from stratray.scene.scene import Scene

ASPECT_RATIO = 16.0 / 9.0
DEFAULT_WIDTH = 400
DEFAULT_SAMPLES = 20


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the three-sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: width / (16/9))",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Samples per pixel axis (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "--bounces",
        type=int,
        default=DEFAULT_MAX_BOUNCES,
        help=f"Maximum ray bounces (default: {DEFAULT_MAX_BOUNCES})",
    )
    parser.add_argument(
        "--shading",
        choices=SHADING_MODES,
        default="diffuse",
        help="Shading mode (default: diffuse)",
    )
    parser.add_argument(
        "--albedo-tint",
        action="store_true",
        help="Multiply each bounce by the surface albedo",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Display gamma (default: 1.0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for bounce sampling (default: random)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file with 'materials' and 'spheres' (default: preset)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output file path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def load_scene(path: str | None) -> Scene:
    """Load a scene from JSON, or build the preset when no path is given."""
    if path is None:
        return create_sphere_row_scene()
    scene = Scene()
    with open(path, encoding="utf-8") as f:
        scene.from_dict(json.load(f))
    return scene


def render_spheres(
    width: int = DEFAULT_WIDTH,
    height: int | None = None,
    samples: int = DEFAULT_SAMPLES,
    bounces: int = DEFAULT_MAX_BOUNCES,
    shading: str = "diffuse",
    albedo_tint: bool = False,
    gamma: float = 1.0,
    seed: int | None = None,
    scene_path: str | None = None,
    output_path: str = DEFAULT_OUTPUT,
    quiet: bool = False,
) -> Path:
    """Render the scene and save it to a PNG file.

    Returns:
        Path to the saved image file.
    """
    if height is None:
        height = max(1, int(width / ASPECT_RATIO))

    scene = load_scene(scene_path)
    renderer = Renderer(
        width,
        height,
        scene,
        CameraConfig(samples=samples),
        RenderSettings(
            max_bounces=bounces,
            gamma=gamma,
            shading=shading,
            albedo_tint=albedo_tint,
            seed=seed,
        ),
    )

    if not quiet:
        print(f"Rendering {width}x{height} with {samples * samples} samples per pixel...")

    last_report = time.monotonic()

    def progress_callback(done: int, total: int) -> None:
        nonlocal last_report
        if quiet:
            return
        now = time.monotonic()
        if now - last_report > 1.0:
            print(f"{done / total * 100:.3f}%")
            last_report = now

    output_file = Path(output_path)
    renderer.render(PngSink(output_file), callback=progress_callback)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Time: {renderer.elapsed * 1000:.0f} ms")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    try:
        render_spheres(
            width=args.width,
            height=args.height,
            samples=args.samples,
            bounces=args.bounces,
            shading=args.shading,
            albedo_tint=args.albedo_tint,
            gamma=args.gamma,
            seed=args.seed,
            scene_path=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
