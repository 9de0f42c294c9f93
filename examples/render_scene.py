#!/usr/bin/env python3
"""Render a scene to a PPM or PNG image.

This script renders either a JSON scene configuration or the built-in demo
scene (diffuse, gold and hollow glass spheres with a scatter of small
diffuse spheres) with progressive refinement.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene PATH        JSON render configuration (default: built-in demo scene)
    --width WIDTH       Image width in pixels
    --height HEIGHT     Image height in pixels
    --samples SAMPLES   Number of samples per pixel
    --max-depth DEPTH   Maximum number of bounces
    --seed SEED         Random seed for a reproducible render
    --output OUTPUT     Output file path; .ppm writes plain PPM, else PNG
    --batch-size SIZE   Samples per progress update (default: 1)
    --preview           Show the result in a Matplotlib window
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --width 400 --height 200 --samples 20 --output image.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from pathtracer.camera.pinhole import setup_camera
from pathtracer.config import RenderConfig, load_config
from pathtracer.core.integrator import RenderSettings
from pathtracer.core.progressive import ProgressiveRenderer
from pathtracer.preview.export import save_png, save_ppm
from pathtracer.scene.presets import create_demo_scene

DEFAULT_WIDTH = 200
DEFAULT_HEIGHT = 100
DEFAULT_SAMPLES = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON render configuration (default: built-in demo scene)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels")
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Number of samples per pixel",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum number of bounces",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--output",
        type=str,
        default="image.ppm",
        help="Output file path (default: image.ppm)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=1,
        help="Samples per progress update (default: 1)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Build the render configuration from a scene file or the demo scene.

    Command-line values override the ones from the scene file.
    """
    if args.scene is not None:
        config = load_config(args.scene)
        base = config.settings
    else:
        base = RenderSettings(
            width=DEFAULT_WIDTH,
            height=DEFAULT_HEIGHT,
            samples_per_pixel=DEFAULT_SAMPLES,
        )
        config = None

    settings = RenderSettings(
        width=args.width if args.width is not None else base.width,
        height=args.height if args.height is not None else base.height,
        samples_per_pixel=args.samples if args.samples is not None else base.samples_per_pixel,
        max_depth=args.max_depth if args.max_depth is not None else base.max_depth,
        gamma=base.gamma,
        t_min=base.t_min,
        sky_scale=base.sky_scale,
        seed=args.seed if args.seed is not None else base.seed,
    )

    if config is None:
        scene, camera = create_demo_scene(aspect_ratio=settings.aspect_ratio)
        return RenderConfig(settings=settings, camera=camera, scene=scene)

    config.settings = settings
    config.camera.aspect_ratio = settings.aspect_ratio
    return config


def render_scene(
    config: RenderConfig,
    output_path: str = "image.ppm",
    batch_size: int = 1,
    quiet: bool = False,
    preview: bool = False,
) -> Path:
    """Render a configuration and save the image.

    Args:
        config: The render configuration.
        output_path: Output file path (.ppm for plain PPM, otherwise PNG).
        batch_size: Number of samples to render between progress updates.
        quiet: If True, suppress progress output.
        preview: If True, show the image in a Matplotlib window.

    Returns:
        Path to the saved image file.
    """
    settings = config.settings
    if not quiet:
        print(
            f"Rendering {config.scene.get_sphere_count()} spheres "
            f"({settings.width}x{settings.height}, {settings.samples_per_pixel} spp)..."
        )

    camera = setup_camera(config.camera)
    renderer = ProgressiveRenderer(camera, config.scene.build_meshes(), settings)

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} samples "
                f"({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    renderer.render(
        num_samples=settings.samples_per_pixel,
        batch_size=batch_size,
        callback=progress_callback,
    )

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".ppm":
        save_ppm(renderer, output_file)
    else:
        save_png(renderer, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if preview:
        from pathtracer.preview.display import show_preview

        show_preview(renderer.get_image_numpy(), gamma=settings.gamma)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = build_config(args)
        render_scene(
            config,
            output_path=args.output,
            batch_size=args.batch_size,
            quiet=args.quiet,
            preview=args.preview,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
