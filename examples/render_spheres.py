#!/usr/bin/env python3
"""Render one of the preset sphere scenes.

Creates the scene, configures the camera, renders it and writes the result
as a plain PPM (P3) or PNG image.

Usage:
    python -m examples.render_spheres [options]

Options:
    --scene NAME        Preset scene (default: material_showcase)
    --width WIDTH       Image width in pixels (default: the scene's)
    --samples SAMPLES   Samples per pixel (default: the scene's)
    --max-depth DEPTH   Maximum ray bounces (default: the scene's)
    --output OUTPUT     Output path, .ppm or .png; "-" writes PPM to stdout
                        (default: spheres.ppm)
    --seed SEED         Random seed (default: 0)
    --arch ARCH         Taichi backend: auto, cpu or gpu (default: auto)
    --show              Display the image with matplotlib when done
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_spheres --scene glass --width 200 --samples 20 --output glass.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

SCENE_NAMES = ("material_showcase", "glass", "single_sphere")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a preset sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=SCENE_NAMES,
        default="material_showcase",
        help="Preset scene (default: material_showcase)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Image width in pixels (default: the scene's)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Samples per pixel (default: the scene's)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum ray bounces (default: the scene's)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.ppm",
        help='Output path, .ppm or .png; "-" writes PPM to stdout (default: spheres.ppm)',
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed (default: 0)",
    )
    parser.add_argument(
        "--arch",
        choices=("auto", "cpu", "gpu"),
        default="auto",
        help="Taichi backend (default: auto)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the image with matplotlib when done",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def render_scene(
    scene: str = "material_showcase",
    width: int | None = None,
    samples: int | None = None,
    max_depth: int | None = None,
    output_path: str = "spheres.ppm",
    show: bool = False,
    quiet: bool = False,
):
    """Render a preset scene and write it out.

    Args:
        scene: Name of the preset scene.
        width: Image width override.
        samples: Samples-per-pixel override.
        max_depth: Bounce-limit override.
        output_path: Destination file, or "-" for PPM on stdout.
        show: If True, open a matplotlib window with the result.
        quiet: If True, suppress progress output.

    Returns:
        The rendered image as a uint8 array of shape (height, width, 3).
    """
    # Lazy imports to allow Taichi initialization first
    from src.lumen.camera.camera import Camera
    from src.lumen.output.export import save_png
    from src.lumen.output.ppm import save_ppm, write_ppm
    from src.lumen.scene.presets import SCENES

    # Progress goes to stderr so "-" can stream the image on stdout
    log = sys.stderr

    world, config = SCENES[scene]()
    camera = Camera(config)
    overrides = {
        "image_width": width,
        "samples_per_pixel": samples,
        "max_depth": max_depth,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        camera.configure(**overrides)
    camera.initialize()

    if not quiet:
        print(
            f"Rendering {scene} ({camera.image_width}x{camera.image_height}), "
            f"{camera.config.samples_per_pixel} samples per pixel...",
            file=log,
        )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} samples ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
                file=log,
            )

    image = camera.render(world, callback=progress_callback)

    if not quiet:
        print(file=log)  # Newline after progress

    if output_path == "-":
        write_ppm(image, sys.stdout)
        sys.stdout.flush()
    else:
        output_file = Path(output_path)
        if output_file.suffix.lower() == ".png":
            save_png(image, output_file)
        else:
            save_ppm(image, output_file)
        if not quiet:
            print(f"Saved to: {output_file.absolute()}", file=log)

    if not quiet:
        print(f"Total time: {time.time() - start_time:.2f}s", file=log)

    if show:
        from src.lumen.output.display import show_image

        show_image(image, title=scene)

    return image


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    from src.lumen.runtime import init_taichi

    try:
        backend = init_taichi(arch=args.arch, seed=args.seed)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not args.quiet:
        print(f"Using {backend.upper()} backend", file=sys.stderr)

    try:
        render_scene(
            scene=args.scene,
            width=args.width,
            samples=args.samples,
            max_depth=args.max_depth,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
