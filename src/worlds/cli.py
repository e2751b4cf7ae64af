"""Command-line interface for map generation."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for map generation."""
    parser = argparse.ArgumentParser(
        description="Generate a procedural tile map from noise fields"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Settings name in configs/ or path to a TOML file",
    )
    parser.add_argument("--width", type=int, default=None, help="Grid width")
    parser.add_argument("--height", type=int, default=None, help="Grid height")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for elevation (temperature uses seed + 1)",
    )
    parser.add_argument(
        "--mode",
        choices=["elevation", "temperature", "world_shape"],
        default=None,
        help="Field that drives tile selection",
    )
    parser.add_argument(
        "--shape",
        choices=["centered_circle", "continents"],
        default=None,
        help="World-shape mask generator",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Save the generated map as .npz (optional)",
    )
    parser.add_argument(
        "--preview",
        type=str,
        default=None,
        help="Save a one-pixel-per-tile PNG preview (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from .exceptions import WorldsError
    from .generator import WorldMap
    from .palette import render_preview
    from .persistence import save_map
    from .settings import find_settings, load_settings

    try:
        if args.config:
            settings = load_settings(find_settings(args.config))
        else:
            settings = load_settings(find_settings("default"))
    except (FileNotFoundError, WorldsError) as e:
        parser.error(str(e))

    overrides: dict = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.mode is not None:
        overrides["mode"] = args.mode
    if args.shape is not None:
        overrides["shape"] = {"kind": args.shape}
    if args.seed is not None:
        overrides["elevation"] = {"seed": args.seed}
        overrides["temperature"] = {"noise": {"seed": args.seed + 1}}

    world_map = WorldMap(settings)
    try:
        if overrides:
            settings.update(**overrides)
        print(
            f"Generating {settings.width}x{settings.height} map "
            f"(mode={settings.mode.value}, shape={settings.shape.kind.value})"
        )
        start_time = time.time()
        result = world_map.regenerate()
    except WorldsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Generation complete in {time.time() - start_time:.1f}s")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        save_map(output_path, result.matrix, result.indices, settings)
        print(f"Saved map to {output_path}")

    if args.preview:
        preview_path = Path(args.preview)
        preview_path.parent.mkdir(parents=True, exist_ok=True)
        render_preview(result.matrix, settings).save(preview_path)
        print(f"Saved preview to {preview_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
