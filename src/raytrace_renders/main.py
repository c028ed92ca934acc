import argparse
import dataclasses
import logging
import math
import os
import sys
import time
from raytrace_renders.config import RenderConfig
from raytrace_renders.rendering import render
from raytrace_renders.scenes import SCENES, build_scene
from raytrace_renders.utils import save_png


def render_to_file(scene, width, height, fov_degrees, output, config, workers=None):
    """Render a named scene and write it as PNG."""
    camera, world = build_scene(scene, width, height, math.radians(fov_degrees), config)
    print(f"Rendering '{scene}' at {width}x{height} ({len(world.shapes)} shapes, {len(world.lights)} lights)...")
    t0 = time.time()
    canvas = render(camera, world, workers=workers)
    print(f"  Complete in {time.time() - t0:.2f}s")

    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    save_png(canvas, output)
    print(f"  Saved {output}")
    return canvas


def build_parser():
    parser = argparse.ArgumentParser(description="Ray Tracer CLI")
    parser.add_argument("--ui", action="store_true", help="Launch the interactive Gradio viewport")
    parser.add_argument("--scene", choices=sorted(SCENES), default="demo", help="Scene to render")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=300, help="Image height in pixels")
    parser.add_argument("--fov", type=float, default=60.0, help="Field of view in degrees")
    parser.add_argument("--bounces", type=int, default=RenderConfig.max_bounces,
                        help="Maximum reflection/refraction depth")
    parser.add_argument("--samples", type=int, default=RenderConfig.samples,
                        help="Anti-aliasing grid per axis (1 = off)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes (0 = one per CPU, default renders in-process)")
    parser.add_argument("--output", "-o", default=os.path.join("output", "render.png"), help="PNG file to write")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log render progress")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    if args.ui:
        from raytrace_renders.ui import create_ui, CSS
        print("Launching UI...")
        demo = create_ui()
        demo.launch(css=CSS)
        return 0

    try:
        config = dataclasses.replace(RenderConfig(), max_bounces=args.bounces, samples=args.samples)
    except ValueError as e:
        parser.error(str(e))
    render_to_file(args.scene, args.width, args.height, args.fov, args.output, config, args.workers)
    return 0


def run_ui():
    """Entry point for raytrace-ui command."""
    sys.argv = [sys.argv[0], "--ui"]
    main()


if __name__ == "__main__":
    main()
