"""
Render loop: camera to framebuffer.

Pixels are independent, so the image is split into disjoint row bands. Each
band is traced on its own (in-process, or in a worker process) and written back
into the rows it owns.
"""
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor
import numpy as np
from raytrace_renders.canvas import Canvas
from raytrace_renders.rays import Ray

logger = logging.getLogger(__name__)


def pixel_color(camera, world, px, py):
    """Average color of every sub-pixel ray through pixel (px, py)."""
    rays = camera.rays_for_pixel(px, py)
    total = np.zeros(3)
    for ray in rays:
        total += world.color_at(ray, world.config.max_bounces)
    return total / len(rays)


def render_band(camera, world, y_start, y_end):
    """
    Trace rows y_start .. y_end - 1.

    Returns:
        tuple: (y_start, (y_end - y_start, hsize, 3) array of colors)
    """
    rows = np.zeros((y_end - y_start, camera.hsize, 3))
    if camera.config.samples == 1:
        # one centred ray per pixel, all generated at once
        directions = camera.ray_directions(y_start, y_end)
        for row in range(y_end - y_start):
            for x in range(camera.hsize):
                ray = Ray(camera.origin, directions[row, x])
                rows[row, x] = world.color_at(ray, world.config.max_bounces)
        return y_start, rows

    for y in range(y_start, y_end):
        for x in range(camera.hsize):
            rows[y - y_start, x] = pixel_color(camera, world, x, y)
    return y_start, rows


def row_bands(height, count):
    """Split range(height) into at most count contiguous (start, end) bands."""
    count = max(1, min(count, height))
    size, extra = divmod(height, count)
    bands = []
    start = 0
    for i in range(count):
        end = start + size + (1 if i < extra else 0)
        bands.append((start, end))
        start = end
    return bands


def render(camera, world, workers=None):
    """
    Render world as seen by camera.

    Args:
        camera: Camera
        world: World
        workers: Number of worker processes; None or 1 renders in-process,
            0 uses os.cpu_count()

    Returns:
        Canvas of unclamped colors, camera.hsize x camera.vsize
    """
    if workers is not None and workers < 0:
        raise ValueError(f"workers must be non-negative, got {workers}")
    if workers == 0:
        workers = os.cpu_count() or 1

    canvas = Canvas(camera.hsize, camera.vsize)
    t0 = time.time()
    logger.info("Rendering %dx%d, %d sample(s)/axis, %d bounce(s), workers=%s",
                camera.hsize, camera.vsize, camera.config.samples,
                world.config.max_bounces, workers or 1)

    if workers is None or workers == 1:
        y_start, rows = render_band(camera, world, 0, camera.vsize)
        canvas.write_rows(y_start, rows)
    else:
        # Several bands per worker keep the pool busy when rows differ in cost
        bands = row_bands(camera.vsize, workers * 4)
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(render_band, camera, world, start, end) for start, end in bands]
            for future in futures:
                y_start, rows = future.result()
                canvas.write_rows(y_start, rows)
                logger.debug("Band %d..%d done", y_start, y_start + rows.shape[0] - 1)

    logger.info("Render complete in %.2fs", time.time() - t0)
    return canvas
