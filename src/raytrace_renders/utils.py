"""
Image encoding helpers for rendered framebuffers.

The renderer produces unclamped float colors; everything here belongs to the
output side and is the only place colors are clamped.
"""
import numpy as np
import PIL.Image


def to_rgb8(pixels):
    """
    Clamp float colors to [0, 1] and quantize to 8 bits per channel.

    Args:
        pixels: (..., 3) array of float colors

    Returns:
        uint8 array of the same shape
    """
    pixels = np.asarray(pixels, dtype=np.float64)
    return (np.clip(pixels, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def to_image(canvas):
    return PIL.Image.fromarray(to_rgb8(canvas.pixels))


def save_png(canvas, path):
    """Write a Canvas to path as an 8-bit RGB PNG."""
    to_image(canvas).save(path, format="PNG")
