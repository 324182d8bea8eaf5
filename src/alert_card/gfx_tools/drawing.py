import os
from functools import lru_cache

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont
from colorama import Back

CORNER_STEPS = 8 #points per quadratic corner


@lru_cache(maxsize=32)
def get_font(path, size):
    """Loads a TrueType font, falling back to Pillow's built in font at the same size."""
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        print(Back.YELLOW + f"Font file {path} not found. Falling back to default sans-serif." + Back.RESET)
        return ImageFont.load_default(size=size)


def load_fonts(render_config):
    """Returns a (weight, size) -> font lookup for the fonts in render_config"""
    files = dict(render_config.font_files)

    def font(weight, size):
        return get_font(os.path.join(render_config.font_dir, files[weight]), size)
    return font


def linear_gradient(size, start, end, color1, color2):
    """Two stop linear gradient, like a canvas createLinearGradient.

    Args:
        size (tuple): (width, height) of the image to make
        start (tuple): (x, y) where color1 is fully on, relative to the image
        end (tuple): (x, y) where color2 is fully on

    Returns:
        PIL.Image: RGB image
    """
    width, height = size
    c1 = np.array(ImageColor.getrgb(color1)[:3], dtype=np.float64)
    c2 = np.array(ImageColor.getrgb(color2)[:3], dtype=np.float64)
    dx, dy = end[0] - start[0], end[1] - start[1]
    length_sq = dx * dx + dy * dy

    xs, ys = np.meshgrid(np.arange(width) + 0.5, np.arange(height) + 0.5)
    if length_sq == 0:
        t = np.zeros((height, width))
    else:
        t = ((xs - start[0]) * dx + (ys - start[1]) * dy) / length_sq
        t = np.clip(t, 0.0, 1.0)
    pixels = c1 + (c2 - c1) * t[..., np.newaxis]
    return Image.fromarray(np.round(pixels).astype(np.uint8), 'RGB')


def _quadratic(p0, p1, p2, steps=CORNER_STEPS):
    points = []
    for i in range(1, steps + 1):
        t = i / steps
        a, b, c = (1 - t) ** 2, 2 * (1 - t) * t, t * t
        points.append((a * p0[0] + b * p1[0] + c * p2[0], a * p0[1] + b * p1[1] + c * p2[1]))
    return points


def rounded_rect_points(x, y, width, height, radius):
    """Outline of a rounded rectangle with quadratic curve corners, clockwise from the top left."""
    r = min(radius, width / 2, height / 2)
    points = [(x + r, y), (x + width - r, y)]
    points += _quadratic((x + width - r, y), (x + width, y), (x + width, y + r))
    points.append((x + width, y + height - r))
    points += _quadratic((x + width, y + height - r), (x + width, y + height), (x + width - r, y + height))
    points.append((x + r, y + height))
    points += _quadratic((x + r, y + height), (x, y + height), (x, y + height - r))
    points.append((x, y + r))
    points += _quadratic((x, y + r), (x, y), (x + r, y))
    return points


def fill_gradient_rect(canvas, box, colors):
    """Fills box=(x, y, w, h) with a diagonal gradient, top left -> bottom right."""
    x, y, width, height = box
    gradient = linear_gradient((width, height), (0, 0), (width, height), *colors)
    canvas.paste(gradient, (x, y))


def fill_rounded_gradient(canvas, box, colors, radius):
    """Same as fill_gradient_rect but clipped to a rounded rectangle"""
    x, y, width, height = box
    gradient = linear_gradient((width, height), (0, 0), (width, height), *colors)
    mask = Image.new('L', (width, height), 0)
    ImageDraw.Draw(mask).polygon(rounded_rect_points(0, 0, width, height, radius), fill=255)
    canvas.paste(gradient, (x, y), mask)


def draw_badge(canvas, draw, box, colors, radius, label, value, label_font, value_font,
               label_y, value_y, fill='#ffffff'):
    """Rounded gradient box with a centered label and value.

    label_y/value_y are baseline offsets from the top of the box.
    """
    x, y, width, _ = box
    fill_rounded_gradient(canvas, box, colors, radius)
    center_x = x + width / 2
    draw.text((center_x, y + label_y), label, font=label_font, fill=fill, anchor='ms')
    draw.text((center_x, y + value_y), value, font=value_font, fill=fill, anchor='ms')
