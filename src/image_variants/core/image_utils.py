"""Image decoding, resizing and watermark compositing.

Every function here works on in-memory Pillow images and performs no I/O.
"""

import base64
import binascii
import io
from typing import Tuple

import numpy as np
from PIL import Image

from .error_handling import translate_decode_errors
from .exceptions import DecodeError
from .geometry import compute_grid_positions, compute_watermark_count

DATA_URL_PREFIX = "data:image/"
CONTENT_TYPES = {"JPEG": "image/jpeg", "PNG": "image/png"}


def decode_base64_image(payload: str) -> bytes:
    """
    Decode a base64 image payload, with or without a data URL prefix.

    Args:
        payload: Base64 text, optionally prefixed with ``data:image/...,``

    Returns:
        Raw image bytes

    Raises:
        DecodeError: If the payload is not valid base64
    """
    data = "".join(payload.split())
    if data.startswith(DATA_URL_PREFIX):
        comma_index = data.find(",")
        if comma_index != -1:
            data = data[comma_index + 1 :]

    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Unable to decode Base64 string: {exc}") from exc

    if not decoded:
        raise DecodeError("Unable to decode Base64 string: empty payload")
    return decoded


@translate_decode_errors
def decode_image(image_bytes: bytes) -> Image.Image:
    """
    Decode image bytes into a fully loaded Pillow image.

    Raises:
        DecodeError: If the bytes are not a supported image format
    """
    image = Image.open(io.BytesIO(image_bytes))
    image.load()
    return image


def encode_image(image: Image.Image, format_type: str = "JPEG", quality: int = 75) -> bytes:
    """
    Encode an image as JPEG or PNG bytes.

    JPEG output is flattened to RGB since the format has no alpha channel.
    """
    output_stream = io.BytesIO()
    if format_type == "JPEG":
        if image.mode != "RGB":
            image = image.convert("RGB")
        image.save(output_stream, format="JPEG", quality=quality)
    else:
        image.save(output_stream, format=format_type)
    return output_stream.getvalue()


def content_type_for(format_type: str) -> str:
    return CONTENT_TYPES.get(format_type.upper(), "application/octet-stream")


def scaled_size(size: Tuple[int, int], target_width: int) -> Tuple[int, int]:
    """Size with the given width and the height that keeps the aspect ratio."""
    width, height = size
    if width <= 0 or height <= 0:
        raise DecodeError(f"Image has invalid dimensions {width}x{height}")
    new_height = max(1, int(round(height * target_width / width)))
    return max(1, target_width), new_height


def resize_to_width(image: Image.Image, target_width: int) -> Image.Image:
    """
    Resize an image to ``target_width`` with Lanczos resampling.

    The height is derived from the source aspect ratio. Images smaller than the
    target are scaled up.
    """
    return image.resize(scaled_size(image.size, target_width), Image.LANCZOS)


def apply_transparency(image: Image.Image, alpha: float) -> Image.Image:
    """
    Return a copy of ``image`` with a uniform alpha on every visible pixel.

    Pixels with non-zero source alpha keep their RGB values and get alpha
    ``round(alpha * 255)``. Fully transparent pixels stay (0, 0, 0, 0).
    """
    source = np.asarray(image.convert("RGBA"))
    output = np.zeros_like(source)

    visible = source[..., 3] > 0
    output[visible, :3] = source[visible, :3]
    output[visible, 3] = int(round(alpha * 255))

    return Image.fromarray(output)


def _composite_tile(canvas: Image.Image, tile: Image.Image, x: int, y: int) -> None:
    # Clip to the canvas: offsets may be negative or overhang the far edges.
    left, top = max(x, 0), max(y, 0)
    right = min(x + tile.width, canvas.width)
    bottom = min(y + tile.height, canvas.height)
    if right <= left or bottom <= top:
        return

    piece = tile.crop((left - x, top - y, right - x, bottom - y))
    canvas.alpha_composite(piece, dest=(left, top))


def add_watermark(
    base_image: Image.Image,
    watermark_image: Image.Image,
    alpha: float = 0.7,
    width_fraction: float = 0.2,
) -> Image.Image:
    """
    Tile a semi-transparent watermark over a base image.

    Args:
        base_image: Image to watermark
        watermark_image: Watermark artwork, usually a PNG with transparency
        alpha: Opacity given to the visible watermark pixels
        width_fraction: Watermark width relative to the base width

    Returns:
        New RGBA image with the base image's size
    """
    image_width, image_height = base_image.size
    count = compute_watermark_count(image_width)

    tile_width = max(1, int(image_width * width_fraction))
    tile = resize_to_width(watermark_image.convert("RGBA"), tile_width)
    tile = apply_transparency(tile, alpha)

    canvas = base_image.convert("RGBA").copy()

    positions = compute_grid_positions(
        image_width, image_height, tile.width, tile.height, count
    )
    for x, y in positions:
        _composite_tile(canvas, tile, x, y)

    return canvas
