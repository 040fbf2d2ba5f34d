"""Watermark tile count and grid placement."""

from typing import List, Tuple

GRID_COLUMNS = 2


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero, so negative padding stays symmetric."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def compute_watermark_count(image_width: int) -> int:
    """
    Number of watermark tiles for a base image of the given width.

    Args:
        image_width: Width of the base image in pixels

    Returns:
        1 below 500px, 2 below 1000px, 5 otherwise
    """
    if image_width < 500:
        return 1
    if image_width < 1000:
        return 2
    return 5


def compute_grid_positions(
    image_width: int,
    image_height: int,
    tile_width: int,
    tile_height: int,
    count: int,
) -> List[Tuple[int, int]]:
    """
    Top-left offsets for ``count`` tiles laid out on a two-column grid.

    Rows are ``(count + 1) // 2``; padding is split evenly between and around
    the tiles. Positions come out row-major and stop after ``count``, so an odd
    count leaves the last grid cell empty.

    Padding is not clamped: when the tiles are wider or taller than the image
    the offsets go negative and tiles overlap the image edges.

    Args:
        image_width: Base image width
        image_height: Base image height
        tile_width: Watermark tile width
        tile_height: Watermark tile height
        count: Number of tiles to place

    Returns:
        List of (x, y) offsets, ``count`` long
    """
    if count <= 0:
        return []

    rows = (count + 1) // GRID_COLUMNS
    col_padding = _div_trunc(image_width - GRID_COLUMNS * tile_width, GRID_COLUMNS + 1)
    row_padding = _div_trunc(image_height - rows * tile_height, rows + 1)

    positions: List[Tuple[int, int]] = []
    for row in range(rows):
        for col in range(GRID_COLUMNS):
            if len(positions) >= count:
                return positions
            x = col_padding + col * (tile_width + col_padding)
            y = row_padding + row * (tile_height + row_padding)
            positions.append((x, y))

    return positions
