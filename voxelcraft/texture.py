"""Packing individual texture images into one atlas image."""

from __future__ import annotations

import math
from collections.abc import Sequence
from os import PathLike

from PIL import Image


def atlas_grid(count: int) -> tuple[int, int]:
    """Return (columns, rows) of a square-ish grid holding count cells.

    For example 6 textures give 3x2 and 10 textures give 4x3.
    """
    if count < 1:
        raise ValueError("an atlas needs at least one texture")
    columns = math.ceil(math.sqrt(count))
    rows = math.ceil(count / columns)
    return columns, rows


def _load_rgba(path: str | PathLike[str]) -> Image.Image:
    with Image.open(path) as img:
        rgba = img.convert("RGBA")
    print(f"Decoded {path}")
    return rgba


def compose_atlas(
    paths: Sequence[str | PathLike[str]],
) -> tuple[Image.Image, int, int]:
    """Copy each image into its own cell of one RGBA image.

    The first image fixes the cell size; cells are filled left to right,
    top to bottom.  Returns the atlas image with its column and row counts.
    """
    paths = list(paths)
    columns, rows = atlas_grid(len(paths))

    first = _load_rgba(paths[0])
    cell_width, cell_height = first.size
    atlas = Image.new("RGBA", (columns * cell_width, rows * cell_height))

    tiles = [first, *(_load_rgba(path) for path in paths[1:])]
    for i, tile in enumerate(tiles):
        x = (i % columns) * cell_width
        y = (i // columns) * cell_height
        atlas.paste(tile.crop((0, 0, cell_width, cell_height)), (x, y))
    return atlas, columns, rows