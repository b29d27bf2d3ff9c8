"""Texture atlas layout and the indices of the textures it holds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Texture(IntEnum):
    """Cell index of each texture in the atlas, in load order."""

    GRASS_TOP = 0
    GRASS_SIDE = 1
    DIRT = 2
    STONE = 3
    WOOD_SIDE = 4
    WOOD_END = 5


@dataclass(frozen=True)
class Atlas:
    """A grid of equally sized textures packed into one image."""

    image_id: int
    columns: int
    rows: int
    image_width: int
    image_height: int

    def uv_rect(self, index: int) -> tuple[float, float, float, float]:
        """Return the UV rectangle of a cell as (u0, v1, u1, v0).

        The vertical coordinates are swapped so that images stored top row
        first appear upright.
        """
        col = index % self.columns
        row = index // self.columns

        u0 = col / self.columns
        u1 = u0 + 1.0 / self.columns
        v0 = row / self.rows
        v1 = v0 + 1.0 / self.rows
        return u0, v1, u1, v0