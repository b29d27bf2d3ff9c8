"""A fixed-size column of blocks and the mesh of its visible faces."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from voxelcraft.atlas import Atlas
from voxelcraft.block import REGISTRY, BlockId, BlockType, make_face_mesh

CHUNK_WIDTH = 32
CHUNK_HEIGHT = 128
CHUNK_DEPTH = CHUNK_WIDTH

DEFAULT_SURFACE_LEVEL = 64
DIRT_LAYER_DEPTH = 4

# Neighbour offsets in face order: front, back, top, bottom, right, left.
_NEIGHBOR_OFFSETS = (
    (0, 0, 1),
    (0, 0, -1),
    (0, 1, 0),
    (0, -1, 0),
    (1, 0, 0),
    (-1, 0, 0),
)

_UNKNOWN_BLOCK = BlockType(
    name="",
    face_textures=(0,) * 6,
    face_tints=((0.0, 0.0, 0.0),) * 6,
)


def _in_bounds(x: int, y: int, z: int) -> bool:
    return 0 <= x < CHUNK_WIDTH and 0 <= y < CHUNK_HEIGHT and 0 <= z < CHUNK_DEPTH


@dataclass
class ChunkMesh:
    """Interleaved vertex data and triangle indices of a chunk."""

    vertices: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


@dataclass
class Chunk:
    """Block ids indexed as blocks[x, y, z]; everything starts as air."""

    blocks: np.ndarray = field(
        default_factory=lambda: np.zeros(
            (CHUNK_WIDTH, CHUNK_HEIGHT, CHUNK_DEPTH), dtype=np.uint8
        )
    )
    location: tuple[int, int, int] = (0, 0, 0)

    def set_block(self, x: int, y: int, z: int, block_id: int) -> None:
        """Store a block id; coordinates outside the chunk are ignored."""
        if _in_bounds(x, y, z):
            self.blocks[x, y, z] = block_id

    def get_block(self, x: int, y: int, z: int) -> int:
        """Return the block id, or air for coordinates outside the chunk."""
        if not _in_bounds(x, y, z):
            return int(BlockId.AIR)
        return int(self.blocks[x, y, z])

    def fill(self, block_id: int) -> None:
        self.blocks[...] = block_id

    def generate_flat(self) -> None:
        """Lay stone, then a dirt layer, then grass at the surface level."""
        dirt_start = DEFAULT_SURFACE_LEVEL - DIRT_LAYER_DEPTH
        self.blocks[:, :dirt_start, :] = BlockId.STONE
        self.blocks[:, dirt_start:DEFAULT_SURFACE_LEVEL, :] = BlockId.DIRT
        self.blocks[:, DEFAULT_SURFACE_LEVEL, :] = BlockId.GRASS

    def is_air(self, x: int, y: int, z: int) -> bool:
        """True for air cells and for anything outside the chunk."""
        if not _in_bounds(x, y, z):
            return True
        return int(self.blocks[x, y, z]) == BlockId.AIR

    def _exposed_faces(self) -> np.ndarray:
        solid = self.blocks != BlockId.AIR
        padded = np.pad(solid, 1, constant_values=False)
        w, h, d = solid.shape
        exposed = [
            solid & ~padded[1 + dx : 1 + dx + w, 1 + dy : 1 + dy + h, 1 + dz : 1 + dz + d]
            for dx, dy, dz in _NEIGHBOR_OFFSETS
        ]
        return np.stack(exposed, axis=-1)

    def build_mesh(self, atlas: Atlas) -> ChunkMesh:
        """Mesh every solid block face that touches air.

        Faces are emitted in x, y, z order, then front, back, top, bottom,
        right, left.
        """
        mesh = ChunkMesh()
        index_offset = 0
        for x, y, z, face in np.argwhere(self._exposed_faces()):
            block_type = REGISTRY.get(int(self.blocks[x, y, z]), _UNKNOWN_BLOCK)
            face_vertices, face_indices = make_face_mesh(
                atlas, block_type, int(face), int(x), int(y), int(z)
            )
            mesh.vertices.extend(face_vertices)
            mesh.indices.extend(index_offset + i for i in face_indices)
            index_offset += 4
        return mesh