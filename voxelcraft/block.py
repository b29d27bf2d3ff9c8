"""Block types and the construction of cube and face meshes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from voxelcraft.atlas import Atlas, Texture

FLOATS_PER_VERTEX = 8
"""Vertex layout: position (3), uv (2), tint (3)."""

Vec3 = tuple[float, float, float]


class BlockId(IntEnum):
    """Identifiers stored in chunk cells."""

    AIR = 0
    GRASS = 1
    DIRT = 2
    STONE = 3


@dataclass(frozen=True)
class BlockType:
    """Appearance of a block: a texture and a tint for each face."""

    name: str
    face_textures: tuple[int, int, int, int, int, int]
    face_tints: tuple[Vec3, Vec3, Vec3, Vec3, Vec3, Vec3]
    base_position: Vec3 = (0.0, 0.0, 0.0)


@dataclass
class CubeMesh:
    """Vertices and indices of a whole cube, with each face's index range."""

    vertices: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    face_ranges: list[tuple[int, int]] = field(default_factory=list)


# Faces in the order front (+Z), back (-Z), top (+Y), bottom (-Y),
# right (+X), left (-X); corners counter-clockwise seen from outside.
CUBE_FACES: tuple[tuple[Vec3, Vec3, Vec3, Vec3], ...] = (
    ((-0.5, -0.5, 0.5), (0.5, -0.5, 0.5), (0.5, 0.5, 0.5), (-0.5, 0.5, 0.5)),
    ((0.5, -0.5, -0.5), (-0.5, -0.5, -0.5), (-0.5, 0.5, -0.5), (0.5, 0.5, -0.5)),
    ((-0.5, 0.5, 0.5), (0.5, 0.5, 0.5), (0.5, 0.5, -0.5), (-0.5, 0.5, -0.5)),
    ((-0.5, -0.5, -0.5), (0.5, -0.5, -0.5), (0.5, -0.5, 0.5), (-0.5, -0.5, 0.5)),
    ((0.5, -0.5, 0.5), (0.5, -0.5, -0.5), (0.5, 0.5, -0.5), (0.5, 0.5, 0.5)),
    ((-0.5, -0.5, -0.5), (-0.5, -0.5, 0.5), (-0.5, 0.5, 0.5), (-0.5, 0.5, -0.5)),
)

FACE_INDICES: tuple[int, ...] = (0, 1, 2, 2, 3, 0)

_WHITE: Vec3 = (1.0, 1.0, 1.0)

DIRT = BlockType(
    name="dirt",
    face_textures=(Texture.DIRT,) * 6,
    face_tints=(_WHITE,) * 6,
)

GRASS = BlockType(
    name="grass",
    face_textures=(
        Texture.GRASS_SIDE,
        Texture.GRASS_SIDE,
        Texture.GRASS_TOP,
        Texture.DIRT,
        Texture.GRASS_SIDE,
        Texture.GRASS_SIDE,
    ),
    face_tints=(_WHITE, _WHITE, (0.486, 0.741, 0.42), _WHITE, _WHITE, _WHITE),
)

STONE = BlockType(
    name="stone",
    face_textures=(Texture.STONE,) * 6,
    face_tints=(_WHITE,) * 6,
)

REGISTRY: dict[int, BlockType] = {
    BlockId.GRASS: GRASS,
    BlockId.DIRT: DIRT,
    BlockId.STONE: STONE,
}


def _face_vertices(
    atlas: Atlas, block_type: BlockType, face_index: int, offset: Vec3
) -> list[float]:
    tint = block_type.face_tints[face_index]
    u0, v0, u1, v1 = atlas.uv_rect(block_type.face_textures[face_index])
    uvs = ((u0, v0), (u1, v0), (u1, v1), (u0, v1))
    ox, oy, oz = offset
    vertices: list[float] = []
    for (cx, cy, cz), (u, v) in zip(CUBE_FACES[face_index], uvs):
        vertices.extend((cx + ox, cy + oy, cz + oz, u, v, *tint))
    return vertices


def build_cube_mesh(atlas: Atlas, block_type: BlockType) -> CubeMesh:
    """Build all six faces of a cube placed at the block's base position."""
    mesh = CubeMesh()
    for face_index in range(len(CUBE_FACES)):
        base = len(mesh.vertices) // FLOATS_PER_VERTEX
        mesh.vertices.extend(
            _face_vertices(atlas, block_type, face_index, block_type.base_position)
        )
        mesh.face_ranges.append((len(mesh.indices), len(FACE_INDICES)))
        mesh.indices.extend(base + i for i in FACE_INDICES)
    return mesh


def make_face_mesh(
    atlas: Atlas, block_type: BlockType, face_index: int, bx: int, by: int, bz: int
) -> tuple[list[float], list[int]]:
    """Build one face of a cube centred at (bx, by, bz).

    Returns the four vertices and the six indices of its two triangles.
    """
    vertices = _face_vertices(
        atlas, block_type, face_index, (float(bx), float(by), float(bz))
    )
    return vertices, list(FACE_INDICES)