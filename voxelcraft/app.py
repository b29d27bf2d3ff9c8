"""Window, input handling and the main loop of the voxel viewer."""

from __future__ import annotations

import argparse
import math
from pathlib import Path

from voxelcraft.atlas import Atlas
from voxelcraft.block import BlockId
from voxelcraft.camera import Camera
from voxelcraft.chunk import DEFAULT_SURFACE_LEVEL, Chunk, ChunkMesh
from voxelcraft.matrix import perspective
from voxelcraft.render import Renderer, link_program, load_atlas, load_shader

WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 800
WINDOW_TITLE = "VoxelCraft"

# Must follow the order of voxelcraft.atlas.Texture.
TEXTURE_FILES = (
    "textures/grass_top.png",
    "textures/grass_side.png",
    "textures/dirt.png",
    "textures/stone.png",
    "textures/log_oak.png",
    "textures/log_oak_top.png",
)

FIELD_OF_VIEW = 60.0
NEAR_PLANE = 0.1
FAR_PLANE = 2000.0
START_POSITION = (0.0, 130.0, 0.0)


def build_world(atlas: Atlas) -> ChunkMesh:
    """Generate a flat chunk with one hole in its surface and mesh it."""
    chunk = Chunk()
    chunk.generate_flat()
    chunk.set_block(10, DEFAULT_SURFACE_LEVEL, 10, BlockId.AIR)
    return chunk.build_mesh(atlas)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="voxelcraft", description="Fly over a single voxel chunk."
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=Path("assets"),
        help="directory holding the shaders/ and textures/ folders",
    )
    args = parser.parse_args(argv)

    import pyglet
    from pyglet import gl
    from pyglet.window import key

    config = gl.Config(double_buffer=True, depth_size=24)
    window = pyglet.window.Window(
        WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True, config=config
    )

    vert = load_shader(args.assets / "shaders" / "cube.vert", gl.GL_VERTEX_SHADER)
    frag = load_shader(args.assets / "shaders" / "cube.frag", gl.GL_FRAGMENT_SHADER)
    program = link_program(vert, frag)

    atlas = load_atlas([args.assets / name for name in TEXTURE_FILES])

    mesh = build_world(atlas)
    print(
        f"Chunk mesh: {len(mesh.vertices) // 8} vertices, {len(mesh.indices)} indices"
    )

    renderer = Renderer(window, program, atlas)
    renderer.upload_mesh(mesh.vertices, mesh.indices)
    index_count = len(mesh.indices)

    camera = Camera(position=START_POSITION)
    window.set_exclusive_mouse(True)

    keys = key.KeyStateHandler()
    window.push_handlers(keys)
    # The camera expects absolute cursor positions with y growing downwards.
    cursor = [0.0, 0.0]

    @window.event
    def on_mouse_motion(x, y, dx, dy):
        cursor[0] += dx
        cursor[1] -= dy
        camera.process_mouse(cursor[0], cursor[1])

    @window.event
    def on_draw():
        width, height = window.get_framebuffer_size()
        aspect = width / height if height else 1.0
        projection = perspective(
            math.radians(FIELD_OF_VIEW), aspect, NEAR_PLANE, FAR_PLANE
        )
        renderer.render(index_count, projection @ camera.view_matrix())

    def update(dt: float) -> None:
        if keys[key.W]:
            camera.move_forward(dt)
        if keys[key.S]:
            camera.move_backward(dt)
        if keys[key.A]:
            camera.move_left(dt)
        if keys[key.D]:
            camera.move_right(dt)
        if keys[key.ESCAPE]:
            window.close()

    pyglet.clock.schedule(update)
    print("Ready!")
    pyglet.app.run()
    return 0