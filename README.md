# voxelcraft

A small voxel world viewer. It builds a flat terrain chunk (stone, a layer
of dirt and a grass surface, with one block missing from the surface),
turns the block faces that touch air into a single mesh, packs the block
textures into one atlas image and lets you fly around the result with a
first-person camera in a pyglet window.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
voxelcraft
```

By default the viewer reads its shaders and textures from `assets/` in the
working directory; another directory can be given with `--assets`:

```
voxelcraft --assets path/to/assets
```

The assets directory must hold:

```
shaders/cube.vert
shaders/cube.frag
textures/grass_top.png
textures/grass_side.png
textures/dirt.png
textures/stone.png
textures/log_oak.png
textures/log_oak_top.png
```

The textures are packed in this order, which matches the cell indices of
`voxelcraft.atlas.Texture`. The first image sets the cell size. On start-up
the viewer prints the size of the chunk mesh and then `Ready!`.

The vertex shader receives position at location 0, atlas coordinates at
location 1 and tint at location 2, and the uniforms `uMVP` (the
model-view-projection matrix) and `uAtlas` (texture unit 0).

Controls:

- `W` / `S`: move forward / backward along the view direction
- `A` / `D`: strafe left / right
- mouse: look around (pitch is clamped to ±89°)
- `Escape`: close the window

## Using the library

The meshing and camera code does not need a window and can be used on its own:

```python
from voxelcraft.atlas import Atlas
from voxelcraft.block import BlockId
from voxelcraft.chunk import Chunk

atlas = Atlas(image_id=0, columns=3, rows=2, image_width=16, image_height=16)

chunk = Chunk()
chunk.generate_flat()
chunk.set_block(10, 64, 10, BlockId.AIR)

mesh = chunk.build_mesh(atlas)
print(len(mesh.vertices) // 8, "vertices,", len(mesh.indices), "indices")
```

`voxelcraft.app.build_world(atlas)` does exactly this and returns the mesh.

Every vertex has eight floats: position (x, y, z), atlas coordinates
(u, v) and an RGB tint. Each visible face contributes four vertices and
six indices (two counter-clockwise triangles). Faces are emitted in x, y,
z order of their blocks, and per block in the order front (+Z), back (-Z),
top (+Y), bottom (-Y), right (+X), left (-X).

A chunk is 32 × 128 × 32 blocks. `set_block` ignores coordinates outside
it, `get_block` and `is_air` treat them as air, and `fill` sets every cell.

Other entry points:

- `voxelcraft.atlas.Atlas.uv_rect(index)` gives the texture coordinates of
  an atlas cell as `(u0, v1, u1, v0)`.
- `voxelcraft.block.build_cube_mesh` and `make_face_mesh` build the mesh of a
  single block or a single face; `REGISTRY` maps block ids to the `GRASS`,
  `DIRT` and `STONE` block types.
- `voxelcraft.camera.Camera` holds position, yaw and pitch (in degrees),
  moves with `move_forward`, `move_backward`, `move_left` and `move_right`,
  turns with `process_mouse`, and gives a view matrix with `view_matrix()`.
- `voxelcraft.matrix` provides `look_at`, `perspective` (field of view in
  radians) and `normalize`, working on numpy arrays.
- `voxelcraft.texture.compose_atlas` packs a list of image files into a
  near-square grid image and returns it with its column and row counts;
  `atlas_grid` gives the grid size for a number of textures (for example
  6 textures give 3 columns by 2 rows).
- `voxelcraft.render` loads and links shaders (`load_shader`,
  `link_program`, raising `ShaderError` on failure), uploads an atlas as an
  OpenGL texture (`load_atlas`) and draws an uploaded mesh (`Renderer`).
  These need a current OpenGL context.

## Limitations

The viewer shows one fixed chunk. Blocks cannot be placed or removed while
it runs, there is no terrain generation beyond the flat layers, no
collision or gravity for the camera, and the world is not saved or loaded.