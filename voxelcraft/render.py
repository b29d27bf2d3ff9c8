"""Shader loading, atlas upload and drawing of an uploaded mesh."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike
from typing import Any

import numpy as np

from voxelcraft.atlas import Atlas
from voxelcraft.texture import compose_atlas

TEXTURE_MAX_ANISOTROPY_EXT = 0x84FE
MAX_TEXTURE_MAX_ANISOTROPY_EXT = 0x84FF

_FLOAT_SIZE = 4
_STRIDE = 8 * _FLOAT_SIZE
# Vertex attributes: (location, component count, offset in floats).
_ATTRIBUTES = ((0, 3, 0), (1, 2, 3), (2, 3, 5))

# OpenGL shader type enums and the stage names the shader module expects.
_SHADER_STAGES = {
    0x8B31: "vertex",
    0x8B30: "fragment",
    0x8DD9: "geometry",
    0x91B9: "compute",
    0x8E88: "tesscontrol",
    0x8E87: "tessevaluation",
}


class ShaderError(RuntimeError):
    """A shader could not be read, compiled or linked."""


class _PygletGL:
    """The OpenGL functions, with pointer-taking calls wrapped in plain Python."""

    def __init__(self) -> None:
        from pyglet import gl

        self._gl = gl

    def __getattr__(self, name: str) -> Any:
        if name == "_gl":
            raise AttributeError(name)
        return getattr(self._gl, name)

    def _generate(self, function: Any) -> int:
        ids = (self._gl.GLuint * 1)()
        function(1, ids)
        return int(ids[0])

    def gen_vertex_array(self) -> int:
        return self._generate(self._gl.glGenVertexArrays)

    def gen_buffer(self) -> int:
        return self._generate(self._gl.glGenBuffers)

    def gen_texture(self) -> int:
        return self._generate(self._gl.glGenTextures)

    def buffer_data(self, target: int, data: bytes, usage: int) -> None:
        raw = (self._gl.GLubyte * len(data)).from_buffer_copy(data)
        self._gl.glBufferData(target, len(data), raw, usage)

    def vertex_attrib_pointer(self, location: int, size: int, stride: int, offset: int) -> None:
        gl = self._gl
        gl.glVertexAttribPointer(location, size, gl.GL_FLOAT, gl.GL_FALSE, stride, offset)

    def uniform_location(self, program: int, name: str) -> int:
        encoded = name.encode() + b"\0"
        raw = (self._gl.GLchar * len(encoded)).from_buffer_copy(encoded)
        return int(self._gl.glGetUniformLocation(program, raw))

    def uniform_matrix4(self, location: int, values: Sequence[float]) -> None:
        raw = (self._gl.GLfloat * 16)(*values)
        self._gl.glUniformMatrix4fv(location, 1, self._gl.GL_FALSE, raw)

    def tex_image_rgba(self, width: int, height: int, pixels: bytes) -> None:
        gl = self._gl
        raw = (gl.GLubyte * len(pixels)).from_buffer_copy(pixels)
        gl.glTexImage2D(
            gl.GL_TEXTURE_2D, 0, gl.GL_RGBA8, width, height, 0,
            gl.GL_RGBA, gl.GL_UNSIGNED_BYTE, raw,
        )

    def max_anisotropy(self) -> float:
        out = (self._gl.GLfloat * 1)()
        try:
            self._gl.glGetFloatv(MAX_TEXTURE_MAX_ANISOTROPY_EXT, out)
        except self._gl.GLException:
            return 0.0
        return float(out[0])


def _stage_name(shader_type: int | str) -> str:
    if isinstance(shader_type, str):
        return shader_type
    try:
        return _SHADER_STAGES[int(shader_type)]
    except KeyError:
        raise ShaderError(f"unknown shader type: {shader_type:#x}") from None


def load_shader(path: str | PathLike[str], shader_type: int | str) -> Any:
    """Read and compile a shader of the given type; return the compiled shader."""
    try:
        with open(path, encoding="utf-8") as handle:
            source = handle.read()
    except OSError as exc:
        raise ShaderError(f"failed to read shader: {exc}") from exc

    stage = _stage_name(shader_type)
    from pyglet.graphics.shader import Shader, ShaderException

    try:
        return Shader(source, stage)
    except ShaderException as exc:
        raise ShaderError(f"shader compile error: {exc}") from exc


def link_program(vert: Any, frag: Any) -> Any:
    """Link two compiled shaders into a program; its GL handle is ``.id``."""
    from pyglet.graphics.shader import ShaderException, ShaderProgram

    try:
        return ShaderProgram(vert, frag)
    except ShaderException as exc:
        raise ShaderError(f"failed to link program: {exc}") from exc


def load_atlas(paths: Sequence[str | PathLike[str]]) -> Atlas:
    """Pack the images into an atlas, upload it as a texture and describe it."""
    image, columns, rows = compose_atlas(paths)
    gl = _PygletGL()

    texture = gl.gen_texture()
    gl.glBindTexture(gl.GL_TEXTURE_2D, texture)
    gl.tex_image_rgba(image.width, image.height, image.tobytes("raw", "RGBA"))

    gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
    # Clamping keeps neighbouring tiles from bleeding into each other.
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE)

    max_aniso = gl.max_anisotropy()
    if max_aniso > 0:
        gl.glTexParameterf(gl.GL_TEXTURE_2D, TEXTURE_MAX_ANISOTROPY_EXT, max_aniso)
        print(f"Anisotropic filtering enabled: {max_aniso:.1f}x")
    else:
        print("Anisotropic filtering not supported.")

    return Atlas(
        image_id=texture,
        columns=columns,
        rows=rows,
        image_width=image.width // columns,
        image_height=image.height // rows,
    )


class Renderer:
    """Draws one uploaded mesh with a shader program and the atlas texture."""

    def __init__(self, window: Any, program: Any, atlas: Atlas, gl: Any = None) -> None:
        self.window = window
        # Keep the program object alive; GL calls need only its handle.
        self._program_owner = program
        self.program = getattr(program, "id", program)
        self.atlas = atlas
        self.gl = gl if gl is not None else _PygletGL()
        self.vao = 0
        self.vbo = 0
        self.ebo = 0

        gl = self.gl
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glDepthFunc(gl.GL_LEQUAL)
        gl.glEnable(gl.GL_CULL_FACE)
        gl.glCullFace(gl.GL_BACK)
        gl.glFrontFace(gl.GL_CCW)

    def upload_mesh(self, vertices: Sequence[float], indices: Sequence[int]) -> None:
        """Copy interleaved vertices and triangle indices to the GPU."""
        gl = self.gl
        self.vao = gl.gen_vertex_array()
        self.vbo = gl.gen_buffer()
        self.ebo = gl.gen_buffer()

        vertex_bytes = np.asarray(vertices, dtype=np.float32).tobytes()
        index_bytes = np.asarray(indices, dtype=np.uint32).tobytes()

        gl.glBindVertexArray(self.vao)
        gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self.vbo)
        gl.buffer_data(gl.GL_ARRAY_BUFFER, vertex_bytes, gl.GL_STATIC_DRAW)
        gl.glBindBuffer(gl.GL_ELEMENT_ARRAY_BUFFER, self.ebo)
        gl.buffer_data(gl.GL_ELEMENT_ARRAY_BUFFER, index_bytes, gl.GL_STATIC_DRAW)

        for location, size, offset in _ATTRIBUTES:
            gl.glEnableVertexAttribArray(location)
            gl.vertex_attrib_pointer(location, size, _STRIDE, offset * _FLOAT_SIZE)

        gl.glBindVertexArray(0)

    def render(self, indices_count: int, mvp: Any) -> None:
        """Clear the frame and draw the uploaded mesh with the given MVP matrix."""
        gl = self.gl
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        gl.glUseProgram(self.program)

        # OpenGL expects column-major storage.
        values = np.asarray(mvp, dtype=np.float32).T.ravel().tolist()
        gl.uniform_matrix4(gl.uniform_location(self.program, "uMVP"), values)
        gl.glUniform1i(gl.uniform_location(self.program, "uAtlas"), 0)

        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_2D, self.atlas.image_id)

        gl.glBindVertexArray(self.vao)
        gl.glDrawElements(gl.GL_TRIANGLES, indices_count, gl.GL_UNSIGNED_INT, None)
        gl.glBindVertexArray(0)