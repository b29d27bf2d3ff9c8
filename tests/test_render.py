import functools

import numpy as np
import pytest

from voxelcraft.atlas import Atlas
from voxelcraft.block import STONE, make_face_mesh
from voxelcraft.render import Renderer, ShaderError, load_atlas, load_shader

ATLAS = Atlas(image_id=42, columns=3, rows=2, image_width=16, image_height=16)
UNIFORMS = {"uMVP": 7, "uAtlas": 8}


class FakeGL:
    """Records GL calls; constants evaluate to their own names."""

    GL_COLOR_BUFFER_BIT = 1
    GL_DEPTH_BUFFER_BIT = 2

    def __init__(self):
        self.calls = []
        self.buffers = {}
        self.matrix = None
        self._next_id = 0

    def __getattr__(self, name):
        if name.startswith("GL_"):
            return name
        if name.startswith("gl"):
            return functools.partial(self._record, name)
        raise AttributeError(name)

    def _record(self, name, *args):
        self.calls.append((name, args))

    def _new_id(self):
        self._next_id += 1
        return self._next_id

    def gen_vertex_array(self):
        return self._new_id()

    def gen_buffer(self):
        return self._new_id()

    def gen_texture(self):
        return self._new_id()

    def buffer_data(self, target, data, usage):
        self._record("buffer_data", target, len(data), usage)
        self.buffers[target] = bytes(data)

    def vertex_attrib_pointer(self, location, size, stride, offset):
        self._record("vertex_attrib_pointer", location, size, stride, offset)

    def uniform_location(self, program, name):
        return UNIFORMS[name]

    def uniform_matrix4(self, location, values):
        self._record("uniform_matrix4", location)
        self.matrix = np.array(values, dtype=np.float64)

    def named(self, name):
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def fake_gl():
    return FakeGL()


def test_renderer_sets_depth_and_culling(fake_gl):
    Renderer(None, 3, ATLAS, gl=fake_gl)
    assert ("GL_DEPTH_TEST",) in fake_gl.named("glEnable")
    assert ("GL_CULL_FACE",) in fake_gl.named("glEnable")
    assert fake_gl.named("glDepthFunc") == [("GL_LEQUAL",)]
    assert fake_gl.named("glCullFace") == [("GL_BACK",)]
    assert fake_gl.named("glFrontFace") == [("GL_CCW",)]


def test_upload_mesh_copies_vertices_and_indices(fake_gl):
    vertices, indices = make_face_mesh(ATLAS, STONE, 0, 1, 2, 3)
    renderer = Renderer(None, 3, ATLAS, gl=fake_gl)
    renderer.upload_mesh(vertices, indices)

    uploaded_vertices = np.frombuffer(fake_gl.buffers["GL_ARRAY_BUFFER"], dtype=np.float32)
    uploaded_indices = np.frombuffer(
        fake_gl.buffers["GL_ELEMENT_ARRAY_BUFFER"], dtype=np.uint32
    )
    np.testing.assert_allclose(uploaded_vertices, np.asarray(vertices, dtype=np.float32))
    assert uploaded_indices.tolist() == indices
    assert len({renderer.vao, renderer.vbo, renderer.ebo}) == 3
    assert min(renderer.vao, renderer.vbo, renderer.ebo) > 0


def test_upload_mesh_sizes_match_data(fake_gl):
    vertices, indices = make_face_mesh(ATLAS, STONE, 2, 0, 0, 0)
    Renderer(None, 3, ATLAS, gl=fake_gl).upload_mesh(vertices, indices)
    sizes = {args[0]: args[1] for args in fake_gl.named("buffer_data")}
    assert sizes["GL_ARRAY_BUFFER"] == len(vertices) * 4
    assert sizes["GL_ELEMENT_ARRAY_BUFFER"] == len(indices) * 4


def test_upload_mesh_vertex_layout(fake_gl):
    vertices, indices = make_face_mesh(ATLAS, STONE, 0, 0, 0, 0)
    Renderer(None, 3, ATLAS, gl=fake_gl).upload_mesh(vertices, indices)
    layout = fake_gl.named("vertex_attrib_pointer")
    assert layout == [(0, 3, 8 * 4, 0), (1, 2, 8 * 4, 3 * 4), (2, 3, 8 * 4, 5 * 4)]
    assert [args[0] for args in fake_gl.named("glEnableVertexAttribArray")] == [0, 1, 2]


def test_render_draws_requested_index_count(fake_gl):
    renderer = Renderer(None, 3, ATLAS, gl=fake_gl)
    renderer.upload_mesh([0.0] * 32, [0, 1, 2, 2, 3, 0])
    renderer.render(6, np.identity(4))
    assert fake_gl.named("glDrawElements") == [
        ("GL_TRIANGLES", 6, "GL_UNSIGNED_INT", None)
    ]
    assert fake_gl.named("glUseProgram") == [(3,)]
    assert fake_gl.named("glBindTexture") == [("GL_TEXTURE_2D", ATLAS.image_id)]
    assert fake_gl.named("glUniform1i") == [(UNIFORMS["uAtlas"], 0)]


def test_render_sends_matrix_column_major(fake_gl):
    mvp = np.identity(4)
    mvp[0, 3] = 5.0
    mvp[1, 3] = -2.0
    Renderer(None, 3, ATLAS, gl=fake_gl).render(0, mvp)
    assert fake_gl.named("uniform_matrix4")[0][0] == UNIFORMS["uMVP"]
    assert fake_gl.matrix[12] == pytest.approx(5.0)
    assert fake_gl.matrix[13] == pytest.approx(-2.0)
    assert fake_gl.matrix[3] == pytest.approx(0.0)
    np.testing.assert_allclose(fake_gl.matrix.reshape(4, 4).T, mvp)


def test_load_shader_missing_file(tmp_path):
    with pytest.raises(ShaderError, match="failed to read shader"):
        load_shader(tmp_path / "missing.vert", 0)


def test_load_atlas_without_paths():
    with pytest.raises(ValueError):
        load_atlas([])