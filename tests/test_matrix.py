import math

import numpy as np
import pytest

from voxelcraft.matrix import look_at, normalize, perspective


def test_normalize_gives_unit_length():
    v = normalize((3.0, -4.0, 12.0))
    assert np.linalg.norm(v) == pytest.approx(1.0)
    assert v[0] / v[1] == pytest.approx(3.0 / -4.0)


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        normalize((0.0, 0.0, 0.0))


def test_look_at_maps_eye_to_origin():
    eye = np.array([1.0, 130.0, -7.0])
    m = look_at(eye, eye + [0.0, 0.0, -1.0], [0.0, 1.0, 0.0])
    assert np.allclose(m @ np.append(eye, 1.0), [0.0, 0.0, 0.0, 1.0])


def test_look_at_target_lies_on_negative_z():
    eye = np.array([2.0, 3.0, 4.0])
    center = np.array([5.0, 1.0, -2.0])
    m = look_at(eye, center, [0.0, 1.0, 0.0])
    transformed = m @ np.append(center, 1.0)
    distance = np.linalg.norm(center - eye)
    assert np.allclose(transformed[:3], [0.0, 0.0, -distance])


def test_look_at_rotation_is_orthonormal():
    m = look_at([0.0, 0.0, 0.0], [1.0, 2.0, 3.0], [0.0, 1.0, 0.0])
    rotation = m[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.identity(3))


def test_perspective_maps_near_and_far_planes():
    near, far = 0.1, 2000.0
    m = perspective(math.radians(60), 1200 / 800, near, far)
    near_clip = m @ [0.0, 0.0, -near, 1.0]
    far_clip = m @ [0.0, 0.0, -far, 1.0]
    assert near_clip[2] / near_clip[3] == pytest.approx(-1.0)
    assert far_clip[2] / far_clip[3] == pytest.approx(1.0)


def test_perspective_edge_of_view_maps_to_unit():
    fovy = math.radians(60)
    aspect = 1.5
    m = perspective(fovy, aspect, 0.1, 100.0)
    depth = 10.0
    half_height = depth * math.tan(fovy / 2)
    clip = m @ [half_height * aspect, half_height, -depth, 1.0]
    assert clip[0] / clip[3] == pytest.approx(1.0)
    assert clip[1] / clip[3] == pytest.approx(1.0)