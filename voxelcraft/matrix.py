"""Small vector and 4x4 matrix helpers for the camera and projection."""

from __future__ import annotations

import math

import numpy as np


def normalize(v) -> np.ndarray:
    """Return v scaled to unit length."""
    arr = np.asarray(v, dtype=float)
    length = float(np.linalg.norm(arr))
    if length == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return arr / length


def look_at(eye, center, up) -> np.ndarray:
    """Return a view matrix looking from eye towards center."""
    eye_v = np.asarray(eye, dtype=float)
    forward = normalize(np.asarray(center, dtype=float) - eye_v)
    side = normalize(np.cross(forward, np.asarray(up, dtype=float)))
    upward = np.cross(side, forward)

    m = np.identity(4)
    m[0, :3] = side
    m[1, :3] = upward
    m[2, :3] = -forward
    m[0, 3] = -float(np.dot(side, eye_v))
    m[1, 3] = -float(np.dot(upward, eye_v))
    m[2, 3] = float(np.dot(forward, eye_v))
    return m


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Return a perspective projection; fovy is in radians."""
    f = 1.0 / math.tan(fovy / 2.0)
    nmf = near - far
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (near + far) / nmf
    m[2, 3] = 2.0 * far * near / nmf
    m[3, 2] = -1.0
    return m