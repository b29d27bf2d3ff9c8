"""Voxel world viewer: chunk meshing, texture atlases and a fly-through camera."""

__version__ = "0.1.0"