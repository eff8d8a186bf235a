"""Batched 2D rendering primitives: vectors, buffer layouts, textures, shaders, sprite sheets, cameras, viewports and quad batches."""

__version__ = "1.0.0"