[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sibox"
version = "1.0.0"
description = "Batched 2D rendering primitives: vectors, buffer layouts, textures, shaders, sprite sheets, cameras, viewports and quad batching."
requires-python = ">=3.10"
keywords = ["rendering", "graphics", "sprites", "batching", "camera", "2d", "shaders"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sibox"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
