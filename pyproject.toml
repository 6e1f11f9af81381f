[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meshworks"
version = "0.1.0"
description = "Wavefront OBJ/MTL loading, a binary mesh cache, quadric mesh simplification, ray picking, scene components and split-screen viewport layout"
requires-python = ">=3.10"
dependencies = []
keywords = ["obj", "mtl", "mesh", "3d", "ray-picking", "simplification", "quadric", "viewport"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["meshworks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
