[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chemengine"
version = "0.1.0"
description = "Engine building blocks: a render graph, frustum culling, indirect draw lists, packed meshes, BSP dungeons, scene hierarchy markers and window settings."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "game-engine",
    "render-graph",
    "frustum-culling",
    "indirect-drawing",
    "procedural-generation",
    "dungeon",
    "bsp",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["chemengine"]

[tool.hatch.build.targets.sdist]
include = ["chemengine", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
