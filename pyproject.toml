[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plantgrow"
version = "0.1.0"
description = "Interactive 3D viewer that grows an L-system style plant over time"
requires-python = ">=3.10"
keywords = ["plant", "l-system", "opengl", "growth", "animation", "bmp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
plant-grow = "plantgrow.app:main"

[tool.hatch.build.targets.wheel]
packages = ["plantgrow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
