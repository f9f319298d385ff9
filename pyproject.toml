[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stereomap"
version = "0.1.0"
description = "Building blocks for stereo visual SLAM: time stamps, feature matching, measurements, motion model and frustum culling"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["slam", "stereo", "computer-vision", "feature-matching", "robotics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["stereomap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
