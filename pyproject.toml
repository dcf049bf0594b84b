[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polytrack"
version = "0.1.0"
description = "Building blocks for colour-based object tracking: image viewport logic, tracking overlays, colour projection maps, camera follow control and colour sampling."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["tracking", "image processing", "video", "overlay", "colour sampling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["polytrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
