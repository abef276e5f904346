[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rgis"
version = "0.1.0"
description = "Geospatial data viewer core: feature collections, file loading, geometry operations, layers and camera control"
requires-python = ">=3.10"
dependencies = [
    "shapely",
    "requests",
]
keywords = ["gis", "geospatial", "geojson", "gpx", "wkt", "shapefile", "geometry", "map"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["rgis"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
