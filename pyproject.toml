[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gallerypi"
version = "0.1.0"
description = "Photo and video gallery toolkit: media indexing by month, gallery grid model, on-demand thumbnails and mpv playback"
requires-python = ">=3.11"
keywords = ["gallery", "photos", "thumbnails", "exif", "mpv", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
]
dependencies = [
    "pillow",
    "platformdirs",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gallerypi = "gallerypi.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gallerypi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
