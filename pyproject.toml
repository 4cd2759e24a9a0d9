[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audiomix"
version = "0.1.0"
description = "Audio sample sources, format converters, a dynamic mixer, a playback queue and a WAV decoder"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "mixer", "resampling", "wav", "pcm", "sound"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["audiomix"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
