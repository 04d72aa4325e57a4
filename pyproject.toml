[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "specscope"
version = "0.5.2"
description = "Signal analysis building blocks: spectrogram tiles, window functions, tuning, thresholding and bit decoding"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "sdr",
    "spectrogram",
    "signal-processing",
    "fft",
    "iq",
    "window-function",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Telecommunications Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["specscope"]

[tool.pytest.ini_options]
addopts = "-ra"
