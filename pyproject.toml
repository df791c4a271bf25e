[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qgpnet"
version = "0.1.0"
description = "Small dense and 3D convolutional neural networks for telling quark-gluon plasma events from ordinary ones"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "neural-network",
    "perceptron",
    "convolution",
    "quark-gluon-plasma",
    "physics",
    "machine-learning",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
qgpnet-cnn = "qgpnet.cnn:main"
qgpnet-app = "qgpnet.app:main"

[tool.hatch.build.targets.wheel]
packages = ["qgpnet"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
