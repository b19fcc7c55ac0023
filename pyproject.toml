[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quadplay"
version = "0.1.0"
description = "Headless game simulations: tile-based platformer physics, particle emitters and small classic games"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "physics", "platformer", "particles", "simulation", "life", "snake", "arkanoid", "asteroids"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["quadplay"]

[tool.pytest.ini_options]
addopts = "-ra"
