[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eipscan"
version = "1.1.0"
description = "EtherNet/IP encapsulation, common packet format and socket helpers for talking to industrial devices"
requires-python = ">=3.10"
dependencies = []
keywords = ["ethernet/ip", "cip", "industrial", "plc", "fieldbus", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["eipscan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
