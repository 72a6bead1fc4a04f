[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "countlink"
version = "0.5.0"
description = "Wi-Fi station, TCP client and counter tasks that stream a framed wrapping counter to a remote TCP host"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "client", "state-machine", "framing", "asyncio", "counter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
countlink = "countlink.app:main"

[tool.hatch.build.targets.wheel]
packages = ["countlink"]

[tool.pytest.ini_options]
addopts = "-ra"
