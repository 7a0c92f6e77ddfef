[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "peerchat"
version = "0.1.0"
description = "Two-peer terminal chat over WebSockets with a shared-token handshake"
requires-python = ">=3.10"
dependencies = [
    "websockets",
]
keywords = ["chat", "websocket", "terminal", "peer-to-peer", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
peerchat = "peerchat.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["peerchat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
