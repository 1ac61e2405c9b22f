[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coroweave"
version = "0.1.0"
description = "Coroutine primitives without an event loop: tasks, generators, when_all, thread pools, semaphores, mutexes, ring buffers and small networking helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["coroutine", "async", "thread-pool", "semaphore", "mutex", "ring-buffer", "when-all"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["coroweave"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
