[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osdemos"
version = "0.1.0"
description = "Small runnable demonstrations of operating-system ideas: processes, scheduling, threads, locks, condition variables, semaphores, persistence and UDP messaging."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-systems",
    "education",
    "threads",
    "concurrency",
    "semaphores",
    "condition-variables",
    "scheduling",
    "fork",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
osdemos-lottery = "osdemos.lottery:main"
osdemos-pstack = "osdemos.pstack:main"
osdemos-processes = "osdemos.processes:main"
osdemos-intro = "osdemos.intro:main"
osdemos-udp-client = "osdemos.udp:client_main"
osdemos-udp-server = "osdemos.udp:server_main"
osdemos-threads = "osdemos.threads_api:main"
osdemos-thread-bugs = "osdemos.thread_bugs:main"
osdemos-cv = "osdemos.cv_demos:main"
osdemos-pc = "osdemos.boundedbuffer:main"
osdemos-dining = "osdemos.philosophers:main"
osdemos-sema = "osdemos.semaphores:main"

[tool.hatch.build.targets.wheel]
packages = ["osdemos"]

[tool.hatch.build.targets.sdist]
include = ["osdemos", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
