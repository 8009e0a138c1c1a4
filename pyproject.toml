[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "effilog"
version = "0.1.0"
description = "Logging parts: loggers and sinks, task runners, chunked compression, ECDH/AES encryption, a memory-mapped buffer and a pattern-based record formatter"
requires-python = ">=3.10"
keywords = ["logging", "logger", "mmap", "zstd", "zlib", "aes", "ecdh", "thread pool"]
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
    "Topic :: System :: Logging",
]
dependencies = [
    "zstandard",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["effilog"]

[tool.hatch.build.targets.sdist]
include = ["effilog", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
