[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "amclsym"
version = "0.1.0"
description = "Pure-Python symmetric primitives: AES with ECB/CBC/CFB/OFB/CTR modes, AES-GCM and bounded octet strings"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "aes",
    "gcm",
    "block-cipher",
    "authenticated-encryption",
    "octet",
    "base64",
    "hex",
]
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
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["amclsym"]

[tool.hatch.build.targets.sdist]
include = ["amclsym", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
