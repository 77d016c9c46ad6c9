[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flaretx"
version = "2.4.3"
description = "Parse Flare Network P-chain and C-chain atomic transactions and render them as review screens"
requires-python = ">=3.10"
keywords = ["flare", "transaction", "parser", "p-chain", "c-chain", "staking", "bech32"]
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
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
flaretx = "flaretx.parser:main"

[tool.hatch.build.targets.wheel]
packages = ["flaretx"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
