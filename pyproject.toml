[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gnostic"
version = "0.1.0"
description = "JSON Schema reading and Protocol Buffer model generation for OpenAPI descriptions"
requires-python = ">=3.10"
keywords = ["openapi", "json-schema", "protocol-buffers", "code-generation", "yaml"]
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
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gnostic-generate = "gnostic.generator.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gnostic"]

[tool.pytest.ini_options]
addopts = "-ra"
