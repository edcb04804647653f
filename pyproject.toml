[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "accessrules"
version = "0.1.0"
description = "Role inheritance management and matching operators for access-control rules"
requires-python = ">=3.10"
dependencies = []
keywords = ["rbac", "access-control", "authorization", "roles", "permissions"]
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
    "Topic :: Security",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["accessrules"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
