[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "modindex"
version = "0.1.0"
description = "Core logic for a mod hosting backend: project search, search documents, version listing and editing checks, modpack dependencies and release webhooks."
requires-python = ">=3.10"
keywords = ["mods", "search", "meilisearch", "versions", "webhook", "validation"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Typing :: Typed",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["modindex"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
