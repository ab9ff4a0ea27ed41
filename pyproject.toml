[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fontsite"
version = "0.1.0"
description = "Request handlers, form binding and problem-detail responses for a personal portfolio and article archive site."
requires-python = ">=3.10"
keywords = ["http", "handlers", "problem-details", "form-binding", "markdown", "portfolio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "markdown-it-py",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fontsite"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
