[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coursetools"
version = "0.1.0"
description = "Tools for course books: schedule and timing preprocessing, exercise extraction and slide size evaluation"
requires-python = ">=3.10"
keywords = ["mdbook", "course", "slides", "markdown", "preprocessor", "schedule", "webdriver"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Documentation",
    "Topic :: Text Processing :: Markup :: Markdown",
]
dependencies = [
    "pyyaml",
    "markdown-it-py",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
mdbook-course = "coursetools.preprocessor:main"
course-schedule = "coursetools.schedule:main"
course-content = "coursetools.content:main"
mdbook-exerciser = "coursetools.exerciser:main"
mdbook-slide-evaluator = "coursetools.evaluator_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["coursetools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
