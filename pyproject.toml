[build-system]
requires = ["setuptools>=69", "wheel"]
build-backend = "setuptools.build_meta"

[project]
name = "telegafeed"
version = "0.1.0"
description = "Personal news feed backend: RSS, Atom and RDF aggregation with per-user sources, summaries and daily digests"
requires-python = ">=3.10"
dependencies = [
    "flask>=2.3",
]
keywords = ["rss", "atom", "rdf", "feed", "aggregator", "news", "digest"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: Flask",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: News/Diary",
    "Topic :: Text Processing :: Markup :: XML",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[tool.setuptools.packages.find]
include = ["telegafeed*"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
