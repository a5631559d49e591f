[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raderbot"
version = "0.1.0"
description = "Trading account bookkeeping and technical-analysis signal algorithms for trading bots"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "trading",
    "crypto",
    "technical-analysis",
    "rsi",
    "macd",
    "bollinger-bands",
    "moving-average",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Investment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["raderbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
