[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aicommit"
version = "0.0.3"
description = "Generate git commit messages from staged changes using Claude, OpenAI or Gemini"
requires-python = ">=3.10"
keywords = ["git", "commit", "commit-message", "ai", "llm", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
    "Topic :: Utilities",
]
dependencies = [
    "httpx>=0.24",
    "python-dotenv>=1.0",
    "blessed>=1.20",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "respx>=0.20",
]

[project.scripts]
aic = "aicommit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["aicommit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
