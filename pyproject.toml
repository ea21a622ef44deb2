[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osmetrics"
version = "0.1.0"
description = "A small metrics collection agent and an in-memory HTTP metrics server"
requires-python = ">=3.10"
dependencies = []
keywords = ["metrics", "monitoring", "agent", "gauge", "counter", "wsgi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
osmetrics-server = "osmetrics.server:main"
osmetrics-agent = "osmetrics.agent:main"

[tool.hatch.build.targets.wheel]
packages = ["osmetrics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
