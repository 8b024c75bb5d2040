[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sniffkit"
version = "0.1.0"
description = "Network traffic bookkeeping: packet header analysis, host classification, notifications and report queries."
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "traffic", "monitoring", "packets", "ipv6", "notifications"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sniffkit"]

[tool.pytest.ini_options]
addopts = "-ra"
