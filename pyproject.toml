[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picolab"
version = "0.1.0"
description = "A small HTTP system monitor, plus BMP280 sensor drivers and piano note tables."
requires-python = ">=3.10"
keywords = ["monitoring", "metrics", "http", "bmp280", "sensor", "i2c", "spi", "music"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Framework :: AsyncIO",
    "Topic :: System :: Monitoring",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "psutil",
    "starlette",
    "uvicorn",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "httpx",
]

[project.scripts]
picolab-server = "picolab.server:main"

[tool.hatch.build.targets.wheel]
packages = ["picolab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
