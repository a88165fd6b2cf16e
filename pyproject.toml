[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nivelagua"
version = "0.1.0"
description = "Water tank level controller: pump hysteresis, alarm buzzer, SSD1306 and WS2812 frame rendering, and a small HTTP status server"
requires-python = ">=3.10"
dependencies = []
keywords = ["water level", "pump", "ssd1306", "ws2812", "home automation"]
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
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nivelagua = "nivelagua.webserver:main"

[tool.hatch.build.targets.wheel]
packages = ["nivelagua"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
