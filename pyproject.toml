[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rfidattend"
version = "0.1.0"
description = "RFID card attendance keeping: terminal protocol, user and attendance records, and a serial-line attendance host"
requires-python = ">=3.10"
keywords = ["rfid", "attendance", "serial", "eeprom", "rtc", "timekeeping"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rfidattend = "rfidattend.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rfidattend"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
