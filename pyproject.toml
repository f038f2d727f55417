[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gbcore"
version = "0.1.0"
description = "Game Boy and Game Boy Color emulation components: audio unit, cartridges, DMA, LCD and timing helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["gameboy", "emulator", "apu", "cartridge", "mbc", "retro"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gbcore-romindex = "gbcore.romindex:main"

[tool.hatch.build.targets.wheel]
packages = ["gbcore"]

[tool.pytest.ini_options]
addopts = "-ra"
