[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "goeskit"
version = "0.1.0"
description = "Decode GOES LRIT/HRIT soft-symbol streams into packets, and parse DCS and EMWIN products."
requires-python = ">=3.10"
keywords = [
    "goes",
    "lrit",
    "hrit",
    "emwin",
    "dcs",
    "ccsds",
    "satellite",
    "viterbi",
    "reed-solomon",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
goes-packetinfo = "goeskit.vcdu:main"
goes-packetdump = "goeskit.packetdump:main"

[tool.hatch.build.targets.wheel]
packages = ["goeskit"]

[tool.pytest.ini_options]
addopts = "-ra"
