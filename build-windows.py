"""Build script for Windows.

Usage (activate venv first):
    pip install -e .[build]
    python build-windows.py build
"""

import sys
from pathlib import Path

import tomlkit
from cx_Freeze import Executable, setup

# Read the version from pyproject.toml instead of importing lunar_coiner
pyproject_path = Path(__file__).parent / "pyproject.toml"
pyproject_data = tomlkit.parse(pyproject_path.read_text(encoding="utf-8"))
VERSION = pyproject_data["project"]["version"]  # type: ignore[index]

if sys.platform != "win32":
    sys.exit("This script must be run on Windows to build a Windows binary.")

build_exe_options = {
    "packages": ["lunar_coiner"],
    "excludes": ["tkinter"],
    # The translator looks for resources/ next to the frozen executable
    "include_files": [
        ("src/lunar_coiner/resources/", "resources/"),
    ],
    "zip_include_packages": ["*"],
    "zip_exclude_packages": [],
    "build_exe": f"dist/windows-{VERSION}/LunarCoiner_{VERSION}",
    "optimize": 1,
}

executables = [
    Executable(
        "src/lunar_coiner/main.py",
        # Console base keeps --list/--debug-paths output visible
        base=None,
        target_name="LunarCoiner",
    )
]

setup(
    name="Lunar Coiner",
    version=VERSION,
    description="Risk of Rain 2 lunar coin editor",
    options={"build_exe": build_exe_options},
    executables=executables,
)
