"""External tool availability checks and install hints."""

from __future__ import annotations

import platform as _platform
import shutil

from .languages import supported_languages

# Tools every scan can use regardless of language
BASE_TOOLS = ("git", "lizard")

_INSTALL_INSTRUCTIONS: dict[tuple[str, str], str] = {
    ("git", "linux"): "sudo apt-get install git",
    ("git", "macos"): "brew install git",
    ("git", "windows"): "winget install --id Git.Git",
    ("lizard", "linux"): "pip install lizard",
    ("lizard", "macos"): "pip install lizard",
    ("lizard", "windows"): "pip install lizard",
}


def current_platform() -> str:
    system = _platform.system()
    if system == "Windows":
        return "windows"
    if system == "Darwin":
        return "macos"
    return "linux"


class ToolProcurement:
    """Checks for required command-line tools."""

    def check_tool(self, name: str) -> bool:
        return shutil.which(name) is not None

    def install_instructions(self, name: str, platform: str) -> str:
        key = (name.lower(), platform.lower())
        return _INSTALL_INSTRUCTIONS.get(
            key, f"Please install '{name}' for platform '{platform}' manually."
        )

    def required_tools(self, language: str) -> list[str]:
        """Tools needed to analyze one language; empty for unsupported ones."""
        if language not in supported_languages():
            return []
        return list(BASE_TOOLS)
