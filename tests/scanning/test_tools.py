"""Tests for entropyx.scanning.tools."""

from entropyx.scanning import tools
from entropyx.scanning.tools import BASE_TOOLS, ToolProcurement, current_platform


class TestToolProcurement:
    def test_check_tool_uses_path_lookup(self, monkeypatch):
        monkeypatch.setattr(tools.shutil, "which", lambda name: "/usr/bin/git" if name == "git" else None)
        procurement = ToolProcurement()
        assert procurement.check_tool("git")
        assert not procurement.check_tool("lizard")

    def test_install_instructions(self):
        procurement = ToolProcurement()
        assert procurement.install_instructions("git", "macos") == "brew install git"
        assert procurement.install_instructions("Lizard", "Linux") == "pip install lizard"

    def test_unknown_tool_instructions(self):
        text = ToolProcurement().install_instructions("cloc", "linux")
        assert "cloc" in text and "manually" in text

    def test_required_tools(self):
        procurement = ToolProcurement()
        assert procurement.required_tools("Python") == list(BASE_TOOLS)
        assert procurement.required_tools("Cobol") == []


class TestCurrentPlatform:
    def test_mapping(self, monkeypatch):
        monkeypatch.setattr(tools._platform, "system", lambda: "Darwin")
        assert current_platform() == "macos"
        monkeypatch.setattr(tools._platform, "system", lambda: "Windows")
        assert current_platform() == "windows"
        monkeypatch.setattr(tools._platform, "system", lambda: "Linux")
        assert current_platform() == "linux"
