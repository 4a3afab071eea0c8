"""パッケージ構成のテスト"""

import re
from pathlib import Path

from setuptools import find_namespace_packages

ROOT = Path(__file__).parent.parent


class TestPackageDiscovery:
    """ビルド対象パッケージのテスト"""

    def test_namespace_discovery_is_enabled(self):
        """__init__.py のないサブパッケージもビルド対象にする"""
        text = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
        section = text.split("[tool.setuptools.packages.find]", 1)[1].split("\n[", 1)[0]
        assert re.search(r"^namespaces\s*=\s*true\s*$", section, re.MULTILINE)

    def test_every_module_directory_is_discovered(self):
        """.py を持つディレクトリが全てパッケージとして見つかる"""
        packages = set(find_namespace_packages(where=str(ROOT), include=["golfrank*"]))
        directories = {
            ".".join(path.parent.relative_to(ROOT).parts)
            for path in (ROOT / "golfrank").rglob("*.py")
            if "__pycache__" not in path.parts
        }
        assert "golfrank.analyzers" in directories
        assert directories <= packages
