"""着順表記パーサーのテスト"""

import pytest

from golfrank.utils.finish_parser import parse_finish


class TestParseFinish:
    """parse_finish関数のテスト"""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1", (1, "FINISHED")),
            ("T5", (5, "FINISHED")),
            ("t12", (12, "FINISHED")),
            (" 30 ", (30, "FINISHED")),
            (7, (7, "FINISHED")),
            (3.0, (3, "FINISHED")),
        ],
    )
    def test_numeric_finishes(self, text, expected):
        """数値の着順（タイ表記を含む）を解析する"""
        assert parse_finish(text) == expected

    @pytest.mark.parametrize("marker", ["CUT", "MC", "WD", "W/D", "DQ", "MDF", "DNS"])
    def test_non_finish_markers(self, marker):
        """非完走表記は順位None"""
        assert parse_finish(marker) == (None, marker)

    def test_lowercase_marker(self):
        """小文字の非完走表記も解析する"""
        assert parse_finish("cut") == (None, "CUT")

    @pytest.mark.parametrize("text", [None, "", "  ", "abc", "T", "0", -1, float("nan")])
    def test_unknown(self, text):
        """解析できない表記はUNKNOWN"""
        assert parse_finish(text) == (None, "UNKNOWN")
