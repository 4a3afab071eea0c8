"""メトリクスラベル解決のテスト

TDDのREDフェーズ: テストを作成し、FAILを確認する
"""

import pytest

from golfrank.constants import CourseArchetype, MetricId
from golfrank.errors import UnknownMetricError
from golfrank.utils.metric_resolver import resolve_archetype, resolve_metric_label


class TestResolveMetricLabel:
    """resolve_metric_label関数のテスト"""

    def test_exact_match(self):
        """MetricIdの値と完全一致する"""
        result = resolve_metric_label("SG Putting")
        assert result.metric == MetricId.SG_PUTTING
        assert result.strategy == "exact"

    def test_exact_match_strips_whitespace(self):
        """前後の空白は無視する"""
        result = resolve_metric_label("  Driving Distance ")
        assert result.metric == MetricId.DRIVING_DISTANCE
        assert result.strategy == "exact"

    def test_alias_match(self):
        """別名テーブルで解決する"""
        result = resolve_metric_label("Poor Shot Avoidance")
        assert result.metric == MetricId.POOR_SHOTS
        assert result.strategy == "alias"

    def test_metric_id_passes_through(self):
        """MetricIdをそのまま渡した場合はexact"""
        result = resolve_metric_label(MetricId.GIR)
        assert result.metric == MetricId.GIR
        assert result.strategy == "exact"

    def test_group_prefix_is_stripped(self):
        """既知のグループ名プレフィックスを除去して解決する"""
        result = resolve_metric_label("Scoring: Approach <100 SG", ["Scoring", "Putting"])
        assert result.metric == MetricId.APP_100_SG
        assert result.strategy == "group_prefix"

    def test_group_prefix_with_alias(self):
        """プレフィックス除去後は別名でも解決できる"""
        result = resolve_metric_label("Course Management: Poor Shot Avoidance", ["Course Management"])
        assert result.metric == MetricId.POOR_SHOTS
        assert result.strategy == "group_prefix"

    def test_unknown_group_prefix_raises(self):
        """未知のグループ名プレフィックスは解決しない"""
        with pytest.raises(UnknownMetricError):
            resolve_metric_label("Scoring: Approach <100 SG", ["Putting"])

    def test_unknown_label_raises(self):
        """どの戦略でも解決できないラベルはエラー"""
        with pytest.raises(UnknownMetricError):
            resolve_metric_label("Putts per Round")

    def test_no_partial_match(self):
        """部分一致では解決しない"""
        with pytest.raises(UnknownMetricError):
            resolve_metric_label("SG Putt Total")

    def test_unknown_metric_error_is_value_error(self):
        """UnknownMetricErrorはValueErrorのサブクラス"""
        with pytest.raises(ValueError):
            resolve_metric_label("???")


class TestResolveArchetype:
    """resolve_archetype関数のテスト"""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("POWER", CourseArchetype.POWER),
            ("technical", CourseArchetype.TECHNICAL),
            ("Balanced", CourseArchetype.BALANCED),
            ("distance-dominant", CourseArchetype.POWER),
            ("precision", CourseArchetype.TECHNICAL),
        ],
    )
    def test_resolves_names_and_aliases(self, name, expected):
        """類型名と別名を解決する"""
        assert resolve_archetype(name) == expected

    def test_enum_passes_through(self):
        """CourseArchetypeはそのまま返す"""
        assert resolve_archetype(CourseArchetype.POWER) is CourseArchetype.POWER

    def test_unknown_archetype_raises(self):
        """未知の類型名はValueError"""
        with pytest.raises(ValueError):
            resolve_archetype("links")
