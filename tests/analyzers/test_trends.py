"""直近トレンドのテスト"""

import pytest

from golfrank.analyzers.trends import TrendCalculator, apply_trends, smooth, weighted_slope
from golfrank.constants import MetricId
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.feeds import RoundStatRow


# === テストデータ生成ヘルパー ===


def make_round(
    index: int,
    sg_total: float | None,
    competitor_id: int = 1,
    scoring: float | None = 70.0,
    dated: bool = True,
) -> RoundStatRow:
    """index 日目の大会の1ラウンドを生成"""
    return RoundStatRow(
        competitor_id=competitor_id,
        event_id=f"E{index:03d}",
        round_number=1,
        values={MetricId.SG_TOTAL: sg_total, MetricId.SCORING_AVERAGE: scoring},
        date=f"2025-{1 + index // 28:02d}-{1 + index % 28:02d}" if dated else None,
    )


def rising_rounds(count: int, competitor_id: int = 1) -> list[RoundStatRow]:
    """SG Total が日付順に上がっていくラウンド"""
    return [make_round(i, i * 0.1, competitor_id) for i in range(count)]


def make_bundle(competitor_id: int, sg_total: float | None) -> CompetitorBundle:
    return CompetitorBundle(
        competitor_id=competitor_id,
        name=f"Player {competitor_id}",
        values={MetricId.SG_TOTAL: sg_total},
    )


class TestSmooth:
    """smoothのテスト"""

    def test_window_shrinks_at_edges(self):
        """端は窓を縮めて平均する"""
        assert smooth([1.0, 2.0, 3.0, 4.0, 5.0], 3) == pytest.approx([1.5, 2.0, 3.0, 4.0, 4.5])

    def test_shorter_than_window_is_unchanged(self):
        """窓幅未満はそのまま"""
        assert smooth([1.0, 2.0], 3) == [1.0, 2.0]


class TestWeightedSlope:
    """weighted_slopeのテスト"""

    def test_linear_values(self):
        """直線上の値は傾きそのもの"""
        assert weighted_slope([1.0, 2.0, 3.0, 4.0, 5.0]) == pytest.approx(1.0)

    def test_constant_values(self):
        """一定の値は傾き0"""
        assert weighted_slope([2.0] * 10) == pytest.approx(0.0, abs=1e-12)

    def test_single_value(self):
        """1件では計算できないので0.0"""
        assert weighted_slope([3.0]) == 0.0


class TestMetricTrends:
    """metric_trendsのテスト"""

    def test_rising_metric_has_positive_trend(self):
        """上昇傾向は正のトレンド"""
        trends = TrendCalculator().metric_trends(rising_rounds(20))
        assert trends[MetricId.SG_TOTAL] > 0

    def test_flat_metric_is_omitted(self):
        """変化のないメトリクスは含まない"""
        trends = TrendCalculator().metric_trends(rising_rounds(20))
        assert MetricId.SCORING_AVERAGE not in trends

    def test_too_few_rounds(self):
        """ラウンド数が足りなければ空"""
        assert TrendCalculator().metric_trends(rising_rounds(14)) == {}

    def test_undated_rounds_are_excluded(self):
        """日付のないラウンドは数えない"""
        rows = rising_rounds(14) + [make_round(i, 5.0, dated=False) for i in range(14, 20)]
        assert TrendCalculator().metric_trends(rows) == {}

    def test_rounds_without_scoring_are_excluded(self):
        """スコアのないラウンドは数えない"""
        rows = rising_rounds(14) + [make_round(i, i * 0.1, scoring=None) for i in range(14, 20)]
        assert TrendCalculator().metric_trends(rows) == {}

    def test_only_recent_rounds_are_used(self):
        """直近 total_rounds 件だけを使う"""
        old = [make_round(i, 100.0 - i) for i in range(6)]
        recent = [make_round(i, i * 0.1) for i in range(6, 30)]
        trends = TrendCalculator().metric_trends(old + recent)
        assert trends[MetricId.SG_TOTAL] > 0

    def test_input_order_does_not_matter(self):
        """入力順に依存しない"""
        rows = [make_round(i, (i % 5) * 0.3 + i * 0.05) for i in range(20)]
        calculator = TrendCalculator()
        assert calculator.metric_trends(rows) == calculator.metric_trends(list(reversed(rows)))

    def test_trend_is_rounded(self):
        """傾きは小数3桁"""
        slope = TrendCalculator().metric_trends(rising_rounds(20))[MetricId.SG_TOTAL]
        assert slope == round(slope, 3)

    @pytest.mark.parametrize("kwargs", [{"total_rounds": 1}, {"min_values": 1}, {"window": 0}])
    def test_invalid_parameters(self, kwargs):
        """範囲外のパラメータはValueError"""
        with pytest.raises(ValueError):
            TrendCalculator(**kwargs)


class TestCalculateAll:
    """calculate_allのテスト"""

    def test_groups_by_competitor(self):
        """選手ごとに計算し、トレンドのない選手は含まない"""
        rows = rising_rounds(20, competitor_id=1) + rising_rounds(5, competitor_id=2)
        trends = TrendCalculator().calculate_all(rows)

        assert list(trends) == [1]
        assert trends[1][MetricId.SG_TOTAL] > 0


class TestApplyTrends:
    """apply_trendsのテスト"""

    def test_adds_slope_times_weight(self):
        """値に 傾き × 重み を加える"""
        bundles = [make_bundle(1, 1.0)]
        adjusted = apply_trends(bundles, {1: {MetricId.SG_TOTAL: 0.5}}, 0.3)
        assert adjusted[0].values[MetricId.SG_TOTAL] == pytest.approx(1.15)

    def test_missing_value_stays_missing(self):
        """データなしのメトリクスはNoneのまま"""
        bundles = [make_bundle(1, None)]
        adjusted = apply_trends(bundles, {1: {MetricId.SG_TOTAL: 0.5}}, 0.3)
        assert adjusted[0].values[MetricId.SG_TOTAL] is None

    def test_weight_zero_keeps_bundles(self):
        """重み0なら元のバンドルのまま"""
        bundles = [make_bundle(1, 1.0)]
        adjusted = apply_trends(bundles, {1: {MetricId.SG_TOTAL: 0.5}}, 0.0)
        assert adjusted[0] is bundles[0]

    def test_competitor_without_trend_is_unchanged(self):
        """トレンドのない選手は元のまま"""
        bundles = [make_bundle(1, 1.0), make_bundle(2, 2.0)]
        adjusted = apply_trends(bundles, {1: {MetricId.SG_TOTAL: 0.5}}, 0.3)
        assert adjusted[1] is bundles[1]
        # 元のバンドルは変更しない
        assert bundles[0].values[MetricId.SG_TOTAL] == 1.0
