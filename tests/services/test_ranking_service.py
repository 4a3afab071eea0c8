"""RankingServiceのテスト"""

import pytest

from golfrank.analyzers.adjustments import AdjustmentPipeline, ConfidenceDampening
from golfrank.config.settings import ScoringSettings
from golfrank.constants import MetricId
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.feeds import RealizedResult
from golfrank.models.weights import WeightConfiguration
from golfrank.services.ranking_service import RankingService


# === テストデータ生成ヘルパー ===


def make_bundle(competitor_id: int, sg_total: float | None, sg_putting: float | None = None):
    """テスト用CompetitorBundleを生成"""
    return CompetitorBundle(
        competitor_id=competitor_id,
        name=f"Player {competitor_id}",
        values={MetricId.SG_TOTAL: sg_total, MetricId.SG_PUTTING: sg_putting},
    )


def make_configuration() -> WeightConfiguration:
    """SG Total のみの重み設定"""
    return WeightConfiguration.build("TOTAL_ONLY", {"Total": (1.0, {MetricId.SG_TOTAL: 1.0})})


class TestRankField:
    """rank_fieldのテスト"""

    def test_ranks_all_competitors(self):
        """全出場選手に順位を付ける"""
        bundles = [make_bundle(1, 1.0), make_bundle(2, 3.0), make_bundle(3, 2.0), make_bundle(4, None)]
        ranking = RankingService().rank_field(bundles, make_configuration())

        assert [e.competitor_id for e in ranking] == [2, 3, 4, 1]
        assert [e.rank for e in ranking] == [1, 2, 3, 4]
        # データなしの選手は中立値
        assert ranking[2].score == 0.0

    def test_uses_given_field_statistics(self):
        """渡したフィールド統計を使う"""
        service = RankingService()
        configuration = make_configuration()
        wide_field = [make_bundle(i, float(i)) for i in range(1, 11)]
        stats = service.field_statistics(wide_field, configuration)

        small_field = [make_bundle(1, 1.0), make_bundle(2, 2.0)]
        with_stats = service.rank_field(small_field, configuration, field_stats=stats)
        without = service.rank_field(small_field, configuration)
        assert with_stats[0].score != without[0].score

    def test_custom_pipeline(self):
        """補正パイプラインを差し替えられる"""
        pipeline = AdjustmentPipeline([ConfidenceDampening(threshold=1.0)])
        service = RankingService(pipeline=pipeline)
        bundles = [make_bundle(1, 1.0), make_bundle(2, 3.0)]
        ranking = service.rank_field(bundles, make_configuration(), past_performance={1: 3.0})
        # 過去成績補正がないので順位は変わらない
        assert ranking[0].competitor_id == 2

    def test_settings_property(self):
        """設定を保持する"""
        settings = ScoringSettings(renormalize_missing=False)
        assert RankingService(settings).settings is settings

    def test_shuffled_input_gives_same_scores(self):
        """入力順を変えても各選手のスコアは同じ"""
        bundles = [make_bundle(i, i * 0.3, -i * 0.2) for i in range(1, 8)]
        configuration = WeightConfiguration.build(
            "MIX",
            {
                "Total": (0.7, {MetricId.SG_TOTAL: 1.0}),
                "Putting": (0.3, {MetricId.SG_PUTTING: 1.0}),
            },
        )
        service = RankingService()
        forward = {e.competitor_id: e.score for e in service.rank_field(bundles, configuration)}
        backward = {
            e.competitor_id: e.score
            for e in service.rank_field(list(reversed(bundles)), configuration)
        }
        assert forward == backward


class TestEvaluate:
    """evaluateのテスト"""

    def test_perfect_three_competitors(self):
        """予測と結果が一致する3人"""
        bundles = [make_bundle(10, 3.0), make_bundle(20, 2.0), make_bundle(30, 1.0)]
        results = [
            RealizedResult(competitor_id=10, position=1),
            RealizedResult(competitor_id=20, position=2),
            RealizedResult(competitor_id=30, position=3),
        ]
        ranking, report = RankingService().evaluate(bundles, make_configuration(), results, "E1")

        assert [e.competitor_id for e in ranking] == [10, 20, 30]
        assert report.pearson == pytest.approx(1.0)
        assert report.spearman == pytest.approx(1.0)
        assert report.rmse == pytest.approx(0.0)
        assert report.mae == pytest.approx(0.0)
        assert report.hit_rate(5) == pytest.approx(1.0)

    def test_competitor_missing_from_results_is_still_ranked(self):
        """結果にない選手もランキングには含まれる"""
        bundles = [make_bundle(10, 3.0), make_bundle(20, 2.0), make_bundle(30, 1.0), make_bundle(40, 0.5)]
        results = [
            RealizedResult(competitor_id=10, position=1),
            RealizedResult(competitor_id=20, position=2),
            RealizedResult(competitor_id=30, position=3),
        ]
        ranking, report = RankingService().evaluate(bundles, make_configuration(), results)

        assert len(ranking) == 4
        assert report.matched_count == 3
        assert report.missing_count == 1
        assert report.pearson == pytest.approx(1.0)


class TestTrends:
    """トレンド補正のテスト"""

    def test_no_trends_is_unchanged(self):
        """トレンドを渡さなければ補正なし"""
        bundles = [make_bundle(1, 1.0), make_bundle(2, 1.1)]
        service = RankingService()
        plain = service.rank_field(bundles, make_configuration())
        with_none = service.rank_field(bundles, make_configuration(), trends=None)
        with_empty = service.rank_field(bundles, make_configuration(), trends={})

        assert [(e.competitor_id, e.score) for e in plain] == [(e.competitor_id, e.score) for e in with_none]
        assert [(e.competitor_id, e.score) for e in plain] == [(e.competitor_id, e.score) for e in with_empty]

    def test_improving_trend_moves_competitor_up(self):
        """上昇トレンドで順位が上がる"""
        bundles = [make_bundle(1, 1.0), make_bundle(2, 1.1)]
        ranking = RankingService().rank_field(
            bundles, make_configuration(), trends={1: {MetricId.SG_TOTAL: 1.0}}
        )
        assert [e.competitor_id for e in ranking] == [1, 2]

    def test_rising_scoring_average_lowers_rank(self):
        """スコア平均の上昇（悪化）は順位を下げる"""
        configuration = WeightConfiguration.build(
            "SCORING_ONLY", {"Scoring": (1.0, {MetricId.SCORING_AVERAGE: 1.0})}
        )
        bundles = [
            CompetitorBundle(competitor_id=cid, name=f"Player {cid}", values={MetricId.SCORING_AVERAGE: value})
            for cid, value in [(1, 70.0), (2, 70.1), (3, 71.0)]
        ]
        service = RankingService()

        plain = service.rank_field(bundles, configuration)
        trended = service.rank_field(bundles, configuration, trends={1: {MetricId.SCORING_AVERAGE: 1.0}})

        assert [e.competitor_id for e in plain] == [1, 2, 3]
        assert [e.competitor_id for e in trended] == [2, 1, 3]

    def test_trend_weight_zero_disables_trends(self):
        """trend_weight=0 なら補正なし"""
        bundles = [make_bundle(1, 1.0), make_bundle(2, 1.1)]
        service = RankingService(ScoringSettings(trend_weight=0.0))
        ranking = service.rank_field(bundles, make_configuration(), trends={1: {MetricId.SG_TOTAL: 1.0}})
        assert [e.competitor_id for e in ranking] == [2, 1]

    def test_evaluate_applies_trends(self):
        """evaluate もトレンドを適用する"""
        bundles = [make_bundle(1, 1.0), make_bundle(2, 1.1)]
        results = [RealizedResult(competitor_id=1, position=1), RealizedResult(competitor_id=2, position=2)]
        ranking, report = RankingService().evaluate(
            bundles, make_configuration(), results, trends={1: {MetricId.SG_TOTAL: 1.0}}
        )
        assert ranking[0].competitor_id == 1
        assert report.pearson == pytest.approx(1.0)
