"""RankingService - 集計済みバンドルからランキングを作成し検証するサービス"""

import logging
from typing import Mapping, Sequence

from golfrank.analyzers.adjustments import AdjustmentPipeline
from golfrank.analyzers.score_calculator import FieldStatistics, ScoreCalculator
from golfrank.analyzers.trends import apply_trends
from golfrank.backtest.metrics import ValidationCalculator
from golfrank.config.settings import ScoringSettings
from golfrank.constants import MetricId
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.feeds import RealizedResult
from golfrank.models.ranking import RankingEntry
from golfrank.models.report import ValidationReport
from golfrank.models.weights import WeightConfiguration

logger = logging.getLogger(__name__)


class RankingService:
    """ランキング作成と検証をまとめるサービス

    入力（バンドル・重み設定）が同じなら結果は常に同一。
    """

    def __init__(
        self,
        settings: ScoringSettings | None = None,
        pipeline: AdjustmentPipeline | None = None,
    ):
        """初期化

        Args:
            settings: スコアリング設定
            pipeline: 補正パイプライン（Noneの場合はデフォルト）
        """
        self._settings = settings or ScoringSettings()
        self._pipeline = pipeline

    @property
    def settings(self) -> ScoringSettings:
        return self._settings

    def apply_trends(
        self,
        bundles: Sequence[CompetitorBundle],
        trends: Mapping[int, Mapping[MetricId, float]] | None,
    ) -> list[CompetitorBundle]:
        """直近トレンドをメトリクス値に反映する（Noneなら元のまま）"""
        if not trends:
            return list(bundles)
        return apply_trends(bundles, trends, self._settings.trend_weight)

    def field_statistics(
        self, bundles: Sequence[CompetitorBundle], configuration: WeightConfiguration
    ) -> FieldStatistics:
        """重み設定が期待するメトリクスのフィールド統計を計算する"""
        return FieldStatistics.from_bundles(
            bundles, configuration.expected_metrics(), self._settings
        )

    def rank_field(
        self,
        bundles: Sequence[CompetitorBundle],
        configuration: WeightConfiguration,
        past_performance: Mapping[int, float] | None = None,
        field_stats: FieldStatistics | None = None,
        trends: Mapping[int, Mapping[MetricId, float]] | None = None,
    ) -> list[RankingEntry]:
        """出場選手のランキングを作成する

        Args:
            bundles: 選手のメトリクスバンドル
            configuration: 重み設定
            past_performance: 選手ID → 過去成績倍率
            field_stats: フィールド統計（Noneの場合はトレンド適用後のbundlesから計算）
            trends: 選手ID → (MetricId → 傾き)。Noneならトレンド補正なし

        Returns:
            順位順の RankingEntry リスト
        """
        bundles = self.apply_trends(bundles, trends)
        if field_stats is None:
            field_stats = self.field_statistics(bundles, configuration)
        calculator = ScoreCalculator(configuration, field_stats, self._settings, self._pipeline)
        return calculator.rank(bundles, past_performance)

    def validate_ranking(
        self,
        ranking: Sequence[RankingEntry],
        results: Sequence[RealizedResult],
        event_id: str = "",
    ) -> ValidationReport:
        """ランキングを実際の結果で検証する"""
        return ValidationCalculator.validate(ranking, results, event_id)

    def evaluate(
        self,
        bundles: Sequence[CompetitorBundle],
        configuration: WeightConfiguration,
        results: Sequence[RealizedResult],
        event_id: str = "",
        past_performance: Mapping[int, float] | None = None,
        trends: Mapping[int, Mapping[MetricId, float]] | None = None,
    ) -> tuple[list[RankingEntry], ValidationReport]:
        """ランキング作成と検証をまとめて実行する"""
        ranking = self.rank_field(bundles, configuration, past_performance, trends=trends)
        report = self.validate_ranking(ranking, results, event_id)
        logger.debug(
            "評価: %s pearson=%s matched=%d", configuration.name, report.pearson, report.matched_count
        )
        return ranking, report
