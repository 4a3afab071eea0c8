"""ScoreCalculator - 2階層重み付きスコア計算"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from golfrank.analyzers.adjustments import AdjustmentContext, AdjustmentPipeline
from golfrank.config.settings import ScoringSettings
from golfrank.constants import LOWER_IS_BETTER, METRIC_BUCKETS, MetricId
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.ranking import RankingEntry
from golfrank.models.weights import WeightConfiguration

logger = logging.getLogger(__name__)


def trusted_value(
    bundle: CompetitorBundle, metric: MetricId, low_sample_threshold: int
) -> float | None:
    """サンプル不足を考慮したメトリクス値を取得する

    アプローチ距離帯のショット数が閾値未満なら、その距離帯の値はデータなし扱い。
    """
    value = bundle.value(metric)
    if value is None:
        return None
    bucket = METRIC_BUCKETS.get(metric)
    if bucket is not None and bundle.sample_count(bucket.value) < low_sample_threshold:
        return None
    return value


def oriented(metric: MetricId, value: float) -> float:
    """小さいほど良いメトリクスの符号を反転する"""
    return -value if metric in LOWER_IS_BETTER else value


@dataclass(frozen=True)
class MetricStats:
    """フィールド全体のメトリクス統計（向き補正後）"""

    mean: float
    std_dev: float | None
    count: int


@dataclass(frozen=True)
class FieldStatistics:
    """出場選手全体のメトリクス分布"""

    stats: dict[MetricId, MetricStats] = field(default_factory=dict)

    @classmethod
    def from_bundles(
        cls,
        bundles: Iterable[CompetitorBundle],
        metrics: Iterable[MetricId],
        settings: ScoringSettings | None = None,
    ) -> "FieldStatistics":
        """バンドルからメトリクスごとの平均・標準偏差（標本）を計算する

        データのある選手のみを対象とする。標準偏差が下限未満、または
        2人未満の場合は std_dev=None（全員 z=0）。
        """
        settings = settings or ScoringSettings()
        bundles = list(bundles)
        stats: dict[MetricId, MetricStats] = {}
        for metric in sorted(set(metrics), key=lambda m: m.value):
            values = [
                oriented(metric, value)
                for bundle in bundles
                if (value := trusted_value(bundle, metric, settings.low_sample_threshold))
                is not None
            ]
            if not values:
                continue
            mean = math.fsum(values) / len(values)
            std_dev = None
            if len(values) >= 2:
                variance = math.fsum((v - mean) ** 2 for v in values) / (len(values) - 1)
                std_dev = math.sqrt(variance)
                if std_dev < settings.min_std_dev:
                    std_dev = None
            stats[metric] = MetricStats(mean=mean, std_dev=std_dev, count=len(values))
        return cls(stats=stats)

    def z_score(self, metric: MetricId, oriented_value: float) -> float:
        stat = self.stats.get(metric)
        if stat is None or stat.std_dev is None:
            return 0.0
        return (oriented_value - stat.mean) / stat.std_dev


@dataclass(frozen=True)
class CompetitorScore:
    """1選手のスコア計算結果"""

    competitor_id: int
    score: float
    raw_score: float
    coverage: float
    group_scores: dict[str, float | None]


class ScoreCalculator:
    """メトリクスバンドルの2階層重み付きスコアを計算する

    1. メトリクスを向き補正して z-score 化
    2. グループスコア = グループ内重み付き平均（存在するメトリクスのみ）
    3. 重み付きスコア = Σ グループ重み × グループスコア
    4. カバレッジ = データのある期待メトリクス数 / 期待メトリクス数
    5. 補正パイプライン（信頼度減衰、過去成績補正）
    """

    def __init__(
        self,
        configuration: WeightConfiguration,
        field_stats: FieldStatistics,
        settings: ScoringSettings | None = None,
        pipeline: AdjustmentPipeline | None = None,
    ):
        """初期化

        Args:
            configuration: 重み設定
            field_stats: フィールド統計
            settings: スコアリング設定（Noneの場合はデフォルト値）
            pipeline: 補正パイプライン（Noneの場合はデフォルト）
        """
        self._configuration = configuration
        self._field_stats = field_stats
        self._settings = settings or ScoringSettings()
        self._pipeline = pipeline or AdjustmentPipeline.default(self._settings)
        self._expected = configuration.expected_metrics()

    @property
    def configuration(self) -> WeightConfiguration:
        return self._configuration

    def metric_z_scores(self, bundle: CompetitorBundle) -> dict[MetricId, float]:
        """データのある期待メトリクスの z-score を返す"""
        z_scores: dict[MetricId, float] = {}
        for metric in self._expected:
            value = trusted_value(bundle, metric, self._settings.low_sample_threshold)
            if value is None:
                continue
            z_scores[metric] = self._field_stats.z_score(metric, oriented(metric, value))
        return z_scores

    def calculate(
        self, bundle: CompetitorBundle, past_multiplier: float | None = None
    ) -> CompetitorScore:
        """1選手のスコアを計算する

        Args:
            bundle: 選手のメトリクスバンドル
            past_multiplier: 過去成績倍率（Noneなら補正なし）

        Returns:
            CompetitorScore

        Raises:
            ValueError: スコアが有限値にならない場合
        """
        z_scores = self.metric_z_scores(bundle)

        group_scores: dict[str, float | None] = {}
        weighted_terms = []
        for group in self._configuration.groups:
            group_score = self._group_score(group.metric_weights, z_scores)
            group_scores[group.name] = group_score
            if group_score is not None:
                weighted_terms.append(group.weight * group_score)
        raw_score = math.fsum(weighted_terms)

        coverage = len(z_scores) / len(self._expected)
        context = AdjustmentContext(
            competitor_id=bundle.competitor_id,
            coverage=coverage,
            neutral_value=self._settings.neutral_value,
            past_multiplier=past_multiplier,
        )
        if not z_scores:
            # データなしは中立値
            raw_score = self._settings.neutral_value
        score = self._pipeline.apply(raw_score, context)

        if not math.isfinite(score):
            raise ValueError(f"選手 {bundle.competitor_id} のスコアが有限値ではありません: {score}")

        return CompetitorScore(
            competitor_id=bundle.competitor_id,
            score=score,
            raw_score=raw_score,
            coverage=coverage,
            group_scores=group_scores,
        )

    def _group_score(
        self,
        metric_weights: Sequence[tuple[MetricId, float]],
        z_scores: Mapping[MetricId, float],
    ) -> float | None:
        present = [
            (weight, z_scores[metric])
            for metric, weight in metric_weights
            if weight > 0 and metric in z_scores
        ]
        if not present:
            return None
        weighted = math.fsum(weight * z for weight, z in present)
        if not self._settings.renormalize_missing:
            # 欠損メトリクスの重みはそのまま（中立値に引き寄せられる）
            return weighted
        return weighted / math.fsum(weight for weight, _ in present)

    def rank(
        self,
        bundles: Sequence[CompetitorBundle],
        past_performance: Mapping[int, float] | None = None,
    ) -> list[RankingEntry]:
        """全選手のスコアを計算して順位を付ける

        スコア降順、同点は入力順（安定ソート）。

        Args:
            bundles: 選手のメトリクスバンドル
            past_performance: 選手ID → 過去成績倍率

        Returns:
            順位順の RankingEntry リスト
        """
        past_performance = past_performance or {}
        scored = [
            self.calculate(bundle, past_performance.get(bundle.competitor_id))
            for bundle in bundles
        ]
        order = sorted(range(len(scored)), key=lambda i: -scored[i].score)

        entries = []
        for rank, index in enumerate(order, 1):
            result = scored[index]
            entries.append(
                RankingEntry(
                    competitor_id=result.competitor_id,
                    name=bundles[index].name,
                    score=result.score,
                    rank=rank,
                    coverage=result.coverage,
                    raw_score=result.raw_score,
                    group_scores=result.group_scores,
                )
            )
        logger.debug(f"ランキング作成: {len(entries)}人（設定: {self._configuration.name}）")
        return entries
