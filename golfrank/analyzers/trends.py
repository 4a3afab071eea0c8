"""直近トレンドの算出と適用

直近ラウンドのメトリクス推移を移動平均で平滑化し、新しいラウンドほど重い
加重回帰の傾きをトレンドとする。トレンドは z-score 計算前のメトリクス値に
傾き × 重みとして加える。
"""

import logging
import math
from collections import defaultdict
from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from golfrank.config.weights import (
    TREND_DECAY,
    TREND_MIN_ROUNDS,
    TREND_MIN_VALUES,
    TREND_ROUNDS,
    TREND_SMOOTHING_WINDOW,
    TREND_THRESHOLD,
)
from golfrank.constants import TREND_METRICS, MetricId
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.feeds import RoundStatRow

logger = logging.getLogger(__name__)


def smooth(values: Sequence[float], window: int = TREND_SMOOTHING_WINDOW) -> list[float]:
    """中心移動平均で平滑化する（端は窓を縮める）

    Args:
        values: 古い順の値
        window: 窓幅

    Returns:
        平滑化した値（件数が窓幅未満ならそのまま）
    """
    if len(values) < window:
        return list(values)
    smoothed = []
    for i in range(len(values)):
        start = max(0, i - window // 2)
        end = min(len(values), i + math.ceil(window / 2))
        smoothed.append(math.fsum(values[start:end]) / (end - start))
    return smoothed


def weighted_slope(values: Sequence[float], decay: float = TREND_DECAY) -> float:
    """新しいほど重い加重最小二乗の傾き

    x は古い順に 1, 2, ...、重みは exp(-decay * (n - index))。

    Returns:
        傾き（計算できない場合は0.0）
    """
    n = len(values)
    weights = [math.exp(-decay * (n - index)) for index in range(n)]
    xs = [index + 1 for index in range(n)]
    sum_w = math.fsum(weights)
    sum_x = math.fsum(w * x for w, x in zip(weights, xs))
    sum_y = math.fsum(w * y for w, y in zip(weights, values))
    sum_xy = math.fsum(w * x * y for w, x, y in zip(weights, xs, values))
    sum_x2 = math.fsum(w * x * x for w, x in zip(weights, xs))

    denominator = sum_w * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return 0.0
    return (sum_w * sum_xy - sum_x * sum_y) / denominator


class TrendCalculator:
    """選手ごとのメトリクストレンドを計算する

    大会終了日のないラウンドは時系列が決まらないため対象外。
    """

    def __init__(
        self,
        total_rounds: int = TREND_ROUNDS,
        min_rounds: int = TREND_MIN_ROUNDS,
        min_values: int = TREND_MIN_VALUES,
        threshold: float = TREND_THRESHOLD,
        decay: float = TREND_DECAY,
        window: int = TREND_SMOOTHING_WINDOW,
    ):
        if total_rounds < 2 or min_values < 2:
            raise ValueError("トレンドの計算には2ラウンド以上が必要です")
        if window < 1:
            raise ValueError(f"window は1以上: {window}")
        self.total_rounds = total_rounds
        self.min_rounds = min_rounds
        self.min_values = min_values
        self.threshold = threshold
        self.decay = decay
        self.window = window

    def metric_trends(self, rows: Iterable[RoundStatRow]) -> dict[MetricId, float]:
        """1選手分のラウンド行からトレンドを計算する

        Args:
            rows: 同一選手のラウンド統計行（順不同）

        Returns:
            MetricId → 傾き（有意なもののみ、小数3桁に丸める）
        """
        dated = [row for row in rows if row.date]
        newest_first = sorted(
            dated, key=lambda r: (r.date, r.round_number, r.event_id), reverse=True
        )
        recent = [
            row
            for row in newest_first[: self.total_rounds]
            if row.values.get(MetricId.SCORING_AVERAGE) is not None
        ]
        if len(recent) < self.min_rounds:
            return {}

        oldest_first = list(reversed(recent))
        trends = {}
        for metric in TREND_METRICS:
            values = [
                row.values[metric]
                for row in oldest_first
                if row.values.get(metric) is not None and not math.isnan(row.values[metric])
            ]
            if len(values) < self.min_values:
                continue
            slope = weighted_slope(smooth(values, self.window), self.decay)
            if abs(slope) > self.threshold:
                trends[metric] = round(slope, 3)
        return trends

    def calculate_all(self, round_rows: Iterable[RoundStatRow]) -> dict[int, dict[MetricId, float]]:
        """全選手のトレンドを計算する

        Returns:
            選手ID → (MetricId → 傾き)。有意なトレンドがない選手は含まない
        """
        by_competitor: dict[int, list[RoundStatRow]] = defaultdict(list)
        for row in round_rows:
            by_competitor[row.competitor_id].append(row)

        all_trends = {}
        for competitor_id in sorted(by_competitor):
            trends = self.metric_trends(by_competitor[competitor_id])
            if trends:
                all_trends[competitor_id] = trends
        logger.info(f"トレンド算出: {len(all_trends)}/{len(by_competitor)}人に有意なトレンド")
        return all_trends


def apply_trends(
    bundles: Sequence[CompetitorBundle],
    trends: Mapping[int, Mapping[MetricId, float]],
    weight: float,
) -> list[CompetitorBundle]:
    """バンドルのメトリクス値にトレンドを加える

    値に 傾き × weight を加える。向き補正後は小さいほど良い指標で符号が
    反転するため、悪化傾向（スコア平均の上昇など）はスコアを下げる。
    データなしのメトリクスはデータなしのまま。

    Args:
        bundles: 選手のメトリクスバンドル
        trends: 選手ID → (MetricId → 傾き)
        weight: トレンドの影響度

    Returns:
        トレンド適用後のバンドル（トレンドのない選手は元のまま）
    """
    adjusted = []
    for bundle in bundles:
        competitor_trends = trends.get(bundle.competitor_id)
        if not competitor_trends or weight == 0:
            adjusted.append(bundle)
            continue
        values = dict(bundle.values)
        for metric, slope in competitor_trends.items():
            value = values.get(metric)
            if value is not None:
                values[metric] = value + slope * weight
        adjusted.append(replace(bundle, values=values))
    return adjusted
