"""選手メトリクスバンドル"""

from dataclasses import dataclass, field

from golfrank.constants import MetricId


@dataclass(frozen=True)
class CompetitorBundle:
    """1選手分の集計済みメトリクス（イミュータブル）

    Attributes:
        competitor_id: 選手ID
        name: 表示名
        values: メトリクス → 値（None はデータなし）
        sample_counts: サンプル数（"rounds", "events", 距離帯ごとのショット数）
    """

    competitor_id: int
    name: str
    values: dict[MetricId, float | None] = field(default_factory=dict)
    sample_counts: dict[str, int] = field(default_factory=dict)

    def value(self, metric: MetricId) -> float | None:
        """メトリクス値を取得する（データなしはNone）"""
        return self.values.get(metric)

    def has_data(self, metric: MetricId) -> bool:
        return self.values.get(metric) is not None

    def sample_count(self, key: str) -> int:
        return self.sample_counts.get(key, 0)
