"""入力フィードの行データ

ローダー（または他の呼び出し側）がエンジン実行前に渡すイミュータブルな行。
"""

from dataclasses import dataclass, field

from golfrank.constants import ApproachBucket, MetricId


@dataclass(frozen=True)
class RoundStatRow:
    """1選手・1ラウンド分の統計

    Attributes:
        competitor_id: 選手ID
        event_id: 大会ID
        round_number: 大会内のラウンド番号
        values: メトリクス → 値（欠損は省略またはNone）
        name: 表示名（フィードにあれば）
        date: 大会終了日（YYYY-MM-DD、フィードにあれば）
    """

    competitor_id: int
    event_id: str
    round_number: int
    values: dict[MetricId, float | None] = field(default_factory=dict)
    name: str | None = None
    date: str | None = None


@dataclass(frozen=True)
class ApproachStatRow:
    """1選手分のアプローチショット統計

    Attributes:
        competitor_id: 選手ID
        values: アプローチ系メトリクスの値（率・残り距離・1打あたりSG）
        shot_counts: 距離帯・ライごとのショット数
        name: 表示名（フィードにあれば）
    """

    competitor_id: int
    values: dict[MetricId, float | None] = field(default_factory=dict)
    shot_counts: dict[ApproachBucket, int] = field(default_factory=dict)
    name: str | None = None


@dataclass(frozen=True)
class RealizedResult:
    """大会の実際の着順

    非完走（予選落ち・棄権・失格）は position=None で、status に区分を持つ。
    数値の代替着順は与えない。
    """

    competitor_id: int
    position: int | None
    status: str = "FINISHED"
    name: str | None = None

    @property
    def finished(self) -> bool:
        return self.position is not None
