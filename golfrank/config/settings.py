"""エンジン設定

プロセス全体の可変状態は持たず、呼び出し時に設定オブジェクトを渡す。
"""

from dataclasses import dataclass, field

from golfrank.config.weights import (
    APPROACH_SHOTS_PER_ROUND,
    CONFIDENCE_FACTOR,
    COURSE_SETUP_WEIGHTS,
    COVERAGE_THRESHOLD,
    FITNESS_WEIGHTS,
    GROUP_PERTURBATION,
    MATERIALITY_MARGIN,
    METRIC_PERTURBATION,
    MIN_GROUP_WEIGHT,
    MIN_METRIC_WEIGHT,
    MIN_STD_DEV,
    NEUTRAL_VALUE,
    OPTIMIZER_ITERATIONS,
    PERTURBED_GROUPS_MAX,
    PERTURBED_GROUPS_MIN,
    RMSE_SCALE,
    TREND_WEIGHT,
)
from golfrank.constants import LOW_SAMPLE_SHOT_THRESHOLD


@dataclass(frozen=True)
class AggregationSettings:
    """集計設定"""

    derive_birdie_chances: bool = True
    course_setup_weights: dict[str, float] = field(
        default_factory=lambda: dict(COURSE_SETUP_WEIGHTS)
    )
    approach_shots_per_round: int = APPROACH_SHOTS_PER_ROUND

    def __post_init__(self):
        total = sum(self.course_setup_weights.values())
        if total <= 0:
            raise ValueError("course_setup_weights の合計は正である必要があります")


@dataclass(frozen=True)
class ScoringSettings:
    """スコアリング設定

    Attributes:
        renormalize_missing: 欠損メトリクスを除いて群内重みを再正規化する
        coverage_threshold: 信頼度減衰を始めるカバレッジ
        confidence_factor: 閾値以上で掛ける係数
        neutral_value: 中立値（カバレッジ0のスコア）
        low_sample_threshold: アプローチ距離帯の最少ショット数
        min_std_dev: 標準偏差の下限
        trend_weight: 直近トレンドの影響度（トレンドを渡した場合のみ使う）
    """

    renormalize_missing: bool = True
    coverage_threshold: float = COVERAGE_THRESHOLD
    confidence_factor: float = CONFIDENCE_FACTOR
    neutral_value: float = NEUTRAL_VALUE
    low_sample_threshold: int = LOW_SAMPLE_SHOT_THRESHOLD
    min_std_dev: float = MIN_STD_DEV
    trend_weight: float = TREND_WEIGHT

    def __post_init__(self):
        if not 0.0 < self.coverage_threshold <= 1.0:
            raise ValueError(f"coverage_threshold は (0, 1] の範囲: {self.coverage_threshold}")
        if self.confidence_factor < 0:
            raise ValueError(f"confidence_factor は0以上: {self.confidence_factor}")
        if self.low_sample_threshold < 0:
            raise ValueError(f"low_sample_threshold は0以上: {self.low_sample_threshold}")
        if self.trend_weight < 0:
            raise ValueError(f"trend_weight は0以上: {self.trend_weight}")


@dataclass(frozen=True)
class OptimizerSettings:
    """重み最適化設定

    Attributes:
        iterations: 1シードあたりの試行回数
        time_budget_seconds: 打ち切り時間（Noneなら無制限）
        group_perturbation: グループ重みの摂動幅（±）
        metric_perturbation: メトリクス重みの摂動幅（±）
        materiality_margin: 最適化結果を推奨する最小改善幅
        fitness_weights: 適合度ブレンド（correlation / error / top_n）
    """

    iterations: int = OPTIMIZER_ITERATIONS
    time_budget_seconds: float | None = None
    group_perturbation: float = GROUP_PERTURBATION
    metric_perturbation: float = METRIC_PERTURBATION
    perturbed_groups_min: int = PERTURBED_GROUPS_MIN
    perturbed_groups_max: int = PERTURBED_GROUPS_MAX
    min_group_weight: float = MIN_GROUP_WEIGHT
    min_metric_weight: float = MIN_METRIC_WEIGHT
    materiality_margin: float = MATERIALITY_MARGIN
    rmse_scale: float = RMSE_SCALE
    fitness_weights: dict[str, float] = field(default_factory=lambda: dict(FITNESS_WEIGHTS))

    def __post_init__(self):
        if self.iterations < 0:
            raise ValueError(f"iterations は0以上: {self.iterations}")
        if not 0 <= self.group_perturbation < 1 or not 0 <= self.metric_perturbation < 1:
            raise ValueError("摂動幅は [0, 1) の範囲である必要があります")
        if self.perturbed_groups_min < 1 or self.perturbed_groups_max < self.perturbed_groups_min:
            raise ValueError("摂動グループ数の範囲が不正です")
        if self.materiality_margin < 0:
            raise ValueError(f"materiality_margin は0以上: {self.materiality_margin}")
        missing = {"correlation", "error", "top_n"} - set(self.fitness_weights)
        if missing:
            raise ValueError(f"fitness_weights に不足キー: {sorted(missing)}")

