"""検証レポート・最適化結果モデル"""

from dataclasses import dataclass, field
from typing import Any

from golfrank.models.weights import WeightConfiguration


@dataclass(frozen=True)
class ValidationReport:
    """予測順位と実際の着順の比較結果

    相関は照合選手が2人未満、またはどちらかの系列が一定の場合に None（未定義）。
    0 は「相関なし」であり、未定義とは区別する。

    Attributes:
        event_id: 大会ID
        matched_count: 予測と着順（数値）の両方がある選手数
        pearson: ピアソン相関（予測順位 vs 着順）
        spearman: スピアマン順位相関
        rmse: 二乗平均平方根誤差
        mae: 平均絶対誤差
        hit_rates: N → Top-N 的中率（対象なしはNone）
        top20_weighted: 上位20の順位重み付きスコア（NDCG形式）
        mean_error: 平均誤差（予測順位 - 着順）
        error_std: 誤差の標準偏差
        predicted_count: 予測ランキングの選手数
        non_finisher_count: 非完走で除外した選手数
        missing_count: 結果に存在しない選手数
        summary: 定性的な要約
    """

    event_id: str
    matched_count: int
    pearson: float | None
    spearman: float | None
    rmse: float | None
    mae: float | None
    hit_rates: dict[int, float | None] = field(default_factory=dict)
    top20_weighted: float | None = None
    mean_error: float | None = None
    error_std: float | None = None
    predicted_count: int = 0
    non_finisher_count: int = 0
    missing_count: int = 0
    summary: str = ""

    @property
    def correlation_defined(self) -> bool:
        return self.pearson is not None

    def hit_rate(self, top_n: int) -> float | None:
        return self.hit_rates.get(top_n)

    def to_dict(self) -> dict[str, Any]:
        return {
            "eventId": self.event_id,
            "matchedCount": self.matched_count,
            "pearson": self.pearson,
            "spearman": self.spearman,
            "rmse": self.rmse,
            "mae": self.mae,
            "hitRates": {str(n): rate for n, rate in self.hit_rates.items()},
            "top20Weighted": self.top20_weighted,
            "meanError": self.mean_error,
            "errorStd": self.error_std,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class SearchCheckpoint:
    """中断した探索を再開するための状態

    Attributes:
        seed: シード値
        iterations_done: 完了した試行回数
        rng_state: 乱数生成器の状態（numpy bit_generator.state）
        best_configuration: その時点の最良設定
        best_fitness: 最良適合度
        accepted: 採択回数
    """

    seed: int
    iterations_done: int
    rng_state: dict[str, Any]
    best_configuration: WeightConfiguration
    best_fitness: float
    accepted: int


@dataclass(frozen=True)
class OptimizerRunResult:
    """1シード分の最適化結果

    Attributes:
        seed: シード値
        configuration: 発見した最良の重み設定
        report: その設定の検証レポート
        fitness: その設定の適合度
        baseline_fitness: ベースラインテンプレートの適合度
        improvement: fitness - baseline_fitness
        recommended: ベースラインを改善幅マージン超で上回ったか
        iterations: 実行した試行回数（再開分を含む累計）
        accepted: 採択回数
        completed: 試行回数を使い切ったか（時間切れならFalse）
        checkpoint: 再開用の状態
    """

    seed: int
    configuration: WeightConfiguration
    report: ValidationReport
    fitness: float
    baseline_fitness: float
    improvement: float
    recommended: bool
    iterations: int
    accepted: int
    completed: bool = True
    checkpoint: SearchCheckpoint | None = None


@dataclass(frozen=True)
class OptimizerBatchResult:
    """複数シードの比較結果

    Attributes:
        results: 適合度の降順（同値はシード昇順）に並べた結果
        baseline: ベースライン設定
        baseline_report: ベースラインの検証レポート
        baseline_fitness: ベースラインの適合度
        recommended_configuration: 最終的に推奨する設定
        recommends_baseline: ベースラインを推奨するか
    """

    results: tuple[OptimizerRunResult, ...]
    baseline: WeightConfiguration
    baseline_report: ValidationReport
    baseline_fitness: float
    recommended_configuration: WeightConfiguration
    recommends_baseline: bool

    @property
    def best(self) -> OptimizerRunResult | None:
        return self.results[0] if self.results else None
