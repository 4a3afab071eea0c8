"""WeightOptimizer - シード付き確率的探索による重み最適化

状態遷移:
    Seed → Perturb → Evaluate → Accept/Reject → (Perturb ...) → Terminate → Recommend

候補は常にベースラインを摂動して作る。同じシード・同じ入力なら結果は同一。
"""

import logging
import math
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

import numpy as np

from golfrank.analyzers.score_calculator import FieldStatistics
from golfrank.config.settings import OptimizerSettings, ScoringSettings
from golfrank.constants import MetricId
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.feeds import RealizedResult
from golfrank.models.report import (
    OptimizerBatchResult,
    OptimizerRunResult,
    SearchCheckpoint,
    ValidationReport,
)
from golfrank.models.weights import WeightConfiguration
from golfrank.services.ranking_service import RankingService

logger = logging.getLogger(__name__)


def fitness(report: ValidationReport, settings: OptimizerSettings | None = None) -> float:
    """検証レポートの適合度を計算する

    相関スコア (pearson + 1) / 2、誤差スコア 1 / (1 + rmse / scale)、
    Top-N スコア（Top-20的中率とTop-20重み付きの平均）の加重平均。
    未定義の値は 0 として扱う。

    Args:
        report: 検証レポート
        settings: 最適化設定（ブレンド比率）

    Returns:
        適合度（0.0 - 1.0）
    """
    settings = settings or OptimizerSettings()
    weights = settings.fitness_weights

    correlation_score = 0.0 if report.pearson is None else (report.pearson + 1.0) / 2.0
    error_score = 0.0 if report.rmse is None else 1.0 / (1.0 + report.rmse / settings.rmse_scale)
    top_values = [v for v in (report.hit_rate(20), report.top20_weighted) if v is not None]
    top_n_score = math.fsum(top_values) / len(top_values) if top_values else 0.0

    total_weight = weights["correlation"] + weights["error"] + weights["top_n"]
    if total_weight <= 0:
        raise ValueError("fitness_weights の合計は正である必要があります")
    return (
        weights["correlation"] * correlation_score
        + weights["error"] * error_score
        + weights["top_n"] * top_n_score
    ) / total_weight


@dataclass(frozen=True)
class ComparisonResult:
    """2つの重み設定の比較結果

    Attributes:
        baseline_fitness: ベースラインの適合度
        candidate_fitness: 候補の適合度
        improvement: candidate_fitness - baseline_fitness
        prefer_candidate: 改善幅がマージンを超えたか（同値・僅差はベースライン）
    """

    baseline_report: ValidationReport
    candidate_report: ValidationReport
    baseline_fitness: float
    candidate_fitness: float
    improvement: float
    prefer_candidate: bool


def _run_seed(optimizer: "WeightOptimizer", seed: int) -> OptimizerRunResult:
    return optimizer.run(seed)


class WeightOptimizer:
    """ベースライン重みを摂動して検証成績の良い重みを探す"""

    def __init__(
        self,
        baseline: WeightConfiguration,
        bundles: Sequence[CompetitorBundle],
        results: Sequence[RealizedResult],
        event_id: str = "",
        settings: OptimizerSettings | None = None,
        scoring: ScoringSettings | None = None,
        past_performance: Mapping[int, float] | None = None,
        trends: Mapping[int, Mapping[MetricId, float]] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """初期化

        Args:
            baseline: ベースライン重み設定
            bundles: 全出場選手のメトリクスバンドル
            results: 実際の結果
            event_id: 大会ID
            settings: 最適化設定
            scoring: スコアリング設定
            past_performance: 選手ID → 過去成績倍率
            trends: 選手ID → (MetricId → 傾き)。探索前に一度だけ適用する
            clock: 時間予算の判定に使う時計（秒）
        """
        self._baseline = baseline
        self._service = RankingService(scoring)
        self._bundles = self._service.apply_trends(bundles, trends)
        self._results = list(results)
        self._event_id = event_id
        self._settings = settings or OptimizerSettings()
        self._past_performance = dict(past_performance or {})
        self._clock = clock
        self._field_stats: dict[frozenset[MetricId], FieldStatistics] = {}
        self._baseline_evaluation: tuple[ValidationReport, float] | None = None

    @property
    def baseline(self) -> WeightConfiguration:
        return self._baseline

    @property
    def settings(self) -> OptimizerSettings:
        return self._settings

    def evaluate(self, configuration: WeightConfiguration) -> tuple[ValidationReport, float]:
        """重み設定でランキングを作成・検証し、適合度を返す"""
        metrics = configuration.expected_metrics()
        field_stats = self._field_stats.get(metrics)
        if field_stats is None:
            field_stats = self._service.field_statistics(self._bundles, configuration)
            self._field_stats[metrics] = field_stats
        ranking = self._service.rank_field(
            self._bundles, configuration, self._past_performance, field_stats
        )
        report = self._service.validate_ranking(ranking, self._results, self._event_id)
        return report, fitness(report, self._settings)

    def baseline_evaluation(self) -> tuple[ValidationReport, float]:
        if self._baseline_evaluation is None:
            self._baseline_evaluation = self.evaluate(self._baseline)
        return self._baseline_evaluation

    def perturb(self, rng: np.random.Generator, name: str | None = None) -> WeightConfiguration:
        """ベースラインに有界の摂動を加えた候補を作る

        - ランダムに選んだ 2-3 グループの重みを (1 ± group_perturbation) 倍
        - 重みが0でない全メトリクス重みを (1 ± metric_perturbation) 倍
        - 下限・上限でクリップして正規化（0 のプレースホルダーは 0 のまま）
        """
        settings = self._settings
        groups = self._baseline.groups

        count = int(rng.integers(settings.perturbed_groups_min, settings.perturbed_groups_max + 1))
        count = min(count, len(groups))
        chosen = set(int(i) for i in rng.choice(len(groups), size=count, replace=False))

        group_weights: dict[str, float] = {}
        for index, group in enumerate(groups):
            weight = group.weight
            if index in chosen and weight > 0:
                factor = 1.0 + rng.uniform(-settings.group_perturbation, settings.group_perturbation)
                weight = min(max(weight * factor, settings.min_group_weight), 1.0)
            group_weights[group.name] = weight
        group_total = math.fsum(group_weights.values())
        group_weights = {name_: w / group_total for name_, w in group_weights.items()}

        metric_weights: dict[str, dict[MetricId, float]] = {}
        for group in groups:
            perturbed: dict[MetricId, float] = {}
            for metric, weight in group.metric_weights:
                if weight > 0:
                    factor = 1.0 + rng.uniform(
                        -settings.metric_perturbation, settings.metric_perturbation
                    )
                    weight = min(max(weight * factor, settings.min_metric_weight), 1.0)
                perturbed[metric] = weight
            total = math.fsum(perturbed.values())
            metric_weights[group.name] = {metric: w / total for metric, w in perturbed.items()}

        return self._baseline.with_weights(group_weights, metric_weights, name=name)

    def run(self, seed: int, checkpoint: SearchCheckpoint | None = None) -> OptimizerRunResult:
        """1シード分の探索を実行する

        Args:
            seed: 乱数シード
            checkpoint: 中断した探索の状態（指定時はそこから再開）

        Returns:
            OptimizerRunResult（再開用の checkpoint を含む）
        """
        settings = self._settings
        baseline_report, baseline_fitness = self.baseline_evaluation()
        candidate_name = f"{self._baseline.name} (seed {seed})"

        rng = np.random.default_rng(seed)
        if checkpoint is not None:
            if checkpoint.seed != seed:
                raise ValueError(f"チェックポイントのシード {checkpoint.seed} と {seed} が一致しません")
            rng.bit_generator.state = checkpoint.rng_state
            best = checkpoint.best_configuration
            best_fitness = checkpoint.best_fitness
            done = checkpoint.iterations_done
            accepted = checkpoint.accepted
            logger.info(f"[seed {seed}] {done}回目から再開")
        else:
            best = self._baseline
            best_fitness = baseline_fitness
            done = 0
            accepted = 0

        started = self._clock()
        completed = True
        while done < settings.iterations:
            if (
                settings.time_budget_seconds is not None
                and self._clock() - started >= settings.time_budget_seconds
            ):
                completed = False
                logger.info(f"[seed {seed}] 時間予算に達したため {done} 回で中断")
                break

            candidate = self.perturb(rng, name=candidate_name)
            _, candidate_fitness = self.evaluate(candidate)
            done += 1
            if candidate_fitness > best_fitness:
                best, best_fitness = candidate, candidate_fitness
                accepted += 1
                logger.debug(f"[seed {seed}] 試行{done}: 適合度 {best_fitness:.4f} を採択")

        report = baseline_report if best is self._baseline else self.evaluate(best)[0]
        improvement = best_fitness - baseline_fitness
        recommended = improvement > settings.materiality_margin
        logger.info(
            f"[seed {seed}] 完了: 適合度 {best_fitness:.4f}（ベースライン {baseline_fitness:.4f}, "
            f"改善幅 {improvement:+.4f}, 推奨={'最適化重み' if recommended else 'ベースライン'}）"
        )

        return OptimizerRunResult(
            seed=seed,
            configuration=best,
            report=report,
            fitness=best_fitness,
            baseline_fitness=baseline_fitness,
            improvement=improvement,
            recommended=recommended,
            iterations=done,
            accepted=accepted,
            completed=completed,
            checkpoint=SearchCheckpoint(
                seed=seed,
                iterations_done=done,
                rng_state=rng.bit_generator.state,
                best_configuration=best,
                best_fitness=best_fitness,
                accepted=accepted,
            ),
        )

    def run_seeds(
        self, seeds: Sequence[int], max_workers: int | None = None
    ) -> OptimizerBatchResult:
        """複数シードを実行し、適合度で順位付けして最終推奨を決める

        シード間で状態を共有しないため、並列実行しても各シードの結果は変わらない。

        Args:
            seeds: シードのリスト
            max_workers: 並列プロセス数（None または 1 なら逐次実行）

        Returns:
            OptimizerBatchResult
        """
        if not seeds:
            raise ValueError("シードが指定されていません")
        baseline_report, baseline_fitness = self.baseline_evaluation()

        if max_workers is not None and max_workers > 1 and len(seeds) > 1:
            with ProcessPoolExecutor(max_workers=max_workers) as executor:
                results = list(executor.map(_run_seed, [self] * len(seeds), seeds))
        else:
            results = [self.run(seed) for seed in seeds]

        ranked = tuple(sorted(results, key=lambda r: (-r.fitness, r.seed)))
        best = ranked[0]
        recommends_baseline = not best.recommended
        recommended = self._baseline if recommends_baseline else best.configuration
        logger.info(
            f"{len(ranked)}シード完了: 最良 seed {best.seed} 適合度 {best.fitness:.4f}, "
            f"推奨 {recommended.name}"
        )
        return OptimizerBatchResult(
            results=ranked,
            baseline=self._baseline,
            baseline_report=baseline_report,
            baseline_fitness=baseline_fitness,
            recommended_configuration=recommended,
            recommends_baseline=recommends_baseline,
        )

    def compare(
        self, baseline: WeightConfiguration, candidate: WeightConfiguration
    ) -> ComparisonResult:
        """2つの重み設定を同じ適合度で比較する

        改善幅がマージン以下（同値を含む）ならベースラインを優先する。
        """
        baseline_report, baseline_fitness = self.evaluate(baseline)
        candidate_report, candidate_fitness = self.evaluate(candidate)
        improvement = candidate_fitness - baseline_fitness
        return ComparisonResult(
            baseline_report=baseline_report,
            candidate_report=candidate_report,
            baseline_fitness=baseline_fitness,
            candidate_fitness=candidate_fitness,
            improvement=improvement,
            prefer_candidate=improvement > self._settings.materiality_margin,
        )
