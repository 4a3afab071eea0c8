"""検証結果レポーターモジュール

検証メトリクスの定性評価と、検証・最適化結果の整形出力を行う
"""

from golfrank.constants import HIT_RATE_TOP_N
from golfrank.models.report import OptimizerBatchResult, ValidationReport

# 相関の評価（下限, ラベル）: 上から順に判定
CORRELATION_LEVELS: tuple[tuple[float, str], ...] = (
    (0.7, "strong"),
    (0.5, "moderate"),
    (0.3, "weak"),
)
CORRELATION_FLOOR_LABEL = "very weak"

# RMSEの評価（上限, ラベル）
RMSE_LEVELS: tuple[tuple[float, str], ...] = (
    (10.0, "low"),
    (20.0, "moderate"),
)
RMSE_CEILING_LABEL = "high"

# Top-10的中率の評価（下限, ラベル）
TOP10_LEVELS: tuple[tuple[float, str], ...] = (
    (0.6, "strong"),
    (0.4, "moderate"),
)
TOP10_FLOOR_LABEL = "poor"


def correlation_label(value: float | None) -> str:
    if value is None:
        return "undefined"
    for lower, label in CORRELATION_LEVELS:
        if value > lower:
            return label
    return CORRELATION_FLOOR_LABEL


def rmse_label(value: float | None) -> str:
    if value is None:
        return "undefined"
    for upper, label in RMSE_LEVELS:
        if value < upper:
            return label
    return RMSE_CEILING_LABEL


def top10_label(value: float | None) -> str:
    if value is None:
        return "undefined"
    for lower, label in TOP10_LEVELS:
        if value > lower:
            return label
    return TOP10_FLOOR_LABEL


def summarize(pearson: float | None, rmse: float | None, top10: float | None) -> str:
    """しきい値表による定性的な要約を作成する

    Args:
        pearson: ピアソン相関
        rmse: RMSE
        top10: Top-10的中率

    Returns:
        要約文字列
    """
    if pearson is None:
        correlation_text = "correlation undefined (fewer than 2 matched competitors or constant input)"
    else:
        correlation_text = f"{correlation_label(pearson)} correlation ({pearson:.3f})"
    parts = [correlation_text]
    if rmse is not None:
        parts.append(f"{rmse_label(rmse)} prediction error (RMSE {rmse:.2f})")
    if top10 is not None:
        parts.append(f"{top10_label(top10)} top-10 accuracy ({top10 * 100:.1f}%)")
    return "; ".join(parts)


def _fmt(value: float | None, fmt: str = ".3f") -> str:
    return "-" if value is None else format(value, fmt)


def _pct(value: float | None) -> str:
    return "-" if value is None else f"{value * 100:.1f}%"


class ValidationReporter:
    """検証結果のレポート出力"""

    def __init__(self, title: str = "検証結果"):
        self.title = title

    def print_summary(self, report: ValidationReport) -> str:
        """検証サマリーを生成して返す

        Args:
            report: 検証レポート

        Returns:
            フォーマットされたサマリー文字列
        """
        lines = [
            "=" * 60,
            f"{self.title}: {report.event_id or '-'}",
            "=" * 60,
            f"予測選手数: {report.predicted_count:,}",
            f"照合選手数: {report.matched_count:,}",
            f"非完走（除外）: {report.non_finisher_count:,}",
            f"結果なし（除外）: {report.missing_count:,}",
            "",
            "-" * 60,
            f"{'Pearson':21}|{_fmt(report.pearson):>12}",
            f"{'Spearman':21}|{_fmt(report.spearman):>12}",
            f"{'RMSE':21}|{_fmt(report.rmse, '.2f'):>12}",
            f"{'MAE':21}|{_fmt(report.mae, '.2f'):>12}",
            f"{'平均誤差':21}|{_fmt(report.mean_error, '.2f'):>12}",
            f"{'誤差標準偏差':21}|{_fmt(report.error_std, '.2f'):>12}",
            "-" * 60,
        ]
        for top_n in HIT_RATE_TOP_N:
            lines.append(f"{f'Top-{top_n} 的中率':21}|{_pct(report.hit_rate(top_n)):>12}")
        lines.append(f"{'Top-20 重み付き':21}|{_pct(report.top20_weighted):>12}")
        lines.append("-" * 60)
        lines.append(f"評価: {report.summary}")
        lines.append("=" * 60)
        return "\n".join(lines)

    def print_optimizer_summary(self, batch: OptimizerBatchResult) -> str:
        """最適化結果のサマリーを生成して返す

        Args:
            batch: 複数シードの最適化結果

        Returns:
            フォーマットされたサマリー文字列
        """
        lines = [
            "=" * 60,
            f"重み最適化結果: ベースライン {batch.baseline.name}",
            "=" * 60,
            f"ベースライン適合度: {batch.baseline_fitness:.4f}",
            "",
            f"{'シード':>8} | {'適合度':>8} | {'改善幅':>8} | {'相関':>7} | {'Top-20':>7} | {'推奨':^4}",
            "-" * 60,
        ]
        for result in batch.results:
            mark = "○" if result.recommended else "×"
            lines.append(
                f"{result.seed:>8} | {result.fitness:>8.4f} | {result.improvement:>+8.4f} | "
                f"{_fmt(result.report.pearson):>7} | {_pct(result.report.hit_rate(20)):>7} | {mark:^4}"
            )
        lines.append("-" * 60)
        if batch.recommends_baseline:
            lines.append(f"推奨: ベースライン（{batch.baseline.name}）を維持")
        else:
            best = batch.best
            lines.append(
                f"推奨: シード {best.seed} の最適化重み（改善幅 {best.improvement:+.4f}）"
            )
        lines.append("=" * 60)
        return "\n".join(lines)
