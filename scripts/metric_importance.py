#!/usr/bin/env python3
"""メトリクス重要度測定スクリプト

各メトリクス単体での予測力（着順との相関・上位的中率）を測定し、
重みテンプレート調整の参考データを提供する。

使用方法:
    python scripts/metric_importance.py --rounds data/rounds.csv --approach data/approach.csv \
        --results data/results.csv
"""

import argparse
import math
import sys
from dataclasses import dataclass
from pathlib import Path

from scipy import stats

# golfrankパッケージをインポートパスに追加
sys.path.insert(0, str(Path(__file__).parent.parent))


@dataclass
class MetricImportanceResult:
    """メトリクス重要度測定結果

    Attributes:
        metric_name: メトリクス名
        correlation: スピアマン相関係数（メトリクス値と着順の相関、計算できない場合はNone）
        hit_rate_top10: メトリクス上位10人のTop10的中率
        hit_rate_top20: メトリクス上位20人のTop20的中率
        sample_count: サンプル数
    """

    metric_name: str
    correlation: float | None
    hit_rate_top10: float | None
    hit_rate_top20: float | None
    sample_count: int


def calculate_metric_hit_rate(data: list[dict], top_n: int = 10) -> float | None:
    """メトリクス単体での的中率を計算

    メトリクス値の上位 top_n 人のうち、実際に top_n 位以内だった割合。

    Args:
        data: [{"metric_value": float, "finish_position": int}, ...]
        top_n: 上位何人・何位以内を的中とするか

    Returns:
        的中率（0.0-1.0）、データがない場合はNone
    """
    if not data:
        return None

    ranked = sorted(data, key=lambda d: -d["metric_value"])[:top_n]
    hits = sum(1 for d in ranked if d["finish_position"] <= top_n)
    return hits / len(ranked)


def calculate_metric_ranking_correlation(data: list[dict]) -> float | None:
    """メトリクス値と着順の相関を計算

    Args:
        data: [{"metric_value": float, "finish_position": int}, ...]

    Returns:
        スピアマン相関係数（-1.0 to 1.0、負の値が良い）。2件未満・値が一定の場合はNone
    """
    if len(data) < 2:
        return None

    values = [d["metric_value"] for d in data]
    positions = [d["finish_position"] for d in data]
    if len(set(values)) < 2 or len(set(positions)) < 2:
        return None

    correlation, _ = stats.spearmanr(values, positions)
    if math.isnan(correlation):
        return None
    return float(correlation)


def measure_metric_importance(metric_name: str, data: list[dict]) -> MetricImportanceResult:
    """メトリクスの重要度を総合的に測定

    Args:
        metric_name: メトリクス名
        data: [{"metric_value": float, "finish_position": int}, ...]

    Returns:
        MetricImportanceResult
    """
    return MetricImportanceResult(
        metric_name=metric_name,
        correlation=calculate_metric_ranking_correlation(data),
        hit_rate_top10=calculate_metric_hit_rate(data, top_n=10),
        hit_rate_top20=calculate_metric_hit_rate(data, top_n=20),
        sample_count=len(data),
    )


def collect_metric_data(bundles, results, metric, low_sample_threshold: int = 20) -> list[dict]:
    """バンドルと大会結果からメトリクス値と着順の組を作る

    非完走・結果なし・データなし（サンプル不足を含む）の選手は除外する。
    小さいほど良いメトリクスは符号を反転する。

    Args:
        bundles: CompetitorBundle のリスト
        results: RealizedResult のリスト
        metric: MetricId
        low_sample_threshold: アプローチ距離帯の最少ショット数

    Returns:
        [{"metric_value": float, "finish_position": int}, ...]
    """
    from golfrank.analyzers.score_calculator import oriented, trusted_value

    finishes = {r.competitor_id: r.position for r in results if r.finished}
    data = []
    for bundle in bundles:
        position = finishes.get(bundle.competitor_id)
        if position is None:
            continue
        value = trusted_value(bundle, metric, low_sample_threshold)
        if value is None:
            continue
        data.append({"metric_value": oriented(metric, value), "finish_position": position})
    return data


def _fmt(value: float | None, fmt: str) -> str:
    return "-" if value is None else format(value, fmt)


def print_results(results: list[MetricImportanceResult]) -> None:
    """結果を表形式で出力（相関が計算できないメトリクスは末尾に "-" で表示）"""
    print("\n" + "=" * 80)
    print("                        メトリクス重要度測定結果")
    print("=" * 80)
    print(
        f"{'メトリクス':<36} {'相関係数':>10} {'Top10的中率':>10} "
        f"{'Top20的中率':>10} {'サンプル数':>10}"
    )
    print("-" * 80)

    ordered = sorted(
        results,
        key=lambda x: (x.correlation is None, x.correlation or 0.0, x.metric_name),
    )
    for r in ordered:
        print(
            f"{r.metric_name:<36} {_fmt(r.correlation, '.3f'):>10} "
            f"{_fmt(r.hit_rate_top10, '.1%'):>10} {_fmt(r.hit_rate_top20, '.1%'):>10} "
            f"{r.sample_count:>10,}"
        )

    print("=" * 80)
    print("\n[解釈ガイド]")
    print("- 相関係数: 負の値が良い（値が良い=着順が良い）、-1に近いほど予測力が高い")
    print("- Top10/Top20的中率: メトリクス上位の選手が実際に上位に入った割合")


def main():
    """メイン処理"""
    from golfrank.analyzers.aggregator import MetricAggregator
    from golfrank.constants import MetricId
    from golfrank.errors import MissingInputError, UnknownMetricError
    from golfrank.repositories.feed_repository import CsvFeedRepository
    from golfrank.utils.metric_resolver import resolve_metric_label

    parser = argparse.ArgumentParser(
        description="メトリクス重要度測定",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
    python scripts/metric_importance.py --rounds rounds.csv --approach approach.csv --results results.csv
    python scripts/metric_importance.py --rounds rounds.csv --approach approach.csv --results results.csv \\
        --metric "SG Putting"
        """,
    )
    parser.add_argument("--rounds", required=True, help="ラウンド統計CSV")
    parser.add_argument("--approach", required=True, help="アプローチ統計CSV")
    parser.add_argument("--results", required=True, help="大会結果CSV")
    parser.add_argument(
        "--metric",
        action="append",
        help="特定メトリクスのみ測定（複数可、未指定で全メトリクス）",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="詳細出力")
    args = parser.parse_args()

    try:
        if args.metric:
            metrics = [resolve_metric_label(label).metric for label in args.metric]
        else:
            metrics = list(MetricId)

        repository = CsvFeedRepository()
        bundles = MetricAggregator().aggregate(
            repository.load_round_stats(args.rounds),
            repository.load_approach_stats(args.approach),
        )
        results = repository.load_results(args.results)
    except (MissingInputError, UnknownMetricError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"出場選手: {len(bundles)}人 / 結果: {len(results)}人")
    print(f"対象メトリクス: {len(metrics)}件")
    print("\n測定中...")

    measured = []
    for metric in metrics:
        data = collect_metric_data(bundles, results, metric)
        result = measure_metric_importance(metric.value, data)
        measured.append(result)

        if args.verbose:
            print(f"  - {metric.value}: サンプル数 {result.sample_count}")

    print_results(measured)


if __name__ == "__main__":
    main()
