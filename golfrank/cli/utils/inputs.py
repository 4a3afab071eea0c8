"""CLI共通の入力読み込み"""

import click

from golfrank.analyzers.aggregator import MetricAggregator
from golfrank.analyzers.past_performance import PastPerformanceCalculator
from golfrank.analyzers.trends import TrendCalculator
from golfrank.config.settings import ScoringSettings
from golfrank.constants import MetricId
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.weights import WeightConfiguration
from golfrank.repositories.feed_repository import CsvFeedRepository
from golfrank.services.template_store import TemplateStore, load_template_file


def input_options(func):
    """フィード・テンプレート指定の共通オプション"""
    options = [
        click.option("--rounds", required=True, type=click.Path(), help="ラウンド統計CSV"),
        click.option("--approach", required=True, type=click.Path(), help="アプローチ統計CSV"),
        click.option("--template", "template_id", type=str, default=None, help="テンプレートID"),
        click.option("--venue", type=str, default=None, help="会場（テンプレートID/会場ID/イベントID）"),
        click.option(
            "--archetype",
            type=click.Choice(["POWER", "TECHNICAL", "BALANCED"], case_sensitive=False),
            default=None,
            help="コース類型",
        ),
        click.option("--template-file", type=click.Path(), default=None, help="JSONテンプレートファイル"),
        click.option(
            "--history",
            multiple=True,
            type=click.Path(),
            help="過去大会の結果CSV（新しい順、複数可）",
        ),
        click.option(
            "--no-renormalize", is_flag=True, help="欠損メトリクスの重みを再正規化しない"
        ),
        click.option(
            "--low-sample-threshold",
            type=int,
            default=None,
            help="アプローチ距離帯の最少ショット数（default: 20）",
        ),
        click.option("--trends", "use_trends", is_flag=True, help="直近トレンド補正を適用"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_scoring_settings(no_renormalize: bool, low_sample_threshold: int | None) -> ScoringSettings:
    kwargs = {"renormalize_missing": not no_renormalize}
    if low_sample_threshold is not None:
        kwargs["low_sample_threshold"] = low_sample_threshold
    return ScoringSettings(**kwargs)


def resolve_configuration(
    template_id: str | None,
    venue: str | None,
    archetype: str | None,
    template_file: str | None,
) -> WeightConfiguration:
    """指定に応じて重み設定を決める（ファイル → テンプレートID → 会場/類型）"""
    if template_file:
        configuration = load_template_file(template_file)
        click.echo(f"テンプレート: {configuration.name}（ファイル: {template_file}）")
        return configuration

    store = TemplateStore()
    if template_id:
        try:
            configuration = store.get(template_id)
        except KeyError:
            click.echo(f"テンプレートが見つかりません: {template_id}")
            click.echo(f"利用可能: {', '.join(store.template_ids())}")
            raise SystemExit(1)
        click.echo(f"テンプレート: {configuration.name}")
        return configuration

    resolution = store.resolve(venue=venue, archetype=archetype)
    click.echo(f"テンプレート: {resolution.template.name}（解決: {resolution.strategy}）")
    return resolution.template


def load_bundles(
    rounds: str, approach: str, use_trends: bool = False
) -> tuple[list[CompetitorBundle], dict[int, dict[MetricId, float]] | None]:
    """フィードを読み込んでバンドルを作る

    Returns:
        (バンドル, トレンド)。use_trends が偽ならトレンドはNone
    """
    repository = CsvFeedRepository()
    round_rows = repository.load_round_stats(rounds)
    approach_rows = repository.load_approach_stats(approach)
    bundles = MetricAggregator().aggregate(round_rows, approach_rows)
    trends = TrendCalculator().calculate_all(round_rows) if use_trends else None
    return bundles, trends


def load_past_performance(history: tuple[str, ...]) -> dict[int, float] | None:
    if not history:
        return None
    positions = CsvFeedRepository().load_history(history)
    return PastPerformanceCalculator().calculate_all(positions)
