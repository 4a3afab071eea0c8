"""ランキング検証コマンド"""

import click

from golfrank.cli.utils.inputs import (
    build_scoring_settings,
    input_options,
    load_bundles,
    load_past_performance,
    resolve_configuration,
)
from golfrank.errors import MissingInputError, WeightConfigError


@click.command()
@input_options
@click.option("--results", required=True, type=click.Path(), help="大会結果CSV")
@click.option("--event-id", type=str, default="", help="大会ID（レポート表示用）")
@click.option("--top", type=int, default=20, help="ランキング表示件数 (default: 20, 0で非表示)")
def validate(
    rounds: str,
    approach: str,
    template_id: str | None,
    venue: str | None,
    archetype: str | None,
    template_file: str | None,
    history: tuple[str, ...],
    no_renormalize: bool,
    low_sample_threshold: int | None,
    use_trends: bool,
    results: str,
    event_id: str,
    top: int,
):
    """ランキングを実際の大会結果と照合して精度を表示"""
    from golfrank.backtest import ValidationReporter
    from golfrank.cli.utils.table_printer import print_ranking_table
    from golfrank.repositories.feed_repository import CsvFeedRepository
    from golfrank.services.ranking_service import RankingService

    try:
        configuration = resolve_configuration(template_id, venue, archetype, template_file)
        bundles, trends = load_bundles(rounds, approach, use_trends)
        realized = CsvFeedRepository().load_results(results)
        past_performance = load_past_performance(history)
        service = RankingService(build_scoring_settings(no_renormalize, low_sample_threshold))
        ranking, report = service.evaluate(
            bundles, configuration, realized, event_id or (configuration.event_id or ""),
            past_performance, trends=trends,
        )
    except (MissingInputError, WeightConfigError, ValueError) as e:
        click.echo(f"エラー: {e}")
        raise SystemExit(1)

    if top > 0:
        finishes = {
            r.competitor_id: (str(r.position) if r.finished else r.status) for r in realized
        }
        click.echo("")
        print_ranking_table(ranking, top, finishes)

    click.echo("")
    click.echo(ValidationReporter(title=f"検証結果（{configuration.name}）").print_summary(report))
