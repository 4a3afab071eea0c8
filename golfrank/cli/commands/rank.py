"""ランキング作成コマンド"""

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
@click.option("--top", type=int, default=30, help="表示件数 (default: 30, 0で全件)")
@click.option("--output", type=click.Path(), default=None, help="ランキングCSVの出力先")
def rank(
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
    top: int,
    output: str | None,
):
    """ラウンド統計とアプローチ統計から出場選手のランキングを作成"""
    from golfrank.cli.utils.table_printer import print_ranking_table
    from golfrank.repositories.feed_repository import CsvFeedRepository
    from golfrank.services.ranking_service import RankingService

    try:
        configuration = resolve_configuration(template_id, venue, archetype, template_file)
        bundles, trends = load_bundles(rounds, approach, use_trends)
        past_performance = load_past_performance(history)
        service = RankingService(build_scoring_settings(no_renormalize, low_sample_threshold))
        ranking = service.rank_field(bundles, configuration, past_performance, trends=trends)
    except (MissingInputError, WeightConfigError, ValueError) as e:
        click.echo(f"エラー: {e}")
        raise SystemExit(1)

    click.echo(f"出場選手: {len(bundles)}人")
    click.echo("")
    click.echo("=" * 40)
    click.echo("ランキング")
    click.echo("=" * 40)
    print_ranking_table(ranking, top or None)

    if output:
        path = CsvFeedRepository().write_ranking(ranking, output)
        click.echo("")
        click.echo(f"ランキングを保存しました: {path}")
