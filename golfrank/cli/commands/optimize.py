"""重み最適化コマンド"""

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
@click.option("--seed", "seeds", type=int, multiple=True, help="乱数シード（複数可、default: 1）")
@click.option("--iterations", type=int, default=None, help="シードごとの試行回数 (default: 1500)")
@click.option("--time-budget", type=float, default=None, help="シードごとの時間予算（秒）")
@click.option("--workers", type=int, default=None, help="並列プロセス数（省略時は逐次実行）")
@click.option("--save", type=click.Path(), default=None, help="推奨重みをJSONテンプレートとして保存")
def optimize(
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
    seeds: tuple[int, ...],
    iterations: int | None,
    time_budget: float | None,
    workers: int | None,
    save: str | None,
):
    """ベースライン重みを摂動して大会結果に合う重みを探索"""
    from golfrank.backtest import ValidationReporter
    from golfrank.config.settings import OptimizerSettings
    from golfrank.repositories.feed_repository import CsvFeedRepository
    from golfrank.services.optimizer import WeightOptimizer
    from golfrank.services.template_store import save_template_file

    seeds = seeds or (1,)
    try:
        optimizer_kwargs = {"time_budget_seconds": time_budget}
        if iterations is not None:
            optimizer_kwargs["iterations"] = iterations
        settings = OptimizerSettings(**optimizer_kwargs)

        baseline = resolve_configuration(template_id, venue, archetype, template_file)
        bundles, trends = load_bundles(rounds, approach, use_trends)
        realized = CsvFeedRepository().load_results(results)
        optimizer = WeightOptimizer(
            baseline,
            bundles,
            realized,
            event_id=event_id or (baseline.event_id or ""),
            settings=settings,
            scoring=build_scoring_settings(no_renormalize, low_sample_threshold),
            past_performance=load_past_performance(history),
            trends=trends,
        )

        click.echo(f"出場選手: {len(bundles)}人 / 結果: {len(realized)}人")
        click.echo(f"シード: {', '.join(str(s) for s in seeds)} / 試行回数: {settings.iterations}")
        click.echo("最適化中...")
        batch = optimizer.run_seeds(list(seeds), max_workers=workers)
    except (MissingInputError, WeightConfigError, ValueError) as e:
        click.echo(f"エラー: {e}")
        raise SystemExit(1)

    reporter = ValidationReporter(title="推奨重みの検証結果")
    click.echo("")
    click.echo(reporter.print_optimizer_summary(batch))
    for result in batch.results:
        if not result.completed:
            click.echo(f"シード {result.seed}: 時間予算により {result.iterations} 回で中断")

    report = batch.baseline_report if batch.recommends_baseline else batch.best.report
    click.echo("")
    click.echo(reporter.print_summary(report))

    if save:
        path = save_template_file(batch.recommended_configuration, save)
        click.echo("")
        click.echo(f"推奨重みを保存しました: {path}")


@click.command()
@input_options
@click.option("--results", required=True, type=click.Path(), help="大会結果CSV")
@click.option("--candidate-file", required=True, type=click.Path(), help="比較する候補テンプレートJSON")
@click.option("--event-id", type=str, default="", help="大会ID（レポート表示用）")
def compare(
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
    candidate_file: str,
    event_id: str,
):
    """ベースライン重みと候補重みを同じ適合度で比較"""
    from golfrank.backtest import ValidationReporter
    from golfrank.repositories.feed_repository import CsvFeedRepository
    from golfrank.services.optimizer import WeightOptimizer
    from golfrank.services.template_store import load_template_file

    try:
        baseline = resolve_configuration(template_id, venue, archetype, template_file)
        candidate = load_template_file(candidate_file)
        bundles, trends = load_bundles(rounds, approach, use_trends)
        realized = CsvFeedRepository().load_results(results)
        optimizer = WeightOptimizer(
            baseline,
            bundles,
            realized,
            event_id=event_id or (baseline.event_id or ""),
            scoring=build_scoring_settings(no_renormalize, low_sample_threshold),
            past_performance=load_past_performance(history),
            trends=trends,
        )
        comparison = optimizer.compare(baseline, candidate)
    except (MissingInputError, WeightConfigError, ValueError) as e:
        click.echo(f"エラー: {e}")
        raise SystemExit(1)

    click.echo("")
    click.echo(ValidationReporter(title=f"ベースライン（{baseline.name}）").print_summary(
        comparison.baseline_report
    ))
    click.echo("")
    click.echo(ValidationReporter(title=f"候補（{candidate.name}）").print_summary(
        comparison.candidate_report
    ))
    click.echo("")
    click.echo(f"適合度: ベースライン {comparison.baseline_fitness:.4f} / 候補 {comparison.candidate_fitness:.4f}")
    click.echo(f"改善幅: {comparison.improvement:+.4f}")
    if comparison.prefer_candidate:
        click.echo(f"推奨: 候補（{candidate.name}）")
    else:
        click.echo(f"推奨: ベースライン（{baseline.name}）を維持")
