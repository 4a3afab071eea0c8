"""テーブル表示ユーティリティ"""

from typing import Sequence

import click

from golfrank.models.ranking import RankingEntry
from golfrank.models.weights import WeightConfiguration


def print_ranking_table(
    ranking: Sequence[RankingEntry], top: int | None = None, finishes: dict[int, str] | None = None
) -> None:
    """ランキングテーブルを表示する

    Args:
        ranking: ランキング
        top: 表示件数（Noneなら全件）
        finishes: 選手ID → 着順表記（検証時のみ）
    """
    header = f"{'順位':^4} | {'ID':^8} | {'選手名':^24} | {'スコア':^8} | {'補正前':^8} | {'カバー率':^6}"
    if finishes is not None:
        header += f" | {'着順':^5}"
    click.echo(header)
    click.echo("-" * (82 if finishes is not None else 74))

    rows = ranking if top is None else ranking[:top]
    for entry in rows:
        # 選手名を24文字に切り詰め
        name = entry.name[:24]
        line = (
            f"{entry.rank:^4} | {entry.competitor_id:^8} | {name:<24} | "
            f"{entry.score:>8.3f} | {entry.raw_score:>8.3f} | {entry.coverage:>6.0%}"
        )
        if finishes is not None:
            line += f" | {finishes.get(entry.competitor_id, '-'):^5}"
        click.echo(line)


def print_template_table(configuration: WeightConfiguration) -> None:
    """テンプレートのグループ重みとメトリクス重みを表示する"""
    click.echo(f"{configuration.name}: {configuration.description}")
    if configuration.venue_id or configuration.event_id:
        click.echo(f"会場: {configuration.venue_id or '-'}  イベントID: {configuration.event_id or '-'}")
    if configuration.archetype is not None:
        click.echo(f"類型: {configuration.archetype.value}")
    click.echo("-" * 60)
    for group in configuration.groups:
        click.echo(f"{group.name:<40} {group.weight:>7.1%}")
        for metric, weight in group.metric_weights:
            click.echo(f"    {metric.value:<36} {weight:>7.1%}")
