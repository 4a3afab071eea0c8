"""テンプレート表示コマンド"""

import click


@click.command()
@click.option("--show", "template_id", type=str, default=None, help="重みを表示するテンプレートID")
@click.option("--export", type=click.Path(), default=None, help="--show のテンプレートをJSONに書き出す")
def templates(template_id: str | None, export: str | None):
    """重みテンプレートの一覧・内容を表示"""
    from golfrank.cli.utils.table_printer import print_template_table
    from golfrank.services.template_store import TemplateStore, save_template_file

    store = TemplateStore()
    if template_id is None:
        if export:
            click.echo("--export には --show の指定が必要です")
            raise SystemExit(1)
        click.echo(f"{'テンプレートID':<28} | {'会場ID':<16} | {'イベントID':<8} | {'類型':<10}")
        click.echo("-" * 72)
        for name in store.template_ids():
            configuration = store.get(name)
            archetype = configuration.archetype.value if configuration.archetype else "-"
            click.echo(
                f"{name:<28} | {configuration.venue_id or '-':<16} | "
                f"{configuration.event_id or '-':<8} | {archetype:<10}"
            )
        return

    try:
        configuration = store.get(template_id)
    except KeyError:
        click.echo(f"テンプレートが見つかりません: {template_id}")
        raise SystemExit(1)

    print_template_table(configuration)
    if export:
        path = save_template_file(configuration, export)
        click.echo("")
        click.echo(f"テンプレートを保存しました: {path}")
