"""Click CLIメインモジュール"""

import logging

import click


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="詳細ログを表示")
def main(verbose: bool):
    """ゴルフ大会の選手ランキングCLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# コマンドの登録
from golfrank.cli.commands.rank import rank
from golfrank.cli.commands.validate import validate
from golfrank.cli.commands.optimize import compare, optimize
from golfrank.cli.commands.templates import templates

main.add_command(rank)
main.add_command(validate)
main.add_command(optimize)
main.add_command(compare)
main.add_command(templates)


__all__ = ["main"]
