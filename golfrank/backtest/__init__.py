"""検証モジュール

予測ランキングと実際の着順を照合して精度を検証する
"""

from golfrank.backtest.metrics import ValidationCalculator
from golfrank.backtest.reporter import ValidationReporter, summarize

__all__ = [
    "ValidationCalculator",
    "ValidationReporter",
    "summarize",
]
