"""データモデルパッケージ"""

from golfrank.models.bundle import CompetitorBundle
from golfrank.models.feeds import ApproachStatRow, RealizedResult, RoundStatRow
from golfrank.models.ranking import RankingEntry
from golfrank.models.report import (
    OptimizerBatchResult,
    OptimizerRunResult,
    SearchCheckpoint,
    ValidationReport,
)
from golfrank.models.weights import MetricGroup, WeightConfiguration

__all__ = [
    "ApproachStatRow",
    "CompetitorBundle",
    "MetricGroup",
    "OptimizerBatchResult",
    "OptimizerRunResult",
    "RankingEntry",
    "RealizedResult",
    "RoundStatRow",
    "SearchCheckpoint",
    "ValidationReport",
    "WeightConfiguration",
]
