"""Services module"""

from golfrank.services.optimizer import ComparisonResult, WeightOptimizer, fitness
from golfrank.services.ranking_service import RankingService
from golfrank.services.template_store import (
    TemplateResolution,
    TemplateStore,
    load_template_file,
    save_template_file,
)

__all__ = [
    "ComparisonResult",
    "RankingService",
    "TemplateResolution",
    "TemplateStore",
    "WeightOptimizer",
    "fitness",
    "load_template_file",
    "save_template_file",
]
