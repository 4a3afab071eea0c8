"""スコア補正ステップ

重み付きスコアに順に適用する補正の基底クラスと実装。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from golfrank.config.settings import ScoringSettings


@dataclass(frozen=True)
class AdjustmentContext:
    """補正に必要な選手ごとの情報

    Attributes:
        competitor_id: 選手ID
        coverage: カバレッジ（0.0-1.0）
        neutral_value: 中立値
        past_multiplier: 過去成績倍率（Noneなら補正なし）
    """

    competitor_id: int
    coverage: float
    neutral_value: float
    past_multiplier: float | None = None


class AdjustmentStep(ABC):
    """補正ステップの基底クラス

    全てのステップはこのクラスを継承し、nameとapplyメソッドを実装する必要がある。
    """

    name: str

    @abstractmethod
    def apply(self, score: float, context: AdjustmentContext) -> float:
        """補正後のスコアを返す

        Args:
            score: 補正前スコア
            context: 選手ごとの情報

        Returns:
            補正後スコア
        """
        pass


class ConfidenceDampening(AdjustmentStep):
    """カバレッジによる信頼度減衰

    カバレッジが閾値未満なら中立値からの差を coverage / threshold 倍に縮める
    （カバレッジ0で中立値ちょうど）。閾値以上では confidence_factor を掛ける。
    """

    name = "confidence"

    def __init__(self, threshold: float, confidence_factor: float = 1.0):
        if not 0.0 < threshold <= 1.0:
            raise ValueError(f"threshold は (0, 1] の範囲: {threshold}")
        self.threshold = threshold
        self.confidence_factor = confidence_factor

    def apply(self, score: float, context: AdjustmentContext) -> float:
        neutral = context.neutral_value
        if context.coverage <= 0.0:
            return neutral
        scale = self.confidence_factor
        if context.coverage < self.threshold:
            scale *= context.coverage / self.threshold
        return neutral + (score - neutral) * scale


class PastPerformanceAdjustment(AdjustmentStep):
    """過去成績倍率による補正

    中立値より上のスコアは差に倍率を掛け、下のスコアは倍率で割る。
    倍率>1（好調）が負のスコアをさらに悪化させることはない。
    """

    name = "past_performance"

    def apply(self, score: float, context: AdjustmentContext) -> float:
        multiplier = context.past_multiplier
        if multiplier is None:
            return score
        if multiplier <= 0:
            raise ValueError(
                f"過去成績倍率は正である必要があります: {multiplier} (選手 {context.competitor_id})"
            )
        neutral = context.neutral_value
        deviation = score - neutral
        if deviation >= 0:
            return neutral + deviation * multiplier
        return neutral + deviation / multiplier


class AdjustmentPipeline:
    """補正ステップを順に適用する"""

    def __init__(self, steps: Sequence[AdjustmentStep]):
        self._steps = tuple(steps)

    @property
    def step_names(self) -> tuple[str, ...]:
        return tuple(step.name for step in self._steps)

    def apply(self, score: float, context: AdjustmentContext) -> float:
        for step in self._steps:
            score = step.apply(score, context)
        return score

    @classmethod
    def default(cls, settings: ScoringSettings) -> "AdjustmentPipeline":
        """信頼度減衰 → 過去成績補正 の順のパイプライン"""
        return cls(
            [
                ConfidenceDampening(settings.coverage_threshold, settings.confidence_factor),
                PastPerformanceAdjustment(),
            ]
        )
