"""過去成績倍率の算出"""

import math
from typing import Mapping, Sequence

from golfrank.config.weights import (
    PAST_MULTIPLIER_MAX,
    PAST_MULTIPLIER_MIN,
    PAST_PERFORMANCE_WEIGHT,
    PAST_POSITION_FLOOR_SCORE,
    PAST_POSITION_SCORES,
    RECENCY_DECAY,
)


class PastPerformanceCalculator:
    """直近の着順から過去成績倍率を算出する

    着順をスコア化し、直近ほど重く（RECENCY_DECAY ** k）平均した値を
    非線形に倍率へ変換する。倍率は [PAST_MULTIPLIER_MIN, PAST_MULTIPLIER_MAX]
    に収め、weight で 1.0 側へ縮める。
    """

    def __init__(self, weight: float = PAST_PERFORMANCE_WEIGHT, decay: float = RECENCY_DECAY):
        """初期化

        Args:
            weight: 補正の適用度合い（0.0-1.0）
            decay: 直近重みの減衰率（0 < decay <= 1）
        """
        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"weight は [0, 1] の範囲: {weight}")
        if not 0.0 < decay <= 1.0:
            raise ValueError(f"decay は (0, 1] の範囲: {decay}")
        self.weight = weight
        self.decay = decay

    @staticmethod
    def position_score(position: int | None) -> float:
        """着順をスコアに変換する（予選落ち等はNone）"""
        if position is None:
            return PAST_POSITION_FLOOR_SCORE
        for limit, score in PAST_POSITION_SCORES:
            if position <= limit:
                return score
        return PAST_POSITION_FLOOR_SCORE

    def multiplier(self, recent_positions: Sequence[int | None]) -> float | None:
        """過去成績倍率を計算する

        Args:
            recent_positions: 直近の着順（新しい順、非完走はNone）

        Returns:
            倍率、過去成績がない場合はNone
        """
        if not recent_positions:
            return None

        weights = [self.decay**k for k in range(len(recent_positions))]
        scores = [self.position_score(position) for position in recent_positions]
        average = math.fsum(w * s for w, s in zip(weights, scores)) / math.fsum(weights)

        if average <= 0:
            raw = 0.85 + average * 1.25
        else:
            raw = 1.0 + (average**1.2) * 1.8
        raw = min(max(raw, PAST_MULTIPLIER_MIN), PAST_MULTIPLIER_MAX)
        return 1.0 + (raw - 1.0) * self.weight

    def calculate_all(
        self, history: Mapping[int, Sequence[int | None]]
    ) -> dict[int, float]:
        """選手ごとの過去成績倍率を計算する

        Args:
            history: 選手ID → 直近の着順（新しい順）

        Returns:
            選手ID → 倍率（過去成績がない選手は含まない）
        """
        multipliers = {}
        for competitor_id, positions in history.items():
            value = self.multiplier(positions)
            if value is not None:
                multipliers[competitor_id] = value
        return multipliers
