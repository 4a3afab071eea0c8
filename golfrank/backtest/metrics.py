"""検証メトリクス計算モジュール

予測順位と実際の着順を照合し、相関・誤差・的中率を計算する
"""

import logging
import math
from typing import Mapping, Sequence

import numpy as np
from scipy import stats

from golfrank.backtest.reporter import summarize
from golfrank.constants import HIT_RATE_TOP_N
from golfrank.errors import MissingInputError
from golfrank.models.feeds import RealizedResult
from golfrank.models.ranking import RankingEntry
from golfrank.models.report import ValidationReport

logger = logging.getLogger(__name__)

WEIGHTED_TOP_N = 20


class ValidationCalculator:
    """検証メトリクス計算クラス"""

    @staticmethod
    def correlation(
        predicted: Sequence[float], actual: Sequence[float], method: str = "pearson"
    ) -> float | None:
        """相関係数を計算

        Args:
            predicted: 予測順位
            actual: 実際の着順
            method: "pearson" または "spearman"（同順位は平均順位）

        Returns:
            相関係数（-1.0 - 1.0）、2件未満またはどちらかが一定の場合はNone
        """
        if len(predicted) != len(actual):
            raise ValueError("predicted と actual の長さが一致しません")
        if len(predicted) < 2:
            return None
        if len(set(predicted)) < 2 or len(set(actual)) < 2:
            return None

        if method == "pearson":
            value = stats.pearsonr(predicted, actual)[0]
        elif method == "spearman":
            value = stats.spearmanr(predicted, actual)[0]
        else:
            raise ValueError(f"未知の相関手法: {method}")

        value = float(value)
        if math.isnan(value):
            return None
        return min(1.0, max(-1.0, value))

    @staticmethod
    def hit_rate(
        predicted_order: Sequence[int], finishes: Mapping[int, int | None], top_n: int
    ) -> float | None:
        """Top-N 的中率を計算

        予測上位N人のうち、実際にN位以内だった割合。
        非完走（着順None）と結果にいない選手は外れとして数える。

        Args:
            predicted_order: 予測順の選手ID
            finishes: 選手ID → 着順（非完走はNone）
            top_n: 上位N

        Returns:
            的中率（0.0 - 1.0）、予測がない・結果が空の場合はNone
        """
        candidates = list(predicted_order[:top_n])
        if not candidates or not finishes:
            return None
        hits = 0
        for cid in candidates:
            position = finishes.get(cid)
            if position is not None and position <= top_n:
                hits += 1
        return hits / len(candidates)

    @staticmethod
    def weighted_top_n(
        predicted_order: Sequence[int], finishes: Mapping[int, int | None], top_n: int = WEIGHTED_TOP_N
    ) -> float | None:
        """上位Nの順位重み付きスコア（NDCG形式）

        数値の着順がある選手を予測順に並べた上位Nについて、実際にN位以内の
        選手に gain = N - 着順 + 1 を与え、予測位置で log2 割引した合計を
        理想順の合計で割る。非完走と結果にいない選手は候補に含めない。

        Returns:
            スコア（0.0 - 1.0）、上位N位以内の完走者がいない場合はNone
        """
        candidates = [cid for cid in predicted_order if finishes.get(cid) is not None][:top_n]
        ideal_positions = sorted(
            position for position in finishes.values() if position is not None and position <= top_n
        )
        if not ideal_positions:
            return None

        dcg = 0.0
        for index, cid in enumerate(candidates):
            position = finishes[cid]
            if position is not None and position <= top_n:
                dcg += (top_n - position + 1) / math.log2(index + 2)
        ideal = math.fsum(
            (top_n - position + 1) / math.log2(index + 2)
            for index, position in enumerate(ideal_positions[:top_n])
        )
        return dcg / ideal

    @staticmethod
    def validate(
        ranking: Sequence[RankingEntry],
        results: Sequence[RealizedResult],
        event_id: str = "",
    ) -> ValidationReport:
        """全メトリクスを計算

        予測ランキングと実際の結果を照合する。相関・RMSE・MAE は
        数値の着順がある選手のみを対象にする（非完走・結果にない選手は除外）。

        Args:
            ranking: 予測ランキング（順位順）
            results: 実際の結果
            event_id: 大会ID

        Returns:
            ValidationReport

        Raises:
            MissingInputError: ranking または results が None の場合
        """
        if ranking is None:
            raise MissingInputError("予測ランキングが指定されていません")
        if results is None:
            raise MissingInputError("大会結果が指定されていません")

        finishes: dict[int, int | None] = {}
        for result in results:
            finishes[result.competitor_id] = result.position

        predicted_order = [entry.competitor_id for entry in sorted(ranking, key=lambda e: e.rank)]
        predicted_rank = {entry.competitor_id: entry.rank for entry in ranking}

        matched = [
            (predicted_rank[cid], finishes[cid])
            for cid in predicted_order
            if finishes.get(cid) is not None
        ]
        non_finishers = sum(1 for cid in predicted_order if cid in finishes and finishes[cid] is None)
        missing = sum(1 for cid in predicted_order if cid not in finishes)

        predicted = [float(p) for p, _ in matched]
        actual = [float(a) for _, a in matched]

        pearson = ValidationCalculator.correlation(predicted, actual, "pearson")
        spearman = ValidationCalculator.correlation(predicted, actual, "spearman")

        rmse = mae = mean_error = error_std = None
        if matched:
            errors = np.asarray(predicted) - np.asarray(actual)
            rmse = float(np.sqrt(np.mean(errors**2)))
            mae = float(np.mean(np.abs(errors)))
            mean_error = float(np.mean(errors))
            error_std = float(np.std(errors))

        hit_rates = {
            top_n: ValidationCalculator.hit_rate(predicted_order, finishes, top_n)
            for top_n in HIT_RATE_TOP_N
        }
        top20_weighted = ValidationCalculator.weighted_top_n(predicted_order, finishes)

        if len(matched) < 2:
            logger.warning(f"[{event_id}] 照合できた選手が{len(matched)}人のため相関は未定義です")

        summary = summarize(pearson, rmse, hit_rates.get(10))
        return ValidationReport(
            event_id=event_id,
            matched_count=len(matched),
            pearson=pearson,
            spearman=spearman,
            rmse=rmse,
            mae=mae,
            hit_rates=hit_rates,
            top20_weighted=top20_weighted,
            mean_error=mean_error,
            error_std=error_std,
            predicted_count=len(predicted_order),
            non_finisher_count=non_finishers,
            missing_count=missing,
            summary=summary,
        )
