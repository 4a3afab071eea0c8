"""ValidationCalculatorのテスト

TDDのREDフェーズ: テストを作成し、FAILを確認する
"""

import pytest

from golfrank.backtest.metrics import ValidationCalculator
from golfrank.errors import MissingInputError
from golfrank.models.feeds import RealizedResult
from golfrank.models.ranking import RankingEntry


# === テストデータ生成ヘルパー ===


def make_ranking(competitor_ids: list[int]) -> list[RankingEntry]:
    """予測順の選手IDからランキングを生成"""
    count = len(competitor_ids)
    return [
        RankingEntry(
            competitor_id=cid,
            name=f"Player {cid}",
            score=float(count - index),
            rank=index + 1,
            coverage=1.0,
            raw_score=float(count - index),
        )
        for index, cid in enumerate(competitor_ids)
    ]


def make_results(finishes: dict[int, int | str]) -> list[RealizedResult]:
    """選手ID → 着順（非完走は "CUT" などの文字列）から結果を生成"""
    results = []
    for cid, finish in finishes.items():
        if isinstance(finish, str):
            results.append(RealizedResult(competitor_id=cid, position=None, status=finish))
        else:
            results.append(RealizedResult(competitor_id=cid, position=finish))
    return results


class TestCorrelation:
    """correlationのテスト"""

    def test_perfect_positive(self):
        """完全一致は1.0"""
        assert ValidationCalculator.correlation([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        """完全な逆順は-1.0"""
        assert ValidationCalculator.correlation([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)

    def test_spearman_with_ties(self):
        """スピアマンは同順位を平均順位で扱う"""
        value = ValidationCalculator.correlation([1, 2, 3, 4], [1, 1, 3, 4], "spearman")
        assert 0.9 < value < 1.0

    def test_fewer_than_two_is_undefined(self):
        """2件未満は未定義"""
        assert ValidationCalculator.correlation([1], [1]) is None
        assert ValidationCalculator.correlation([], []) is None

    def test_constant_input_is_undefined(self):
        """一定の系列は未定義（0とは区別する）"""
        assert ValidationCalculator.correlation([1, 2, 3], [5, 5, 5]) is None

    def test_length_mismatch_raises(self):
        """長さが違う場合はValueError"""
        with pytest.raises(ValueError):
            ValidationCalculator.correlation([1, 2], [1, 2, 3])

    def test_unknown_method_raises(self):
        """未知の手法はValueError"""
        with pytest.raises(ValueError):
            ValidationCalculator.correlation([1, 2], [1, 2], "kendall")


class TestHitRate:
    """hit_rateのテスト"""

    def test_counts_hits_in_top_n(self):
        """予測上位N人のうちN位以内だった割合"""
        order = [1, 2, 3, 4]
        finishes = {1: 1, 2: 9, 3: 2, 4: 3}
        assert ValidationCalculator.hit_rate(order, finishes, 2) == pytest.approx(0.5)

    def test_non_finisher_is_a_miss(self):
        """非完走は外れ"""
        order = [1, 2]
        finishes = {1: None, 2: 1}
        assert ValidationCalculator.hit_rate(order, finishes, 2) == pytest.approx(0.5)

    def test_competitor_missing_from_results_is_a_miss(self):
        """結果にない選手も予測上位N人に含め、外れとして数える"""
        order = list(range(1, 11))
        finishes = {cid: cid - 1 for cid in range(2, 11)}
        assert ValidationCalculator.hit_rate(order, finishes, 5) == pytest.approx(0.8)

    def test_fewer_predictions_than_top_n(self):
        """予測がN人未満なら予測人数で割る"""
        assert ValidationCalculator.hit_rate([1, 2], {1: 1, 2: 30}, 10) == pytest.approx(0.5)

    def test_no_candidates_is_none(self):
        """対象がいなければNone"""
        assert ValidationCalculator.hit_rate([1, 2], {}, 5) is None


class TestWeightedTopN:
    """weighted_top_nのテスト"""

    def test_perfect_order_is_one(self):
        """理想順なら1.0"""
        order = list(range(1, 26))
        finishes = {cid: cid for cid in order}
        assert ValidationCalculator.weighted_top_n(order, finishes) == pytest.approx(1.0)

    def test_reversed_order_is_lower(self):
        """逆順は理想より低い"""
        order = list(range(25, 0, -1))
        finishes = {cid: cid for cid in order}
        assert ValidationCalculator.weighted_top_n(order, finishes) < 1.0

    def test_non_finishers_and_missing_are_not_candidates(self):
        """非完走・結果にない選手は候補から外れ、後続の予測が繰り上がる"""
        order = [1, 99, 2, 3]
        finishes = {1: None, 2: 1, 3: 2}
        assert ValidationCalculator.weighted_top_n(order, finishes, 2) == pytest.approx(1.0)

    def test_no_top_finishers_is_none(self):
        """上位N位以内の完走者がいなければNone"""
        assert ValidationCalculator.weighted_top_n([1, 2], {1: None, 2: 45}) is None


class TestValidate:
    """validateのテスト"""

    def test_perfect_prediction(self):
        """予測順位と着順が一致する3人"""
        report = ValidationCalculator.validate(
            make_ranking([10, 20, 30]), make_results({10: 1, 20: 2, 30: 3}), "E1"
        )
        assert report.event_id == "E1"
        assert report.matched_count == 3
        assert report.pearson == pytest.approx(1.0)
        assert report.spearman == pytest.approx(1.0)
        assert report.rmse == pytest.approx(0.0)
        assert report.mae == pytest.approx(0.0)
        assert report.hit_rate(5) == pytest.approx(1.0)
        assert report.correlation_defined is True

    def test_inverted_prediction(self):
        """完全に逆順の予測"""
        report = ValidationCalculator.validate(
            make_ranking([10, 20, 30]), make_results({10: 3, 20: 2, 30: 1})
        )
        assert report.pearson == pytest.approx(-1.0)
        assert report.spearman == pytest.approx(-1.0)
        assert report.rmse == pytest.approx((8 / 3) ** 0.5)
        assert report.mae == pytest.approx(4 / 3)

    def test_competitor_missing_from_results_is_excluded(self):
        """結果にない選手は照合から除外する"""
        report = ValidationCalculator.validate(
            make_ranking([10, 99, 20, 30]), make_results({10: 1, 20: 2, 30: 3})
        )
        assert report.predicted_count == 4
        assert report.matched_count == 3
        assert report.missing_count == 1

    def test_non_finishers_are_excluded_from_errors(self):
        """非完走は相関・誤差から除外する"""
        report = ValidationCalculator.validate(
            make_ranking([10, 20, 30, 40]), make_results({10: 1, 20: "CUT", 30: 2, 40: 3})
        )
        assert report.matched_count == 3
        assert report.non_finisher_count == 1
        assert report.spearman == pytest.approx(1.0)

    def test_single_match_is_undefined(self):
        """照合が1人なら相関は未定義"""
        report = ValidationCalculator.validate(make_ranking([10, 20]), make_results({10: 1}))
        assert report.matched_count == 1
        assert report.pearson is None
        assert report.spearman is None
        assert report.correlation_defined is False
        assert "undefined" in report.summary

    def test_no_results(self):
        """結果が空でも例外にならない"""
        report = ValidationCalculator.validate(make_ranking([10, 20]), [])
        assert report.matched_count == 0
        assert report.rmse is None
        assert report.hit_rate(5) is None
        assert report.top20_weighted is None

    def test_mean_error_sign(self):
        """平均誤差は予測順位 - 着順"""
        report = ValidationCalculator.validate(
            make_ranking([10, 20]), make_results({10: 3, 20: 4})
        )
        assert report.mean_error == pytest.approx(-2.0)
        assert report.error_std == pytest.approx(0.0)

    def test_to_dict(self):
        """辞書形式に変換できる"""
        report = ValidationCalculator.validate(
            make_ranking([10, 20, 30]), make_results({10: 1, 20: 2, 30: 3}), "E1"
        )
        data = report.to_dict()
        assert data["eventId"] == "E1"
        assert data["matchedCount"] == 3
        assert set(data["hitRates"]) == {"5", "10", "20", "50"}

    def test_top_n_counts_competitor_missing_from_results(self):
        """予測上位にいて結果にない選手は的中率の外れになる"""
        report = ValidationCalculator.validate(
            make_ranking(list(range(1, 11))),
            make_results({cid: cid - 1 for cid in range(2, 11)}),
        )
        assert report.missing_count == 1
        assert report.hit_rate(5) == pytest.approx(0.8)
        assert report.hit_rate(10) == pytest.approx(0.9)

    def test_missing_results_raises(self):
        """結果がNoneならMissingInputError"""
        with pytest.raises(MissingInputError):
            ValidationCalculator.validate(make_ranking([1]), None, "E")

    def test_missing_ranking_raises(self):
        """ランキングがNoneならMissingInputError"""
        with pytest.raises(MissingInputError):
            ValidationCalculator.validate(None, make_results({1: 1}), "E")
