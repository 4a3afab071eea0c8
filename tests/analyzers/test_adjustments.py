"""スコア補正ステップのテスト"""

import pytest

from golfrank.analyzers.adjustments import (
    AdjustmentContext,
    AdjustmentPipeline,
    AdjustmentStep,
    ConfidenceDampening,
    PastPerformanceAdjustment,
)
from golfrank.config.settings import ScoringSettings


def make_context(coverage: float = 1.0, past_multiplier: float | None = None, neutral: float = 0.0):
    """テスト用AdjustmentContextを生成"""
    return AdjustmentContext(
        competitor_id=1,
        coverage=coverage,
        neutral_value=neutral,
        past_multiplier=past_multiplier,
    )


class TestConfidenceDampening:
    """ConfidenceDampeningのテスト"""

    def test_full_coverage_unchanged(self):
        """閾値以上のカバレッジでは係数1.0なら変化しない"""
        step = ConfidenceDampening(threshold=0.7)
        assert step.apply(2.0, make_context(coverage=0.8)) == pytest.approx(2.0)

    def test_below_threshold_scales_toward_neutral(self):
        """閾値未満は coverage / threshold 倍に縮める"""
        step = ConfidenceDampening(threshold=0.7)
        assert step.apply(2.0, make_context(coverage=0.35)) == pytest.approx(1.0)

    def test_zero_coverage_is_exactly_neutral(self):
        """カバレッジ0は中立値ちょうど"""
        step = ConfidenceDampening(threshold=0.7)
        assert step.apply(5.0, make_context(coverage=0.0, neutral=0.25)) == 0.25

    def test_negative_score_moves_up_toward_neutral(self):
        """負のスコアも中立値側へ縮む"""
        step = ConfidenceDampening(threshold=0.5)
        assert step.apply(-2.0, make_context(coverage=0.25)) == pytest.approx(-1.0)

    def test_confidence_factor(self):
        """閾値以上では confidence_factor を掛ける"""
        step = ConfidenceDampening(threshold=0.7, confidence_factor=0.5)
        assert step.apply(2.0, make_context(coverage=1.0)) == pytest.approx(1.0)

    def test_invalid_threshold(self):
        """閾値は (0, 1]"""
        with pytest.raises(ValueError):
            ConfidenceDampening(threshold=0.0)


class TestPastPerformanceAdjustment:
    """PastPerformanceAdjustmentのテスト"""

    def test_no_multiplier_unchanged(self):
        """倍率なしは変化しない"""
        step = PastPerformanceAdjustment()
        assert step.apply(1.5, make_context()) == 1.5

    def test_positive_score_multiplied(self):
        """中立値より上は差に倍率を掛ける"""
        step = PastPerformanceAdjustment()
        assert step.apply(1.0, make_context(past_multiplier=1.2)) == pytest.approx(1.2)

    def test_negative_score_divided(self):
        """中立値より下は差を倍率で割る（好調でも悪化しない）"""
        step = PastPerformanceAdjustment()
        assert step.apply(-1.2, make_context(past_multiplier=1.2)) == pytest.approx(-1.0)

    def test_poor_form_pushes_negative_score_down(self):
        """倍率<1は負のスコアをさらに下げる"""
        step = PastPerformanceAdjustment()
        assert step.apply(-1.0, make_context(past_multiplier=0.5)) == pytest.approx(-2.0)

    @pytest.mark.parametrize("multiplier", [0.0, -1.0])
    def test_non_positive_multiplier_raises(self, multiplier):
        """倍率は正である必要がある"""
        step = PastPerformanceAdjustment()
        with pytest.raises(ValueError):
            step.apply(1.0, make_context(past_multiplier=multiplier))


class TestAdjustmentPipeline:
    """AdjustmentPipelineのテスト"""

    def test_default_order(self):
        """デフォルトは信頼度減衰 → 過去成績補正"""
        pipeline = AdjustmentPipeline.default(ScoringSettings())
        assert pipeline.step_names == ("confidence", "past_performance")

    def test_applies_in_order(self):
        """ステップを順に適用する"""
        pipeline = AdjustmentPipeline.default(ScoringSettings(coverage_threshold=0.5))
        context = make_context(coverage=0.25, past_multiplier=2.0)
        # 2.0 → 1.0（減衰）→ 2.0（過去成績）
        assert pipeline.apply(2.0, context) == pytest.approx(2.0)

    def test_custom_step(self):
        """AdjustmentStepを継承した任意のステップを追加できる"""

        class AddOne(AdjustmentStep):
            name = "add_one"

            def apply(self, score, context):
                return score + 1.0

        pipeline = AdjustmentPipeline([AddOne(), AddOne()])
        assert pipeline.step_names == ("add_one", "add_one")
        assert pipeline.apply(0.0, make_context()) == 2.0

    def test_base_class_is_abstract(self):
        """基底クラスは直接インスタンス化できない"""
        with pytest.raises(TypeError):
            AdjustmentStep()
