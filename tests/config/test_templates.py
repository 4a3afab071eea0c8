"""重みテンプレートのマスターデータのテスト"""

import pytest

from golfrank.config.templates import (
    ARCHETYPE_TEMPLATES,
    DEFAULT_ARCHETYPE,
    GROUP_NAMES,
    VENUE_TEMPLATES,
)
from golfrank.constants import LOWER_IS_BETTER, CourseArchetype
from golfrank.models.weights import WeightConfiguration

ALL_TEMPLATES = {**ARCHETYPE_TEMPLATES, **VENUE_TEMPLATES}


class TestTemplateData:
    """テンプレート定義のテスト"""

    def test_archetypes_cover_all_course_types(self):
        """全てのコース類型にテンプレートがある"""
        assert set(ARCHETYPE_TEMPLATES) == {archetype.value for archetype in CourseArchetype}

    def test_default_archetype_exists(self):
        """既定類型のテンプレートがある"""
        assert DEFAULT_ARCHETYPE in ARCHETYPE_TEMPLATES

    @pytest.mark.parametrize("template_id", sorted(ALL_TEMPLATES))
    def test_every_template_loads(self, template_id):
        """全テンプレートが検証を通る"""
        configuration = WeightConfiguration.from_dict(ALL_TEMPLATES[template_id])
        assert configuration.name == template_id
        assert sum(group.weight for group in configuration.groups) == pytest.approx(1.0)
        for group in configuration.groups:
            assert sum(w for _, w in group.metric_weights) == pytest.approx(1.0)

    @pytest.mark.parametrize("template_id", sorted(ALL_TEMPLATES))
    def test_every_template_uses_common_groups(self, template_id):
        """全テンプレートが共通のグループ構成を使う"""
        configuration = WeightConfiguration.from_dict(ALL_TEMPLATES[template_id])
        assert configuration.group_names == GROUP_NAMES

    @pytest.mark.parametrize("template_id", sorted(VENUE_TEMPLATES))
    def test_venue_templates_have_identifiers(self, template_id):
        """会場テンプレートは会場IDとイベントIDを持つ"""
        configuration = WeightConfiguration.from_dict(VENUE_TEMPLATES[template_id])
        assert configuration.venue_id
        assert configuration.event_id

    def test_negative_weights_become_magnitudes(self):
        """会場テンプレートの負の重み（小さいほど良い指標）は絶対値になる"""
        configuration = WeightConfiguration.from_dict(VENUE_TEMPLATES["PEBBLE_BEACH_PRO_AM"])
        for group in configuration.groups:
            for metric, weight in group.metric_weights:
                assert weight >= 0
        assert configuration.expected_metrics() & LOWER_IS_BETTER
