"""TemplateStoreのテスト"""

import json
import logging

import pytest

from golfrank.config.templates import ARCHETYPE_TEMPLATES
from golfrank.constants import CourseArchetype
from golfrank.errors import MissingInputError, WeightConfigError
from golfrank.services.template_store import TemplateStore, load_template_file, save_template_file


def make_template(name: str, **extra) -> dict:
    """テスト用の最小テンプレート辞書を生成"""
    data = {
        "name": name,
        "groupWeights": {"Putting": 0.5, "Driving": 0.5},
        "metricWeights": {
            "Putting": {"SG Putting": {"weight": 1.0}},
            "Driving": {"SG OTT": {"weight": 0.6}, "Driving Distance": {"weight": 0.4}},
        },
    }
    data.update(extra)
    return data


class TestTemplateStore:
    """TemplateStoreのテスト"""

    def test_template_ids(self):
        """類型 → 会場の順にIDを返す"""
        ids = TemplateStore().template_ids()
        assert ids[:3] == ["POWER", "TECHNICAL", "BALANCED"]
        assert "PEBBLE_BEACH_PRO_AM" in ids
        assert "TPC_SCOTTSDALE" in ids

    def test_get_is_case_insensitive(self):
        """テンプレートIDは大文字小文字を区別しない"""
        store = TemplateStore()
        assert store.get("pebble_beach_pro_am").name == "PEBBLE_BEACH_PRO_AM"
        assert store.get("power").name == "POWER"

    def test_get_unknown_raises(self):
        """未知のテンプレートIDはKeyError"""
        with pytest.raises(KeyError):
            TemplateStore().get("AUGUSTA")

    @pytest.mark.parametrize("venue", ["PEBBLE_BEACH_PRO_AM", "pebble_beach", "5"])
    def test_resolve_by_venue(self, venue):
        """テンプレートID・会場ID・イベントIDで会場テンプレートを解決する"""
        resolution = TemplateStore().resolve(venue=venue)
        assert resolution.strategy == "venue"
        assert resolution.template.name == "PEBBLE_BEACH_PRO_AM"

    def test_venue_takes_priority_over_archetype(self):
        """会場が一致すれば類型より優先する"""
        resolution = TemplateStore().resolve(venue="waialae", archetype="POWER")
        assert resolution.strategy == "venue"
        assert resolution.template.name == "WAIALAE_COUNTRY_CLUB"

    def test_unknown_venue_falls_back_to_archetype(self):
        """会場が見つからなければ類型で解決する"""
        resolution = TemplateStore().resolve(venue="augusta", archetype="distance-dominant")
        assert resolution.strategy == "archetype"
        assert resolution.template.name == "POWER"

    def test_default_archetype(self):
        """何も指定しなければ既定類型"""
        resolution = TemplateStore().resolve()
        assert resolution.strategy == "default"
        assert resolution.template.name == "BALANCED"

    def test_no_partial_venue_match(self):
        """会場の部分一致はしない"""
        resolution = TemplateStore().resolve(venue="pebble")
        assert resolution.strategy == "default"

    def test_unknown_archetype_raises(self):
        """未知の類型名はValueError"""
        with pytest.raises(ValueError):
            TemplateStore().resolve(archetype="links")

    def test_resolution_is_logged(self, caplog):
        """一致した戦略をログに出す"""
        with caplog.at_level(logging.INFO, logger="golfrank.services.template_store"):
            TemplateStore().resolve(venue="3")
        assert "TPC_SCOTTSDALE" in caplog.text

    def test_custom_templates(self):
        """任意のテンプレートで構成できる"""
        store = TemplateStore(
            archetype_templates={"BALANCED": make_template("MY_BALANCED")},
            venue_templates={"MY_COURSE": make_template("MY_COURSE", eventId="42")},
        )
        assert store.template_ids() == ["BALANCED", "MY_COURSE"]
        assert store.resolve(venue="42").template.name == "MY_COURSE"
        # 登録されていない類型は既定類型になる
        assert store.resolve(archetype=CourseArchetype.POWER).strategy == "default"

    def test_invalid_template_fails_at_construction(self):
        """不正なテンプレートは構築時にエラー"""
        broken = make_template("BROKEN")
        broken["metricWeights"]["Putting"] = {"Putts per Round": {"weight": 1.0}}
        with pytest.raises(WeightConfigError):
            TemplateStore(archetype_templates=ARCHETYPE_TEMPLATES, venue_templates={"BROKEN": broken})

    def test_missing_default_archetype_raises(self):
        """既定類型のテンプレートがなければエラー"""
        with pytest.raises(WeightConfigError):
            TemplateStore(archetype_templates={"POWER": make_template("P")}, venue_templates={})


class TestTemplateFile:
    """テンプレートファイル読み書きのテスト"""

    def test_save_and_load(self, tmp_path):
        """書き出したテンプレートを読み込める"""
        configuration = TemplateStore().get("TECHNICAL")
        path = save_template_file(configuration, tmp_path / "technical.json")
        loaded = load_template_file(path)

        assert loaded.name == "TECHNICAL"
        assert loaded.archetype == CourseArchetype.TECHNICAL
        assert loaded.group_names == configuration.group_names
        assert loaded.expected_metrics() == configuration.expected_metrics()

    def test_load_hand_written_file(self, tmp_path):
        """手書きのJSONテンプレートを読み込める"""
        path = tmp_path / "custom.json"
        path.write_text(json.dumps(make_template("CUSTOM")), encoding="utf-8")
        assert load_template_file(path).name == "CUSTOM"

    def test_missing_file_raises(self, tmp_path):
        """ファイルがなければMissingInputError"""
        with pytest.raises(MissingInputError):
            load_template_file(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path):
        """JSONが不正ならWeightConfigError"""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(WeightConfigError):
            load_template_file(path)

    def test_non_object_json_raises(self, tmp_path):
        """オブジェクトでないJSONはWeightConfigError"""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(WeightConfigError):
            load_template_file(path)
