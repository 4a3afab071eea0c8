"""TemplateStore - 重みテンプレートの読み取り専用レジストリ"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from golfrank.config.templates import ARCHETYPE_TEMPLATES, DEFAULT_ARCHETYPE, VENUE_TEMPLATES
from golfrank.constants import CourseArchetype
from golfrank.errors import MissingInputError, WeightConfigError
from golfrank.models.weights import WeightConfiguration
from golfrank.utils.metric_resolver import resolve_archetype

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateResolution:
    """テンプレート解決結果

    Attributes:
        template: 解決した重み設定
        strategy: 一致した戦略（venue / archetype / default）
    """

    template: WeightConfiguration
    strategy: str


class TemplateStore:
    """テンプレートIDから重み設定を引くレジストリ

    解決順序: 会場（テンプレートID・会場ID・イベントIDの完全一致）→ コース類型 → 既定類型
    """

    def __init__(
        self,
        archetype_templates: Mapping[str, Mapping] | None = None,
        venue_templates: Mapping[str, Mapping] | None = None,
        default_archetype: str | CourseArchetype = DEFAULT_ARCHETYPE,
    ):
        """初期化（全テンプレートをここで検証する）

        Args:
            archetype_templates: 類型テンプレート（Noneの場合はマスターデータ）
            venue_templates: 会場テンプレート（Noneの場合はマスターデータ）
            default_archetype: 該当なしの場合に使う類型

        Raises:
            WeightConfigError: テンプレートが不正な場合
        """
        if archetype_templates is None:
            archetype_templates = ARCHETYPE_TEMPLATES
        if venue_templates is None:
            venue_templates = VENUE_TEMPLATES

        self._archetypes: dict[CourseArchetype, WeightConfiguration] = {}
        for key, data in archetype_templates.items():
            archetype = resolve_archetype(key)
            self._archetypes[archetype] = WeightConfiguration.from_dict(data)

        self._venues: dict[str, WeightConfiguration] = {
            key.upper(): WeightConfiguration.from_dict(data) for key, data in venue_templates.items()
        }

        self._default_archetype = resolve_archetype(default_archetype)
        if self._default_archetype not in self._archetypes:
            raise WeightConfigError(f"既定類型 {self._default_archetype.value} のテンプレートがありません")

    def template_ids(self) -> list[str]:
        """登録済みテンプレートID（類型 → 会場の順）"""
        return [archetype.value for archetype in self._archetypes] + list(self._venues)

    def get(self, template_id: str) -> WeightConfiguration:
        """テンプレートIDで完全一致検索する

        Raises:
            KeyError: 該当テンプレートがない場合
        """
        key = template_id.strip().upper()
        if key in self._venues:
            return self._venues[key]
        for archetype, template in self._archetypes.items():
            if archetype.value == key:
                return template
        raise KeyError(f"テンプレートが見つかりません: {template_id}")

    def find_venue(self, venue: str) -> WeightConfiguration | None:
        """会場テンプレートをテンプレートID・会場ID・イベントIDで完全一致検索する"""
        key = str(venue).strip()
        if key.upper() in self._venues:
            return self._venues[key.upper()]
        for template in self._venues.values():
            if template.venue_id is not None and template.venue_id.lower() == key.lower():
                return template
            if template.event_id is not None and template.event_id == key:
                return template
        return None

    def resolve(
        self,
        venue: str | None = None,
        archetype: str | CourseArchetype | None = None,
    ) -> TemplateResolution:
        """テンプレートを解決する

        Args:
            venue: 会場（テンプレートID・会場ID・イベントID）
            archetype: コース類型

        Returns:
            TemplateResolution（どの戦略で一致したかを含む）

        Raises:
            ValueError: 未知のコース類型名が指定された場合
        """
        if venue is not None:
            template = self.find_venue(venue)
            if template is not None:
                logger.info(f"テンプレート解決: 会場 '{venue}' → {template.name}")
                return TemplateResolution(template=template, strategy="venue")
            logger.info(f"会場 '{venue}' のテンプレートなし、類型で解決します")

        if archetype is not None:
            resolved = resolve_archetype(archetype)
            if resolved in self._archetypes:
                template = self._archetypes[resolved]
                logger.info(f"テンプレート解決: 類型 {resolved.value} → {template.name}")
                return TemplateResolution(template=template, strategy="archetype")

        template = self._archetypes[self._default_archetype]
        logger.info(f"テンプレート解決: 既定類型 → {template.name}")
        return TemplateResolution(template=template, strategy="default")


def load_template_file(path: str | Path) -> WeightConfiguration:
    """JSONテンプレートファイルを読み込む

    Raises:
        MissingInputError: ファイルが存在しない場合
        WeightConfigError: 内容が不正な場合
    """
    path = Path(path)
    if not path.exists():
        raise MissingInputError(f"テンプレートファイルが見つかりません: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise WeightConfigError(f"テンプレートファイルのJSONが不正です: {path}: {e}") from e
    if not isinstance(data, dict):
        raise WeightConfigError(f"テンプレートファイルの形式が不正です: {path}")
    return WeightConfiguration.from_dict(data)


def save_template_file(configuration: WeightConfiguration, path: str | Path) -> Path:
    """重み設定をJSONテンプレートとして書き出す"""
    path = Path(path)
    path.write_text(
        json.dumps(configuration.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    return path
