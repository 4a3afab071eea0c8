"""重み設定モデル

2階層の重み（グループ重み × グループ内メトリクス重み）を表す。

正規化ルール:
- グループ内メトリクス重みは「配分」として読み込み時に合計1へ正規化する。
  0 の重み（プレースホルダー）は保持するが、期待メトリクス数には数えない。
- グループ重みも読み込み時に合計1へ正規化する。
- 合計が WEIGHT_SUM_TOLERANCE を超えて1からずれていた場合は警告ログを出す。
- 小さいほど良いメトリクスの向きは重みの符号ではなく LOWER_IS_BETTER で扱う。
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping

from golfrank.config.weights import WEIGHT_SUM_TOLERANCE
from golfrank.constants import LOWER_IS_BETTER, CourseArchetype, MetricId
from golfrank.errors import UnknownMetricError, WeightConfigError
from golfrank.utils.metric_resolver import resolve_metric_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricGroup:
    """メトリクスグループ

    Attributes:
        name: グループ名
        weight: グループ重み（正規化済み）
        metric_weights: (メトリクス, 重み) の組（正規化済み、定義順）
    """

    name: str
    weight: float
    metric_weights: tuple[tuple[MetricId, float], ...]

    @property
    def metrics(self) -> tuple[MetricId, ...]:
        return tuple(metric for metric, _ in self.metric_weights)

    def weights_by_metric(self) -> dict[MetricId, float]:
        return dict(self.metric_weights)


@dataclass(frozen=True)
class WeightConfiguration:
    """重み設定（全グループとグループ重み）"""

    name: str
    groups: tuple[MetricGroup, ...]
    description: str = ""
    venue_id: str | None = None
    event_id: str | None = None
    archetype: CourseArchetype | None = None

    @classmethod
    def build(
        cls,
        name: str,
        groups: Mapping[str, tuple[float, Mapping[MetricId | str, float]]],
        description: str = "",
        venue_id: str | None = None,
        event_id: str | None = None,
        archetype: CourseArchetype | None = None,
    ) -> "WeightConfiguration":
        """検証・正規化して重み設定を作成する

        Args:
            name: 設定名
            groups: グループ名 → (グループ重み, {メトリクス: 重み})
            description: 説明
            venue_id: 会場テンプレートID
            event_id: 会場のイベントID
            archetype: コース類型

        Returns:
            正規化済みの WeightConfiguration

        Raises:
            WeightConfigError: 設定が不正な場合
        """
        if not groups:
            raise WeightConfigError(f"[{name}] グループが1つもありません")

        group_names = list(groups.keys())
        raw_group_weights: dict[str, float] = {}
        normalized_metrics: dict[str, tuple[tuple[MetricId, float], ...]] = {}

        for group_name, definition in groups.items():
            try:
                group_weight, metric_weights = definition
            except (TypeError, ValueError) as e:
                raise WeightConfigError(
                    f"[{name}] グループ '{group_name}' の定義が不正です: {definition!r}"
                ) from e
            _check_weight(name, f"グループ '{group_name}' の重み", group_weight)
            raw_group_weights[group_name] = float(group_weight)

            if not metric_weights:
                raise WeightConfigError(f"[{name}] グループ '{group_name}' にメトリクスがありません")

            resolved: dict[MetricId, float] = {}
            for label, weight in metric_weights.items():
                try:
                    metric = resolve_metric_label(label, group_names).metric
                except UnknownMetricError as e:
                    raise WeightConfigError(f"[{name}] グループ '{group_name}': {e}") from e
                if metric in resolved:
                    raise WeightConfigError(
                        f"[{name}] グループ '{group_name}' でメトリクス '{metric.value}' が重複しています"
                    )
                _check_weight(name, f"'{group_name}' / '{metric.value}' の重み", weight)
                resolved[metric] = float(weight)

            total = math.fsum(resolved.values())
            if total <= 0:
                raise WeightConfigError(
                    f"[{name}] グループ '{group_name}' のメトリクス重みが全て0です"
                )
            _warn_if_unnormalized(name, f"グループ '{group_name}' のメトリクス重み", total)
            normalized_metrics[group_name] = tuple(
                (metric, weight / total) for metric, weight in resolved.items()
            )

        group_total = math.fsum(raw_group_weights.values())
        if group_total <= 0:
            raise WeightConfigError(f"[{name}] グループ重みが全て0です")
        _warn_if_unnormalized(name, "グループ重み", group_total)

        built = tuple(
            MetricGroup(
                name=group_name,
                weight=raw_group_weights[group_name] / group_total,
                metric_weights=normalized_metrics[group_name],
            )
            for group_name in group_names
        )
        return cls(
            name=name,
            groups=built,
            description=description,
            venue_id=venue_id,
            event_id=event_id,
            archetype=archetype,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeightConfiguration":
        """テンプレート辞書（JSON形式）から重み設定を作成する

        形式::

            {
              "name": "...", "description": "...", "eventId": "5", "archetype": "TECHNICAL",
              "groupWeights": {"Putting": 0.12, ...},
              "metricWeights": {"Putting": {"SG Putting": {"weight": 1.0}}, ...}
            }

        小さいほど良いメトリクスに負の重みが書かれている場合は絶対値を使う
        （向きは LOWER_IS_BETTER が決める）。それ以外の負の重みはエラー。

        Raises:
            WeightConfigError: 形式や値が不正な場合
        """
        name = data.get("name")
        if not name:
            raise WeightConfigError("テンプレートに name がありません")
        group_weights = data.get("groupWeights") or {}
        metric_weights = data.get("metricWeights") or {}
        if not group_weights:
            raise WeightConfigError(f"[{name}] groupWeights がありません")

        unknown_groups = set(metric_weights) - set(group_weights)
        if unknown_groups:
            raise WeightConfigError(
                f"[{name}] groupWeights にないグループの metricWeights: {sorted(unknown_groups)}"
            )

        group_names = list(group_weights)
        groups: dict[str, tuple[float, dict[MetricId, float]]] = {}
        for group_name, group_weight in group_weights.items():
            metrics: dict[MetricId, float] = {}
            for label, entry in (metric_weights.get(group_name) or {}).items():
                weight = entry.get("weight") if isinstance(entry, Mapping) else entry
                try:
                    metric = resolve_metric_label(label, group_names).metric
                except UnknownMetricError as e:
                    raise WeightConfigError(f"[{name}] グループ '{group_name}': {e}") from e
                if isinstance(weight, (int, float)) and weight < 0 and metric in LOWER_IS_BETTER:
                    logger.debug(
                        "[%s] '%s' の負の重みを絶対値として読み込み（小さいほど良い指標）",
                        name,
                        label,
                    )
                    weight = -weight
                if metric in metrics:
                    raise WeightConfigError(
                        f"[{name}] グループ '{group_name}' でメトリクス '{metric.value}' が重複しています"
                    )
                metrics[metric] = weight
            groups[group_name] = (group_weight, metrics)

        archetype = data.get("archetype")
        if archetype is not None and not isinstance(archetype, CourseArchetype):
            try:
                archetype = CourseArchetype(str(archetype).upper())
            except ValueError as e:
                raise WeightConfigError(f"[{name}] 未知のコース類型: {archetype!r}") from e

        event_id = data.get("eventId")
        return cls.build(
            name=name,
            groups=groups,
            description=data.get("description", ""),
            venue_id=data.get("venueId"),
            event_id=str(event_id) if event_id is not None else None,
            archetype=archetype,
        )

    def to_dict(self) -> dict[str, Any]:
        """テンプレート辞書（JSON形式）に変換する"""
        data: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "groupWeights": {group.name: group.weight for group in self.groups},
            "metricWeights": {
                group.name: {
                    metric.value: {"weight": weight} for metric, weight in group.metric_weights
                }
                for group in self.groups
            },
        }
        if self.venue_id is not None:
            data["venueId"] = self.venue_id
        if self.event_id is not None:
            data["eventId"] = self.event_id
        if self.archetype is not None:
            data["archetype"] = self.archetype.value
        return data

    def with_weights(
        self,
        group_weights: Mapping[str, float],
        metric_weights: Mapping[str, Mapping[MetricId, float]],
        name: str | None = None,
    ) -> "WeightConfiguration":
        """重みを差し替えた新しい設定を作成する（検証・正規化を再実行）"""
        groups = {
            group.name: (
                group_weights.get(group.name, group.weight),
                metric_weights.get(group.name, group.weights_by_metric()),
            )
            for group in self.groups
        }
        return WeightConfiguration.build(
            name=name or self.name,
            groups=groups,
            description=self.description,
            venue_id=self.venue_id,
            event_id=self.event_id,
            archetype=self.archetype,
        )

    @property
    def group_names(self) -> tuple[str, ...]:
        return tuple(group.name for group in self.groups)

    def group(self, name: str) -> MetricGroup:
        for group in self.groups:
            if group.name == name:
                return group
        raise KeyError(name)

    def expected_metrics(self) -> frozenset[MetricId]:
        """スコアに寄与するメトリクス（重み>0のグループ内で重み>0）の集合"""
        return frozenset(
            metric
            for group in self.groups
            if group.weight > 0
            for metric, weight in group.metric_weights
            if weight > 0
        )


def _check_weight(config_name: str, label: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WeightConfigError(f"[{config_name}] {label} が数値ではありません: {value!r}")
    if not math.isfinite(value):
        raise WeightConfigError(f"[{config_name}] {label} が有限ではありません: {value!r}")
    if value < 0 or value > 1:
        raise WeightConfigError(f"[{config_name}] {label} が範囲 [0, 1] 外です: {value!r}")


def _warn_if_unnormalized(config_name: str, label: str, total: float) -> None:
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        logger.warning("[%s] %s の合計が %.4f のため1に正規化しました", config_name, label, total)
