"""メトリクスラベル解決モジュール

テンプレートのメトリクスラベルを MetricId に解決する。解決順序は固定:

1. exact: MetricId の値と完全一致
2. alias: 別名テーブル（METRIC_ALIASES）と完全一致
3. group_prefix: "<グループ名>: <ラベル>" 形式のグループ名を除去し、残りを 1 → 2 の順で解決

部分一致・あいまい一致は行わない。
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from golfrank.constants import ARCHETYPE_ALIASES, METRIC_ALIASES, CourseArchetype, MetricId
from golfrank.errors import UnknownMetricError

logger = logging.getLogger(__name__)

_METRIC_BY_VALUE: dict[str, MetricId] = {metric.value: metric for metric in MetricId}


@dataclass(frozen=True)
class MetricResolution:
    """ラベル解決結果

    Attributes:
        label: 元のラベル
        metric: 解決したメトリクス
        strategy: 一致した戦略（exact / alias / group_prefix）
    """

    label: str
    metric: MetricId
    strategy: str


def _match_direct(label: str) -> tuple[MetricId, str] | None:
    if label in _METRIC_BY_VALUE:
        return _METRIC_BY_VALUE[label], "exact"
    if label in METRIC_ALIASES:
        return METRIC_ALIASES[label], "alias"
    return None


def resolve_metric_label(label: str, group_names: Iterable[str] = ()) -> MetricResolution:
    """メトリクスラベルを解決する

    Args:
        label: テンプレート上のラベル
        group_names: "<グループ名>: " プレフィックスとして認めるグループ名

    Returns:
        MetricResolution

    Raises:
        UnknownMetricError: どの戦略でも解決できない場合
    """
    if isinstance(label, MetricId):
        return MetricResolution(label=label.value, metric=label, strategy="exact")

    text = label.strip()
    matched = _match_direct(text)
    if matched is not None:
        metric, strategy = matched
        return MetricResolution(label=label, metric=metric, strategy=strategy)

    prefix, sep, remainder = text.partition(":")
    if sep and prefix.strip() in set(group_names):
        matched = _match_direct(remainder.strip())
        if matched is not None:
            metric, _ = matched
            logger.debug("ラベル '%s' をグループプレフィックス除去で解決: %s", label, metric.value)
            return MetricResolution(label=label, metric=metric, strategy="group_prefix")

    raise UnknownMetricError(f"未知のメトリクスラベル: {label!r}")


def resolve_archetype(name: str | CourseArchetype) -> CourseArchetype:
    """コース類型名を CourseArchetype に解決する

    Raises:
        ValueError: 未知の類型名
    """
    if isinstance(name, CourseArchetype):
        return name
    text = name.strip()
    if text.upper() in CourseArchetype.__members__:
        return CourseArchetype[text.upper()]
    if text.lower() in ARCHETYPE_ALIASES:
        return ARCHETYPE_ALIASES[text.lower()]
    raise ValueError(f"未知のコース類型: {name!r}")
