"""MetricAggregator - ラウンド統計とアプローチ統計を選手ごとに集計する"""

import logging
import math
from collections import Counter, defaultdict
from typing import Iterable

from golfrank.config.settings import AggregationSettings
from golfrank.config.weights import (
    BCC_COMPONENT_WEIGHTS,
    BCC_PROXIMITY_SCALE,
    BCC_SCORING_BASELINE,
    DEFAULT_FAIRWAY_RATE,
)
from golfrank.constants import (
    APPROACH_METRICS,
    SAMPLE_EVENTS,
    SAMPLE_ROUNDS,
    ApproachBucket,
    ApproachField,
    MetricId,
)
from golfrank.errors import MissingInputError
from golfrank.models.bundle import CompetitorBundle
from golfrank.models.feeds import ApproachStatRow, RoundStatRow

logger = logging.getLogger(__name__)


class _Accumulator:
    """1選手分の集計途中の値"""

    def __init__(self):
        self.values: dict[MetricId, list[float]] = defaultdict(list)
        self.names: Counter[str] = Counter()
        self.events: set[str] = set()
        self.rounds = 0
        self.shot_counts: dict[ApproachBucket, int] = defaultdict(int)

    def add_values(self, values: dict[MetricId, float | None]) -> None:
        for metric, value in values.items():
            if _is_usable(value):
                self.values[metric].append(float(value))

    def add_name(self, name: str | None) -> None:
        if name:
            self.names[name] += 1

    def display_name(self, competitor_id: int) -> str:
        if not self.names:
            return str(competitor_id)
        # 最頻の表記、同数ならアルファベット順で先のもの
        return min(self.names.items(), key=lambda item: (-item[1], item[0]))[0]


def _is_usable(value: float | None) -> bool:
    return value is not None and not isinstance(value, bool) and math.isfinite(value)


class MetricAggregator:
    """フィードを選手ごとの CompetitorBundle に集計する

    - 同一選手の複数行はメトリクスごとの算術平均（math.fsum で入力順に依存しない）
    - 寄与する行が0件のメトリクスは None（データなし）。0 とは区別する
    - 空のフィードはエラーではない（該当メトリクスがデータなしになる）
    """

    def __init__(self, settings: AggregationSettings | None = None):
        """初期化

        Args:
            settings: 集計設定（Noneの場合はデフォルト）
        """
        self._settings = settings or AggregationSettings()

    def aggregate(
        self,
        round_rows: Iterable[RoundStatRow] | None,
        approach_rows: Iterable[ApproachStatRow] | None,
    ) -> list[CompetitorBundle]:
        """選手ごとのバンドルを作成する

        Args:
            round_rows: ラウンド統計行
            approach_rows: アプローチ統計行

        Returns:
            選手ID昇順の CompetitorBundle リスト

        Raises:
            MissingInputError: フィード自体が渡されていない場合
        """
        if round_rows is None:
            raise MissingInputError("ラウンド統計フィードがありません")
        if approach_rows is None:
            raise MissingInputError("アプローチ統計フィードがありません")

        accumulators: dict[int, _Accumulator] = defaultdict(_Accumulator)

        round_count = 0
        for row in round_rows:
            acc = accumulators[row.competitor_id]
            acc.add_values(row.values)
            acc.add_name(row.name)
            acc.events.add(str(row.event_id))
            acc.rounds += 1
            round_count += 1

        approach_count = 0
        for row in approach_rows:
            acc = accumulators[row.competitor_id]
            acc.add_values(row.values)
            acc.add_name(row.name)
            for bucket, count in row.shot_counts.items():
                if count is not None and count > 0:
                    acc.shot_counts[bucket] += int(count)
            approach_count += 1

        if round_count == 0:
            logger.warning("ラウンド統計フィードが空です")
        if approach_count == 0:
            logger.warning("アプローチ統計フィードが空です")

        bundles = [
            self._build_bundle(competitor_id, accumulators[competitor_id])
            for competitor_id in sorted(accumulators)
        ]
        logger.info(
            f"集計完了: 選手{len(bundles)}人（ラウンド{round_count}行, アプローチ{approach_count}行）"
        )
        return bundles

    def _build_bundle(self, competitor_id: int, acc: _Accumulator) -> CompetitorBundle:
        values: dict[MetricId, float | None] = {metric: None for metric in MetricId}
        for metric, observed in acc.values.items():
            if observed:
                values[metric] = math.fsum(observed) / len(observed)

        if self._settings.derive_birdie_chances and values[MetricId.BIRDIE_CHANCES_CREATED] is None:
            values[MetricId.BIRDIE_CHANCES_CREATED] = self.birdie_chances_created(values)

        sample_counts = {
            SAMPLE_ROUNDS: acc.rounds,
            SAMPLE_EVENTS: len(acc.events),
        }
        for bucket in ApproachBucket:
            sample_counts[bucket.value] = acc.shot_counts.get(bucket, 0)

        return CompetitorBundle(
            competitor_id=competitor_id,
            name=acc.display_name(competitor_id),
            values=values,
            sample_counts=sample_counts,
        )

    def birdie_chances_created(self, values: dict[MetricId, float | None]) -> float | None:
        """Birdie Chances Created（派生複合指標）を計算する

        距離帯ごとのGIR率・アプローチSG・近さを、コースの距離分布と
        選手のフェアウェイキープ率で重み付けし、パッティングとスコアを加味する。

        Args:
            values: 集計済みメトリクス値

        Returns:
            複合指標値、入力が不足している場合はNone
        """
        sg_putting = values.get(MetricId.SG_PUTTING)
        scoring_avg = values.get(MetricId.SCORING_AVERAGE)
        if sg_putting is None or scoring_avg is None:
            return None

        fairway = values.get(MetricId.DRIVING_ACCURACY)
        if fairway is None:
            fairway = DEFAULT_FAIRWAY_RATE
        rough = 1.0 - fairway

        setup = self._settings.course_setup_weights
        setup_total = sum(setup.values())
        under_100 = setup.get("under_100", 0.0) / setup_total
        mid = setup.get("from_100_to_150", 0.0) / setup_total
        long = setup.get("from_150_to_200", 0.0) / setup_total
        very_long = setup.get("over_200", 0.0) / setup_total

        # 距離帯ごとの寄与率
        bucket_shares = {
            ApproachBucket.UNDER_100: under_100,
            ApproachBucket.FW_100_150: mid * fairway,
            ApproachBucket.RGH_UNDER_150: mid * rough,
            ApproachBucket.FW_150_200: long * fairway,
            ApproachBucket.RGH_OVER_150: (long + very_long) * rough,
            ApproachBucket.FW_OVER_200: very_long * fairway,
        }

        gir_terms = []
        sg_terms = []
        prox_terms = []
        for bucket, share in bucket_shares.items():
            fields = APPROACH_METRICS[bucket]
            gir = values.get(fields[ApproachField.GIR])
            sg = values.get(fields[ApproachField.SG])
            prox = values.get(fields[ApproachField.PROXIMITY])
            if gir is None or sg is None or prox is None:
                continue
            gir_terms.append(gir * share)
            sg_terms.append(sg * self._settings.approach_shots_per_round * share)
            prox_terms.append(prox * share)

        if not gir_terms:
            return None

        weighted_gir = math.fsum(gir_terms)
        approach = math.fsum(sg_terms) - math.fsum(prox_terms) / BCC_PROXIMITY_SCALE
        return (
            weighted_gir * BCC_COMPONENT_WEIGHTS["gir"]
            + approach * BCC_COMPONENT_WEIGHTS["approach"]
            + sg_putting * BCC_COMPONENT_WEIGHTS["putting"]
            + (BCC_SCORING_BASELINE - scoring_avg) * BCC_COMPONENT_WEIGHTS["scoring"]
        )
