"""Constants for golfrank ranking engine."""

from enum import Enum


class MetricId(str, Enum):
    """エンジンが扱うメトリクスの閉じた識別子"""

    # ラウンド統計
    SG_TOTAL = "SG Total"
    DRIVING_DISTANCE = "Driving Distance"
    DRIVING_ACCURACY = "Driving Accuracy"
    SG_T2G = "SG T2G"
    SG_APPROACH = "SG Approach"
    SG_ARG = "SG Around Green"
    SG_OTT = "SG OTT"
    SG_PUTTING = "SG Putting"
    GIR = "Greens in Regulation"
    SCRAMBLING = "Scrambling"
    GREAT_SHOTS = "Great Shots"
    POOR_SHOTS = "Poor Shots"
    SCORING_AVERAGE = "Scoring Average"
    BIRDIES_OR_BETTER = "Birdies or Better"
    FAIRWAY_PROXIMITY = "Fairway Proximity"
    ROUGH_PROXIMITY = "Rough Proximity"

    # アプローチ統計（距離帯 × 5項目）
    APP_100_GIR = "Approach <100 GIR"
    APP_100_GOOD = "Approach <100 Good Shot"
    APP_100_POOR_AVOID = "Approach <100 Poor Shot Avoid"
    APP_100_PROX = "Approach <100 Prox"
    APP_100_SG = "Approach <100 SG"
    APP_150_FW_GIR = "Approach <150 FW GIR"
    APP_150_FW_GOOD = "Approach <150 FW Good Shot"
    APP_150_FW_POOR_AVOID = "Approach <150 FW Poor Shot Avoid"
    APP_150_FW_PROX = "Approach <150 FW Prox"
    APP_150_FW_SG = "Approach <150 FW SG"
    APP_150_RGH_GIR = "Approach <150 Rough GIR"
    APP_150_RGH_GOOD = "Approach <150 Rough Good Shot"
    APP_150_RGH_POOR_AVOID = "Approach <150 Rough Poor Shot Avoid"
    APP_150_RGH_PROX = "Approach <150 Rough Prox"
    APP_150_RGH_SG = "Approach <150 Rough SG"
    APP_OVER_150_RGH_GIR = "Approach >150 Rough GIR"
    APP_OVER_150_RGH_GOOD = "Approach >150 Rough Good Shot"
    APP_OVER_150_RGH_POOR_AVOID = "Approach >150 Rough Poor Shot Avoid"
    APP_OVER_150_RGH_PROX = "Approach >150 Rough Prox"
    APP_OVER_150_RGH_SG = "Approach >150 Rough SG"
    APP_200_FW_GIR = "Approach <200 FW GIR"
    APP_200_FW_GOOD = "Approach <200 FW Good Shot"
    APP_200_FW_POOR_AVOID = "Approach <200 FW Poor Shot Avoid"
    APP_200_FW_PROX = "Approach <200 FW Prox"
    APP_200_FW_SG = "Approach <200 FW SG"
    APP_OVER_200_FW_GIR = "Approach >200 FW GIR"
    APP_OVER_200_FW_GOOD = "Approach >200 FW Good Shot"
    APP_OVER_200_FW_POOR_AVOID = "Approach >200 FW Poor Shot Avoid"
    APP_OVER_200_FW_PROX = "Approach >200 FW Prox"
    APP_OVER_200_FW_SG = "Approach >200 FW SG"

    # 派生複合指標
    BIRDIE_CHANCES_CREATED = "Birdie Chances Created"


class ApproachBucket(str, Enum):
    """アプローチショットの距離・ライ区分"""

    UNDER_100 = "<100"
    FW_100_150 = "<150 FW"
    RGH_UNDER_150 = "<150 Rough"
    RGH_OVER_150 = ">150 Rough"
    FW_150_200 = "<200 FW"
    FW_OVER_200 = ">200 FW"


class ApproachField(str, Enum):
    """距離帯ごとの統計項目"""

    GIR = "gir"
    GOOD_SHOT = "good_shot"
    POOR_AVOID = "poor_avoid"
    PROXIMITY = "proximity"
    SG = "sg"


class CourseArchetype(str, Enum):
    """コース類型

    POWER: 飛距離重視, TECHNICAL: 精度重視, BALANCED: バランス型
    """

    POWER = "POWER"
    TECHNICAL = "TECHNICAL"
    BALANCED = "BALANCED"


# 距離帯 × 項目 → MetricId
APPROACH_METRICS: dict[ApproachBucket, dict[ApproachField, MetricId]] = {
    ApproachBucket.UNDER_100: {
        ApproachField.GIR: MetricId.APP_100_GIR,
        ApproachField.GOOD_SHOT: MetricId.APP_100_GOOD,
        ApproachField.POOR_AVOID: MetricId.APP_100_POOR_AVOID,
        ApproachField.PROXIMITY: MetricId.APP_100_PROX,
        ApproachField.SG: MetricId.APP_100_SG,
    },
    ApproachBucket.FW_100_150: {
        ApproachField.GIR: MetricId.APP_150_FW_GIR,
        ApproachField.GOOD_SHOT: MetricId.APP_150_FW_GOOD,
        ApproachField.POOR_AVOID: MetricId.APP_150_FW_POOR_AVOID,
        ApproachField.PROXIMITY: MetricId.APP_150_FW_PROX,
        ApproachField.SG: MetricId.APP_150_FW_SG,
    },
    ApproachBucket.RGH_UNDER_150: {
        ApproachField.GIR: MetricId.APP_150_RGH_GIR,
        ApproachField.GOOD_SHOT: MetricId.APP_150_RGH_GOOD,
        ApproachField.POOR_AVOID: MetricId.APP_150_RGH_POOR_AVOID,
        ApproachField.PROXIMITY: MetricId.APP_150_RGH_PROX,
        ApproachField.SG: MetricId.APP_150_RGH_SG,
    },
    ApproachBucket.RGH_OVER_150: {
        ApproachField.GIR: MetricId.APP_OVER_150_RGH_GIR,
        ApproachField.GOOD_SHOT: MetricId.APP_OVER_150_RGH_GOOD,
        ApproachField.POOR_AVOID: MetricId.APP_OVER_150_RGH_POOR_AVOID,
        ApproachField.PROXIMITY: MetricId.APP_OVER_150_RGH_PROX,
        ApproachField.SG: MetricId.APP_OVER_150_RGH_SG,
    },
    ApproachBucket.FW_150_200: {
        ApproachField.GIR: MetricId.APP_200_FW_GIR,
        ApproachField.GOOD_SHOT: MetricId.APP_200_FW_GOOD,
        ApproachField.POOR_AVOID: MetricId.APP_200_FW_POOR_AVOID,
        ApproachField.PROXIMITY: MetricId.APP_200_FW_PROX,
        ApproachField.SG: MetricId.APP_200_FW_SG,
    },
    ApproachBucket.FW_OVER_200: {
        ApproachField.GIR: MetricId.APP_OVER_200_FW_GIR,
        ApproachField.GOOD_SHOT: MetricId.APP_OVER_200_FW_GOOD,
        ApproachField.POOR_AVOID: MetricId.APP_OVER_200_FW_POOR_AVOID,
        ApproachField.PROXIMITY: MetricId.APP_OVER_200_FW_PROX,
        ApproachField.SG: MetricId.APP_OVER_200_FW_SG,
    },
}

# アプローチメトリクス → サンプル数判定に使う距離帯
METRIC_BUCKETS: dict[MetricId, ApproachBucket] = {
    metric: bucket
    for bucket, fields in APPROACH_METRICS.items()
    for metric in fields.values()
}

# 小さいほど良いメトリクス（スコア計算前に符号反転する）
LOWER_IS_BETTER: frozenset[MetricId] = frozenset(
    {
        MetricId.POOR_SHOTS,
        MetricId.SCORING_AVERAGE,
        MetricId.FAIRWAY_PROXIMITY,
        MetricId.ROUGH_PROXIMITY,
    }
    | {fields[ApproachField.PROXIMITY] for fields in APPROACH_METRICS.values()}
)

# 外部テンプレートで使われる別名 → MetricId
METRIC_ALIASES: dict[str, MetricId] = {
    "Poor Shot Avoidance": MetricId.POOR_SHOTS,
    "SG Around the Green": MetricId.SG_ARG,
    "SG ARG": MetricId.SG_ARG,
    "SG Off the Tee": MetricId.SG_OTT,
    "SG Tee to Green": MetricId.SG_T2G,
    "SG Putt": MetricId.SG_PUTTING,
    "SG APP": MetricId.SG_APPROACH,
    "GIR": MetricId.GIR,
    "Greens In Regulation": MetricId.GIR,
    "Scoring Avg": MetricId.SCORING_AVERAGE,
    "Birdies": MetricId.BIRDIES_OR_BETTER,
    "BCC": MetricId.BIRDIE_CHANCES_CREATED,
    "Prox FW": MetricId.FAIRWAY_PROXIMITY,
    "Prox Rough": MetricId.ROUGH_PROXIMITY,
}

# コース類型の別名
ARCHETYPE_ALIASES: dict[str, CourseArchetype] = {
    "power": CourseArchetype.POWER,
    "distance": CourseArchetype.POWER,
    "distance-dominant": CourseArchetype.POWER,
    "technical": CourseArchetype.TECHNICAL,
    "precision": CourseArchetype.TECHNICAL,
    "precision-dominant": CourseArchetype.TECHNICAL,
    "balanced": CourseArchetype.BALANCED,
}

# ラウンド統計CSVの列名 → MetricId
ROUND_COLUMNS: dict[str, MetricId] = {
    "sg_total": MetricId.SG_TOTAL,
    "driving_dist": MetricId.DRIVING_DISTANCE,
    "driving_acc": MetricId.DRIVING_ACCURACY,
    "sg_t2g": MetricId.SG_T2G,
    "sg_app": MetricId.SG_APPROACH,
    "sg_arg": MetricId.SG_ARG,
    "sg_ott": MetricId.SG_OTT,
    "sg_putt": MetricId.SG_PUTTING,
    "gir": MetricId.GIR,
    "scrambling": MetricId.SCRAMBLING,
    "great_shots": MetricId.GREAT_SHOTS,
    "poor_shots": MetricId.POOR_SHOTS,
    "score": MetricId.SCORING_AVERAGE,
    "prox_fw": MetricId.FAIRWAY_PROXIMITY,
    "prox_rgh": MetricId.ROUGH_PROXIMITY,
}

# birdies + eagles_or_better → Birdies or Better
BIRDIE_COLUMNS: tuple[str, ...] = ("birdies", "eagles_or_better")

# 直近トレンドを計算するラウンド統計メトリクス
TREND_METRICS: tuple[MetricId, ...] = tuple(ROUND_COLUMNS.values()) + (MetricId.BIRDIES_OR_BETTER,)

# ラウンド統計CSVの大会終了日の列
ROUND_DATE_COLUMN = "event_completed"

# アプローチ統計CSVの列プレフィックス
APPROACH_COLUMN_PREFIXES: dict[str, ApproachBucket] = {
    "50_100_fw": ApproachBucket.UNDER_100,
    "100_150_fw": ApproachBucket.FW_100_150,
    "under_150_rgh": ApproachBucket.RGH_UNDER_150,
    "over_150_rgh": ApproachBucket.RGH_OVER_150,
    "150_200_fw": ApproachBucket.FW_150_200,
    "over_200_fw": ApproachBucket.FW_OVER_200,
}

# アプローチ統計CSVの列サフィックス
APPROACH_FIELD_SUFFIXES: dict[str, ApproachField] = {
    "_gir_rate": ApproachField.GIR,
    "_good_shot_rate": ApproachField.GOOD_SHOT,
    "_poor_shot_avoid_rate": ApproachField.POOR_AVOID,
    "_proximity_per_shot": ApproachField.PROXIMITY,
    "_sg_per_shot": ApproachField.SG,
}
SHOT_COUNT_SUFFIX = "_shot_count"

# 0-100表記で届くことがある割合系メトリクス（1超なら100で割る）
PERCENT_METRICS: frozenset[MetricId] = frozenset(
    {MetricId.DRIVING_ACCURACY, MetricId.GIR, MetricId.SCRAMBLING}
    | {
        fields[field]
        for fields in APPROACH_METRICS.values()
        for field in (ApproachField.GIR, ApproachField.GOOD_SHOT, ApproachField.POOR_AVOID)
    }
)

# 非完走（検証から除外する）着順表記
NON_FINISH_MARKERS: frozenset[str] = frozenset({"CUT", "MC", "WD", "W/D", "DQ", "MDF", "DNS"})

# サンプル数のキー
SAMPLE_ROUNDS = "rounds"
SAMPLE_EVENTS = "events"

# アプローチ距離帯の信頼できる最少ショット数
LOW_SAMPLE_SHOT_THRESHOLD = 20

# 検証で使うTop-N
HIT_RATE_TOP_N: tuple[int, ...] = (5, 10, 20, 50)
