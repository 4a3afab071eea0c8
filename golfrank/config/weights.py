"""スコアリング・検証・最適化のデフォルト設定値

設定値はモジュール定数として定義し、golfrank.config.settings の
dataclass がデフォルト値として参照する。
"""

# 信頼度減衰: カバレッジがこの値未満ならスコアを中立値へ線形に寄せる
COVERAGE_THRESHOLD = 0.70
# カバレッジが閾値以上のときに掛ける信頼度係数
CONFIDENCE_FACTOR = 1.0
# 中立値（フィールド平均 = z-score 0）
NEUTRAL_VALUE = 0.0
# 標準偏差の下限（これ未満は「情報なし」として z=0）
MIN_STD_DEV = 0.001

# 過去成績補正の適用度合い（0=補正なし、1=フル補正）
PAST_PERFORMANCE_WEIGHT = 0.3
# 過去成績の着順帯ごとのスコア（上限着順, スコア）
PAST_POSITION_SCORES: tuple[tuple[int, float], ...] = (
    (1, 1.5),
    (3, 1.2),
    (5, 1.0),
    (10, 0.8),
    (25, 0.4),
    (50, 0.1),
)
# 上記に該当しない着順・予選落ち
PAST_POSITION_FLOOR_SCORE = -0.2
# 直近ほど重くする減衰率（k件前 → RECENCY_DECAY ** k）
RECENCY_DECAY = 0.5
PAST_MULTIPLIER_MIN = 0.3
PAST_MULTIPLIER_MAX = 3.0

# 直近トレンド: 傾き × TREND_WEIGHT をメトリクス値に加える
TREND_WEIGHT = 0.30
# これ以下の傾きは有意でないとして0にする
TREND_THRESHOLD = 0.005
# 対象にする直近ラウンド数と、トレンドを出す最少ラウンド数
TREND_ROUNDS = 24
TREND_MIN_ROUNDS = 15
# メトリクスごとに必要な最少観測数
TREND_MIN_VALUES = 10
# 回帰の重み exp(-TREND_DECAY * 新しい方からの位置)
TREND_DECAY = 0.2
# 移動平均の窓幅
TREND_SMOOTHING_WINDOW = 3

# コースのアプローチ距離分布（Birdie Chances Created 用）
COURSE_SETUP_WEIGHTS = {
    "under_100": 0.154,
    "from_100_to_150": 0.253,
    "from_150_to_200": 0.293,
    "over_200": 0.300,
}
# 1ラウンドあたりの平均アプローチショット数（per-shot SG → per-round）
APPROACH_SHOTS_PER_ROUND = 18
# Birdie Chances Created の構成比
BCC_COMPONENT_WEIGHTS = {
    "gir": 0.40,
    "approach": 0.30,
    "putting": 0.25,
    "scoring": 0.05,
}
BCC_SCORING_BASELINE = 74.0
BCC_PROXIMITY_SCALE = 30.0
# 精度データがない場合に仮定するフェアウェイキープ率
DEFAULT_FAIRWAY_RATE = 0.6

# 適合度ブレンド: 相関 / 誤差（RMSEの逆数）/ Top-N
FITNESS_WEIGHTS = {
    "correlation": 0.4,
    "error": 0.2,
    "top_n": 0.4,
}
# RMSE をスコア化するスケール: 1 / (1 + rmse / RMSE_SCALE)
RMSE_SCALE = 10.0

# 最適化
OPTIMIZER_ITERATIONS = 1500
GROUP_PERTURBATION = 0.20
METRIC_PERTURBATION = 0.15
# 1候補あたりに摂動するグループ数の範囲（両端含む）
PERTURBED_GROUPS_MIN = 2
PERTURBED_GROUPS_MAX = 3
MIN_GROUP_WEIGHT = 0.001
MIN_METRIC_WEIGHT = 0.0001
# この差を超えて改善した場合のみ最適化結果を推奨する
MATERIALITY_MARGIN = 0.01

# 正規化で合計がこれ以上ずれたら警告する
WEIGHT_SUM_TOLERANCE = 0.01
