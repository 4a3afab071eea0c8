"""golfrank例外定義"""


class MissingInputError(ValueError):
    """必須入力（フィード・列・ファイル）が存在しない"""


class WeightConfigError(ValueError):
    """重み設定が不正（読み込み時に検出）"""


class UnknownMetricError(ValueError):
    """メトリクスラベルを解決できない"""
