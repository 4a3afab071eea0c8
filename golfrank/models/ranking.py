"""ランキング結果モデル"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RankingEntry:
    """ランキング1行（イミュータブル）

    Attributes:
        competitor_id: 選手ID
        name: 表示名
        score: 補正後の総合スコア
        rank: 順位（1=最上位、同点は入力順）
        coverage: 期待メトリクスのうちデータがある割合
        raw_score: 補正前の重み付きスコア
        group_scores: グループ名 → グループスコア（データなしはNone）
    """

    competitor_id: int
    name: str
    score: float
    rank: int
    coverage: float
    raw_score: float
    group_scores: dict[str, float | None] = field(default_factory=dict)
