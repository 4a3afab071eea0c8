"""CSVフィードリポジトリ

ラウンド統計・アプローチ統計・大会結果のCSVを読み込み、エンジンの入力行に変換する。
エンジン本体からは呼ばれない（CLIなどの呼び出し側が使う）。
"""

import logging
from pathlib import Path
from typing import Iterable, Sequence

import pandas as pd

from golfrank.constants import (
    APPROACH_COLUMN_PREFIXES,
    APPROACH_FIELD_SUFFIXES,
    APPROACH_METRICS,
    BIRDIE_COLUMNS,
    PERCENT_METRICS,
    ROUND_COLUMNS,
    ROUND_DATE_COLUMN,
    SHOT_COUNT_SUFFIX,
    MetricId,
)
from golfrank.errors import MissingInputError
from golfrank.models.feeds import ApproachStatRow, RealizedResult, RoundStatRow
from golfrank.models.ranking import RankingEntry
from golfrank.utils.finish_parser import parse_finish

logger = logging.getLogger(__name__)

ID_COLUMN = "dg_id"
NAME_COLUMN = "player_name"
ROUND_KEY_COLUMNS = (ID_COLUMN, "event_id", "round_num")
RESULT_COLUMNS = (ID_COLUMN, "fin_text")


def normalize_percent(metric: MetricId, value: float | None) -> float | None:
    """0-100 表記の割合を 0-1 に揃える"""
    if value is None or metric not in PERCENT_METRICS:
        return value
    return value / 100.0 if value > 1.0 else value


def _cell(row: pd.Series, column: str) -> float | None:
    if column not in row.index or pd.isna(row[column]):
        return None
    try:
        return float(row[column])
    except (TypeError, ValueError):
        return None


def _text(row: pd.Series, column: str) -> str | None:
    if column not in row.index or pd.isna(row[column]):
        return None
    return str(row[column])


def _name(row: pd.Series) -> str | None:
    name = _text(row, NAME_COLUMN)
    if name is None:
        return None
    return name.strip() or None


class CsvFeedRepository:
    """CSVファイルからフィードを読み込むリポジトリ"""

    def _read(
        self,
        path: str | Path,
        required: Sequence[str],
        label: str,
        dtype: dict[str, type] | None = None,
    ) -> pd.DataFrame:
        path = Path(path)
        if not path.exists():
            raise MissingInputError(f"{label}が見つかりません: {path}")
        df = pd.read_csv(path, dtype=dtype)
        df.columns = [str(column).strip() for column in df.columns]
        missing = [column for column in required if column not in df.columns]
        if missing:
            raise MissingInputError(f"{label}に必須列がありません: {missing} ({path})")

        df[ID_COLUMN] = pd.to_numeric(df[ID_COLUMN], errors="coerce")
        invalid = int(df[ID_COLUMN].isna().sum())
        if invalid:
            logger.warning(f"{label}: 選手IDが不正な{invalid}行をスキップ")
            df = df[df[ID_COLUMN].notna()].copy()
        return df

    def load_round_stats(self, path: str | Path) -> list[RoundStatRow]:
        """ラウンド統計CSVを読み込む

        Args:
            path: CSVファイルパス

        Returns:
            RoundStatRow のリスト

        Raises:
            MissingInputError: ファイルまたは必須列がない場合
        """
        df = self._read(path, ROUND_KEY_COLUMNS, "ラウンド統計", dtype={"event_id": str})
        missing_event = int(df["event_id"].isna().sum())
        if missing_event:
            logger.warning(f"ラウンド統計: 大会IDが空の{missing_event}行をスキップ")
            df = df[df["event_id"].notna()].copy()
        df["event_id"] = df["event_id"].str.strip()
        if ROUND_DATE_COLUMN in df.columns:
            df[ROUND_DATE_COLUMN] = pd.to_datetime(
                df[ROUND_DATE_COLUMN], errors="coerce"
            ).dt.strftime("%Y-%m-%d")
        for column in list(ROUND_COLUMNS) + list(BIRDIE_COLUMNS):
            if column in df.columns:
                df[column] = pd.to_numeric(df[column], errors="coerce")

        rows = []
        for _, row in df.iterrows():
            values: dict[MetricId, float | None] = {}
            for column, metric in ROUND_COLUMNS.items():
                values[metric] = normalize_percent(metric, _cell(row, column))

            birdie_parts = [_cell(row, column) for column in BIRDIE_COLUMNS]
            if birdie_parts[0] is not None:
                values[MetricId.BIRDIES_OR_BETTER] = birdie_parts[0] + (birdie_parts[1] or 0.0)

            rows.append(
                RoundStatRow(
                    competitor_id=int(row[ID_COLUMN]),
                    event_id=str(row["event_id"]),
                    round_number=int(row["round_num"]) if pd.notna(row["round_num"]) else 0,
                    values=values,
                    name=_name(row),
                    date=_text(row, ROUND_DATE_COLUMN),
                )
            )
        logger.info(f"ラウンド統計: {len(rows)}行を読み込み ({path})")
        return rows

    def load_approach_stats(self, path: str | Path) -> list[ApproachStatRow]:
        """アプローチ統計CSVを読み込む

        列名は "<距離帯プレフィックス><項目サフィックス>"（例: 50_100_fw_gir_rate）。
        """
        df = self._read(path, (ID_COLUMN,), "アプローチ統計")
        rows = []
        for _, row in df.iterrows():
            values: dict[MetricId, float | None] = {}
            shot_counts = {}
            for prefix, bucket in APPROACH_COLUMN_PREFIXES.items():
                for suffix, field in APPROACH_FIELD_SUFFIXES.items():
                    metric = APPROACH_METRICS[bucket][field]
                    values[metric] = normalize_percent(
                        metric, _cell(row, prefix + suffix)
                    )
                count = _cell(row, prefix + SHOT_COUNT_SUFFIX)
                if count is not None:
                    shot_counts[bucket] = int(count)
            rows.append(
                ApproachStatRow(
                    competitor_id=int(row[ID_COLUMN]),
                    values=values,
                    shot_counts=shot_counts,
                    name=_name(row),
                )
            )
        logger.info(f"アプローチ統計: {len(rows)}行を読み込み ({path})")
        return rows

    def load_results(self, path: str | Path) -> list[RealizedResult]:
        """大会結果CSVを読み込む

        fin_text の "T5" は 5 位、"CUT" / "WD" / "DQ" などは非完走（順位None）。
        """
        df = self._read(path, RESULT_COLUMNS, "大会結果")
        results = []
        for _, row in df.iterrows():
            raw = row["fin_text"]
            position, status = parse_finish(None if pd.isna(raw) else raw)
            results.append(
                RealizedResult(
                    competitor_id=int(row[ID_COLUMN]),
                    position=position,
                    status=status,
                    name=_name(row),
                )
            )
        finished = sum(1 for r in results if r.finished)
        logger.info(f"大会結果: {len(results)}人（完走{finished}人）を読み込み ({path})")
        return results

    def load_history(self, paths: Iterable[str | Path]) -> dict[int, list[int | None]]:
        """過去大会の結果CSVから選手ごとの直近着順を作る

        Args:
            paths: 過去大会の結果CSV（新しい順）

        Returns:
            選手ID → 着順リスト（新しい順、非完走はNone）
        """
        history: dict[int, list[int | None]] = {}
        for path in paths:
            for result in self.load_results(path):
                history.setdefault(result.competitor_id, []).append(result.position)
        return history

    def write_ranking(self, ranking: Sequence[RankingEntry], path: str | Path) -> Path:
        """ランキングをCSVに書き出す"""
        path = Path(path)
        df = pd.DataFrame(
            [
                {
                    "rank": entry.rank,
                    ID_COLUMN: entry.competitor_id,
                    NAME_COLUMN: entry.name,
                    "score": entry.score,
                    "raw_score": entry.raw_score,
                    "coverage": entry.coverage,
                }
                for entry in ranking
            ],
            columns=["rank", ID_COLUMN, NAME_COLUMN, "score", "raw_score", "coverage"],
        )
        df.to_csv(path, index=False)
        logger.info(f"ランキングを書き出し: {path}")
        return path

