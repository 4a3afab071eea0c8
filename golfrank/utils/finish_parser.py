"""着順表記パーサー"""

import re

from golfrank.constants import NON_FINISH_MARKERS

_POSITION_PATTERN = re.compile(r"^T?(\d+)$")


def parse_finish(text: str | int | float | None) -> tuple[int | None, str]:
    """着順表記を (順位, ステータス) に変換する

    "1" → (1, "FINISHED"), "T5" → (5, "FINISHED"), "CUT" → (None, "CUT")。
    非完走を数値の番兵に置き換えることはしない。

    Args:
        text: 着順表記

    Returns:
        (順位またはNone, ステータス)
    """
    if text is None:
        return None, "UNKNOWN"
    if isinstance(text, (int, float)):
        if text != text or text <= 0:
            return None, "UNKNOWN"
        return int(text), "FINISHED"

    normalized = str(text).strip().upper()
    if not normalized:
        return None, "UNKNOWN"
    if normalized in NON_FINISH_MARKERS:
        return None, normalized

    match = _POSITION_PATTERN.match(normalized)
    if match:
        position = int(match.group(1))
        if position > 0:
            return position, "FINISHED"
    return None, "UNKNOWN"
