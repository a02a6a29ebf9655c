"""
Reporter - Render FrequencyTable thanh bang 2 cot Word / Frequency.

Hai modes dung chung column-width computation:
- alphabetical: sort theo word (da fold) tang dan
- frequency: sort theo count giam dan, khong co secondary key
  (ties giu thu tu ma stable sort nhan vao)
"""

import sys
from enum import Enum
from typing import List, Optional, TextIO, Tuple, Union

from core.counting.frequency_table import FrequencyTable

WORD_HEADER = "Word"
COUNT_HEADER = "Frequency"
COLUMN_GAP = "  "


class ReportMode(str, Enum):
    """Thu tu cac dong trong report."""

    ALPHABETICAL = "alphabetical"
    FREQUENCY = "frequency"


def column_widths(table: FrequencyTable) -> Tuple[int, int]:
    """
    Tinh do rong 2 cot trong mot lan duyet.

    Returns:
        (word_width, count_width), toi thieu bang do rong header
    """
    word_width = len(WORD_HEADER)
    count_width = len(COUNT_HEADER)
    for word, count in table.items():
        word_width = max(word_width, len(word))
        count_width = max(count_width, len(str(count)))
    return word_width, count_width


def sort_alphabetical(table: FrequencyTable) -> List[Tuple[str, int]]:
    return sorted(table.items(), key=lambda kv: kv[0])


def sort_by_frequency(table: FrequencyTable) -> List[Tuple[str, int]]:
    return sorted(table.items(), key=lambda kv: kv[1], reverse=True)


def render_report(
    table: FrequencyTable,
    mode: Union[ReportMode, str] = ReportMode.FREQUENCY,
    top: Optional[int] = None,
) -> List[str]:
    """
    Render table thanh cac dong text (khong co newline).

    Args:
        table: FrequencyTable can render
        mode: "alphabetical" hoac "frequency"
        top: Gioi han so dong du lieu (None = tat ca)

    Returns:
        List dong: header truoc, sau do mot dong moi word

    Raises:
        ValueError: Neu mode khong hop le
    """
    mode = ReportMode(mode)
    if mode is ReportMode.ALPHABETICAL:
        rows = sort_alphabetical(table)
    else:
        rows = sort_by_frequency(table)
    if top is not None:
        rows = rows[: max(0, top)]

    word_width, count_width = column_widths(table)
    lines = [f"{WORD_HEADER:<{word_width}}{COLUMN_GAP}{COUNT_HEADER:>{count_width}}"]
    for word, count in rows:
        lines.append(f"{word:<{word_width}}{COLUMN_GAP}{count:>{count_width}}")
    return lines


def print_report(
    table: FrequencyTable,
    mode: Union[ReportMode, str] = ReportMode.FREQUENCY,
    stream: Optional[TextIO] = None,
    top: Optional[int] = None,
) -> None:
    """Ghi report ra stream (default: stdout)."""
    out = stream if stream is not None else sys.stdout
    for line in render_report(table, mode, top):
        out.write(line + "\n")
    out.flush()
