"""
exporter.py
Writes an AggregatedResult to a timestamped two-column workbook.
"""
import os

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import IllegalCharacterError

from errors import ExportError
from suggest_fetcher import current_millis
from suggestions import Engine

DEFAULT_LABELS = {
    Engine.NAVER.value: "네이버",
    Engine.DAUM.value: "다음",
}
SHEET_NAME = "Sheet1"
COLUMNS = ["Source", "Keyword"]
REPLACEMENT_CHAR = "\ufffd"


def sheet_text(value):
    """Replace control characters openpyxl refuses to store, one for one."""
    return ILLEGAL_CHARACTERS_RE.sub(REPLACEMENT_CHAR, value)


def _label_rows(label, keywords):
    # Two suggestions can collapse into the same text once cleaned.
    seen = {}
    for kw in keywords:
        seen.setdefault(sheet_text(kw), None)
    return [[label, kw] for kw in seen]


def build_rows(result, labels=None):
    """Naver rows first, then Daum rows, each as [label, suggestion]."""
    labels = {**DEFAULT_LABELS, **(labels or {})}
    rows = _label_rows(labels[Engine.NAVER.value], result.from_engine_a)
    rows += _label_rows(labels[Engine.DAUM.value], result.from_engine_b)
    return pd.DataFrame(rows, columns=COLUMNS)


def result_filename(timestamp_ms=None):
    if timestamp_ms is None:
        timestamp_ms = current_millis()
    return f"result_{timestamp_ms}.xlsx"


def _force_text(worksheet, row_count):
    # openpyxl turns "=..." into a formula; every cell here is plain text.
    if not row_count:
        return
    for row in worksheet.iter_rows(min_row=1, max_row=row_count, min_col=1, max_col=len(COLUMNS)):
        for cell in row:
            cell.data_type = "s"


def save_to_excel(result, output_dir=".", labels=None, timestamp_ms=None):
    """Saves the workbook and returns its path."""
    path = os.path.join(output_dir, result_filename(timestamp_ms))
    df = build_rows(result, labels)
    try:
        os.makedirs(output_dir, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=SHEET_NAME, index=False, header=False)
            _force_text(writer.sheets[SHEET_NAME], len(df))
    except (OSError, ValueError, IllegalCharacterError) as e:
        raise ExportError(path, e) from e
    return path
