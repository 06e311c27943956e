#!/usr/bin/env python3
"""
validate_xlsx.py

Checks a related-search workbook against the rules the collector writes it with.

Usage:
  python validate_xlsx.py --xlsx result_1700000000000.xlsx --out diff_report.json [--config config.yml]

Labels come from `export.labels` in the config file when it exists.

Exit codes:
  0 = valid
  1 = invalid
  2 = error (unreadable file)
"""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from classifiers import SourceClassifier
from exporter import DEFAULT_LABELS, SHEET_NAME
from suggestions import Engine

# ----------------------------
# Helpers
# ----------------------------


def load_config_labels(config_path: Path) -> Dict[str, str]:
    if not config_path.exists():
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    return config.get("export", {}).get("labels") or {}


def load_rows(xlsx_path: Path) -> pd.DataFrame:
    # Every cell is text; "NA" or "null" are suggestions, not missing values.
    df = pd.read_excel(xlsx_path, sheet_name=SHEET_NAME, header=None,
                       dtype=str, keep_default_na=False)
    # An all-empty last column is dropped on read.
    if df.shape[1] < 2:
        df = df.reindex(columns=range(2), fill_value="")
    return df


def check_rows(df: pd.DataFrame, labels: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    labels = {**DEFAULT_LABELS, **(labels or {})}
    label_to_engine = {v: Engine(k) for k, v in labels.items()}
    classifier = SourceClassifier()

    diff: Dict[str, Any] = {"valid": True, "row_count": int(len(df)), "problems": {}}

    def flag(kind: str, detail: Any) -> None:
        diff["valid"] = False
        diff["problems"].setdefault(kind, []).append(detail)

    if len(df) and df.shape[1] != 2:
        flag("column_count", df.shape[1])
        return diff

    seen: Dict[Engine, set] = {engine: set() for engine in Engine}
    filed_under: Dict[str, List[Engine]] = {}
    last_engine = None

    for i, (label, keyword) in enumerate(df.itertuples(index=False, name=None)):
        engine = label_to_engine.get(label)
        if engine is None:
            flag("unknown_label", {"row": i + 1, "label": label})
            continue
        if last_engine == Engine.DAUM and engine == Engine.NAVER:
            flag("naver_after_daum", {"row": i + 1, "keyword": keyword})
        last_engine = engine

        if keyword in seen[engine]:
            flag("duplicate", {"row": i + 1, "label": label, "keyword": keyword})
        seen[engine].add(keyword)
        filed_under.setdefault(keyword, []).append(engine)

    for keyword, engines in filed_under.items():
        expected, _ = classifier.classify(keyword)
        if set(engines) != set(expected):
            flag("misclassified", {
                "keyword": keyword,
                "found": sorted(e.value for e in set(engines)),
                "expected": sorted(e.value for e in expected),
            })

    # Keep the report readable on large workbooks
    for kind, items in diff["problems"].items():
        diff["problems"][kind] = items[:10]
    return diff

# ----------------------------
# Main validation
# ----------------------------


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--xlsx", required=True)
    ap.add_argument("--out", required=True)
    ap.add_argument("--config", default="config.yml")
    args = ap.parse_args(argv)

    xlsx_path = Path(args.xlsx)
    out_path = Path(args.out)

    try:
        labels = load_config_labels(Path(args.config))
        diff = check_rows(load_rows(xlsx_path), labels)
        out_path.write_text(json.dumps(
            diff, indent=2, ensure_ascii=False), encoding="utf-8")
        return 0 if diff["valid"] else 1

    except Exception as e:
        err = {"valid": False, "errors": [str(e)]}
        out_path.write_text(json.dumps(
            err, indent=2, ensure_ascii=False), encoding="utf-8")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
