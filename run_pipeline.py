#!/usr/bin/env python3
"""
run_pipeline.py
Orchestrates a full related-search run:
1. Collect (Fetch + Decode + Aggregate + Export)
2. Validate the newest workbook
"""
import glob
import os
import subprocess
import sys

import yaml


def run_command(cmd, description):
    print(f"\n--- {description} ---")
    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, capture_output=False)
    if result.returncode != 0:
        print(f"❌ {description} Failed! (Exit Code: {result.returncode})")
        sys.exit(result.returncode)
    print(f"✅ {description} Completed.")


def latest_result(output_dir):
    candidates = glob.glob(os.path.join(output_dir, "result_*.xlsx"))
    if not candidates:
        return None
    return max(candidates, key=os.path.getmtime)


def main():
    # Load Config
    config = {}
    if os.path.exists("config.yml"):
        with open("config.yml", "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    files_cfg = config.get("files", {})
    output_dir = os.getenv(
        "RELATED_SEARCH_OUTPUT_DIR", files_cfg.get("output_dir", "."))

    # 1. Collect related searches
    run_command([sys.executable, "related_search.py"],
                "Step 1: Related Search Collection")

    # 2. Validate the workbook
    xlsx_file = latest_result(output_dir)
    diff_file = "diff_report.json"
    if xlsx_file:
        run_command([
            sys.executable, "validate_xlsx.py",
            "--xlsx", xlsx_file,
            "--out", diff_file,
            "--config", "config.yml"
        ], "Step 2: Workbook Validation")
    else:
        print("⚠️ Skipping validation: no result_*.xlsx found.")

    print("\n🎉 Pipeline Finished Successfully!")
    print(f"   - Excel:  {xlsx_file}")
    print(f"   - Diff:   {diff_file}")


if __name__ == "__main__":
    main()
