import os
import sys

import yaml
from dotenv import load_dotenv

from aggregator import aggregate
from envelope import decode
from errors import ExportError, KeywordSourceError, SuggestError
from exporter import DEFAULT_LABELS, save_to_excel
from keyword_source import read_keywords
from run_log import RunLogger
from suggest_fetcher import DEFAULT_USER_AGENT, SuggestionFetcher
from suggestions import Engine

# --- CONFIGURATION ---
load_dotenv()

CONFIG = {}
if os.path.exists("config.yml"):
    with open("config.yml", "r", encoding="utf-8") as f:
        CONFIG = yaml.safe_load(f) or {}


def _env_bool(name, default=False):
    """Read boolean env var with common truthy/falsey values."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "no", "n", "off"}:
        return False
    return default


INPUT_FILE = os.getenv(
    "RELATED_SEARCH_INPUT", CONFIG.get("files", {}).get("input_txt", "input.txt"))
OUTPUT_DIR = os.getenv(
    "RELATED_SEARCH_OUTPUT_DIR", CONFIG.get("files", {}).get("output_dir", "."))
ERROR_LOG = CONFIG.get("files", {}).get("error_log", "error.log")
APP_LOG = CONFIG.get("files", {}).get("app_log", "app.log")

USER_AGENT = CONFIG.get("http", {}).get("user_agent", DEFAULT_USER_AGENT)
TIMEOUT_SECONDS = CONFIG.get("http", {}).get("timeout_seconds")
STRICT_STATUS = _env_bool(
    "RELATED_SEARCH_STRICT_STATUS",
    bool(CONFIG.get("http", {}).get("strict_status", False))
)
LABELS = {**DEFAULT_LABELS, **(CONFIG.get("export", {}).get("labels") or {})}

ENGINE_ORDER = (Engine.NAVER, Engine.DAUM)
DONE_MESSAGE = "결과 분류가 완료되었습니다. 결과파일을 확인하세요."


def process_keyword(keyword, fetcher, run_log):
    """
    Fetch and decode one keyword on every engine.
    A failure on one engine is logged and does not stop the other.
    """
    records = []
    for engine in ENGINE_ORDER:
        try:
            raw = fetcher.fetch(engine, keyword)
            records.append(decode(raw, engine, query=keyword))
        except SuggestError as e:
            run_log.error(f"[{engine}] keyword='{keyword}': {e}")
    return records


def collect_records(keywords, fetcher, run_log):
    all_records = []
    for keyword in keywords:
        all_records.extend(process_keyword(keyword, fetcher, run_log))
    return all_records


def main():
    run_log = RunLogger(ERROR_LOG, APP_LOG).open()
    try:
        try:
            keywords = read_keywords(INPUT_FILE)
        except KeywordSourceError as e:
            run_log.error(str(e))
            return 1

        fetcher = SuggestionFetcher(
            user_agent=USER_AGENT,
            timeout=TIMEOUT_SECONDS,
            strict_status=STRICT_STATUS,
            run_log=run_log,
        )
        records = collect_records(keywords, fetcher, run_log)
        result = aggregate(records)

        try:
            path = save_to_excel(result, output_dir=OUTPUT_DIR, labels=LABELS)
        except ExportError as e:
            run_log.error(str(e))
            return 1

        run_log.summary(result.total_count)
        print(DONE_MESSAGE)
        print(path)
        return 0
    finally:
        run_log.close()


if __name__ == "__main__":
    sys.exit(main())
