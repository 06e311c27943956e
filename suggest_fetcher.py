"""
suggest_fetcher.py
Issues the autocomplete requests for Naver and Daum and returns the raw JSONP text.
"""
import time

import requests

from errors import TransportError, UnsupportedEngine
from suggestions import Engine

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/114.0.5735.110 Safari/537.36"
)

NAVER_URL = "https://ac.search.naver.com/nx/ac"
DAUM_URL = "https://vmsuggest.search.daum.net/v2/sushi/pc/get"

REFERERS = {
    Engine.NAVER: "https://www.naver.com/",
    Engine.DAUM: "https://www.daum.net/",
}


def current_millis():
    return time.time_ns() // 1_000_000


class SuggestionFetcher:
    def __init__(self, user_agent=DEFAULT_USER_AGENT, timeout=None, strict_status=False, run_log=None):
        self.user_agent = user_agent
        self.timeout = timeout
        self.strict_status = strict_status
        self.run_log = run_log

    def headers_for(self, engine):
        return {
            "Content-Type": "application/javascript; charset=UTF-8",
            "Referer": REFERERS[engine],
            "User-Agent": self.user_agent,
        }

    def build_request(self, engine, keyword):
        """Returns (url, params) for one engine/keyword pair."""
        if engine == Engine.NAVER:
            return NAVER_URL, {
                "q": keyword,
                "con": "1",
                "frm": "nv",
                "ans": "2",
                "r_format": "json",
                "r_enc": "UTF-8",
                "r_unicode": "0",
                "t_koreng": "1",
                "run": "2",
                "rev": "4",
                "q_enc": "UTF-8",
                "st": "100",
                "_callback": "_jsonp_4",
            }
        if engine == Engine.DAUM:
            # Callback name is unique per request.
            return DAUM_URL, {
                "q": keyword,
                "callback": f"jsonp{current_millis()}",
            }
        raise UnsupportedEngine(engine)

    def fetch(self, engine, keyword):
        """
        GETs the engine's suggest endpoint and returns the body as text.
        Connection level failures become TransportError. Non-2xx bodies are
        passed through unless strict_status is set.
        """
        url, params = self.build_request(engine, keyword)
        engine = Engine(engine)
        try:
            response = requests.get(
                url, params=params, headers=self.headers_for(engine), timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(engine, keyword, e) from e

        if not response.ok:
            if self.strict_status:
                raise TransportError(engine, keyword, f"HTTP {response.status_code}")
            if self.run_log:
                self.run_log.error(
                    f"{engine} returned HTTP {response.status_code} for '{keyword}', decoding body anyway",
                    stacklevel=2)

        response.encoding = "utf-8"
        return response.text
