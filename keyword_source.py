"""
keyword_source.py
Reads the newline-delimited seed keyword list.
"""
from errors import KeywordSourceError


def read_keywords(path):
    """Returns the non-blank lines of `path`, stripped, in file order."""
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise KeywordSourceError(path, e) from e

    keywords = []
    for line in lines:
        keyword = line.strip()
        if keyword:
            keywords.append(keyword)
    return keywords
