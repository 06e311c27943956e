"""
aggregator.py
Merges every SuggestionRecord of a run into one deduplicated AggregatedResult.
"""
from classifiers import SourceClassifier
from suggestions import AggregatedResult, Engine


def unique_suggestions(records):
    """Exact-string union of all record keywords, in first-seen order."""
    seen = {}
    for record in records:
        for keyword in record.keywords:
            seen.setdefault(keyword, None)
    return list(seen)


def aggregate(records, classifier=None):
    classifier = classifier or SourceClassifier()
    from_naver = []
    from_daum = []

    for suggestion in unique_suggestions(records):
        engines, _ = classifier.classify(suggestion)
        if Engine.NAVER in engines:
            from_naver.append(suggestion)
        if Engine.DAUM in engines:
            from_daum.append(suggestion)

    return AggregatedResult(from_engine_a=tuple(from_naver), from_engine_b=tuple(from_daum))
