"""
classifiers.py
Rules-based source classifier for related-search suggestions.

The rule looks at the suggestion text, not at which engine returned it: a Daum
suggestion that mentions "naver" is filed under Naver.
"""
from suggestions import Engine


class SourceClassifier:
    def __init__(self, markers=None):
        # Checked in order; first match wins.
        self.markers = markers or [
            (Engine.NAVER, Engine.NAVER.value),
            (Engine.DAUM, Engine.DAUM.value),
        ]

    def classify(self, suggestion):
        """
        Returns the engines a suggestion is filed under, plus the evidence used.
        A suggestion naming neither engine is filed under both.
        """
        for engine, marker in self.markers:
            if marker in suggestion:
                return (engine,), [f"contains:{marker}"]
        return tuple(engine for engine, _ in self.markers), ["fallback"]
