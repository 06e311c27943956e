"""
errors.py
Exception hierarchy for fetching, decoding and exporting related searches.
"""


class SuggestError(Exception):
    """Base class for every error raised by the collector."""


class MalformedEnvelope(SuggestError):
    """The JSONP text has no usable function-call wrapper."""


class SchemaMismatch(SuggestError):
    def __init__(self, engine, detail):
        self.engine = engine
        self.detail = detail
        super().__init__(f"{engine}: payload does not match schema ({detail})")


class UnsupportedEngine(SuggestError):
    def __init__(self, engine):
        self.engine = engine
        super().__init__(f"unsupported engine: {engine!r}")


class TransportError(SuggestError):
    def __init__(self, engine, keyword, cause):
        self.engine = engine
        self.keyword = keyword
        self.cause = cause
        super().__init__(f"{engine} request for '{keyword}' failed: {cause}")


class KeywordSourceError(SuggestError):
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"could not read keywords from {path}: {cause}")


class ExportError(SuggestError):
    def __init__(self, path, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"failed to save {path}: {cause}")
