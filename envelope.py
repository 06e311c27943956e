"""
envelope.py
Strips the JSONP callback wrapper from an autocomplete response and decodes the
inner JSON into a SuggestionRecord for the engine that produced it.
"""
import json

from errors import MalformedEnvelope, SchemaMismatch, UnsupportedEngine
from suggestions import PAYLOAD_TYPES, Engine, SuggestionRecord


def strip_envelope(text):
    """Return the text between the first '(' and the last ')'."""
    if not isinstance(text, str):
        raise MalformedEnvelope(f"expected text, got {type(text).__name__}")
    start = text.find("(")
    end = text.rfind(")")
    if start == -1 or end == -1 or start >= end:
        raise MalformedEnvelope(f"invalid JSONP format: {text[:80]!r}")
    return text[start + 1:end]


def _resolve_engine(engine):
    try:
        return Engine(engine)
    except ValueError:
        raise UnsupportedEngine(engine) from None


def parse_payload(inner, engine):
    """Parse the unwrapped JSON text with the schema registered for `engine`."""
    engine = _resolve_engine(engine)
    payload_type = PAYLOAD_TYPES.get(engine)
    if payload_type is None:
        raise UnsupportedEngine(engine)

    try:
        data = json.loads(inner)
    except json.JSONDecodeError as e:
        raise SchemaMismatch(engine, f"error unmarshalling JSONP: {e}") from e
    return payload_type.from_json(data)


def decode(raw_payload, engine, query=""):
    """
    Decode one raw engine response.

    Raises MalformedEnvelope when the callback wrapper is missing,
    SchemaMismatch when the JSON does not fit the engine's shape, and
    UnsupportedEngine for an engine outside the known set.
    """
    engine = _resolve_engine(engine)
    inner = strip_envelope(raw_payload)
    payload = parse_payload(inner, engine)
    return SuggestionRecord(engine=engine, query=query, keywords=payload.suggestions())
