"""
suggestions.py
Data types shared by the decoder, aggregator and exporter.

The two engines answer with unrelated JSON shapes, so each shape gets its own
payload class and `PAYLOAD_TYPES` maps an Engine to the class that knows how
to read it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Type, Union

from errors import SchemaMismatch


class Engine(str, Enum):
    NAVER = "naver"
    DAUM = "daum"

    def __str__(self):
        return self.value


def _string_list(engine: Engine, field: str, value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise SchemaMismatch(engine, f"'{field}' must be a list of strings")
    return tuple(value)


def _require_object(engine: Engine, data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise SchemaMismatch(
            engine, f"expected a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class NaverPayload:
    """
    Naver autocomplete response.
    `items` is a list of groups, each group a list of entries, each entry a
    list of strings whose first element is the display keyword.
    """
    query: Tuple[str, ...] = ()
    answer: Tuple[str, ...] = ()
    intend: Tuple[str, ...] = ()
    items: Tuple[Tuple[Tuple[str, ...], ...], ...] = ()

    engine = Engine.NAVER

    @classmethod
    def from_json(cls, data: Any) -> "NaverPayload":
        data = _require_object(Engine.NAVER, data)
        raw_items = data.get("items")
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise SchemaMismatch(Engine.NAVER, "'items' must be a list")

        groups = []
        for g, group in enumerate(raw_items):
            if group is None:
                group = []
            if not isinstance(group, list):
                raise SchemaMismatch(Engine.NAVER, f"items[{g}] must be a list")
            groups.append(tuple(
                _string_list(Engine.NAVER, f"items[{g}][{e}]", entry)
                for e, entry in enumerate(group)
            ))

        return cls(
            query=_string_list(Engine.NAVER, "query", data.get("query")),
            answer=_string_list(Engine.NAVER, "answer", data.get("answer")),
            intend=_string_list(Engine.NAVER, "intend", data.get("intend")),
            items=tuple(groups),
        )

    def suggestions(self) -> Tuple[str, ...]:
        return tuple(entry[0] for group in self.items for entry in group if entry)


@dataclass(frozen=True)
class DaumPayload:
    """Daum suggest response: `subkeys` carries one object per suggestion."""
    q: str = ""
    subkeys: Tuple[str, ...] = ()

    engine = Engine.DAUM

    @classmethod
    def from_json(cls, data: Any) -> "DaumPayload":
        data = _require_object(Engine.DAUM, data)
        q = data.get("q")
        if q is None:
            q = ""
        if not isinstance(q, str):
            raise SchemaMismatch(Engine.DAUM, "'q' must be a string")

        raw_subkeys = data.get("subkeys")
        if raw_subkeys is None:
            raw_subkeys = []
        if not isinstance(raw_subkeys, list):
            raise SchemaMismatch(Engine.DAUM, "'subkeys' must be a list")

        keywords = []
        for i, subkey in enumerate(raw_subkeys):
            if not isinstance(subkey, dict):
                raise SchemaMismatch(Engine.DAUM, f"subkeys[{i}] must be an object")
            keyword = subkey.get("keyword")
            if keyword is None:
                # Entry without a keyword; the rest of the list is still usable.
                continue
            if not isinstance(keyword, str):
                raise SchemaMismatch(
                    Engine.DAUM, f"subkeys[{i}].keyword must be a string")
            keywords.append(keyword)

        return cls(q=q, subkeys=tuple(keywords))

    def suggestions(self) -> Tuple[str, ...]:
        return self.subkeys


Payload = Union[NaverPayload, DaumPayload]

PAYLOAD_TYPES: Dict[Engine, Type[Payload]] = {
    Engine.NAVER: NaverPayload,
    Engine.DAUM: DaumPayload,
}


@dataclass(frozen=True)
class SuggestionRecord:
    """Suggestions one engine returned for one keyword, not yet deduplicated."""
    engine: Engine
    query: str
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AggregatedResult:
    from_engine_a: Tuple[str, ...] = ()
    from_engine_b: Tuple[str, ...] = ()

    @property
    def total_count(self) -> int:
        return len(self.from_engine_a) + len(self.from_engine_b)
