import unittest

from envelope import decode, parse_payload, strip_envelope
from errors import MalformedEnvelope, SchemaMismatch, UnsupportedEngine
from suggestions import DaumPayload, Engine, NaverPayload, SuggestionRecord

NAVER_RAW = (
    '_jsonp_4({"query":["x"],"answer":[],"intend":[],'
    '"items":[[["kw1","x"],["kw2","y"]],[["kw3","z"]]]})'
)
DAUM_RAW = (
    'jsonp1700000000000({"q":"x","tltm":null,"subkeys":['
    '{"keyword":"kw1","highlighted":[[0,1]],"metaCnt":0,"meta":[]},'
    '{"keyword":"kw2","highlighted":[],"metaCnt":2,"meta":[{"a":1}]}]})'
)


class TestStripEnvelope(unittest.TestCase):

    def test_extracts_content_between_outer_parens(self):
        """Text between the first '(' and the last ')' is returned verbatim."""
        self.assertEqual(strip_envelope("prefix(content)suffix"), "content")
        self.assertEqual(strip_envelope('cb({"a":"(x)"});'), '{"a":"(x)"}')

    def test_missing_or_reversed_parens(self):
        """No '(' / no ')' / ')' before '(' are malformed envelopes."""
        for text in ["no parens", "only(open", "only)close", ")(", ""]:
            with self.assertRaises(MalformedEnvelope, msg=text):
                strip_envelope(text)

    def test_non_text_payload(self):
        with self.assertRaises(MalformedEnvelope):
            strip_envelope(None)


class TestDecode(unittest.TestCase):

    def test_naver_extraction_flattens_groups(self):
        """First field of every inner entry, groups flattened in order."""
        record = decode(NAVER_RAW, Engine.NAVER, query="x")
        self.assertEqual(record, SuggestionRecord(
            engine=Engine.NAVER, query="x", keywords=("kw1", "kw2", "kw3")))

    def test_naver_skips_empty_entries(self):
        record = decode('cb({"items":[[[], ["kw1"]], []]})', Engine.NAVER)
        self.assertEqual(record.keywords, ("kw1",))

    def test_daum_extraction(self):
        """The keyword field of each subkey, ignoring ranking metadata."""
        record = decode(DAUM_RAW, Engine.DAUM, query="x")
        self.assertEqual(record.engine, Engine.DAUM)
        self.assertEqual(record.keywords, ("kw1", "kw2"))

    def test_engine_given_as_string(self):
        record = decode(DAUM_RAW, "daum")
        self.assertEqual(record.engine, Engine.DAUM)

    def test_missing_and_null_fields_decode_empty(self):
        """Absent or null collections decode to an empty record."""
        self.assertEqual(decode("cb({})", Engine.NAVER).keywords, ())
        self.assertEqual(decode('cb({"items":null})', Engine.NAVER).keywords, ())
        self.assertEqual(decode('cb({"q":"x","subkeys":null})', Engine.DAUM).keywords, ())

    def test_invalid_json_is_schema_mismatch(self):
        with self.assertRaises(SchemaMismatch) as ctx:
            decode("cb({not json})", Engine.NAVER)
        self.assertEqual(ctx.exception.engine, Engine.NAVER)
        self.assertIn("unmarshalling", ctx.exception.detail)

    def test_empty_envelope_is_schema_mismatch(self):
        with self.assertRaises(SchemaMismatch):
            decode("cb()", Engine.DAUM)

    def test_wrong_shapes_are_schema_mismatch(self):
        """Present fields of the wrong type do not match the engine's schema."""
        cases = [
            ('cb([1,2])', Engine.NAVER),
            ('cb({"items":"kw1"})', Engine.NAVER),
            ('cb({"items":[["kw1"]]})', Engine.NAVER),
            ('cb({"items":[[[1,2]]]})', Engine.NAVER),
            ('cb({"query":"x"})', Engine.NAVER),
            ('cb({"q":1})', Engine.DAUM),
            ('cb({"subkeys":{"keyword":"kw1"}})', Engine.DAUM),
            ('cb({"subkeys":["kw1"]})', Engine.DAUM),
            ('cb({"subkeys":[{"keyword":7}]})', Engine.DAUM),
        ]
        for raw, engine in cases:
            with self.assertRaises(SchemaMismatch, msg=raw):
                decode(raw, engine)

    def test_daum_subkey_without_keyword_is_skipped(self):
        """Other subkeys of the same response survive an entry with no keyword."""
        raw = 'cb({"subkeys":[{"keyword":"kw1"},{"highlighted":[]},{"keyword":null},{"keyword":"kw2"}]})'
        self.assertEqual(decode(raw, Engine.DAUM).keywords, ("kw1", "kw2"))

    def test_schema_is_selected_by_engine(self):
        """A Daum payload read as Naver yields no Naver items, and vice versa."""
        self.assertEqual(decode(DAUM_RAW, Engine.NAVER).keywords, ())
        self.assertEqual(decode(NAVER_RAW, Engine.DAUM).keywords, ())

    def test_unsupported_engine(self):
        with self.assertRaises(UnsupportedEngine):
            decode(NAVER_RAW, "google")
        with self.assertRaises(UnsupportedEngine):
            parse_payload("{}", "bing")

    def test_malformed_envelope_propagates(self):
        with self.assertRaises(MalformedEnvelope):
            decode('{"items":[]}', Engine.NAVER)


class TestPayloadTypes(unittest.TestCase):

    def test_parse_payload_returns_engine_type(self):
        naver = parse_payload('{"query":["x"],"items":[]}', Engine.NAVER)
        daum = parse_payload('{"q":"x","subkeys":[]}', Engine.DAUM)
        self.assertIsInstance(naver, NaverPayload)
        self.assertEqual(naver.query, ("x",))
        self.assertIsInstance(daum, DaumPayload)
        self.assertEqual(daum.q, "x")


if __name__ == '__main__':
    unittest.main()
