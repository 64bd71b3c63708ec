"""Tests for ContentHash"""

import pytest

from histograph.storage import ContentHash, MalformedObject
from histograph.storage.codec import encode_vertex

VERTEX_27_KEY = "4d159113222bfeb85fbe717cc2393ee8a6a85b7ce5ac1791c4eade5e3dd6de41"


class TestContentHash:

    def test_golden_vertex_hash(self):
        """Vertex 27, encoded then hashed, yields a fixed key."""
        assert ContentHash.compute(encode_vertex(27)).to_key_string() == VERTEX_27_KEY

    def test_compute_is_deterministic(self):
        a = ContentHash.compute(b"same bytes")
        b = ContentHash.compute(b"same bytes")
        assert a == b
        assert hash(a) == hash(b)
        assert a.to_key_string() == b.to_key_string()

    def test_different_content_different_hash(self):
        assert ContentHash.compute(b"a") != ContentHash.compute(b"b")

    def test_empty_content(self):
        h = ContentHash.compute(b"")
        assert h.to_key_string() == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_key_string_is_lowercase_hex(self):
        key = ContentHash.compute(b"x").to_key_string()
        assert len(key) == 64
        assert key == key.lower()
        int(key, 16)

    def test_key_string_round_trip(self):
        h = ContentHash.compute(b"round trip")
        assert ContentHash.from_key_string(h.to_key_string()) == h

    @pytest.mark.parametrize("key", [
        "",
        "abc",
        VERTEX_27_KEY.upper(),
        "z" * 64,
        VERTEX_27_KEY + "00",
    ])
    def test_from_key_string_rejects_non_canonical(self, key):
        with pytest.raises(MalformedObject):
            ContentHash.from_key_string(key)

    def test_wrong_digest_length_rejected(self):
        with pytest.raises(MalformedObject):
            ContentHash(b"\x00" * 31)

    def test_usable_as_dict_key(self):
        h = ContentHash.compute(b"key")
        lookup = {h: "value"}
        assert lookup[ContentHash.compute(b"key")] == "value"

    def test_not_equal_to_raw_bytes(self):
        h = ContentHash.compute(b"key")
        assert h != h.digest
        assert bytes(h) == h.digest
