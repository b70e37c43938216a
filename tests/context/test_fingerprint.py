# tests/context/test_fingerprint.py
"""Tests for document fingerprinting."""

from researchquest.context import fingerprint


class TestFingerprint:
    def test_deterministic(self):
        assert fingerprint("same text") == fingerprint("same text")

    def test_sensitive_to_any_change(self):
        assert fingerprint("The cat sat.") != fingerprint("The cat sat!")
        assert fingerprint("text") != fingerprint("text ")

    def test_empty_string_has_a_digest(self):
        assert fingerprint("") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_hex_sha256_format(self):
        digest = fingerprint("hello")
        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)
