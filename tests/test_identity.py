"""Stable notice ids and change-detection fingerprints."""

from idb_notices.ingest.identity import fingerprint, sha256_hex, stable_id


class TestStableId:
    def test_same_input_same_id(self):
        url = "https://projectprocurement.iadb.org/en/notice/AR-L1234-P001"
        assert stable_id(url, "A") == stable_id(url, "A")
        assert stable_id(url, "A") == "AR-L1234-P001"

    def test_title_is_ignored_when_url_present(self):
        url = "https://example.org/notices/123"
        assert stable_id(url, "A") == stable_id(url, "B")

    def test_same_last_segment_collides(self):
        # known boundary: only the final path segment identifies a notice
        a = stable_id("https://a.example.org/x/notice-77", "")
        b = stable_id("https://b.example.org/y/notice-77", "")
        assert a == b == "notice-77"

    def test_trailing_slash_uses_last_non_empty_segment(self):
        assert stable_id("https://example.org/notices/55/", "") == "55"

    def test_query_string_when_no_path(self):
        assert stable_id("https://example.org/?id=42&lang=en", "") == "id42langen"

    def test_unsafe_characters_stripped_and_truncated(self):
        slug = stable_id("https://example.org/" + "é" * 3 + "a b" + "x" * 200, "")
        assert slug.startswith("abx")
        assert len(slug) == 80

    def test_segment_that_sanitizes_to_nothing_hashes_url(self):
        url = "https://example.org/~!~"
        assert stable_id(url, "") == sha256_hex(url)[:16]

    def test_relative_url_hashes_url(self):
        assert stable_id("notices/42", "t") == sha256_hex("notices/42")[:16]

    def test_malformed_url_hashes_url(self):
        assert stable_id("http://[::1", "t") == sha256_hex("http://[::1")[:16]

    def test_no_url_hashes_title(self):
        assert stable_id("", "Bridge Rehabilitation") == sha256_hex("Bridge Rehabilitation")[:16]
        assert stable_id(None, "Bridge Rehabilitation") == stable_id("", "Bridge Rehabilitation")

    def test_distinct_titles_distinct_ids(self):
        assert stable_id("", "Road works lot 1") != stable_id("", "Road works lot 2")


class TestFingerprint:
    def test_deterministic(self):
        assert fingerprint("a", "b", None, "d") == fingerprint("a", "b", None, "d")

    def test_changes_with_any_field(self):
        base = fingerprint("t", "Peru", "2024-03-15", "https://x")
        assert fingerprint("t2", "Peru", "2024-03-15", "https://x") != base
        assert fingerprint("t", "Chile", "2024-03-15", "https://x") != base
        assert fingerprint("t", "Peru", "2024-03-16", "https://x") != base
        assert fingerprint("t", "Peru", "2024-03-15", "https://y") != base

    def test_none_and_empty_are_equivalent(self):
        assert fingerprint("t", None) == fingerprint("t", "")

    def test_separator_inside_a_field_does_not_collide(self):
        url = "https://example.org/notices/1"
        assert fingerprint("A|Peru", None, None, url) != fingerprint("A", "Peru|", None, url)
        assert fingerprint("a|b", "c") != fingerprint("a", "b|c")
