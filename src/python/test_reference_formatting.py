#!/usr/bin/env python3
"""
Tests for reference normalization and display/API formatting.

Covers:
- normalize_scripture_reference (parse path and fallback path)
- Idempotency of normalization
- Display format (" | " between verse groups) and its inverse
- Round-trip law for normalized references
"""

import sys
import os
import unittest

# Ensure src/python is on the path
sys.path.insert(0, os.path.dirname(__file__))

from scripture_detector import (
    NET_BIBLE_COPYRIGHT,
    detect_scripture_references,
    format_book_name_for_api,
    format_reference_for_api,
    format_reference_for_display,
    normalize_scripture_reference,
)


# ============================================================================
# NORMALIZATION
# ============================================================================

class TestNormalizeScriptureReference(unittest.TestCase):

    def test_collapses_irregular_spacing(self):
        self.assertEqual(normalize_scripture_reference("John 3: 16 - 17"), "John 3:16-17")

    def test_multi_group(self):
        self.assertEqual(
            normalize_scripture_reference("Matthew 26:6-13, 17-30"),
            "Matthew 26:6-13,17-30",
        )

    def test_already_normalized(self):
        self.assertEqual(normalize_scripture_reference("John 3:16"), "John 3:16")

    def test_canonical_book_name(self):
        self.assertEqual(normalize_scripture_reference("rom 8:28"), "Romans 8:28")
        self.assertEqual(normalize_scripture_reference("Song of Solomon 2:4"), "Song of Songs 2:4")
        self.assertEqual(normalize_scripture_reference("  1 cor 13:4 - 7 "), "1 Corinthians 13:4-7")

    def test_chapter_only(self):
        self.assertEqual(normalize_scripture_reference("Psalm 23"), "Psalms 23:1")

    def test_fallback_cleans_spacing_without_book_lookup(self):
        self.assertEqual(normalize_scripture_reference("Hezekiah 3: 16 - 17"), "Hezekiah 3:16-17")
        self.assertEqual(normalize_scripture_reference("Hezekiah 3:1, 4"), "Hezekiah 3:1,4")

    def test_fallback_chained_dashes(self):
        self.assertEqual(normalize_scripture_reference("Foo 1 - 2 - 3"), "Foo 1-2-3")

    def test_fallback_recovers_split_book_name(self):
        self.assertEqual(normalize_scripture_reference("Jo, hn 3:16"), "John 3:16")

    def test_plain_text_unchanged(self):
        self.assertEqual(normalize_scripture_reference("random text"), "random text")

    def test_empty_and_non_string(self):
        self.assertEqual(normalize_scripture_reference(""), "")
        self.assertIsNone(normalize_scripture_reference(None))

    def test_idempotent(self):
        """Normalizing twice gives the same result as normalizing once."""
        samples = [
            "John 3: 16 - 17",
            "  Matthew 26:6-13, 17-30 ",
            "1 cor 13:4 - 7",
            "Psalm 23",
            "Foo 1 - 2 - 3",
            "Jo, hn 3:16",
            "Hezekiah 3: 16,  17",
            "random text",
            "John 3 : 16",
            "Rev 22:20-21, 1",
        ]
        for sample in samples:
            once = normalize_scripture_reference(sample)
            self.assertEqual(normalize_scripture_reference(once), once, f"Not idempotent for {sample!r}")

    def test_detected_references_normalize(self):
        refs = detect_scripture_references("Matthew 26:6 - 13, 17-30. Hebrews 13:2, 1 Peter 4:9")
        self.assertEqual(
            [normalize_scripture_reference(r.reference) for r in refs],
            ["Matthew 26:6-13,17-30", "Hebrews 13:2", "1 Peter 4:9"],
        )


# ============================================================================
# DISPLAY / API FORMAT
# ============================================================================

class TestDisplayFormat(unittest.TestCase):

    def test_groups_get_divider(self):
        self.assertEqual(
            format_reference_for_display("Matthew 26:6-13,17-30"),
            "Matthew 26:6-13 | 17-30",
        )

    def test_three_groups(self):
        self.assertEqual(
            format_reference_for_display("Psalms 23:1,4,6"),
            "Psalms 23:1 | 4 | 6",
        )

    def test_single_group_unchanged(self):
        self.assertEqual(format_reference_for_display("John 3:16-17"), "John 3:16-17")

    def test_not_a_reference_unchanged(self):
        self.assertEqual(format_reference_for_display("no verses here, 5"), "no verses here, 5")

    def test_api_format(self):
        self.assertEqual(
            format_reference_for_api("Matthew 26:6-13 | 17-30"),
            "Matthew 26:6-13,17-30",
        )

    def test_api_format_without_divider_unchanged(self):
        self.assertEqual(format_reference_for_api("John 3:16"), "John 3:16")

    def test_round_trip(self):
        references = [
            "John 3:16",
            "1 Corinthians 13:4-7",
            "Matthew 26:6-13,17-30",
            "Psalms 23:1,4,6",
            "Song of Songs 2:4,8-10",
        ]
        for reference in references:
            self.assertEqual(
                format_reference_for_api(format_reference_for_display(reference)),
                reference,
            )

    def test_round_trip_of_normalized_input(self):
        for raw in ["Matthew 26:6 - 13, 17 - 30", "rom 8:28, 31-39", "John 3: 16"]:
            normalized = normalize_scripture_reference(raw)
            self.assertEqual(
                format_reference_for_api(format_reference_for_display(normalized)),
                normalized,
            )

    def test_book_name_for_api(self):
        self.assertEqual(format_book_name_for_api("  1 Corinthians "), "1 Corinthians")
        self.assertEqual(format_book_name_for_api("Song of Songs"), "Song of Songs")

    def test_copyright_exported(self):
        self.assertIn("NET Bible", NET_BIBLE_COPYRIGHT)


if __name__ == '__main__':
    unittest.main()
