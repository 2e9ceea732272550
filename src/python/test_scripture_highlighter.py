#!/usr/bin/env python3
"""
Tests for wrapping scripture references in note-link spans.
"""

import sys
import os
import unittest

# Ensure src/python is on the path
sys.path.insert(0, os.path.dirname(__file__))

from scripture_highlighter import highlight_scripture_references, wrap_note_link


class TestHighlightScriptureReferences(unittest.TestCase):

    def test_wraps_reference(self):
        content = "<p>Read John 3:16 today</p>"
        result = highlight_scripture_references(content, [("John 3:16", "note_1")])
        self.assertEqual(result, f"<p>Read {wrap_note_link('John 3:16', 'note_1')} today</p>")
        self.assertIn('class="note-link"', result)
        self.assertIn('data-note-id="note_1"', result)

    def test_case_and_whitespace_flexible(self):
        content = "<p>see john   3:16</p>"
        result = highlight_scripture_references(content, [("John 3:16", "note_1")])
        self.assertIn(wrap_note_link("john   3:16", "note_1"), result)

    def test_does_not_double_wrap(self):
        content = "<p>Read John 3:16 today</p>"
        once = highlight_scripture_references(content, [("John 3:16", "note_1")])
        twice = highlight_scripture_references(once, [("John 3:16", "note_1")])
        self.assertEqual(once, twice)

    def test_skips_match_inside_other_note_link(self):
        content = '<p><span class="note-link" data-note-id="note_9">Romans 8:28</span></p>'
        result = highlight_scripture_references(content, [("Romans 8:28", "note_2")])
        self.assertEqual(result, content)

    def test_multiple_references(self):
        content = "<p>Rom 8:28 and, much later in the note, " + "x" * 150 + " Psalm 23:1</p>"
        result = highlight_scripture_references(
            content, [("Rom 8:28", "note_a"), ("Psalm 23:1", "note_b")]
        )
        self.assertIn(wrap_note_link("Rom 8:28", "note_a"), result)
        self.assertIn(wrap_note_link("Psalm 23:1", "note_b"), result)

    def test_regex_characters_in_reference_are_literal(self):
        content = "<p>John 3.16 and John 3:16</p>"
        result = highlight_scripture_references(content, [("John 3.16", "note_1")])
        self.assertIn(wrap_note_link("John 3.16", "note_1"), result)
        self.assertNotIn(wrap_note_link("John 3:16", "note_1"), result)

    def test_empty_inputs(self):
        self.assertEqual(highlight_scripture_references("", [("John 3:16", "n")]), "")
        self.assertEqual(highlight_scripture_references("<p>John 3:16</p>", []), "<p>John 3:16</p>")
        self.assertEqual(highlight_scripture_references("<p>John 3:16</p>", [("  ", "n")]), "<p>John 3:16</p>")


if __name__ == '__main__':
    unittest.main()
