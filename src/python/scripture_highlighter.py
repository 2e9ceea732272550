"""
Scripture Highlighter

Wraps scripture references inside note HTML with note-link spans so the
editor can open the scripture note a reference points to.
"""

import re
from typing import Iterable, List, Tuple

# ============================================================================
# CONFIGURATION
# ============================================================================

NOTE_LINK_CLASS = 'note-link'
NOTE_LINK_STYLE = 'background-color: rgba(255, 235, 59, 0.4); cursor: pointer;'

# How far either side of a match to look for an existing link to the same note
WRAP_CONTEXT_CHARS = 100

_OPEN_NOTE_LINK = re.compile(r'<span[^>]*class="note-link"[^>]*>', re.IGNORECASE)
_CLOSE_SPAN = re.compile(r'</span>', re.IGNORECASE)


def _reference_pattern(reference: str) -> 're.Pattern[str]':
    """Case-insensitive pattern for a reference, with flexible whitespace."""
    words = reference.split()
    return re.compile(r'\s+'.join(re.escape(word) for word in words), re.IGNORECASE)


def _inside_note_link(before: str) -> bool:
    opened = len(_OPEN_NOTE_LINK.findall(before))
    closed = len(_CLOSE_SPAN.findall(before))
    return opened > closed


def wrap_note_link(text: str, note_id: str) -> str:
    """Wrap text in a note-link span pointing at note_id."""
    return (
        f'<span class="{NOTE_LINK_CLASS}" data-note-id="{note_id}" '
        f'style="{NOTE_LINK_STYLE}">{text}</span>'
    )


def highlight_scripture_references(content: str, references: Iterable[Tuple[str, str]]) -> str:
    """
    Highlight scripture references in HTML content.

    Every occurrence of each reference is wrapped with a note-link span
    unless it already sits inside a note-link span, or a link to the same
    note is within WRAP_CONTEXT_CHARS characters of it.

    Args:
        content: HTML content of a note
        references: (reference, note_id) pairs

    Returns:
        Updated HTML content
    """
    references = list(references)
    if not content or not references:
        return content

    updated = content
    for reference, note_id in references:
        if not reference or not reference.strip():
            continue
        pattern = _reference_pattern(reference)
        matches: List[Tuple[int, int]] = [(m.start(), m.end()) for m in pattern.finditer(updated)]

        # Work backwards so earlier offsets stay valid
        for start, end in reversed(matches):
            before = updated[:start]
            if _inside_note_link(before):
                continue

            context = updated[max(0, start - WRAP_CONTEXT_CHARS):end + WRAP_CONTEXT_CHARS]
            if f'data-note-id="{note_id}"' in context:
                continue

            updated = before + wrap_note_link(updated[start:end], note_id) + updated[end:]

    return updated
