#!/usr/bin/env python3
"""
Scripture Reference Detector for Note Text

This module processes free-form note text (titles, HTML note bodies) to:
1. Detect embedded Bible references ("John 3:16", "Matthew 26:6-13, 17-30")
2. Resolve abbreviated book names against the book catalog ("Rom" → "Romans")
3. Correct over-greedy matches whose last verse number is really the start of
   the next numbered book ("Hebrews 13:2, 1 Peter 4:9")
4. Normalize references for storage and for the verse-fetch API
5. Convert between API format ("6-13,17-30") and display format ("6-13 | 17-30")

Nothing in here raises on string input. Text that cannot be parsed simply
produces no references, or falls back to best-effort formatting.
"""

import re
from dataclasses import replace
from functools import lru_cache
from typing import List, Dict, Any, Optional, Tuple

from bible_books import list_all_name_variations, resolve_book_name
from scripture_model import (
    NET_BIBLE_COPYRIGHT,
    ParsedReference,
    ScriptureDetection,
    ScriptureReference,
    VerseGroup,
    create_empty_detection,
    create_reference_detection,
)

# ============================================================================
# CONFIGURATION
# ============================================================================

# Separator shown between non-contiguous verse groups in the UI
DISPLAY_GROUP_SEPARATOR = ' | '

# Separator between verse groups in storage / API format
API_GROUP_SEPARATOR = ','

# Verse specification: "16", "16-17", "6-13, 17-30" (spaces allowed around dashes)
VERSE_GROUP_PATTERN = r'\d+(?:\s*-\s*\d+)?'
VERSE_SPEC_PATTERN = rf'{VERSE_GROUP_PATTERN}(?:,\s*{VERSE_GROUP_PATTERN})*'

# HTML tags are removed with a plain pattern, not an HTML parser
HTML_TAG_PATTERN = re.compile(r'<[^>]*>')

_WHITESPACE = re.compile(r'\s+')
_NEXT_WORD = re.compile(r'\s+(\w+)')
_BARE_NUMBER = re.compile(r'\d+')
_GROUP = re.compile(r'(\d+)\s*(?:-\s*(\d+))?')

# Full reference: "Book 3:16", "Book 3: 16 - 17", "Book 26:6-13, 17-30"
_FULL_REFERENCE = re.compile(
    r'^(.+?)\s+(\d+):\s*'
    r'(\d+(?:\s*-\s*\d+)?(?:\s*,\s*\d+(?:\s*-\s*\d+)?)*)$'
)
# Chapter only: "Book 3" (treated as chapter 3, verse 1)
_CHAPTER_ONLY = re.compile(r'^([^:]+?)\s+(\d+)$')

# Everything up to and including "<chapter>:" in a reference
_REFERENCE_PREFIX = re.compile(r'^(.+?\s+\d+:)(.+)$')
_VERSE_PART = re.compile(r':\s*([^:]+)$')


# ============================================================================
# REFERENCE PATTERN
# ============================================================================

def _name_to_pattern(name: str) -> str:
    """Escape a book name, letting any whitespace separate its words."""
    return r'\s+'.join(re.escape(word) for word in name.split())


@lru_cache(maxsize=1)
def get_reference_pattern() -> 're.Pattern[str]':
    """
    Build the compiled reference scanner (once).

    The book alternation covers canonical names and all synonyms, longest
    first so "1 John" is tried before "John" and "Song of Solomon" before
    "Song". Groups: 1 = book phrase, 2 = chapter, 3 = verse specification.
    """
    names = sorted(set(name.lower() for name in list_all_name_variations()), key=len, reverse=True)
    book_alternation = '|'.join(_name_to_pattern(name) for name in names)
    return re.compile(
        rf'\b({book_alternation})\s+(\d+):({VERSE_SPEC_PATTERN})(?!\d)',
        re.IGNORECASE,
    )


# ============================================================================
# VERSE-SPEC PARSING
# ============================================================================

def _parse_group(group: str) -> Optional[Tuple[int, int, bool]]:
    """Parse "16" or "6 - 13" into (start, end, is_range)."""
    match = _GROUP.fullmatch(group.strip())
    if not match:
        return None
    try:
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) is not None else start
    except ValueError:
        return None
    return start, end, match.group(2) is not None


def parse_verse_spec(book: str, chapter_raw: str, verse_spec: str) -> Optional[ScriptureReference]:
    """
    Expand a verse specification into a ScriptureReference.

    Rules, in priority order:
    - Comma present: every group contributes its verses; verse = (min, max)
    - Single dash: verse = (start, end)
    - Otherwise: verse = N

    The reference string is rebuilt in canonical form ("6-13,17-30").
    """
    try:
        chapter = int(chapter_raw)
    except ValueError:
        return None

    verse_spec = verse_spec.strip()

    if ',' in verse_spec:
        rendered: List[str] = []
        low: Optional[int] = None
        high: Optional[int] = None
        for group in verse_spec.split(','):
            parsed = _parse_group(group)
            if parsed is None:
                return None
            start, end, is_range = parsed
            rendered.append(f"{start}-{end}" if is_range else str(start))
            # A reversed range ("13-6") covers no verses
            if start > end:
                continue
            low = start if low is None else min(low, start)
            high = end if high is None else max(high, end)
        if low is None or high is None:
            return None
        return ScriptureReference(
            book=book,
            chapter=chapter,
            verse=(low, high),
            reference=f"{book} {chapter}:{API_GROUP_SEPARATOR.join(rendered)}",
        )

    parsed = _parse_group(verse_spec)
    if parsed is None:
        return None
    start, end, is_range = parsed
    if is_range:
        return ScriptureReference(
            book=book,
            chapter=chapter,
            verse=(start, end),
            reference=f"{book} {chapter}:{start}-{end}",
        )
    return ScriptureReference(
        book=book,
        chapter=chapter,
        verse=start,
        reference=f"{book} {chapter}:{start}",
    )


def parse_reference(text: str) -> Optional[ScriptureReference]:
    """
    Parse a single reference string into a ScriptureReference.

    Accepts "Book C:V", "Book C:V-W", "Book C:V-W, X-Y" (whitespace tolerated
    after the colon, after commas and around dashes) and chapter-only
    "Book C", which is treated as verse 1. The book may be any catalog name or
    synonym and is replaced by its canonical form.

    Args:
        text: Reference string

    Returns:
        ScriptureReference with a canonical reference string, or None
    """
    if not isinstance(text, str):
        return None
    candidate = text.strip()

    match = _FULL_REFERENCE.match(candidate)
    if match:
        book = resolve_book_name(match.group(1))
        if book is None:
            return None
        return parse_verse_spec(book, match.group(2), match.group(3))

    match = _CHAPTER_ONLY.match(candidate)
    if match:
        book = resolve_book_name(match.group(1))
        if book is None:
            return None
        try:
            chapter = int(match.group(2))
        except ValueError:
            return None
        return ScriptureReference(
            book=book,
            chapter=chapter,
            verse=1,
            reference=f"{book} {chapter}:1",
        )

    return None


def parse_scripture_reference(reference: str) -> Optional[ParsedReference]:
    """Parse a reference string into its book, chapter and verse components."""
    parsed = parse_reference(reference)
    if parsed is None:
        return None
    return ParsedReference(book=parsed.book, chapter=parsed.chapter, verse=parsed.verse)


def parse_verse_groups(reference: str) -> List[VerseGroup]:
    """
    Split the verse part of a reference into its verse groups.

    Works on API format ("Matthew 26:6-13,17-30") and display format
    ("Matthew 26:6-13 | 17-30"). Groups keep the order they were written in;
    malformed groups are skipped.
    """
    if not isinstance(reference, str):
        return []
    match = _VERSE_PART.search(reference)
    if not match:
        return []

    verse_part = format_reference_for_api(match.group(1).strip())
    groups: List[VerseGroup] = []
    for group in verse_part.split(API_GROUP_SEPARATOR):
        parsed = _parse_group(group)
        if parsed is None:
            continue
        start, end, _ = parsed
        groups.append(VerseGroup(start=start, end=end))
    return groups


def build_group_passages(reference: str) -> List[str]:
    """
    Build one passage string per verse group.

    Verse-fetch clients whose API drops verses from comma-separated lists
    request each group separately: "Matthew 26:6-13,17-30" gives
    ["Matthew 26:6-13", "Matthew 26:17-30"]. References with a single group
    are returned unchanged; unparseable references give an empty list.
    """
    if not isinstance(reference, str):
        return []
    clean = re.sub(r',\s+', ',', format_reference_for_api(reference.strip()))
    parsed = parse_scripture_reference(clean)
    if parsed is None:
        return []

    groups = parse_verse_groups(clean)
    if len(groups) <= 1:
        return [reference.strip()]
    return [f"{parsed.book} {parsed.chapter}:{group.to_spec()}" for group in groups]


# ============================================================================
# BOUNDARY DISAMBIGUATION
# ============================================================================

def trim_trailing_book_number(text: str, match: 're.Match[str]', verbose: bool = False) -> int:
    """
    Find where a raw reference match really ends.

    The verse-spec pattern is greedy, so in "Hebrews 13:2, 1 Peter 4:9" it
    swallows ", 1". When the text after the last comma is a bare number and
    "<number> <next word>" names a book, the number belongs to the next
    reference and the match is cut just before the comma.

    Only this one shape is handled; other ambiguous overlaps are left alone.

    Args:
        text: The full text being scanned
        match: Raw match from the reference pattern
        verbose: Print a note when a match is trimmed

    Returns:
        End offset of the reference in text (match.end() when untouched)
    """
    verse_spec = match.group(3)
    last_comma = verse_spec.rfind(',')
    if last_comma < 0:
        return match.end()

    trailing = verse_spec[last_comma + 1:].strip()
    if not _BARE_NUMBER.fullmatch(trailing):
        return match.end()

    following = _NEXT_WORD.match(text, match.end())
    if not following:
        return match.end()

    hypothesis = f"{trailing} {following.group(1)}"
    if resolve_book_name(hypothesis) is None:
        return match.end()

    new_end = match.start(3) + last_comma
    if verbose:
        print(f"      ℹ '{hypothesis}' is a book name, trimmed to '{text[match.start():new_end]}'")
    return new_end


# ============================================================================
# REFERENCE DETECTION
# ============================================================================

def detect_scripture_references(text: str, verbose: bool = False) -> List[ScriptureReference]:
    """
    Detect all Bible references in plain text.

    The scan cursor is an explicit offset. After each match it moves to the
    (possibly trimmed) end of the reference, so a number given back by the
    boundary check is scanned again as the start of the next book name.

    Args:
        text: Plain text (HTML already removed)
        verbose: Print diagnostics for trimmed and dropped candidates

    Returns:
        References in document order, each keeping the text as it was typed;
        byte-identical duplicates are dropped (first occurrence wins)
    """
    if not isinstance(text, str) or not text:
        return []

    pattern = get_reference_pattern()
    references: List[ScriptureReference] = []
    seen = set()
    pos = 0

    while pos < len(text):
        match = pattern.search(text, pos)
        if not match:
            break

        end = trim_trailing_book_number(text, match, verbose=verbose)
        original = text[match.start():end]
        pos = end

        extracted = parse_reference(original)
        if extracted is None:
            if verbose:
                print(f"  ⚠ Could not parse reference: {original}")
            continue

        if original in seen:
            continue
        seen.add(original)
        # Keep the user's formatting in the detected reference
        references.append(replace(extracted, reference=original))

    return references


def strip_html(text: str) -> str:
    """Remove HTML tags and collapse whitespace."""
    return _WHITESPACE.sub(' ', HTML_TAG_PATTERN.sub(' ', text)).strip()


def detect_scripture(text: str, verbose: bool = False) -> ScriptureDetection:
    """
    Detect scripture in a note's title or content.

    Args:
        text: Raw note text, possibly HTML
        verbose: Print the references found

    Returns:
        ScriptureDetection; is_scripture is True exactly when references
        were found
    """
    if not isinstance(text, str) or not text.strip():
        return create_empty_detection()

    plain_text = strip_html(text)

    # Step 1: References
    references = detect_scripture_references(plain_text, verbose=verbose)

    if verbose:
        print(f"   Found {len(references)} scripture references:")
        for ref in references:
            print(f"      • {ref.reference} → {normalize_scripture_reference(ref.reference)}")

    # Step 2: Verse text detection ('text' / 'both' types) is not implemented
    return create_reference_detection(references, plain_text)


def get_primary_reference(detection: ScriptureDetection) -> Optional[str]:
    """Return the first detected reference string, or None."""
    if detection.references:
        return detection.references[0].reference
    return None


def build_detection_payload(text: str) -> Dict[str, Any]:
    """
    Run detection and shape the result for the host app.

    The payload is the detection itself plus the primary reference and its
    parsed components, ready for a verse fetch.
    """
    detection = detect_scripture(text)
    primary_reference = get_primary_reference(detection)

    parsed_reference = None
    if primary_reference:
        parsed = parse_scripture_reference(primary_reference)
        if parsed is not None:
            parsed_reference = parsed.to_dict()

    return {
        **detection.to_dict(),
        'primaryReference': primary_reference,
        'parsedReference': parsed_reference,
    }


# ============================================================================
# FORMATTING
# ============================================================================

def format_book_name_for_api(book_name: str) -> str:
    """The verse API accepts canonical book names as-is."""
    return book_name.strip()


def format_reference_for_display(reference: str) -> str:
    """
    Show verse groups with a divider.

    "Matthew 26:6-13,17-30" → "Matthew 26:6-13 | 17-30"
    """
    match = _REFERENCE_PREFIX.match(reference)
    if not match:
        return reference

    prefix, verse_groups = match.group(1), match.group(2)
    return prefix + re.sub(r',(?=\s*\d)', DISPLAY_GROUP_SEPARATOR, verse_groups)


def format_reference_for_api(reference: str) -> str:
    """
    Convert display format back to API format.

    "Matthew 26:6-13 | 17-30" → "Matthew 26:6-13,17-30"
    """
    return re.sub(r'\s+\|\s+', API_GROUP_SEPARATOR, reference)


def normalize_scripture_reference(reference: str) -> str:
    """
    Normalize a reference for storage and comparison.

    Parses and rebuilds the reference when possible (canonical book name,
    compact spacing). Otherwise only the spacing is cleaned up:
    "John 3: 16" → "John 3:16", "John 3:16 - 17" → "John 3:16-17",
    "Matthew 26:6-13, 17-30" → "Matthew 26:6-13,17-30".

    Idempotent. Empty and non-string input is returned unchanged.
    """
    if not reference or not isinstance(reference, str):
        return reference

    parsed = parse_reference(reference.strip())
    if parsed is not None:
        return parsed.reference

    normalized = re.sub(r':\s+', ':', reference)
    normalized = re.sub(r',\s+', ',', normalized)
    normalized = re.sub(r'(?<=\d)\s*-\s*(?=\d)', '-', normalized)
    normalized = normalized.strip()

    # Cleanup can join a split book name ("Jo, hn 3:16")
    parsed = parse_reference(normalized)
    if parsed is not None:
        return parsed.reference
    return normalized


__all__ = [
    'NET_BIBLE_COPYRIGHT',
    'DISPLAY_GROUP_SEPARATOR',
    'build_detection_payload',
    'build_group_passages',
    'detect_scripture',
    'detect_scripture_references',
    'format_book_name_for_api',
    'format_reference_for_api',
    'format_reference_for_display',
    'get_primary_reference',
    'get_reference_pattern',
    'normalize_scripture_reference',
    'parse_reference',
    'parse_scripture_reference',
    'parse_verse_spec',
    'parse_verse_groups',
    'strip_html',
    'trim_trailing_book_number',
]
