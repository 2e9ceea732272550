"""
Bible Book Catalog

Static table of the 66 books of the Protestant canon together with the
abbreviations and alternate names accepted in note text, plus the text
normalization used to compare a typed book phrase against the table.

The catalog is built once at import time and never mutated, so it can be
shared freely between threads.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Dict, Optional, Tuple


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class BookEntry:
    """One book of the canon with its accepted alternate names."""
    name: str  # Canonical spelling, e.g. "1 Corinthians"
    synonyms: Tuple[str, ...]
    chapters: int
    ordinal: int  # 1-based position in canon order

    @property
    def variations(self) -> Tuple[str, ...]:
        return (self.name,) + self.synonyms


def _book(ordinal: int, name: str, chapters: int, *synonyms: str) -> BookEntry:
    return BookEntry(name=name, synonyms=tuple(synonyms), chapters=chapters, ordinal=ordinal)


# ============================================================================
# BIBLE BOOK DATA
# ============================================================================

BIBLE_BOOKS: Tuple[BookEntry, ...] = (
    # Old Testament
    _book(1, 'Genesis', 50, 'gen', 'first book'),
    _book(2, 'Exodus', 40, 'exo', 'second book'),
    _book(3, 'Leviticus', 27, 'lev', 'third book'),
    _book(4, 'Numbers', 36, 'num', 'fourth book'),
    _book(5, 'Deuteronomy', 34, 'deut', 'fifth book'),
    _book(6, 'Joshua', 24, 'josh'),
    _book(7, 'Judges', 21, 'judg'),
    _book(8, 'Ruth', 4),
    _book(9, '1 Samuel', 31, '1 sam', 'first samuel'),
    _book(10, '2 Samuel', 24, '2 sam', 'second samuel'),
    _book(11, '1 Kings', 22, '1 kgs', 'first kings'),
    _book(12, '2 Kings', 25, '2 kgs', 'second kings'),
    _book(13, '1 Chronicles', 29, '1 chron', 'first chronicles'),
    _book(14, '2 Chronicles', 36, '2 chron', 'second chronicles'),
    _book(15, 'Ezra', 10),
    _book(16, 'Nehemiah', 13, 'neh'),
    _book(17, 'Esther', 10, 'esth'),
    _book(18, 'Job', 42),
    _book(19, 'Psalms', 150, 'psalm', 'ps'),
    _book(20, 'Proverbs', 31, 'prov', 'proverb'),
    _book(21, 'Ecclesiastes', 12, 'eccl', 'ecc'),
    _book(22, 'Song of Songs', 8, 'song of solomon', 'sos'),
    _book(23, 'Isaiah', 66, 'isa'),
    _book(24, 'Jeremiah', 52, 'jer'),
    _book(25, 'Lamentations', 5, 'lam'),
    _book(26, 'Ezekiel', 48, 'ezek'),
    _book(27, 'Daniel', 12, 'dan'),
    _book(28, 'Hosea', 14, 'hos'),
    _book(29, 'Joel', 3),
    _book(30, 'Amos', 9),
    _book(31, 'Obadiah', 1, 'obad'),
    _book(32, 'Jonah', 4),
    _book(33, 'Micah', 7, 'mic'),
    _book(34, 'Nahum', 3, 'nah'),
    _book(35, 'Habakkuk', 3, 'hab'),
    _book(36, 'Zephaniah', 3, 'zeph'),
    _book(37, 'Haggai', 2, 'hag'),
    _book(38, 'Zechariah', 14, 'zech'),
    _book(39, 'Malachi', 4, 'mal'),
    # New Testament
    _book(40, 'Matthew', 28, 'matt', 'mt'),
    _book(41, 'Mark', 16, 'mk', 'mr'),
    _book(42, 'Luke', 24, 'lk'),
    _book(43, 'John', 21, 'jn'),
    _book(44, 'Acts', 28, 'acts of the apostles'),
    _book(45, 'Romans', 16, 'rom'),
    _book(46, '1 Corinthians', 16, '1 cor', 'first corinthians'),
    _book(47, '2 Corinthians', 13, '2 cor', 'second corinthians'),
    _book(48, 'Galatians', 6, 'gal'),
    _book(49, 'Ephesians', 6, 'eph'),
    _book(50, 'Philippians', 4, 'phil'),
    _book(51, 'Colossians', 4, 'col'),
    _book(52, '1 Thessalonians', 5, '1 thess', 'first thessalonians'),
    _book(53, '2 Thessalonians', 3, '2 thess', 'second thessalonians'),
    _book(54, '1 Timothy', 6, '1 tim', 'first timothy'),
    _book(55, '2 Timothy', 4, '2 tim', 'second timothy'),
    _book(56, 'Titus', 3),
    _book(57, 'Philemon', 1, 'phlm'),
    _book(58, 'Hebrews', 13, 'heb'),
    _book(59, 'James', 5, 'jas'),
    _book(60, '1 Peter', 5, '1 pet', 'first peter'),
    _book(61, '2 Peter', 3, '2 pet', 'second peter'),
    _book(62, '1 John', 5, '1 jn', 'first john'),
    _book(63, '2 John', 1, '2 jn', 'second john'),
    _book(64, '3 John', 1, '3 jn', 'third john'),
    _book(65, 'Jude', 1),
    _book(66, 'Revelation', 22, 'rev', 'apocalypse'),
)

# Book name to canon ordinal (standard Protestant Bible order)
BOOK_ID_MAP: Dict[str, int] = {book.name: book.ordinal for book in BIBLE_BOOKS}

BOOK_CHAPTER_COUNTS: Dict[str, int] = {book.name: book.chapters for book in BIBLE_BOOKS}

SINGLE_CHAPTER_BOOKS = frozenset(book.name for book in BIBLE_BOOKS if book.chapters == 1)

_BOOKS_BY_NAME: Dict[str, BookEntry] = {book.name: book for book in BIBLE_BOOKS}


def list_canonical_books() -> List[str]:
    """Return the canonical names of all 66 books in canon order."""
    return [book.name for book in BIBLE_BOOKS]


def list_all_name_variations() -> List[str]:
    """Return every canonical name and synonym (duplicates allowed)."""
    variations: List[str] = []
    for book in BIBLE_BOOKS:
        variations.extend(book.variations)
    return variations


# ============================================================================
# TEXT NORMALIZATION
# ============================================================================

# Punctuation ignored when comparing book names. Dashes are included, so this
# must never be applied to a verse specification.
_NAME_PUNCTUATION = re.compile(r"[.,;:!?'\"()\-–—]")
_WHITESPACE = re.compile(r'\s+')


def normalize_text(text: str) -> str:
    """
    Normalize text for book-name comparison.

    Lowercases, strips punctuation (including dashes), collapses whitespace
    and trims. Idempotent.

    Args:
        text: Arbitrary text, typically a captured book phrase

    Returns:
        Normalized text (possibly empty)
    """
    normalized = _NAME_PUNCTUATION.sub('', text.lower())
    return _WHITESPACE.sub(' ', normalized).strip()


# ============================================================================
# BOOK NAME RESOLUTION
# ============================================================================

@lru_cache(maxsize=1)
def _normalized_variations() -> Tuple[Tuple[str, str], ...]:
    """(normalized variation, canonical name) pairs in catalog order."""
    return tuple(
        (normalize_text(variation), book.name)
        for book in BIBLE_BOOKS
        for variation in book.variations
    )


@lru_cache(maxsize=1)
def _exact_lookup() -> Dict[str, str]:
    lookup: Dict[str, str] = {}
    for normalized, canonical in _normalized_variations():
        lookup.setdefault(normalized, canonical)
    return lookup


def resolve_book_name(phrase: str) -> Optional[str]:
    """
    Resolve a typed book phrase to its canonical book name.

    A phrase matches a name variation when, after normalization, the two are
    equal or one is a prefix of the other. Exact matches win over prefix
    matches; among prefix matches the first in canon order wins.

    Args:
        phrase: Book phrase as typed ("Rom", "1 cor.", "Song of Solomon")

    Returns:
        Canonical book name or None if not recognized
    """
    normalized = normalize_text(phrase)
    if not normalized:
        return None

    exact = _exact_lookup().get(normalized)
    if exact:
        return exact

    for variation, canonical in _normalized_variations():
        if normalized.startswith(variation) or variation.startswith(normalized):
            return canonical
    return None


def get_book(name: str) -> Optional[BookEntry]:
    """Look up a catalog entry by canonical name, synonym or abbreviation."""
    canonical = resolve_book_name(name)
    if canonical is None:
        return None
    return _BOOKS_BY_NAME[canonical]


def is_valid_chapter(book: str, chapter: int) -> bool:
    """Check whether a chapter number exists in the given book."""
    entry = get_book(book)
    if entry is None:
        return False
    return 1 <= chapter <= entry.chapters
