"""
Scripture Model - Data structures for detected Bible references (Python Implementation)

This module defines the Python dataclasses that mirror the TypeScript scripture
types used by the note editor. Instances are produced by scripture_detector and
handed to the caller; the detector keeps no reference to them.

Design principles:
- Immutable results (frozen dataclasses)
- JSON-serializable for IPC with the host app (camelCase keys)
- A verse is either a single int or an overall (start, end) tuple
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Union, Tuple, Literal


# ============================================================================
# TYPE ALIASES
# ============================================================================

VerseSpan = Tuple[int, int]
Verse = Union[int, VerseSpan]  # 16 or (16, 17)
DetectionType = Optional[Literal['reference', 'text', 'both']]


# ============================================================================
# CONSTANTS
# ============================================================================

# Fixed confidence reported whenever at least one reference is detected
DETECTION_CONFIDENCE = 0.9
NO_DETECTION_CONFIDENCE = 0.0

# Detection types. 'text' and 'both' are reserved for verse-text detection,
# which is not implemented; the detector only ever reports 'reference' or None.
DETECTION_TYPE_REFERENCE = 'reference'
DETECTION_TYPE_TEXT = 'text'
DETECTION_TYPE_BOTH = 'both'

# NET Bible copyright attribution (displayed by the UI next to fetched verse text)
NET_BIBLE_COPYRIGHT = (
    'Scripture quotations are from the NET Bible® copyright ©1996, 2019 by '
    'Biblical Studies Press, L.L.C. http://netbible.com All rights reserved.'
)


def verse_to_json(verse: Verse) -> Union[int, List[int]]:
    """Convert a verse value to its JSON form (tuples become 2-element lists)."""
    if isinstance(verse, tuple):
        return [verse[0], verse[1]]
    return verse


# ============================================================================
# SCRIPTURE TYPES
# ============================================================================

@dataclass(frozen=True)
class VerseGroup:
    """One contiguous verse or verse range within a reference's verse list."""
    start: int
    end: int

    @property
    def is_single(self) -> bool:
        return self.start == self.end

    def to_spec(self) -> str:
        """Render as it appears in an API-format reference ("16" or "6-13")."""
        if self.is_single:
            return str(self.start)
        return f"{self.start}-{self.end}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start': self.start,
            'end': self.end,
        }


@dataclass(frozen=True)
class ScriptureReference:
    """A detected or parsed Bible reference."""
    book: str  # Canonical form, e.g., "Romans", "1 Corinthians"
    chapter: int
    verse: Verse
    reference: str  # Original matched text for detections, canonical form for parses

    @property
    def verse_start(self) -> int:
        if isinstance(self.verse, tuple):
            return self.verse[0]
        return self.verse

    @property
    def verse_end(self) -> int:
        if isinstance(self.verse, tuple):
            return self.verse[1]
        return self.verse

    def to_dict(self) -> Dict[str, Any]:
        return {
            'book': self.book,
            'chapter': self.chapter,
            'verse': verse_to_json(self.verse),
            'reference': self.reference,
        }


@dataclass(frozen=True)
class ParsedReference:
    """Components of a reference string, without the reference text itself."""
    book: str
    chapter: int
    verse: Verse

    def to_dict(self) -> Dict[str, Any]:
        return {
            'book': self.book,
            'chapter': self.chapter,
            'verse': verse_to_json(self.verse),
        }


@dataclass(frozen=True)
class ScriptureDetection:
    """Top-level result of running detection over a piece of note text."""
    is_scripture: bool
    type: DetectionType
    references: Tuple[ScriptureReference, ...] = field(default_factory=tuple)
    confidence: float = NO_DETECTION_CONFIDENCE
    detected_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'isScripture': self.is_scripture,
            'type': self.type,
            'references': [r.to_dict() for r in self.references],
            'confidence': self.confidence,
        }
        if self.detected_text is not None:
            result['detectedText'] = self.detected_text
        return result


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_empty_detection() -> ScriptureDetection:
    """Create the result reported when no reference was found."""
    return ScriptureDetection(
        is_scripture=False,
        type=None,
        references=(),
        confidence=NO_DETECTION_CONFIDENCE,
    )


def create_reference_detection(
    references: List[ScriptureReference],
    detected_text: str,
) -> ScriptureDetection:
    """Create a detection result from a list of found references.

    Falls back to the empty detection when the list is empty so that
    ``is_scripture`` always equals ``bool(references)``.
    """
    if not references:
        return create_empty_detection()
    return ScriptureDetection(
        is_scripture=True,
        type=DETECTION_TYPE_REFERENCE,
        references=tuple(references),
        confidence=DETECTION_CONFIDENCE,
        detected_text=detected_text,
    )
