#!/usr/bin/env python3
"""
Scripture Engine Python Bridge

This module provides a JSON-based subprocess interface for the note app to:
1. Detect scripture references in note titles and content
2. Normalize references for storage and verse lookup
3. Convert references between API and display formats
4. Highlight references inside note HTML

Protocol: Reads one JSON command from stdin, writes one JSON response line to
stdout ({"type": "result", ...} or {"type": "error", "error": ...}).
Diagnostics go to stderr so stdout stays valid JSON.
"""

import sys
import json
import traceback
from typing import Dict, Any, Callable, Optional

from bible_books import BIBLE_BOOKS
from scripture_model import NET_BIBLE_COPYRIGHT
from scripture_detector import (
    build_detection_payload,
    build_group_passages,
    format_reference_for_api,
    format_reference_for_display,
    normalize_scripture_reference,
    parse_scripture_reference,
    parse_verse_groups,
)
from scripture_highlighter import highlight_scripture_references


# ============================================================================
# OUTPUT
# ============================================================================

def emit_error(error: str):
    """Emit an error to stdout as JSON."""
    result = {
        "type": "error",
        "error": error,
    }
    print(json.dumps(result), flush=True)


def emit_result(data: Dict[str, Any]):
    """Emit the final result to stdout as JSON."""
    result = {
        "type": "result",
        **data
    }
    print(json.dumps(result), flush=True)


# ============================================================================
# COMMAND HANDLERS
# ============================================================================

def _require_string(command: Dict[str, Any], key: str) -> Optional[str]:
    value = command.get(key)
    if not isinstance(value, str) or not value:
        return None
    return value


def handle_detect(command: Dict[str, Any]) -> Dict[str, Any]:
    text = _require_string(command, 'text')
    if text is None:
        return {'error': 'text is required'}
    return build_detection_payload(text)


def handle_normalize(command: Dict[str, Any]) -> Dict[str, Any]:
    reference = _require_string(command, 'reference')
    if reference is None:
        return {'error': 'reference is required'}
    return {'reference': normalize_scripture_reference(reference)}


def handle_format_display(command: Dict[str, Any]) -> Dict[str, Any]:
    reference = _require_string(command, 'reference')
    if reference is None:
        return {'error': 'reference is required'}
    return {'reference': format_reference_for_display(reference)}


def handle_format_api(command: Dict[str, Any]) -> Dict[str, Any]:
    reference = _require_string(command, 'reference')
    if reference is None:
        return {'error': 'reference is required'}
    return {'reference': format_reference_for_api(reference)}


def handle_parse(command: Dict[str, Any]) -> Dict[str, Any]:
    reference = _require_string(command, 'reference')
    if reference is None:
        return {'error': 'reference is required'}
    parsed = parse_scripture_reference(reference)
    if parsed is None:
        return {'error': 'Invalid scripture reference format'}
    return parsed.to_dict()


def handle_verse_groups(command: Dict[str, Any]) -> Dict[str, Any]:
    reference = _require_string(command, 'reference')
    if reference is None:
        return {'error': 'reference is required'}
    return {
        'verseGroups': [group.to_dict() for group in parse_verse_groups(reference)],
        'passages': build_group_passages(reference),
    }


def handle_highlight(command: Dict[str, Any]) -> Dict[str, Any]:
    content = command.get('content')
    if not isinstance(content, str):
        return {'error': 'content is required'}

    references = []
    for item in command.get('references') or []:
        if not isinstance(item, dict):
            print(f"Warning: skipping malformed reference entry: {item!r}", file=sys.stderr)
            continue
        reference, note_id = item.get('reference'), item.get('noteId')
        if not isinstance(reference, str) or not isinstance(note_id, str):
            print(f"Warning: skipping malformed reference entry: {item!r}", file=sys.stderr)
            continue
        references.append((reference, note_id))

    return {'content': highlight_scripture_references(content, references)}


def handle_get_books(command: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'books': [
            {
                'name': book.name,
                'synonyms': list(book.synonyms),
                'chapters': book.chapters,
                'ordinal': book.ordinal,
            }
            for book in BIBLE_BOOKS
        ],
        'copyright': NET_BIBLE_COPYRIGHT,
    }


COMMANDS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    'detect': handle_detect,
    'normalize': handle_normalize,
    'format_display': handle_format_display,
    'format_api': handle_format_api,
    'parse': handle_parse,
    'verse_groups': handle_verse_groups,
    'highlight': handle_highlight,
    'get_books': handle_get_books,
}


def handle_command(command: Dict[str, Any]) -> Dict[str, Any]:
    """
    Handle a command from the note app.

    Commands:
        - detect: Detect references in text ({"text": ...})
        - normalize: Canonical storage form ({"reference": ...})
        - format_display / format_api: Convert between formats ({"reference": ...})
        - parse: Book, chapter and verse of a reference ({"reference": ...})
        - verse_groups: Verse groups and per-group passages ({"reference": ...})
        - highlight: Wrap references in note HTML ({"content": ..., "references": [...]})
        - get_books: The book catalog and NET Bible attribution
    """
    cmd = command.get('command', '')
    handler = COMMANDS.get(cmd)
    if handler is None:
        return {'error': f'Unknown command: {cmd}'}
    return handler(command)


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def main():
    """
    Main entry point for subprocess mode.
    Reads a JSON command from stdin and writes the JSON response to stdout.
    """
    try:
        input_data = sys.stdin.read()
        if not input_data.strip():
            emit_error("No input provided")
            return

        command = json.loads(input_data)
    except json.JSONDecodeError as e:
        emit_error(f"Invalid JSON input: {e}")
        return

    if not isinstance(command, dict):
        emit_error("Command must be a JSON object")
        return

    try:
        result = handle_command(command)
        emit_result(result)
    except Exception as e:
        emit_error(f"Error processing command: {e}\n{traceback.format_exc()}")


if __name__ == "__main__":
    # Ensure proper stdout encoding for JSON output
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore[union-attr]
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore[union-attr]
    main()
