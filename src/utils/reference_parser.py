# utils/reference_parser.py

"""
Tokenizer for cross-record references.

A reference has the form ``$.<key>.<source>.<path>`` where ``key`` is a
word (letters, digits, underscore), ``source`` is one of ``params``,
``body`` or ``header`` and ``path`` is a dot separated list of words.
Text that does not complete this grammar is literal.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

REFERENCE_PREFIX = "$."
REFERENCE_SOURCES = ("params", "body", "header")


@dataclass(frozen=True)
class Reference:
    """One parsed reference together with its position in the source text."""

    text: str
    start: int
    end: int
    key: str
    source: str
    path: Tuple[str, ...]

    def spans(self, expression: str) -> bool:
        """True when the reference is the whole expression."""
        return self.start == 0 and self.end == len(expression)


def _is_word_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


def _scan_word(text: str, pos: int) -> int:
    while pos < len(text) and _is_word_char(text[pos]):
        pos += 1
    return pos


def _parse_at(text: str, start: int) -> Optional[Reference]:
    pos = start + len(REFERENCE_PREFIX)

    key_end = _scan_word(text, pos)
    if key_end == pos or not text.startswith(".", key_end):
        return None
    key = text[pos:key_end]
    pos = key_end + 1

    for source in REFERENCE_SOURCES:
        if text.startswith(f"{source}.", pos):
            break
    else:
        return None
    pos += len(source) + 1

    path_end = pos
    while path_end < len(text) and (
        _is_word_char(text[path_end]) or text[path_end] == "."
    ):
        path_end += 1
    # a trailing dot belongs to the surrounding text, not to the path
    while path_end > pos and text[path_end - 1] == ".":
        path_end -= 1
    if path_end == pos:
        return None

    return Reference(
        text=text[start:path_end],
        start=start,
        end=path_end,
        key=key,
        source=source,
        path=tuple(text[pos:path_end].split(".")),
    )


def find_references(text: str) -> List[Reference]:
    """All references in ``text``, left to right, non-overlapping."""
    references: List[Reference] = []
    pos = 0
    while True:
        start = text.find(REFERENCE_PREFIX, pos)
        if start < 0:
            return references
        reference = _parse_at(text, start)
        if reference is None:
            pos = start + 1
            continue
        references.append(reference)
        pos = reference.end
