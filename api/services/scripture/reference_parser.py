# api/services/scripture/reference_parser.py
"""
Citation parser.

Follows the Chicago Manual of Style citation layout
(https://en.wikipedia.org/wiki/Bible_citation):

- Citations are ';'-separated. A citation without a book name uses the book
  of the citation before it. Book names may be long or abbreviated.
- Within a citation the chapter is left of the ':'. A citation without ':'
  lists whole chapters.
- Right of the ':' is a ','-separated list of verses within that chapter.
- Ranges are written with a dash; en-dash, hyphen and em-dash are accepted.

Examples:
    "Alma 3:16"                    one verse
    "Alma 3:16–17, 20"             two verse clauses in chapter 3
    "John 1–3"                     three whole chapters
    "Alma 32:31; Mosiah 1:1; 3:2"  last clause inherits Mosiah
"""

import logging
import re
from enum import Enum
from typing import List, Optional, Tuple

from .books import Work, find_book
from .ranges import (
    CHAPTER_VERSE_DELIM,
    CITATION_DELIM,
    RANGE_DELIMS,
    VERSE_CHUNK_DELIM,
    ChapterRange,
    RangeCollection,
    VerseRange,
    VerseRangeReference,
)

logger = logging.getLogger(__name__)

POSSIBLE_BOOK_NAME = re.compile(r"^(?P<name>(\d\s)?[A-Za-z ]+\.?)\s+")
_RANGE_SPLIT = re.compile("|".join(re.escape(d) for d in RANGE_DELIMS))
_NUMBER = re.compile(r"[0-9]+")


class ReferenceErrorKind(Enum):
    EMPTY = "No references found"
    UNKNOWN_BOOK = "Book name not found as expected"
    INVALID_RANGE = "Range is invalid"
    TOO_MANY_DASHES = "Too many dashes found"
    TOO_MANY_COLONS = "More than 1 ':' in a single citation"
    BAD_NUMBER = "Unable to parse number"


class ReferenceParseError(ValueError):
    """
    Raised when a citation cannot be parsed.

    Attributes:
        kind: What went wrong
        text: The fragment that could not be parsed
    """

    def __init__(self, kind: ReferenceErrorKind, text: str = ""):
        self.kind = kind
        self.text = text
        detail = f"{kind.value} in '{text}'" if text else kind.value
        super().__init__(f"Reference error: {detail}")


def extract_number(s: str) -> int:
    s = s.strip()
    if not _NUMBER.fullmatch(s):
        raise ReferenceParseError(ReferenceErrorKind.BAD_NUMBER, s)
    return int(s)


def extract_range(s: str) -> Tuple[int, int]:
    """
    Parse "n" or "a<dash>b" into an inclusive (start, end) pair.

    An explicit range must have start < end; a single unit is written as a
    bare number.
    """
    split = _RANGE_SPLIT.split(s)
    if len(split) == 1:
        num = extract_number(split[0])
        return num, num
    if len(split) == 2:
        lower = extract_number(split[0])
        upper = extract_number(split[1])
        if lower >= upper:
            raise ReferenceParseError(ReferenceErrorKind.INVALID_RANGE, s.strip())
        return lower, upper
    raise ReferenceParseError(ReferenceErrorKind.TOO_MANY_DASHES, s.strip())


def extract_book_name(s: str) -> Tuple[int, int, Work]:
    """
    Find a leading book name in `s`.

    Returns:
        (index in `s` where the numeric part begins, book index, work)

    Raises:
        ReferenceParseError: If `s` does not start with a known book name
    """
    match = POSSIBLE_BOOK_NAME.match(s.strip())
    if match:
        candidate = match.group("name").strip()
        book = find_book(candidate)
        if book is not None:
            end = s.find(candidate) + len(candidate)
            return end, book.book_index, book.work

    raise ReferenceParseError(ReferenceErrorKind.UNKNOWN_BOOK, s.strip())


def _book_or_previous(
    s: str, previous: Optional[VerseRangeReference]
) -> Tuple[int, int, Work]:
    try:
        return extract_book_name(s)
    except ReferenceParseError:
        if previous is None:
            raise
        return 0, previous.book_index, previous.work


def parse_citation(text: str) -> RangeCollection:
    """
    Parse a citation string into a RangeCollection, in citation order.

    Parsing is all-or-nothing: one malformed clause fails the whole string.
    A successful parse does not mean the references exist; check that with
    RangeCollection.is_valid().

    Raises:
        ReferenceParseError: If the citation does not match the grammar
    """
    if not text.strip():
        raise ReferenceParseError(ReferenceErrorKind.EMPTY)

    references: List[VerseRangeReference] = []

    for citation in text.split(CITATION_DELIM):
        previous = references[-1] if references else None
        chapter_verse_split = citation.split(CHAPTER_VERSE_DELIM)

        if len(chapter_verse_split) == 1:
            # Whole chapters only.
            end, book_index, work = _book_or_previous(citation, previous)
            for chunk in citation[end:].split(VERSE_CHUNK_DELIM):
                start, stop = extract_range(chunk)
                references.append(VerseRangeReference(
                    work=work,
                    book_index=book_index,
                    range_type=ChapterRange(start, stop),
                ))

        elif len(chapter_verse_split) == 2:
            book_chapter, verse_part = chapter_verse_split
            end, book_index, work = _book_or_previous(book_chapter, previous)
            chapter = extract_number(book_chapter[end:])
            for chunk in verse_part.split(VERSE_CHUNK_DELIM):
                start, stop = extract_range(chunk)
                references.append(VerseRangeReference(
                    work=work,
                    book_index=book_index,
                    range_type=VerseRange(chapter, start, stop),
                ))

        else:
            raise ReferenceParseError(ReferenceErrorKind.TOO_MANY_COLONS, citation.strip())

    logger.debug(f"Parsed {len(references)} clause(s) from {text!r}")
    return RangeCollection(references)
