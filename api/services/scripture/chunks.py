# api/services/scripture/chunks.py
"""
Classification of source-text chunks.

A chunk is one blank-line separated block of the source text. Each chunk is
a book title, a book description, a chapter heading, a verse, or something
that looked like a verse but carried an unusable verse number.

Examples of the recognized shapes:

    THE BOOK OF ALMA                       -> BOOK_TITLE

    Alma 3                                 -> CHAPTER_START
    Chapter 3

    Alma 3:16                              -> VERSE (short title "Alma",
      16 And it came to pass ...              number 16, text "And it ...")
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

CHAPTER_START_PATTERN = re.compile(r"^(\d+\s+)?[A-Za-z]+\s+\d+\nChapter\s+(?P<num>\d+)$")
VERSE_PATTERN = re.compile(
    r"^(?P<short_title>.+)\s+\d+:\d+\n\s+(?P<num>\d+)\s+(?P<text>[\S\s]+)$"
)


class ChunkKind(Enum):
    BOOK_TITLE = "book_title"
    BOOK_DESCRIPTION = "book_description"
    CHAPTER_START = "chapter_start"
    VERSE = "verse"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Chunk:
    """
    A classified chunk. Verse fields are only set for VERSE chunks.
    """
    kind: ChunkKind
    text: str
    short_title: Optional[str] = None
    verse_num: Optional[int] = None
    verse_text: Optional[str] = None


def _is_book_title(s: str) -> bool:
    return "\n" not in s and s.upper() == s


def classify_chunk(s: str) -> Chunk:
    """
    Classify one trimmed chunk of source text.

    Order matters: the cheap title check runs first, then the chapter heading,
    then the verse pattern. Anything else is a book description.
    """
    if _is_book_title(s):
        return Chunk(ChunkKind.BOOK_TITLE, s)

    if CHAPTER_START_PATTERN.match(s):
        return Chunk(ChunkKind.CHAPTER_START, s)

    match = VERSE_PATTERN.match(s)
    if match:
        verse_num = int(match.group("num"))
        if verse_num < 1:
            return Chunk(ChunkKind.UNRECOGNIZED, s)
        return Chunk(
            ChunkKind.VERSE,
            s,
            short_title=match.group("short_title"),
            verse_num=verse_num,
            verse_text=match.group("text"),
        )

    return Chunk(ChunkKind.BOOK_DESCRIPTION, s)


def split_chunks(text: str) -> list:
    """Split source text into non-empty chunks with surrounding newlines trimmed."""
    pieces = (piece.strip("\n") for piece in text.split("\n\n"))
    return [piece for piece in pieces if piece]
