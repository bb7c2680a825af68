# api/services/scripture/corpus_parser.py
"""
Parser that rebuilds a Corpus from the Gutenberg plain-text layout.

The source is a flat stream of blank-line separated chunks. The parser
classifies each chunk (see chunks.py) and checks it against the kind of the
chunk before it:

    chunk            allowed after
    ---------------  -----------------------------------------------
    book title       verse (the initial state counts as a verse)
    description      book title
    chapter start    book title, description, verse
    verse            book title, description, chapter start, verse

Verse numbers must run 1..N inside each chapter. Any violation stops the
parse with a CorpusInvalidError naming the offending chunk.
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from . import front_matter
from .chunks import Chunk, ChunkKind, classify_chunk, split_chunks
from .corpus import Book, Chapter, Corpus, Verse, WitnessTestimony

logger = logging.getLogger(__name__)


class CorpusErrorKind(Enum):
    MISPLACED_TITLE = "Book title in incorrect location"
    MISPLACED_DESCRIPTION = "Book description in incorrect location"
    MISPLACED_CHAPTER = "Chapter start in incorrect location"
    MISPLACED_VERSE = "Verse in incorrect location"
    VERSE_MISMATCH = "Verse number mismatch"
    UNRECOGNIZED_CHUNK = "Unrecognized chunk"
    EMPTY_BOOK = "Book has no chapters"
    NO_BOOKS = "No books found"


class CorpusError(Exception):
    """Base exception for corpus loading errors."""
    pass


class CorpusNotFoundError(CorpusError):
    """Raised when the corpus source cannot be read."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Corpus not found: {path}")


class CorpusInvalidError(CorpusError):
    """
    Raised when the corpus source breaks a structural rule.

    Attributes:
        kind: Which rule was broken
        snippet: The offending chunk, when there is one
        expected: Verse number the parser expected (VERSE_MISMATCH only)
        actual: Verse number found in the text (VERSE_MISMATCH only)
    """

    def __init__(
        self,
        kind: CorpusErrorKind,
        snippet: Optional[str] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        self.kind = kind
        self.snippet = snippet
        self.expected = expected
        self.actual = actual
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.kind == CorpusErrorKind.VERSE_MISMATCH:
            reason = (
                f"Parser thought this verse was {self.expected} "
                f"but text says it's verse {self.actual}"
            )
        else:
            reason = self.kind.value
        if self.snippet:
            reason = f"{reason}: {self.snippet}"
        return f"Corpus invalid: {reason}"


_NEWLINE_RUN = re.compile(r"\s*\n\s*")


def _fold_lines(text: str) -> str:
    """Join a verse that spans several physical lines into one line."""
    return _NEWLINE_RUN.sub(" ", text.strip())


class CorpusParser:
    """
    Incrementally assembles a Corpus from classified chunks.

    Usage:
        parser = CorpusParser()
        for chunk in split_chunks(text):
            parser.feed(chunk)
        corpus = parser.finish()
    """

    def __init__(self):
        self.books: List[Book] = []
        # Start as if a verse was just seen, so a book title comes first.
        self.previous_kind = ChunkKind.VERSE

    def feed(self, s: str) -> Chunk:
        chunk = classify_chunk(s)
        handler = {
            ChunkKind.BOOK_TITLE: self._on_book_title,
            ChunkKind.BOOK_DESCRIPTION: self._on_book_description,
            ChunkKind.CHAPTER_START: self._on_chapter_start,
            ChunkKind.VERSE: self._on_verse,
            ChunkKind.UNRECOGNIZED: self._on_unrecognized,
        }[chunk.kind]
        handler(chunk)
        self.previous_kind = chunk.kind
        return chunk

    def _on_book_title(self, chunk: Chunk) -> None:
        if self.previous_kind != ChunkKind.VERSE:
            raise CorpusInvalidError(CorpusErrorKind.MISPLACED_TITLE, chunk.text)
        self.books.append(Book(title=chunk.text))
        logger.debug(f"Book {len(self.books)}: {chunk.text}")

    def _on_book_description(self, chunk: Chunk) -> None:
        if self.previous_kind != ChunkKind.BOOK_TITLE:
            raise CorpusInvalidError(CorpusErrorKind.MISPLACED_DESCRIPTION, chunk.text)
        self.books[-1].description = chunk.text

    def _on_chapter_start(self, chunk: Chunk) -> None:
        if self.previous_kind not in (
            ChunkKind.BOOK_TITLE,
            ChunkKind.BOOK_DESCRIPTION,
            ChunkKind.VERSE,
        ) or not self.books:
            raise CorpusInvalidError(CorpusErrorKind.MISPLACED_CHAPTER, chunk.text)
        self.books[-1].chapters.append(Chapter())

    def _on_verse(self, chunk: Chunk) -> None:
        if self.previous_kind not in (
            ChunkKind.BOOK_TITLE,
            ChunkKind.BOOK_DESCRIPTION,
            ChunkKind.CHAPTER_START,
            ChunkKind.VERSE,
        ) or not self.books:
            raise CorpusInvalidError(CorpusErrorKind.MISPLACED_VERSE, chunk.text)

        book = self.books[-1]
        if self.previous_kind in (ChunkKind.BOOK_TITLE, ChunkKind.BOOK_DESCRIPTION):
            # Single-chapter books have no chapter heading.
            book.chapters.append(Chapter())
        book.short_title = chunk.short_title

        chapter = book.chapters[-1]
        expected = len(chapter.verses) + 1
        if chunk.verse_num != expected:
            raise CorpusInvalidError(
                CorpusErrorKind.VERSE_MISMATCH,
                chunk.text,
                expected=expected,
                actual=chunk.verse_num,
            )
        chapter.verses.append(Verse(text=_fold_lines(chunk.verse_text)))

    def _on_unrecognized(self, chunk: Chunk) -> None:
        raise CorpusInvalidError(CorpusErrorKind.UNRECOGNIZED_CHUNK, chunk.text)

    def finish(self) -> Corpus:
        """Validate the end state and return the finished Corpus."""
        if not self.books:
            raise CorpusInvalidError(CorpusErrorKind.NO_BOOKS)
        if not self.books[-1].chapters:
            raise CorpusInvalidError(CorpusErrorKind.EMPTY_BOOK, self.books[-1].title)

        verse_count = sum(len(c.verses) for b in self.books for c in b.chapters)
        logger.info(f"Parsed corpus: {len(self.books)} books, {verse_count} verses")

        return Corpus(
            books=tuple(self.books),
            title=front_matter.TITLE,
            subtitle=front_matter.SUBTITLE,
            translator=front_matter.TRANSLATOR,
            last_updated=front_matter.LAST_UPDATED,
            language=front_matter.LANGUAGE,
            title_page_text=front_matter.TITLE_PAGE_TEXT,
            witness_testimonies=(
                WitnessTestimony(
                    title=front_matter.THREE_WITNESS_TITLE,
                    text=front_matter.THREE_WITNESS_TEXT,
                    signatures=front_matter.THREE_WITNESS_SIGNATURES,
                ),
                WitnessTestimony(
                    title=front_matter.EIGHT_WITNESS_TITLE,
                    text=front_matter.EIGHT_WITNESS_TEXT,
                    signatures=front_matter.EIGHT_WITNESS_SIGNATURES,
                ),
            ),
        )


def parse_corpus(text: str) -> Corpus:
    """
    Parse corpus source text.

    Raises:
        CorpusInvalidError: If the text does not follow the expected layout
    """
    parser = CorpusParser()
    for chunk in split_chunks(text.replace("\r\n", "\n")):
        parser.feed(chunk)
    return parser.finish()


def parse_corpus_file(path: Union[str, Path]) -> Corpus:
    """
    Read and parse a corpus source file.

    Raises:
        CorpusNotFoundError: If the file cannot be read
        CorpusInvalidError: If the text does not follow the expected layout
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusNotFoundError(path) from e

    logger.info(f"Parsing corpus from {path}")
    return parse_corpus(text)
