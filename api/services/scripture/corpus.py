# api/services/scripture/corpus.py
"""
Data model for a parsed scripture corpus.

A Corpus is a tree of books, chapters and verses plus front matter that sits
outside the addressable tree. Verse numbers are not stored: a verse's number
is its 1-based position in its chapter.

References (VerseReference, and the range types in ranges.py) hold indices
only. Text is resolved through explicit lookups such as Corpus.verse_at().
"""

import html
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .books import Work


@dataclass(frozen=True)
class Verse:
    text: str


@dataclass
class Chapter:
    verses: List[Verse] = field(default_factory=list)


@dataclass
class Book:
    """
    A book of the corpus.

    Attributes:
        title: Long title as it appears in the source ("THE FIRST BOOK OF NEPHI")
        short_title: Running head taken from the book's verses ("1 Nephi")
        description: Optional descriptive paragraph following the title
        chapters: Chapters in order
    """
    title: str
    short_title: Optional[str] = None
    description: Optional[str] = None
    chapters: List[Chapter] = field(default_factory=list)

    @property
    def display_title(self) -> str:
        return self.short_title or self.title


@dataclass(frozen=True)
class WitnessTestimony:
    title: str
    text: str
    signatures: str


@dataclass(frozen=True)
class VerseReference:
    """
    Everything needed to identify a single verse.

    Attributes:
        work: Scripture volume the reference belongs to
        book_index: 0-based index into the corpus books
        chapter_index: 1-based chapter number (0 is never valid)
        verse_index: 1-based verse number (0 is never valid)
    """
    work: Work = Work.BOOK_OF_MORMON
    book_index: int = 0
    chapter_index: int = 1
    verse_index: int = 1

    def is_valid(self, corpus: "Corpus") -> bool:
        """True if the book, chapter and verse all exist in `corpus`."""
        return corpus._resolve(self) is not None

    def url(self) -> Optional[str]:
        """Study URL for this verse on churchofjesuschrist.org."""
        from .ranges import RangeCollection

        return RangeCollection.from_verse_ref(self).url()

    def to_dict(self) -> dict:
        return {
            "work": self.work.name,
            "book_index": self.book_index,
            "chapter_index": self.chapter_index,
            "verse_index": self.verse_index,
        }


@dataclass(frozen=True)
class VerseWithReference:
    """
    The text of one verse together with its resolved reference.

    The text is an owned copy, so instances stay usable independently of the
    corpus they were read from.
    """
    book_title: str
    reference: VerseReference
    text: str

    @property
    def reference_string(self) -> str:
        return (
            f"{self.book_title} "
            f"{self.reference.chapter_index}:{self.reference.verse_index}"
        )

    def __str__(self) -> str:
        return f"{self.reference_string}\n{self.text}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "reference": self.reference.to_dict(),
            "reference_string": self.reference_string,
            "text": self.text,
        }

    def to_html_string(self) -> str:
        """Render as an HTML fragment with the reference linked to its study page."""
        title = html.escape(self.reference_string)
        url = self.reference.url()
        if url:
            title = f'<a href="{html.escape(url)}">{title}</a>'
        return f"<p><b>{title}</b></p>\n<p>{html.escape(self.text)}</p>"


@dataclass(frozen=True)
class Corpus:
    """
    A parsed copy of a scripture text.

    Built once by corpus_parser.parse_corpus() and read-only afterwards, so a
    single instance may be shared between readers without locking.
    """
    books: Tuple[Book, ...]
    title: str = ""
    subtitle: str = ""
    translator: str = ""
    last_updated: str = ""
    language: str = ""
    title_page_text: str = ""
    witness_testimonies: Tuple[WitnessTestimony, ...] = ()
    work: Work = Work.BOOK_OF_MORMON

    def _resolve(self, ref: VerseReference) -> Optional[Tuple[Book, Verse]]:
        if ref.book_index < 0 or ref.chapter_index < 1 or ref.verse_index < 1:
            return None
        if ref.book_index >= len(self.books):
            return None
        book = self.books[ref.book_index]
        if ref.chapter_index > len(book.chapters):
            return None
        chapter = book.chapters[ref.chapter_index - 1]
        if ref.verse_index > len(chapter.verses):
            return None
        return book, chapter.verses[ref.verse_index - 1]

    def chapter_count(self, book_index: int) -> int:
        """Number of chapters in a book, 0 for an unknown book."""
        if 0 <= book_index < len(self.books):
            return len(self.books[book_index].chapters)
        return 0

    def verse_count(self, book_index: int, chapter_index: int) -> int:
        """Number of verses in a chapter, 0 for an unknown chapter."""
        if 1 <= chapter_index <= self.chapter_count(book_index):
            return len(self.books[book_index].chapters[chapter_index - 1].verses)
        return 0

    def verse_at(self, ref: VerseReference) -> Optional[VerseWithReference]:
        """
        Look up a single verse.

        Returns None for any reference that does not resolve; never raises for
        an out-of-range reference.
        """
        resolved = self._resolve(ref)
        if resolved is None:
            return None
        book, verse = resolved
        return VerseWithReference(
            book_title=book.display_title,
            reference=ref,
            text=verse.text,
        )

    def all_verses(self) -> Iterator[VerseWithReference]:
        """Every verse in document order."""
        from .iterators import VerseIterator

        return VerseIterator(self)

    def verses_matching(self, range_collection) -> Iterator[VerseWithReference]:
        """
        Verses covered by a RangeCollection, in clause order.

        References that do not resolve against this corpus are skipped.
        """
        for ref in range_collection.verse_refs(self):
            verse = self.verse_at(ref)
            if verse is not None:
                yield verse
