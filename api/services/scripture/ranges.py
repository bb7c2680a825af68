# api/services/scripture/ranges.py
"""
Range-aware scripture references.

A RangeCollection is the parsed form of a citation such as
"Alma 3:16–17, 18; Mosiah 1:1". Each clause is a VerseRangeReference that
covers either whole chapters (ChapterRange) or verses within one chapter
(VerseRange) of a single book.

Collections can be validated against a Corpus, expanded into single
VerseReferences, canonicalized (sorted and merged) and rendered back to
citation text.
"""

import copy
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Iterator, List, Optional, Tuple, Union

from .books import Work, book_at
from .corpus import Corpus, VerseReference

CITATION_DELIM = ";"
VERSE_CHUNK_DELIM = ","
CHAPTER_VERSE_DELIM = ":"
RANGE_DELIM_CANONICAL = "–"  # en-dash
RANGE_DELIMS = (RANGE_DELIM_CANONICAL, "-", "—")  # en-dash, hyphen, em-dash

STUDY_URL = (
    "https://www.churchofjesuschrist.org/study/scriptures/"
    "{work}/{book}/{chapter}?lang=eng&id=p{start}-p{end}#p{start}"
)


@dataclass(frozen=True)
class ChapterRange:
    """Whole chapters start..end, inclusive."""
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Chapter range start {self.start} is after end {self.end}")

    @property
    def chapter_range(self) -> Tuple[int, int]:
        return self.start, self.end

    @property
    def verse_range(self) -> Optional[Tuple[int, int]]:
        return None


@dataclass(frozen=True)
class VerseRange:
    """Verses start..end, inclusive, within a single chapter."""
    chapter: int
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Verse range start {self.start} is after end {self.end}")

    @property
    def chapter_range(self) -> Tuple[int, int]:
        return self.chapter, self.chapter

    @property
    def verse_range(self) -> Optional[Tuple[int, int]]:
        return self.start, self.end


RangeType = Union[ChapterRange, VerseRange]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_range_types(a: RangeType, b: RangeType) -> int:
    """
    Order two ranges of the same book.

    Two verse ranges compare by (chapter, start, end) and two chapter ranges
    by (start, end). A verse range against a chapter range compares the verse
    range's chapter with the chapter range's start, then with its end.
    """
    if isinstance(a, VerseRange) and isinstance(b, VerseRange):
        return _cmp((a.chapter, a.start, a.end), (b.chapter, b.start, b.end))
    if isinstance(a, VerseRange):
        return _cmp(a.chapter, b.start) or _cmp(a.chapter, b.end)
    if isinstance(b, VerseRange):
        return _cmp(a.start, b.chapter) or _cmp(a.end, b.chapter)
    return _cmp((a.start, a.end), (b.start, b.end))


def compare_references(a: "VerseRangeReference", b: "VerseRangeReference") -> int:
    """Order by book index, then by range. Work is not part of the order."""
    return _cmp(a.book_index, b.book_index) or compare_range_types(a.range_type, b.range_type)


@dataclass(frozen=True)
class VerseRangeReference:
    """One clause of a citation: a chapter or verse range within one book."""
    work: Work
    book_index: int
    range_type: RangeType

    def is_valid(self, corpus: Corpus) -> bool:
        """True if both ends of the range exist in `corpus`. Index 0 is never valid."""
        r = self.range_type
        if isinstance(r, ChapterRange):
            if r.start < 1 or r.end < 1:
                return False
            chapters = corpus.chapter_count(self.book_index)
            return r.start <= chapters and r.end <= chapters

        if r.chapter < 1 or r.start < 1 or r.end < 1:
            return False
        verses = corpus.verse_count(self.book_index, r.chapter)
        return r.start <= verses and r.end <= verses

    def verse_refs(self, corpus: Corpus) -> Iterator[VerseReference]:
        """
        Expand into single verse references in order.

        An invalid range expands to nothing.
        """
        if not self.is_valid(corpus):
            return

        r = self.range_type
        if isinstance(r, ChapterRange):
            for chapter in range(r.start, r.end + 1):
                for verse in range(1, corpus.verse_count(self.book_index, chapter) + 1):
                    yield VerseReference(self.work, self.book_index, chapter, verse)
        else:
            for verse in range(r.start, r.end + 1):
                yield VerseReference(self.work, self.book_index, r.chapter, verse)


def _format_span(start: int, end: int) -> str:
    if start == end:
        return str(start)
    return f"{start}{RANGE_DELIM_CANONICAL}{end}"


@dataclass
class RangeCollection:
    """
    A parsed citation: one or more book-scoped ranges.

    Usage:
        refs = RangeCollection.parse("Alma 3:18-19, 16-17; Mosiah 3:18")
        refs.is_valid(corpus)          # True if every clause exists
        refs.canonicalize()            # sort + merge, in place
        str(refs)                      # "Mosiah 3:18; Alma 3:16–19"
        list(corpus.verses_matching(refs))

    canonicalize() mutates the collection. Callers sharing an instance
    between threads must lock around it or canonicalize a copy().
    """
    refs: List[VerseRangeReference] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "RangeCollection":
        """
        Parse a citation string.

        Raises:
            ReferenceParseError: If the citation does not match the grammar
        """
        from .reference_parser import parse_citation

        return parse_citation(text)

    @classmethod
    def from_verse_ref(cls, ref: VerseReference) -> "RangeCollection":
        """A one-clause collection covering a single verse."""
        return cls([
            VerseRangeReference(
                work=ref.work,
                book_index=ref.book_index,
                range_type=VerseRange(ref.chapter_index, ref.verse_index, ref.verse_index),
            )
        ])

    def __len__(self) -> int:
        return len(self.refs)

    def __iter__(self) -> Iterator[VerseRangeReference]:
        return iter(self.refs)

    def copy(self) -> "RangeCollection":
        return copy.deepcopy(self)

    def is_valid(self, corpus: Corpus) -> bool:
        """True if every chapter, book and verse named exists in `corpus`."""
        return all(r.is_valid(corpus) for r in self.refs)

    def verse_refs(self, corpus: Corpus) -> Iterator[VerseReference]:
        """Every verse reference covered, clause by clause."""
        for r in self.refs:
            yield from r.verse_refs(corpus)

    def canonicalize(self) -> None:
        """
        Sort the clauses and merge overlapping or adjacent ones, in place.

        Merging happens only within the same work and book:
        - two chapter ranges merge into their union;
        - two verse ranges of the same chapter merge into their union;
        - a chapter range absorbs a verse range in an overlapping or
          adjacent chapter (the chapter clause is kept as is).

        Raises:
            ValueError: If the collection is empty
        """
        if not self.refs:
            raise ValueError("Cannot canonicalize an empty RangeCollection")

        ordered = sorted(self.refs, key=cmp_to_key(compare_references))
        merged = [ordered[0]]

        for r in ordered[1:]:
            current = merged[-1]
            combined = self._collapse(current, r)
            if combined is None:
                merged.append(r)
            else:
                merged[-1] = combined

        self.refs = merged

    @staticmethod
    def _collapse(
        current: VerseRangeReference, r: VerseRangeReference
    ) -> Optional[VerseRangeReference]:
        """The single clause covering both `current` and `r`, or None if they stay apart."""
        if r.work != current.work or r.book_index != current.book_index:
            return None

        cur_chapters = current.range_type.chapter_range
        chapters = r.range_type.chapter_range
        if not cur_chapters[0] <= chapters[0] <= cur_chapters[1] + 1:
            return None

        cur_verses = current.range_type.verse_range
        verses = r.range_type.verse_range

        if cur_verses is None and verses is None:
            return VerseRangeReference(
                work=current.work,
                book_index=current.book_index,
                range_type=ChapterRange(
                    min(cur_chapters[0], chapters[0]),
                    max(cur_chapters[1], chapters[1]),
                ),
            )

        if cur_verses is not None and verses is not None:
            if chapters[0] != cur_chapters[0]:
                return None
            if not cur_verses[0] <= verses[0] <= cur_verses[1] + 1:
                return None
            return VerseRangeReference(
                work=current.work,
                book_index=current.book_index,
                range_type=VerseRange(
                    cur_chapters[0],
                    min(cur_verses[0], verses[0]),
                    max(cur_verses[1], verses[1]),
                ),
            )

        # One whole-chapter clause and one verse clause: the chapter clause
        # wins outright and the verse clause is dropped.
        return r if verses is None else current

    def to_canonical_string(self) -> str:
        """
        Render in citation syntax with abbreviated book names and en-dashes.

        The output parses back to an equal collection, so rendering is stable
        after one pass.
        """
        parts = []
        previous_book = None
        previous_chapter = None

        for i, r in enumerate(self.refs):
            new_title = (r.work, r.book_index) != previous_book
            if new_title:
                if i:
                    parts.append(f"{CITATION_DELIM} ")
                # Parsed collections only hold indices from the book table.
                parts.append(f"{book_at(r.work, r.book_index).short_name} ")
                previous_book = (r.work, r.book_index)
                previous_chapter = None

            rt = r.range_type
            if isinstance(rt, ChapterRange):
                if not new_title:
                    # After a verse clause a bare number would read as a verse.
                    delim = VERSE_CHUNK_DELIM if previous_chapter is None else CITATION_DELIM
                    parts.append(f"{delim} ")
                parts.append(_format_span(rt.start, rt.end))
                previous_chapter = None
            else:
                if not new_title and rt.chapter == previous_chapter:
                    parts.append(f"{VERSE_CHUNK_DELIM} ")
                else:
                    if not new_title:
                        parts.append(f"{CITATION_DELIM} ")
                    parts.append(f"{rt.chapter}{CHAPTER_VERSE_DELIM}")
                    previous_chapter = rt.chapter
                parts.append(_format_span(rt.start, rt.end))

        return "".join(parts)

    def __str__(self) -> str:
        return self.to_canonical_string()

    def url(self) -> Optional[str]:
        """
        Study URL for the first clause.

        Only verse clauses have a URL; chapter clauses and empty collections
        return None.
        """
        if not self.refs:
            return None
        r = self.refs[0]
        if not isinstance(r.range_type, VerseRange):
            return None
        book = book_at(r.work, r.book_index)
        if book is None:
            return None
        return STUDY_URL.format(
            work=r.work.url_name,
            book=book.url_name,
            chapter=r.range_type.chapter,
            start=r.range_type.start,
            end=r.range_type.end,
        )
