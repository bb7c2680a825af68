# api/services/scripture/__init__.py
"""
Scripture corpus and citation services.

This package provides:
- parse_corpus / parse_corpus_file: Rebuild a book/chapter/verse Corpus from source text
- Corpus: Parsed text with verse lookup and iteration
- VerseReference: Address of a single verse
- VerseWithReference: Verse text with its resolved reference
- RangeCollection: Parsed citation with validation, expansion,
  canonicalization and formatting
- parse_citation: Parse a human-written citation
- ScriptureService: Unified interface used by the CLI, HTTP API and email job
"""

from .books import Work, BookData, BOOK_DATA, find_book, book_at
from .corpus import (
    Corpus,
    Book,
    Chapter,
    Verse,
    WitnessTestimony,
    VerseReference,
    VerseWithReference,
)
from .chunks import ChunkKind, Chunk, classify_chunk, split_chunks
from .corpus_parser import (
    CorpusParser,
    CorpusError,
    CorpusNotFoundError,
    CorpusInvalidError,
    CorpusErrorKind,
    parse_corpus,
    parse_corpus_file,
)
from .iterators import VerseIterator
from .ranges import (
    ChapterRange,
    VerseRange,
    VerseRangeReference,
    RangeCollection,
    compare_range_types,
    compare_references,
)
from .reference_parser import (
    ReferenceParseError,
    ReferenceErrorKind,
    parse_citation,
)
from .scripture_service import ScriptureService, load_default_corpus

__all__ = [
    # Books
    "Work",
    "BookData",
    "BOOK_DATA",
    "find_book",
    "book_at",
    # Data model
    "Corpus",
    "Book",
    "Chapter",
    "Verse",
    "WitnessTestimony",
    "VerseReference",
    "VerseWithReference",
    "VerseIterator",
    # Corpus parsing
    "ChunkKind",
    "Chunk",
    "classify_chunk",
    "split_chunks",
    "CorpusParser",
    "CorpusError",
    "CorpusNotFoundError",
    "CorpusInvalidError",
    "CorpusErrorKind",
    "parse_corpus",
    "parse_corpus_file",
    # Citations
    "ChapterRange",
    "VerseRange",
    "VerseRangeReference",
    "RangeCollection",
    "compare_range_types",
    "compare_references",
    "ReferenceParseError",
    "ReferenceErrorKind",
    "parse_citation",
    # Service
    "ScriptureService",
    "load_default_corpus",
]
