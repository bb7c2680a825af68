# api/tests/test_corpus_parser.py
"""
Tests for corpus_parser.py - rebuilding the corpus tree from source text.
"""

import os
import sys

import pytest

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import BOOKS, TESTDATA
from services.scripture import (
    CorpusErrorKind,
    CorpusInvalidError,
    CorpusNotFoundError,
    CorpusParser,
    VerseReference,
    parse_corpus,
    parse_corpus_file,
)


def test_parses_every_book(corpus):
    assert len(corpus.books) == len(BOOKS)
    for book, (title, short_title, description, chapters) in zip(corpus.books, BOOKS):
        assert book.title == title
        assert book.short_title == short_title
        assert book.description == description
        assert [len(c.verses) for c in book.chapters] == chapters


def test_front_matter_attached(corpus):
    assert corpus.title == "The Book of Mormon"
    assert corpus.translator == "Joseph Smith, Jr."
    assert len(corpus.witness_testimonies) == 2
    assert corpus.witness_testimonies[0].title == "THE TESTIMONY OF THREE WITNESSES"


def test_multi_line_verse_is_folded(corpus):
    verse = corpus.verse_at(VerseReference(book_index=0, chapter_index=1, verse_index=1))
    assert verse.text == "I, Nephi, having been born of goodly parents, therefore I was taught."


def test_single_chapter_book_without_heading(corpus):
    enos = corpus.books[3]
    assert enos.short_title == "Enos"
    assert len(enos.chapters) == 1
    assert len(enos.chapters[0].verses) == 20


def test_windows_line_endings():
    text = "THE BOOK OF ENOS\r\n\r\nEnos 1:1\r\n  1 Behold, it came to pass.\r\n"
    corpus = parse_corpus(text)
    assert corpus.books[0].chapters[0].verses[0].text == "Behold, it came to pass."


def test_verse_mismatch_reports_both_numbers():
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus_file(TESTDATA / "bad_data_file.txt")

    err = excinfo.value
    assert err.kind == CorpusErrorKind.VERSE_MISMATCH
    assert err.expected == 2
    assert err.actual == 3
    assert "2" in str(err) and "3" in str(err)
    assert str(err).startswith("Corpus invalid:")


def test_empty_file_has_no_books():
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus_file(TESTDATA / "empty_file.txt")
    assert excinfo.value.kind == CorpusErrorKind.NO_BOOKS


def test_missing_file(tmp_path):
    with pytest.raises(CorpusNotFoundError) as excinfo:
        parse_corpus_file(tmp_path / "does_not_exist.txt")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_verse_before_any_book():
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus("Alma 1:1\n  1 Now it came to pass.")
    assert excinfo.value.kind == CorpusErrorKind.MISPLACED_VERSE


def test_title_after_title():
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus("THE BOOK OF ENOS\n\nTHE BOOK OF JAROM")
    assert excinfo.value.kind == CorpusErrorKind.MISPLACED_TITLE


def test_description_after_verse():
    text = "THE BOOK OF ENOS\n\nEnos 1:1\n  1 Behold.\n\nA stray paragraph."
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus(text)
    assert excinfo.value.kind == CorpusErrorKind.MISPLACED_DESCRIPTION
    assert excinfo.value.snippet == "A stray paragraph."


def test_chapter_after_chapter():
    text = "THE BOOK OF ALMA\n\nAlma 1\nChapter 1\n\nAlma 2\nChapter 2"
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus(text)
    assert excinfo.value.kind == CorpusErrorKind.MISPLACED_CHAPTER


def test_verse_zero_is_rejected():
    text = "THE BOOK OF ENOS\n\nEnos 1:0\n  0 Behold."
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus(text)
    assert excinfo.value.kind == CorpusErrorKind.UNRECOGNIZED_CHUNK


def test_verse_numbers_restart_each_chapter():
    text = (
        "THE BOOK OF ALMA\n\n"
        "Alma 1\nChapter 1\n\n"
        "Alma 1:1\n  1 One.\n\n"
        "Alma 1:2\n  2 Two.\n\n"
        "Alma 2\nChapter 2\n\n"
        "Alma 2:2\n  2 Skipped one."
    )
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus(text)
    assert excinfo.value.expected == 1
    assert excinfo.value.actual == 2


def test_book_without_verses():
    with pytest.raises(CorpusInvalidError) as excinfo:
        parse_corpus("THE BOOK OF ENOS")
    assert excinfo.value.kind == CorpusErrorKind.EMPTY_BOOK


def test_incremental_feed():
    parser = CorpusParser()
    parser.feed("THE BOOK OF ENOS")
    parser.feed("Enos 1:1\n  1 Behold.")
    parser.feed("Enos 1:2\n  2 And my soul hungered.")
    corpus = parser.finish()
    assert corpus.verse_count(0, 1) == 2
