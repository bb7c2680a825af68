# api/tests/test_corpus.py
"""
Tests for the corpus data model: verse lookup, iteration and matching.
"""

import os
import sys

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import BOOKS, TENT_VERSE
from services.scripture import (
    RangeCollection,
    VerseIterator,
    VerseReference,
    VerseWithReference,
    Work,
)

TOTAL_VERSES = sum(sum(chapters) for _, _, _, chapters in BOOKS)


def test_verse_at(corpus):
    verse = corpus.verse_at(VerseReference(Work.BOOK_OF_MORMON, 0, 2, 15))
    assert verse.text == TENT_VERSE
    assert verse.book_title == "1 Nephi"
    assert verse.reference == VerseReference(Work.BOOK_OF_MORMON, 0, 2, 15)


def test_verse_at_out_of_range(corpus):
    assert corpus.verse_at(VerseReference(book_index=0, chapter_index=0, verse_index=1)) is None
    assert corpus.verse_at(VerseReference(book_index=0, chapter_index=1, verse_index=0)) is None
    assert corpus.verse_at(VerseReference(book_index=0, chapter_index=2, verse_index=16)) is None
    assert corpus.verse_at(VerseReference(book_index=0, chapter_index=3, verse_index=1)) is None
    assert corpus.verse_at(VerseReference(book_index=len(BOOKS), chapter_index=1, verse_index=1)) is None
    assert corpus.verse_at(VerseReference(book_index=-1, chapter_index=1, verse_index=1)) is None


def test_verse_reference_is_valid(corpus):
    assert VerseReference(book_index=0, chapter_index=2, verse_index=15).is_valid(corpus)
    assert not VerseReference(book_index=0, chapter_index=2, verse_index=16).is_valid(corpus)


def test_counts(corpus):
    assert corpus.chapter_count(8) == 4
    assert corpus.chapter_count(99) == 0
    assert corpus.verse_count(0, 2) == 15
    assert corpus.verse_count(0, 3) == 0
    assert corpus.verse_count(0, 0) == 0


def test_all_verses_in_document_order(corpus):
    verses = list(corpus.all_verses())
    assert len(verses) == TOTAL_VERSES

    first = verses[0]
    assert (first.reference.book_index, first.reference.chapter_index, first.reference.verse_index) == (0, 1, 1)

    # 1 Nephi 1 has 20 verses, so 1 Nephi 2:15 is the 35th
    assert verses[34].text == TENT_VERSE
    # and 2 Nephi 1:1 follows it
    assert verses[35].reference == VerseReference(Work.BOOK_OF_MORMON, 1, 1, 1)

    last = verses[-1]
    assert last.reference == VerseReference(Work.BOOK_OF_MORMON, 14, 2, 20)


def test_iterator_stays_exhausted(corpus):
    it = VerseIterator(corpus)
    assert sum(1 for _ in it) == TOTAL_VERSES
    assert next(it, None) is None
    assert sum(1 for _ in corpus.all_verses()) == TOTAL_VERSES


def test_verses_matching_in_clause_order(corpus):
    refs = RangeCollection.parse("1 Nephi 2:15; 1 Nephi 1:2-3")
    verses = list(corpus.verses_matching(refs))
    assert [v.reference_string for v in verses] == ["1 Nephi 2:15", "1 Nephi 1:2", "1 Nephi 1:3"]


def test_verses_matching_whole_chapters(corpus):
    refs = RangeCollection.parse("Alma 2-3")
    verses = list(corpus.verses_matching(refs))
    assert len(verses) == 40
    assert verses[0].reference_string == "Alma 2:1"
    assert verses[-1].reference_string == "Alma 3:20"


def test_verses_matching_skips_invalid_clauses(corpus):
    refs = RangeCollection.parse("Alma 3:16; Alma 30:1; 1 Nephi 2:15")
    verses = list(corpus.verses_matching(refs))
    assert [v.reference_string for v in verses] == ["Alma 3:16", "1 Nephi 2:15"]


def test_verse_display(corpus):
    verse = corpus.verse_at(VerseReference(book_index=0, chapter_index=2, verse_index=15))
    assert str(verse) == f"1 Nephi 2:15\n{TENT_VERSE}"
    assert verse.to_dict() == {
        "reference": {
            "work": "BOOK_OF_MORMON",
            "book_index": 0,
            "chapter_index": 2,
            "verse_index": 15,
        },
        "reference_string": "1 Nephi 2:15",
        "text": TENT_VERSE,
    }


def test_verse_html_links_to_study_page():
    verse = VerseWithReference(
        book_title="Alma",
        reference=VerseReference(Work.BOOK_OF_MORMON, 8, 32, 21),
        text="Faith is not to have a perfect knowledge of things & such.",
    )
    html = verse.to_html_string()
    assert 'href="https://www.churchofjesuschrist.org/study/scriptures/bofm/alma/32?lang=eng&amp;id=p21-p21#p21"' in html
    assert "Alma 32:21" in html
    assert "things &amp; such." in html
