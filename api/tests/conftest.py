# api/tests/conftest.py
"""
Shared fixtures: a small synthetic corpus in the Gutenberg text layout.

Every Book of Mormon book is present, in order, so book indices match the
citation table. Chapters hold 20 verses except 1 Nephi 2, which stops at
verse 15 ("And my father dwelt in a tent."). Single-chapter books have no
chapter heading, as in the real text.
"""

import os
import sys
from pathlib import Path

import pytest

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.scripture import ScriptureService, parse_corpus

TESTDATA = Path(__file__).parent / "testdata"

# (title, short title, description, verses per chapter)
BOOKS = [
    ("THE FIRST BOOK OF NEPHI", "1 Nephi", "An account of Lehi and his wife Sariah.", [20, 15]),
    ("THE SECOND BOOK OF NEPHI", "2 Nephi", None, [20, 20]),
    ("THE BOOK OF JACOB", "Jacob", "The brother of Nephi.", [20, 20]),
    ("THE BOOK OF ENOS", "Enos", None, [20]),
    ("THE BOOK OF JAROM", "Jarom", None, [20]),
    ("THE BOOK OF OMNI", "Omni", None, [20]),
    ("THE WORDS OF MORMON", "Words of Mormon", None, [20]),
    ("THE BOOK OF MOSIAH", "Mosiah", None, [20, 20, 20]),
    ("THE BOOK OF ALMA", "Alma", "The son of Alma.", [20, 20, 20, 20]),
    ("THE BOOK OF HELAMAN", "Helaman", None, [20, 20]),
    ("THIRD NEPHI", "3 Nephi", "The book of Nephi.", [20, 20]),
    ("FOURTH NEPHI", "4 Nephi", "Which is the book of Nephi.", [20]),
    ("THE BOOK OF MORMON", "Mormon", None, [20, 20]),
    ("THE BOOK OF ETHER", "Ether", None, [20, 20]),
    ("THE BOOK OF MORONI", "Moroni", None, [20, 20]),
]

VERSE_TEXT = {
    ("1 Nephi", 1, 1): "I, Nephi, having been born of\ngoodly parents, therefore I was taught.",
    ("1 Nephi", 1, 3): "And I know that the record (which I make) is true.",
    ("1 Nephi", 2, 15): "And my father dwelt in a tent.",
}

TENT_VERSE = "And my father dwelt in a tent."


def verse_text(short_title: str, chapter: int, verse: int) -> str:
    text = VERSE_TEXT.get((short_title, chapter, verse))
    if text is None:
        text = f"Text of {short_title} {chapter}:{verse}."
    return text


def build_corpus_text(books=BOOKS) -> str:
    """Render `books` in the source layout: blank-line separated chunks."""
    chunks = []
    for title, short_title, description, chapters in books:
        chunks.append(title)
        if description:
            chunks.append(description)
        for chapter, count in enumerate(chapters, start=1):
            if len(chapters) > 1:
                chunks.append(f"{short_title} {chapter}\nChapter {chapter}")
            for verse in range(1, count + 1):
                lines = verse_text(short_title, chapter, verse).split("\n")
                body = "\n".join(f"  {line}" for line in lines[1:])
                chunk = f"{short_title} {chapter}:{verse}\n  {verse} {lines[0]}"
                if body:
                    chunk = f"{chunk}\n{body}"
                chunks.append(chunk)
    return "\n\n".join(chunks) + "\n"


@pytest.fixture(scope="session")
def corpus_text():
    return build_corpus_text()


@pytest.fixture(scope="session")
def corpus(corpus_text):
    return parse_corpus(corpus_text)


@pytest.fixture
def corpus_file(tmp_path, corpus_text):
    path = tmp_path / "gutenberg.txt"
    path.write_text(corpus_text, encoding="utf-8")
    return path


@pytest.fixture
def service(corpus):
    return ScriptureService(corpus)


@pytest.fixture
def client(service):
    from server import create_app

    app = create_app(service)
    app.config["TESTING"] = True
    return app.test_client()
