# api/services/scripture/iterators.py
"""
Document-order iteration over a Corpus.
"""

from .corpus import Corpus, VerseReference, VerseWithReference


class VerseIterator:
    """
    Walks every verse of a corpus in document order.

    The cursor starts at book 0, chapter 1, verse 1. Each step resolves the
    cursor; the first cursor that fails to resolve ends the sequence. An
    exhausted iterator stays exhausted, so create a new one to start over.
    """

    def __init__(self, corpus: Corpus):
        self.corpus = corpus
        self.book_index = 0
        self.chapter_index = 1
        self.verse_index = 1
        self._done = False

    def __iter__(self):
        return self

    def __next__(self) -> VerseWithReference:
        if self._done:
            raise StopIteration

        ref = VerseReference(
            work=self.corpus.work,
            book_index=self.book_index,
            chapter_index=self.chapter_index,
            verse_index=self.verse_index,
        )
        verse = self.corpus.verse_at(ref)
        if verse is None:
            self._done = True
            raise StopIteration

        self.verse_index += 1
        if self.verse_index > self.corpus.verse_count(self.book_index, self.chapter_index):
            self.verse_index = 1
            self.chapter_index += 1
            if self.chapter_index > self.corpus.chapter_count(self.book_index):
                # Running past the last book is caught on the next resolve.
                self.chapter_index = 1
                self.book_index += 1

        return verse
