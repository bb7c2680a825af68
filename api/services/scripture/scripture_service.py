# api/services/scripture/scripture_service.py
"""
Unified scripture service.

Wraps a parsed Corpus with the operations the command line tool, the HTTP
API and the daily verse email all need: single-verse lookup, citation
lookup and canonicalization, random verse selection and free-text search.
"""

import logging
import random
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from core import config
from services.cache.corpus_cache import CorpusCache

from .corpus import Corpus, VerseReference, VerseWithReference
from .corpus_parser import parse_corpus_file
from .reference_parser import ReferenceParseError, parse_citation

logger = logging.getLogger(__name__)


def load_default_corpus(
    path: Union[str, Path, None] = None,
    use_cache: Optional[bool] = None,
    delete_cache: bool = False,
    cache: Optional[CorpusCache] = None,
) -> Corpus:
    """
    Load the configured corpus, going through the snapshot cache.

    A usable snapshot is returned as-is. Otherwise the source text is parsed
    and a fresh snapshot is written. Snapshot problems never fail the load.

    Args:
        path: Source text (default: config.CORPUS_PATH)
        use_cache: Read/write the snapshot (default: config.CACHE_ENABLED)
        delete_cache: Remove any existing snapshot first
        cache: Snapshot store (default: one at config.CACHE_PATH)

    Raises:
        CorpusNotFoundError: If the source cannot be read
        CorpusInvalidError: If the source does not have the expected layout
    """
    path = Path(path) if path is not None else config.CORPUS_PATH
    if use_cache is None:
        use_cache = config.CACHE_ENABLED
    if cache is None:
        cache = CorpusCache(config.CACHE_PATH)

    if delete_cache:
        cache.delete()

    if use_cache:
        corpus = cache.load()
        if corpus is not None:
            return corpus

    corpus = parse_corpus_file(path)

    if use_cache:
        cache.save(corpus)

    return corpus


class ScriptureService:
    """
    Read-only operations over one Corpus.

    Usage:
        service = ScriptureService()

        service.verse(0, 2, 15)                 # 1 Nephi 2:15
        service.lookup("Alma 3:16-17")          # list of VerseWithReference
        service.canonicalize("Alma 3:18, 16")   # {"parsed_reference": "Alma 3:16, 18", ...}
        total, hits = service.search("dwelt in a", limit=5)

    The corpus is loaded on first use when none is given.
    """

    def __init__(self, corpus: Optional[Corpus] = None, **load_options):
        self._corpus = corpus
        self._load_options = load_options

    @property
    def corpus(self) -> Corpus:
        if self._corpus is None:
            self._corpus = load_default_corpus(**self._load_options)
        return self._corpus

    def verse(self, book: int, chapter: int, verse: int) -> Optional[VerseWithReference]:
        """A single verse by 0-based book index and 1-based chapter/verse, or None."""
        ref = VerseReference(self.corpus.work, book, chapter, verse)
        return self.corpus.verse_at(ref)

    def lookup(self, citation: str) -> List[VerseWithReference]:
        """
        All verses covered by a citation, in citation order.

        Raises:
            ReferenceParseError: If the citation cannot be parsed
        """
        collection = parse_citation(citation)
        return list(self.corpus.verses_matching(collection))

    def canonicalize(self, citation: str) -> dict:
        """
        Parse, sort and merge a citation.

        Returns:
            {
                "original_reference": "Alma 3:18-19, 16-17",
                "parsed_reference": "Alma 3:16–19",
                "is_valid": True
            }

        Raises:
            ReferenceParseError: If the citation cannot be parsed
        """
        collection = parse_citation(citation)
        collection.canonicalize()
        return {
            "original_reference": citation,
            "parsed_reference": collection.to_canonical_string(),
            "is_valid": collection.is_valid(self.corpus),
        }

    def random_verse(self, rng: Optional[random.Random] = None) -> VerseWithReference:
        """A uniformly chosen verse from the whole corpus."""
        rng = rng or random
        verses = list(self.corpus.all_verses())
        return verses[rng.randrange(len(verses))]

    def search(self, query: str, limit: int = 10) -> Tuple[int, List[VerseWithReference]]:
        """
        Search by citation or by text.

        A query that parses as a citation returns every verse it covers and
        ignores `limit`. Anything else is matched case-insensitively as a
        regular expression (or as literal text when it is not a valid pattern)
        against each verse.

        Returns:
            (total number of matches, at most `limit` matching verses)
        """
        try:
            collection = parse_citation(query)
        except ReferenceParseError:
            collection = None

        if collection is not None:
            matches = list(self.corpus.verses_matching(collection))
            return len(matches), matches

        try:
            pattern = re.compile(query, re.IGNORECASE)
        except re.error:
            logger.debug(f"Query {query!r} is not a valid pattern, matching literally")
            pattern = re.compile(re.escape(query), re.IGNORECASE)

        total = 0
        matches = []
        for v in self.corpus.all_verses():
            if pattern.search(v.text):
                total += 1
                if len(matches) < limit:
                    matches.append(v)

        return total, matches

    def text(self) -> str:
        """Every verse's text, one per line, in document order."""
        return "\n".join(v.text for v in self.corpus.all_verses())
