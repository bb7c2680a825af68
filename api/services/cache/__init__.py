"""
Cache Services

On-disk snapshots of parsed corpora.
"""

from .corpus_cache import CorpusCache, SNAPSHOT_VERSION

__all__ = ["CorpusCache", "SNAPSHOT_VERSION"]
