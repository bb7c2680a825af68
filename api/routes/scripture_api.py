# routes/scripture_api.py
"""
API endpoints for verse lookup and citation canonicalization.

Provides access to:
- Single verses by book/chapter/verse index
- All verses covered by a citation
- A random verse
- Canonical form and validity of a citation
"""

import logging

from flask import Blueprint, jsonify

from core import config
from services.scripture import (
    CorpusError,
    ReferenceParseError,
    ScriptureService,
    VerseReference,
)
from utils.errors import corpus_unavailable, invalid_reference, not_found

logger = logging.getLogger(__name__)

scripture_bp = Blueprint("scripture_api", __name__, url_prefix=config.API_PREFIX)

# Lazily initialized service instance
_service = None


def get_service() -> ScriptureService:
    """Get or create ScriptureService instance."""
    global _service
    if _service is None:
        _service = ScriptureService()
    return _service


def set_service(service: ScriptureService) -> None:
    """Replace the shared service (used to serve a preloaded corpus)."""
    global _service
    _service = service


@scripture_bp.errorhandler(CorpusError)
def handle_corpus_error(e):
    logger.error(f"Corpus unavailable: {e}")
    return corpus_unavailable(str(e))


# =============================================================================
# Verse Endpoints
# =============================================================================

@scripture_bp.get("/verse/<int:book>/<int:chapter>/<int:verse>")
def single_verse(book: int, chapter: int, verse: int):
    """
    Look up one verse.

    Path params:
        book: 0-based book index
        chapter: 1-based chapter
        verse: 1-based verse

    Returns:
        {
            "reference": {"work": "BOOK_OF_MORMON", "book_index": 0, ...},
            "reference_string": "1 Nephi 2:15",
            "text": "And my father dwelt in a tent."
        }
    """
    service = get_service()
    result = service.verse(book, chapter, verse)
    if result is None:
        ref = VerseReference(service.corpus.work, book, chapter, verse)
        return not_found("verse", f"Invalid reference: {ref}")
    return jsonify(result.to_dict())


@scripture_bp.get("/verses/<path:reference>")
def verses(reference: str):
    """
    All verses covered by a citation, in citation order.

    Clauses that do not exist in the corpus contribute no verses.

    Returns:
        [{"reference": {...}, "reference_string": "...", "text": "..."}, ...]
    """
    try:
        results = get_service().lookup(reference)
    except ReferenceParseError as e:
        return invalid_reference(reference, f"Error: {e}")
    return jsonify([v.to_dict() for v in results])


@scripture_bp.get("/verse/random")
def random_verse():
    """One verse chosen uniformly at random."""
    return jsonify(get_service().random_verse().to_dict())


# =============================================================================
# Citation Endpoints
# =============================================================================

@scripture_bp.get("/canonicalize/<path:reference>")
def canonicalize(reference: str):
    """
    Canonical form of a citation.

    Returns:
        {
            "original_reference": "Alma 3:18-19, 16-17",
            "parsed_reference": "Alma 3:16–19",
            "is_valid": true
        }
    """
    try:
        return jsonify(get_service().canonicalize(reference))
    except ReferenceParseError as e:
        return invalid_reference(reference, f"Error: {e}")
