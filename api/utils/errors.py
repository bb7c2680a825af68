# api/utils/errors.py
"""
Standardized API error responses.

All errors follow the format: {"error": "error_code", "detail": "optional message"}

Error codes are snake_case and machine-parseable.
"""

from flask import jsonify
from typing import Optional


def error_response(code: str, status: int = 400, detail: Optional[str] = None, **extra):
    """
    JSON error body plus status, ready to return from a view.

    Extra keyword arguments are copied into the body, e.g. the reference
    that failed to parse.
    """
    body = {"error": code, **extra}
    if detail:
        body["detail"] = detail
    return jsonify(body), status


# Not Found (404)
def not_found(resource: str = "resource", detail: str = None, **extra):
    """Requested resource does not exist."""
    return error_response("not_found", 404, detail or f"{resource} not found", **extra)


def invalid_reference(reference: str, detail: str = None):
    """A citation could not be parsed. Reported as not found."""
    return not_found("reference", detail or f"Invalid reference: {reference}", reference=reference)


# Service Unavailable (503)
def corpus_unavailable(detail: str = None):
    """The scripture corpus could not be loaded."""
    return error_response("corpus_unavailable", 503, detail)
