"""
VibeCodeSpace Error Taxonomy

Domain failures raised by the workflows and the store. Routers translate
them into HTTP responses via to_http_exception().

| Exception         | HTTP |
|-------------------|------|
| NotFound          | 404  |
| InvalidState      | 409  |
| DuplicateSlug     | 409  |
| ValidationError   | 422  |
| StoreUnavailable  | 503  |
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException


class ShowcaseError(Exception):
    """Base class for all domain errors."""
    code = "SHOWCASE_ERROR"
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_detail(self) -> Dict[str, Any]:
        detail: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            detail["details"] = self.details
        return detail


class NotFound(ShowcaseError):
    """Referenced record does not exist."""
    code = "NOT_FOUND"
    http_status = 404


class InvalidState(ShowcaseError):
    """Operation attempted outside the required status."""
    code = "INVALID_STATE"
    http_status = 409


class DuplicateSlug(InvalidState):
    """(slug, locale) already belongs to another case."""
    code = "DUPLICATE_SLUG"


class ValidationError(ShowcaseError):
    """Argument violates a declared shape or enum constraint."""
    code = "VALIDATION_ERROR"
    http_status = 422


class StoreUnavailable(ShowcaseError):
    """Store is not configured or cannot be reached. Safe to retry."""
    code = "STORE_UNAVAILABLE"
    http_status = 503


def to_http_exception(error: ShowcaseError) -> HTTPException:
    return HTTPException(status_code=error.http_status, detail=error.to_detail())
