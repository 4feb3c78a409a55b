"""
Page Errors - the error taxonomy shared by the page services and routers.

Services raise PageServiceError with an explicit kind; the application's
exception handler (pagen.main) turns it into an HTTP response. Routers never
build error responses by hand.
"""

from enum import Enum
from typing import Any, Dict, Optional


class PageErrorKind(str, Enum):
    """Kinds of failures a page request can end in."""
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    BACKEND_UNAVAILABLE = "backend_unavailable"
    GENERATION_FAILURE = "generation_failure"


# HTTP status for each kind
STATUS_CODES: Dict[PageErrorKind, int] = {
    PageErrorKind.VALIDATION: 422,
    PageErrorKind.NOT_FOUND: 404,
    PageErrorKind.BACKEND_UNAVAILABLE: 500,
    PageErrorKind.GENERATION_FAILURE: 502,
}


class PageServiceError(Exception):
    """
    A tagged failure from the page services.

    Attributes:
        kind: Which failure this is
        message: Human-readable explanation returned to the caller
        detail: Optional structured detail (e.g. field errors)
    """

    def __init__(
        self,
        kind: PageErrorKind,
        message: str,
        detail: Optional[Any] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.kind.value, "message": self.message}
        if self.detail is not None:
            body["detail"] = self.detail
        return body

    @classmethod
    def not_found(cls, page_id: int) -> "PageServiceError":
        return cls(PageErrorKind.NOT_FOUND, f"Page {page_id} not found")

    @classmethod
    def backend_unavailable(cls) -> "PageServiceError":
        return cls(PageErrorKind.BACKEND_UNAVAILABLE, "DB binding missing")

    @classmethod
    def generation_failure(cls, message: str) -> "PageServiceError":
        return cls(PageErrorKind.GENERATION_FAILURE, message)

    @classmethod
    def validation(cls, message: str, detail: Optional[Any] = None) -> "PageServiceError":
        return cls(PageErrorKind.VALIDATION, message, detail)
