from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class UnknownAwardCategory(DomainException):
    def __init__(self, category: str) -> None:
        super().__init__(
            status_code=404,
            title="Award category not found",
            detail=f"award category '{category}' does not exist",
            code="award_category_not_found",
        )


class UnsupportedUpload(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=415,
            title="Unsupported upload",
            detail=detail,
            code="unsupported_upload",
        )


class ScoreExtractionFailed(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=422,
            title="Score extraction failed",
            detail=detail,
            code="score_extraction_failed",
        )


class ExtractorUnavailable(DomainException):
    def __init__(self, detail: str = "no score extraction provider is reachable") -> None:
        super().__init__(
            status_code=503,
            title="Score extraction unavailable",
            detail=detail,
            code="extractor_unavailable",
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
