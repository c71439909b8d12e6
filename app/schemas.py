"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from models.errors import ErrorKind, MessageValidationError


class MessageAccepted(BaseModel):
    """Response for an inbound message that produces no reply."""

    status: str = "accepted"


class ValidationIssueDetail(BaseModel):
    kind: ErrorKind
    field: Optional[str] = None
    detail: str


class RejectedMessage(BaseModel):
    """Body of a 422 response for a payload that failed to decode."""

    message_type: str = Field(..., description="Wire type name the payload claimed to be.")
    issues: List[ValidationIssueDetail] = Field(default_factory=list)

    @classmethod
    def from_error(cls, exc: MessageValidationError) -> "RejectedMessage":
        return cls(
            message_type=exc.message_type,
            issues=[
                ValidationIssueDetail(kind=issue.kind, field=issue.field, detail=issue.detail)
                for issue in exc.issues
            ],
        )
