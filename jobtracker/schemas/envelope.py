"""
Response envelope shared by every endpoint.

    {"status": "success" | "error", "message": str, "data"?: ..., "pagination"?: {"limit": int}}
"""

from typing import Generic, Literal, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class MessageResponse(BaseModel):
    """Envelope without a payload (deletes and errors)."""
    status: Literal["success", "error"] = "success"
    message: str


class Envelope(MessageResponse, Generic[T]):
    data: T


class Pagination(BaseModel):
    """Echo of the list limit; 0 means no limit was applied."""
    limit: int = 0


class PaginatedEnvelope(Envelope[T], Generic[T]):
    pagination: Pagination


def error_body(message: str) -> dict:
    return MessageResponse(status="error", message=message).model_dump()
