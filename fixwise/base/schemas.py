from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class BaseDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime | None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=-(-total // limit))


class Envelope(BaseModel, Generic[T]):
    """
    JSON envelope shared by every API response.

    Successful responses carry `data` (and `pagination` for list endpoints),
    failed ones carry `error` and optionally `details`.
    """

    success: bool = True
    data: T | None = None
    message: str | None = None
    pagination: Pagination | None = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    details: Any = None
