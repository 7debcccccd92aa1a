import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from functools import lru_cache
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fixwise.analysis import (
    Analyzer,
    Category,
    ModelNotConfiguredError,
    ModelTimeoutError,
    ModelUnavailableError,
    Urgency,
    create_analyzer,
)
from fixwise.auth import get_current_user
from fixwise.base.dependencies import get_session
from fixwise.base.schemas import BaseDTO, Envelope, Pagination
from fixwise.maintenance.models import RequestStatus
from fixwise.maintenance.store import (
    NewRequest,
    RequestNotFoundError,
    RequestPermissionError,
    create_request,
    delete_request,
    get_request,
    list_requests,
)
from fixwise.user.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/maintenance")


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class AnalyzeRequestBody(BaseModel):
    description: str = Field(min_length=10, max_length=2000)
    property_address: str | None = None
    category: Category | None = None

    @field_validator("property_address", "category", mode="before")
    @classmethod
    def normalize_optional(cls, value: object) -> object:
        return _blank_to_none(value)


class AnalyzeResponse(BaseModel):
    description: str
    property_address: str | None
    category: Category | None
    diagnosis: str
    urgency: Urgency
    estimated_cost: str
    contractor_type: str
    next_steps: str
    timestamp: datetime


class SaveRequestBody(BaseModel):
    description: str = Field(min_length=1)
    diagnosis: str = Field(min_length=1)
    urgency: Urgency
    property_address: str | None = None
    category: Category | None = None
    estimated_cost: str | None = None
    contractor_type: str | None = None
    next_steps: str | None = None

    @field_validator(
        "property_address",
        "category",
        "estimated_cost",
        "contractor_type",
        "next_steps",
        mode="before",
    )
    @classmethod
    def normalize_optional(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("urgency", mode="before")
    @classmethod
    def lowercase_urgency(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class SavedRequestResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: UUID
    created_at: datetime


class MaintenanceRequestResponse(BaseDTO):
    description: str
    property_address: str | None
    category: Category | None
    diagnosis: str
    urgency: Urgency
    estimated_cost: str | None
    contractor_type: str | None
    next_steps: str | None
    status: RequestStatus


@lru_cache(maxsize=1)
def _shared_analyzer() -> Analyzer:
    return create_analyzer()


def get_analyzer() -> Analyzer:
    try:
        return _shared_analyzer()
    except ModelNotConfiguredError as exc:
        logger.error("Analysis requested but the model is not configured: %s", exc)
        raise HTTPException(
            status_code=503,
            detail="AI service not configured. Please contact support.",
        ) from exc


@router.post("/analyze", response_model=Envelope[AnalyzeResponse])
async def analyze(
    body: AnalyzeRequestBody,
    analyzer: Analyzer = Depends(get_analyzer),
) -> Envelope[AnalyzeResponse]:
    try:
        analyzed = await analyzer.analyze_request(
            body.description,
            property_address=body.property_address,
            category=body.category,
        )
    except ModelNotConfiguredError as exc:
        raise HTTPException(
            status_code=503,
            detail="AI service not configured. Please contact support.",
        ) from exc
    except ModelTimeoutError as exc:
        logger.warning("Analysis timed out: %s", exc)
        raise HTTPException(
            status_code=504, detail="Analysis timed out. Please try again."
        ) from exc
    except ModelUnavailableError as exc:
        logger.exception("Analysis failed")
        raise HTTPException(
            status_code=502, detail="Failed to analyze request. Please try again."
        ) from exc

    result = analyzed.analysis
    return Envelope(
        data=AnalyzeResponse(
            description=analyzed.description,
            property_address=analyzed.property_address,
            category=analyzed.category,
            diagnosis=result.diagnosis,
            urgency=result.urgency,
            estimated_cost=result.estimated_cost,
            contractor_type=result.contractor_type,
            next_steps=result.next_steps,
            timestamp=analyzed.timestamp,
        )
    )


@router.post("/save", response_model=Envelope[SavedRequestResponse], status_code=201)
async def save(
    body: SaveRequestBody,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Envelope[SavedRequestResponse]:
    try:
        request = await create_request(session, user, NewRequest(**body.model_dump()))
    except IntegrityError as exc:
        logger.warning("Rejected duplicate maintenance request: %s", exc.orig)
        raise HTTPException(status_code=409, detail="Duplicate request.") from exc

    return Envelope(data=SavedRequestResponse.model_validate(request))


@router.get("/list", response_model=Envelope[list[MaintenanceRequestResponse]])
async def list_user_requests(
    urgency: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Envelope[list[MaintenanceRequestResponse]]:
    # Unknown urgency values are ignored rather than rejected.
    urgency_filter = (
        Urgency(urgency) if urgency in {u.value for u in Urgency} else None
    )
    result = await list_requests(
        session, user, urgency=urgency_filter, page=page, limit=limit
    )
    return Envelope(
        data=[MaintenanceRequestResponse.model_validate(r) for r in result.items],
        pagination=Pagination.build(page=page, limit=limit, total=result.total),
    )


@contextmanager
def _ownership_errors(action: str) -> Iterator[None]:
    try:
        yield
    except RequestNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Request not found.") from exc
    except RequestPermissionError as exc:
        raise HTTPException(
            status_code=403,
            detail=f"You don't have permission to {action} this request.",
        ) from exc


@router.get("/{request_id}", response_model=Envelope[MaintenanceRequestResponse])
async def get_user_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Envelope[MaintenanceRequestResponse]:
    with _ownership_errors("view"):
        request = await get_request(session, request_id, user)
    return Envelope(data=MaintenanceRequestResponse.model_validate(request))


@router.delete("/{request_id}", response_model=Envelope[None])
async def delete_user_request(
    request_id: UUID,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Envelope[None]:
    with _ownership_errors("delete"):
        await delete_request(session, request_id, user)
    return Envelope(message="Request deleted successfully.")
