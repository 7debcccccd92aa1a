from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fixwise.analysis.interface import Category, Urgency
from fixwise.maintenance.models import MaintenanceRequest, RequestStatus
from fixwise.user.models import User

logger = logging.getLogger(__name__)


class RequestNotFoundError(Exception):
    def __init__(self, request_id: UUID) -> None:
        super().__init__(f"Maintenance request {request_id} not found")
        self.request_id = request_id


class RequestPermissionError(Exception):
    def __init__(self, request_id: UUID) -> None:
        super().__init__(f"Maintenance request {request_id} belongs to another user")
        self.request_id = request_id


@dataclass(frozen=True)
class NewRequest:
    description: str
    diagnosis: str
    urgency: Urgency
    property_address: str | None = None
    category: Category | None = None
    estimated_cost: str | None = None
    contractor_type: str | None = None
    next_steps: str | None = None


@dataclass(frozen=True)
class RequestPage:
    items: list[MaintenanceRequest]
    total: int


async def create_request(
    session: AsyncSession, user: User, data: NewRequest
) -> MaintenanceRequest:
    request = MaintenanceRequest(
        user_id=user.id,
        description=data.description,
        property_address=data.property_address,
        category=data.category,
        diagnosis=data.diagnosis,
        urgency=data.urgency,
        estimated_cost=data.estimated_cost,
        contractor_type=data.contractor_type,
        next_steps=data.next_steps,
        status=RequestStatus.ANALYZED,
    )
    session.add(request)
    await session.flush()
    logger.info("User %s saved maintenance request %s", user.id, request.id)
    return request


async def get_request(
    session: AsyncSession, request_id: UUID, user: User
) -> MaintenanceRequest:
    """Fetch a request owned by `user`.

    Raises `RequestNotFoundError` if no such request exists and
    `RequestPermissionError` if it belongs to someone else.
    """
    request = await session.get(MaintenanceRequest, request_id)
    if request is None:
        raise RequestNotFoundError(request_id)
    if request.user_id != user.id:
        raise RequestPermissionError(request_id)
    return request


async def list_requests(
    session: AsyncSession,
    user: User,
    *,
    urgency: Urgency | None = None,
    page: int = 1,
    limit: int = 20,
) -> RequestPage:
    """List the user's requests, newest first."""
    conditions = [MaintenanceRequest.user_id == user.id]
    if urgency is not None:
        conditions.append(MaintenanceRequest.urgency == urgency)

    stmt = (
        select(MaintenanceRequest)
        .where(*conditions)
        .order_by(MaintenanceRequest.created_at.desc(), MaintenanceRequest.id)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    count_stmt = (
        select(func.count()).select_from(MaintenanceRequest).where(*conditions)
    )

    items = list((await session.execute(stmt)).scalars().all())
    total = (await session.execute(count_stmt)).scalar_one()
    return RequestPage(items=items, total=total)


async def delete_request(session: AsyncSession, request_id: UUID, user: User) -> None:
    request = await get_request(session, request_id, user)
    await session.delete(request)
    await session.flush()
    logger.info("User %s deleted maintenance request %s", user.id, request_id)
