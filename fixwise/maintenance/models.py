from __future__ import annotations

import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fixwise.analysis.interface import Category, Urgency
from fixwise.base.models import BaseDbModel
from fixwise.user.models import User


class RequestStatus(enum.Enum):
    ANALYZED = "analyzed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MaintenanceRequest(BaseDbModel):
    __tablename__ = "maintenance_requests"
    __table_args__ = (
        Index("ix_maintenance_requests_user_created", "user_id", "created_at"),
    )

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    property_address: Mapped[str | None] = mapped_column(String, nullable=True)
    category: Mapped[Category | None] = mapped_column(Enum(Category), nullable=True)
    diagnosis: Mapped[str] = mapped_column(Text, nullable=False)
    urgency: Mapped[Urgency] = mapped_column(Enum(Urgency), nullable=False)
    estimated_cost: Mapped[str | None] = mapped_column(String, nullable=True)
    contractor_type: Mapped[str | None] = mapped_column(String, nullable=True)
    next_steps: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus), nullable=False, default=RequestStatus.ANALYZED
    )

    user: Mapped[User] = relationship(back_populates="maintenance_requests")
