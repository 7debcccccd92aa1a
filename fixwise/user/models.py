from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fixwise.base.models import BaseDbModel

if TYPE_CHECKING:
    from fixwise.maintenance.models import MaintenanceRequest


class User(BaseDbModel):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)

    maintenance_requests: Mapped[list[MaintenanceRequest]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
