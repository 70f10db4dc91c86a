"""Announcement ORM model (single global row)."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from taskdesk.infrastructure.persistence.database import Base
from taskdesk.infrastructure.persistence.models.mixins import AppModel


class Announcement(AppModel, Base):
    """Global announcement shown on every dashboard. Table: announcement."""

    __tablename__ = "announcement"

    content: Mapped[str] = mapped_column(String(500), nullable=False)
    is_visible: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
