"""Profile ORM model. Shares its primary key with the account."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from taskdesk.infrastructure.persistence.database import Base


class Profile(Base):
    """Per-user profile carrying role and department. Table: profile."""

    __tablename__ = "profile"

    id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), primary_key=True
    )
    first_name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default="Regular", server_default="Regular"
    )
    department: Mapped[str | None] = mapped_column(String(200), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        CheckConstraint("role IN ('Admin', 'Regular')", name="ck_profile_role"),
    )
