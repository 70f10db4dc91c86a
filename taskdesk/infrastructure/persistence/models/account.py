"""Account ORM model (credentials held by the auth backend)."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from taskdesk.infrastructure.persistence.database import Base
from taskdesk.infrastructure.persistence.models.mixins import AppModel


class Account(AppModel, Base):
    """Sign-in account. Table: app_user. Email is stored lower-case and unique."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
