"""Profile repository (role, department, admin user listings)."""

from __future__ import annotations

from sqlalchemy import distinct, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.profile import Profile as ProfileResult
from taskdesk.application.dtos.profile import UserListItem
from taskdesk.domain.enums import ProfileRole
from taskdesk.infrastructure.persistence.models.account import Account
from taskdesk.infrastructure.persistence.models.profile import Profile
from taskdesk.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)


def _to_result(p: Profile) -> ProfileResult:
    return ProfileResult(
        id=p.id,
        first_name=p.first_name,
        role=ProfileRole(p.role),
        department=p.department,
    )


class ProfileRepository(BaseRepository[Profile]):
    """Profile repository. Implements IProfileRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Profile)

    @translate_db_errors("profile.get")
    async def get_by_id(self, user_id: str) -> ProfileResult | None:
        profile = await self._get(user_id)
        return _to_result(profile) if profile else None

    @translate_db_errors("profile.list_users")
    async def list_users(self) -> list[UserListItem]:
        result = await self.db.execute(
            select(Profile, Account.email)
            .join(Account, Account.id == Profile.id)
            .order_by(Profile.first_name, Profile.id)
        )
        return [
            UserListItem(
                id=profile.id,
                first_name=profile.first_name,
                email=email,
                role=ProfileRole(profile.role),
                department=profile.department,
            )
            for profile, email in result.all()
        ]

    @translate_db_errors("profile.list_departments")
    async def list_departments(self) -> list[str]:
        result = await self.db.execute(
            select(distinct(Profile.department))
            .where(Profile.department.is_not(None), Profile.department != "")
            .order_by(Profile.department)
        )
        return [d for d in result.scalars().all() if d]
