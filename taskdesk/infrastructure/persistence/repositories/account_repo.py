"""Account repository used by the token auth backend."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.account import AccountResult, RegistrationData
from taskdesk.domain.enums import ProfileRole
from taskdesk.domain.exceptions import ResourceNotFoundException, ValidationException
from taskdesk.infrastructure.persistence.models.account import Account
from taskdesk.infrastructure.persistence.models.profile import Profile
from taskdesk.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)


def _to_result(a: Account) -> AccountResult:
    return AccountResult(
        id=a.id,
        email=a.email,
        hashed_password=a.hashed_password,
        is_active=a.is_active,
    )


class AccountRepository(BaseRepository[Account]):
    """Account repository. Implements IAccountRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Account)

    @translate_db_errors("account.get_by_email")
    async def get_by_email(self, email: str) -> AccountResult | None:
        result = await self.db.execute(
            select(Account).where(func.lower(Account.email) == email.strip().lower())
        )
        account = result.scalar_one_or_none()
        return _to_result(account) if account else None

    @translate_db_errors("account.get")
    async def get_by_id(self, user_id: str) -> AccountResult | None:
        account = await self._get(user_id)
        return _to_result(account) if account else None

    @translate_db_errors("account.create")
    async def create_with_profile(
        self, data: RegistrationData, hashed_password: str
    ) -> AccountResult:
        account = Account(email=data.email.strip().lower(), hashed_password=hashed_password)
        self.db.add(account)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise ValidationException("Email is already registered", field="email") from e
        self.db.add(
            Profile(
                id=account.id,
                first_name=data.first_name.strip(),
                role=ProfileRole.REGULAR.value,
                department=(data.department or "").strip() or None,
            )
        )
        await self.db.flush()
        await self.db.refresh(account)
        return _to_result(account)

    @translate_db_errors("account.update_password")
    async def update_password(self, user_id: str, hashed_password: str) -> None:
        account = await self._get(user_id)
        if account is None:
            raise ResourceNotFoundException("account", user_id)
        account.hashed_password = hashed_password
        await self.db.flush()
