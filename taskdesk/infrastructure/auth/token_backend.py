"""Token auth backend: issues, verifies, refreshes and revokes JWT sessions.

Plays the session-issuing collaborator. Accounts live in the database;
revoked session ids live in the revocation store; lifecycle events go to
the shared AuthEventBus.
"""

import logging

from taskdesk.application.dtos.account import RegistrationData
from taskdesk.application.dtos.session import Session, SessionChange
from taskdesk.application.interfaces.repositories import IAccountRepository
from taskdesk.application.interfaces.services import SessionChangeHandler, Unsubscribe
from taskdesk.domain.enums import AuthEvent
from taskdesk.domain.exceptions import AuthenticationException, ValidationException
from taskdesk.infrastructure.auth.events import AuthEventBus
from taskdesk.infrastructure.auth.revocation import SessionRevocationStore
from taskdesk.infrastructure.security.jwt import create_access_token, verify_token
from taskdesk.infrastructure.security.password import (
    get_password_hash,
    validate_new_password,
    verify_password,
)
from taskdesk.shared.utils.datetime import from_timestamp_utc
from taskdesk.shared.utils.generators import generate_session_id

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class TokenAuthBackend:
    """Implements IAuthBackend plus the account operations."""

    def __init__(
        self,
        bus: AuthEventBus,
        revocations: SessionRevocationStore,
        account_repo: IAccountRepository | None = None,
    ) -> None:
        self.bus = bus
        self.revocations = revocations
        self.account_repo = account_repo

    def _accounts(self) -> IAccountRepository:
        if self.account_repo is None:
            raise RuntimeError("TokenAuthBackend has no account repository")
        return self.account_repo

    def _issue(self, user_id: str) -> Session:
        session_id = generate_session_id()
        token, expires_at = create_access_token(user_id, session_id)
        return Session(
            access_token=token,
            user_id=user_id,
            session_id=session_id,
            expires_at=expires_at,
        )

    async def get_session(self, access_token: str | None) -> Session | None:
        if not access_token:
            return None
        try:
            payload = verify_token(access_token)
        except ValueError as e:
            logger.debug("Rejected token: %s", e)
            return None
        session_id = payload["sid"]
        if await self.revocations.is_revoked(session_id):
            return None
        user_id = payload["sub"]
        if self.account_repo is not None:
            account = await self.account_repo.get_by_id(user_id)
            if account is None or not account.is_active:
                return None
        return Session(
            access_token=access_token,
            user_id=user_id,
            session_id=session_id,
            expires_at=from_timestamp_utc(payload["exp"]),
        )

    def on_auth_state_change(self, handler: SessionChangeHandler) -> Unsubscribe:
        return self.bus.subscribe(handler)

    async def sign_up(self, data: RegistrationData) -> Session:
        """Create the account and its Regular profile, then sign in."""
        validate_new_password(data.password)
        if not data.first_name or not data.first_name.strip():
            raise ValidationException("First name is required", field="first_name")
        accounts = self._accounts()
        if await accounts.get_by_email(data.email) is not None:
            raise ValidationException("Email is already registered", field="email")
        account = await accounts.create_with_profile(data, get_password_hash(data.password))
        session = self._issue(account.id)
        await self.bus.publish(SessionChange(AuthEvent.SIGNED_IN, account.id, session))
        return session

    async def sign_in(self, email: str, password: str) -> Session:
        account = await self._accounts().get_by_email(email)
        if (
            account is None
            or not account.is_active
            or not verify_password(password, account.hashed_password)
        ):
            raise AuthenticationException(INVALID_CREDENTIALS)
        session = self._issue(account.id)
        await self.bus.publish(SessionChange(AuthEvent.SIGNED_IN, account.id, session))
        return session

    async def refresh(self, session: Session) -> Session:
        """Replace session wholesale; the old session id stops working."""
        await self.revocations.revoke(session.session_id, session.expires_at)
        renewed = self._issue(session.user_id)
        await self.bus.publish(
            SessionChange(
                AuthEvent.TOKEN_REFRESHED,
                session.user_id,
                renewed,
                ended_session_id=session.session_id,
            )
        )
        return renewed

    async def sign_out(self, session: Session) -> None:
        """Revoke the session; listeners hear about it even if the shared store write fails."""
        try:
            await self.revocations.revoke(session.session_id, session.expires_at)
        finally:
            await self.bus.publish(
                SessionChange(
                    AuthEvent.SIGNED_OUT, session.user_id, ended_session_id=session.session_id
                )
            )

    async def update_password(
        self, session: Session, new_password: str, confirmation: str
    ) -> None:
        validate_new_password(new_password, confirmation)
        await self._accounts().update_password(
            session.user_id, get_password_hash(new_password)
        )
        await self.bus.publish(
            SessionChange(AuthEvent.USER_UPDATED, session.user_id, session)
        )
