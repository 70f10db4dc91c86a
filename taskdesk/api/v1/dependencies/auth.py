"""Session, route guard and caller dependencies (composition root).

Every protected route goes through the same path: a per-request
SessionStore around the bearer token, a RouteGuard that evaluates the
navigation, and require_authorized() turning a denial into 401/403.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import tzinfo
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskdesk.application.dtos.session import Caller
from taskdesk.application.interfaces.repositories import (
    IAccountRepository,
    IProfileRepository,
)
from taskdesk.application.services.profile_resolver import ProfileResolver
from taskdesk.application.services.route_guard import Authorized, RouteGuard, RouteTable
from taskdesk.application.services.session_store import SessionStore
from taskdesk.api.v1.dependencies.db import (
    get_account_repository,
    get_account_repository_tx,
    get_profile_repository,
)
from taskdesk.core.config import get_settings
from taskdesk.domain.exceptions import RemoteFailureException, ResourceNotFoundException
from taskdesk.infrastructure.auth.token_backend import TokenAuthBackend
from taskdesk.shared.utils.datetime import resolve_zone

security = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    return credentials.credentials if credentials else None


def _backend(request: Request, accounts: IAccountRepository) -> TokenAuthBackend:
    return TokenAuthBackend(
        bus=request.app.state.auth_bus,
        revocations=request.app.state.revocations,
        account_repo=accounts,
    )


async def get_auth_backend(
    request: Request,
    accounts: Annotated[IAccountRepository, Depends(get_account_repository)],
) -> TokenAuthBackend:
    """Backend for session reads, sign-in, refresh and sign-out."""
    return _backend(request, accounts)


async def get_account_backend(
    request: Request,
    accounts: Annotated[IAccountRepository, Depends(get_account_repository_tx)],
) -> TokenAuthBackend:
    """Backend for account writes (sign-up, password update), in one transaction."""
    return _backend(request, accounts)


async def get_session_store(
    backend: Annotated[TokenAuthBackend, Depends(get_auth_backend)],
    token: Annotated[str | None, Depends(get_access_token)],
) -> AsyncIterator[SessionStore]:
    """Per-request SessionStore; every subscription is released when the request ends."""
    with SessionStore(backend, token) as store:
        yield store


async def get_profile_resolver(
    profile_repo: Annotated[IProfileRepository, Depends(get_profile_repository)],
) -> ProfileResolver:
    return ProfileResolver(profile_repo)


async def get_route_guard(
    store: Annotated[SessionStore, Depends(get_session_store)],
    resolver: Annotated[ProfileResolver, Depends(get_profile_resolver)],
) -> RouteGuard:
    settings = get_settings()
    return RouteGuard(
        store,
        resolver,
        login_path=settings.login_path,
        landing_path=settings.landing_path,
    )


def get_route_table(request: Request) -> RouteTable:
    return request.app.state.route_table


async def require_session(
    guard: Annotated[RouteGuard, Depends(get_route_guard)],
) -> Authorized:
    """Protected route: any signed-in user (401 otherwise)."""
    await guard.evaluate(admin_only=False)
    return guard.require_authorized()


async def require_admin(
    guard: Annotated[RouteGuard, Depends(get_route_guard)],
) -> Authorized:
    """Admin route: signed in (401) with an Admin profile (403)."""
    await guard.evaluate(admin_only=True)
    return guard.require_authorized()


async def get_caller(
    authorized: Annotated[Authorized, Depends(require_session)],
    resolver: Annotated[ProfileResolver, Depends(get_profile_resolver)],
) -> Caller:
    """The signed-in user with the admin flag from a fresh profile lookup.

    A missing profile or failed lookup degrades to a regular caller.
    """
    user_id = authorized.session.user_id
    try:
        profile = await resolver.resolve_profile(user_id)
    except (ResourceNotFoundException, RemoteFailureException):
        return Caller(user_id=user_id, is_admin=False)
    return Caller(user_id=user_id, is_admin=profile.is_admin)


async def get_admin_caller(
    authorized: Annotated[Authorized, Depends(require_admin)],
) -> Caller:
    return Caller(user_id=authorized.session.user_id, is_admin=True)


def get_timezone(request: Request) -> tzinfo:
    """Caller's zone from the timezone header, else DEFAULT_TIMEZONE."""
    settings = get_settings()
    return resolve_zone(
        request.headers.get(settings.timezone_header), settings.default_timezone
    )
