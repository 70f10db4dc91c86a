"""Auth API: register, login, refresh, logout, password update, current profile.

The bearer token issued here is the session; the route guard dependencies
read it back on every protected request.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from taskdesk.api.v1.dependencies import (
    get_account_backend,
    get_auth_backend,
    get_profile_resolver,
    require_session,
)
from taskdesk.application.dtos.account import RegistrationData
from taskdesk.application.services.profile_resolver import ProfileResolver
from taskdesk.application.services.route_guard import Authorized
from taskdesk.core.limiter import limit_auth, limit_register, limit_writes
from taskdesk.infrastructure.auth.token_backend import TokenAuthBackend
from taskdesk.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    SessionResponse,
    UpdatePasswordRequest,
)
from taskdesk.schemas.profile import ProfileResponse

router = APIRouter()


@router.post("/register", response_model=SessionResponse, status_code=201)
@limit_register
async def register(
    request: Request,
    body: RegisterRequest,
    backend: Annotated[TokenAuthBackend, Depends(get_account_backend)],
):
    """Create an account with a Regular profile and sign in (public endpoint)."""
    session = await backend.sign_up(
        RegistrationData(
            email=str(body.email).lower(),
            password=body.password,
            first_name=body.first_name.strip(),
            department=body.department.strip() if body.department else None,
        )
    )
    return SessionResponse.model_validate(session)


@router.post("/login", response_model=SessionResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    backend: Annotated[TokenAuthBackend, Depends(get_auth_backend)],
):
    """Authenticate with email and password; return a bearer session."""
    session = await backend.sign_in(str(body.email).lower(), body.password)
    return SessionResponse.model_validate(session)


@router.post("/refresh", response_model=SessionResponse)
@limit_auth
async def refresh(
    request: Request,
    authorized: Annotated[Authorized, Depends(require_session)],
    backend: Annotated[TokenAuthBackend, Depends(get_auth_backend)],
):
    """Replace the current session; the old token stops working."""
    session = await backend.refresh(authorized.session)
    return SessionResponse.model_validate(session)


@router.post("/logout", status_code=204)
async def logout(
    authorized: Annotated[Authorized, Depends(require_session)],
    backend: Annotated[TokenAuthBackend, Depends(get_auth_backend)],
) -> Response:
    """Revoke the current session."""
    await backend.sign_out(authorized.session)
    return Response(status_code=204)


@router.put("/password", response_model=MessageResponse)
@limit_writes
async def update_password(
    request: Request,
    body: UpdatePasswordRequest,
    authorized: Annotated[Authorized, Depends(require_session)],
    backend: Annotated[TokenAuthBackend, Depends(get_account_backend)],
):
    """Change the signed-in user's password."""
    await backend.update_password(authorized.session, body.password, body.confirm_password)
    return MessageResponse(message="Password updated")


@router.get("/me", response_model=ProfileResponse)
async def get_me(
    authorized: Annotated[Authorized, Depends(require_session)],
    resolver: Annotated[ProfileResolver, Depends(get_profile_resolver)],
):
    """Return the signed-in user's profile."""
    profile = await resolver.resolve_profile(authorized.session.user_id)
    return ProfileResponse.model_validate(profile)
