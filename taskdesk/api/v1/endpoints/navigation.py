"""Navigation API: runs the route guard for a client path.

Clients call this on every navigation and render the page only on
state == "authorized"; on "denied" they redirect (replacing history) and
show the notice, if any.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from taskdesk.api.v1.dependencies import get_route_guard, get_route_table
from taskdesk.application.services.route_guard import (
    AccessLevel,
    Authorized,
    Denied,
    RouteGuard,
    RouteTable,
)
from taskdesk.domain.exceptions import ResourceNotFoundException
from taskdesk.schemas.navigation import NavigationResponse

router = APIRouter()


@router.get("/resolve", response_model=NavigationResponse)
async def resolve_navigation(
    guard: Annotated[RouteGuard, Depends(get_route_guard)],
    routes: Annotated[RouteTable, Depends(get_route_table)],
    path: Annotated[str, Query(min_length=1)],
):
    """Return the guard decision for path (unknown paths are 404)."""
    resolved = routes.resolve(path)
    if resolved is None:
        raise ResourceNotFoundException("route", path)
    rule, params = resolved
    if rule.access is AccessLevel.PUBLIC:
        return NavigationResponse(
            path=path, access=rule.access.value, state="authorized", params=params
        )
    state = await guard.evaluate(admin_only=rule.access is AccessLevel.ADMIN)
    if isinstance(state, Authorized):
        return NavigationResponse(
            path=path, access=rule.access.value, state="authorized", params=params
        )
    if isinstance(state, Denied):
        return NavigationResponse(
            path=path,
            access=rule.access.value,
            state="denied",
            params=params,
            redirect_to=state.redirect_to,
            replace=state.replace,
            notice=state.notice,
        )
    return NavigationResponse(
        path=path, access=rule.access.value, state="checking", params=params
    )
