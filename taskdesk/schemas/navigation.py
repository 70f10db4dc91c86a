"""Navigation (route guard) schemas."""

from pydantic import BaseModel


class NavigationResponse(BaseModel):
    """Guard decision for a client path."""

    path: str
    access: str
    state: str
    params: dict[str, str] = {}
    redirect_to: str | None = None
    replace: bool = False
    notice: str | None = None
