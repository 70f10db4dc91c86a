"""Profile resolution for role checks."""

from taskdesk.application.dtos.profile import Profile
from taskdesk.application.interfaces.repositories import IProfileRepository
from taskdesk.domain.exceptions import ResourceNotFoundException
from taskdesk.shared.telemetry.tracing import traced


class ProfileResolver:
    """Fetches the profile for a user on every call (no caching)."""

    def __init__(self, profile_repo: IProfileRepository) -> None:
        self.profile_repo = profile_repo

    @traced("profile.resolve")
    async def resolve_profile(self, user_id: str) -> Profile:
        """Return the profile for user_id.

        Raises:
            ResourceNotFoundException: no profile row for user_id.
            RemoteFailureException: the backend call failed.
        """
        profile = await self.profile_repo.get_by_id(user_id)
        if profile is None:
            raise ResourceNotFoundException("profile", user_id)
        return profile
