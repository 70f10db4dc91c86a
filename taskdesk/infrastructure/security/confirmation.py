"""Signed, short-lived delete confirmation tokens."""

from datetime import timedelta

from taskdesk.application.dtos.task import DeletionTicket
from taskdesk.domain.exceptions import ValidationException
from taskdesk.infrastructure.security.jwt import encode_token, verify_token
from taskdesk.shared.utils.datetime import utc_now

DELETE_PURPOSE = "task-delete"


class DeleteConfirmationTokens:
    """Implements IConfirmationTokens with JWTs bound to task id and user id."""

    def __init__(self, ttl_seconds: int = 300) -> None:
        self.ttl = timedelta(seconds=ttl_seconds)

    def issue(self, task_id: str, user_id: str) -> DeletionTicket:
        expires_at = utc_now() + self.ttl
        token = encode_token(
            {"sub": user_id, "task_id": task_id, "purpose": DELETE_PURPOSE}, expires_at
        )
        return DeletionTicket(task_id=task_id, token=token, expires_at=expires_at)

    def verify(self, token: str, task_id: str, user_id: str) -> None:
        try:
            payload = verify_token(token, purpose=DELETE_PURPOSE)
        except ValueError as e:
            raise ValidationException(
                "Deletion confirmation is invalid or expired", field="confirmation"
            ) from e
        if payload.get("task_id") != task_id or payload.get("sub") != user_id:
            raise ValidationException(
                "Deletion confirmation does not match this task", field="confirmation"
            )
