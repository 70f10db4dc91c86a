"""Task filter composition.

Turns the user-facing filter predicates plus the caller's base scope into a
QuerySpec that the task repository applies in SQL. Composition is pure: no
I/O and no clock reads, so the same inputs always produce the same spec.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from enum import Enum
from typing import Any

from taskdesk.domain.enums import TaskPriority, TaskStatus
from taskdesk.domain.exceptions import ValidationException
from taskdesk.shared.utils.datetime import ensure_utc, local_day_bounds

ALL = "all"


def _unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in ("", ALL))


def _parse_enum[E: Enum](enum_cls: type[E], value: Any, field: str) -> E | None:
    if _unset(value):
        return None
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationException(
            f"Invalid {field} '{value}'. Allowed: {allowed}, {ALL}", field=field
        ) from e


def _parse_day(value: Any) -> date | None:
    if _unset(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValidationException(
            f"Invalid date '{value}'. Expected YYYY-MM-DD", field="date"
        ) from e


@dataclass(frozen=True)
class FilterPredicates:
    """User-selected filters. None means "all" (no constraint)."""

    day: date | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    user_id: str | None = None
    department: str | None = None

    @classmethod
    def from_params(
        cls,
        day: Any = None,
        priority: Any = None,
        status: Any = None,
        user_id: Any = None,
        department: Any = None,
    ) -> "FilterPredicates":
        """Build predicates from raw query values, treating "all" and "" as unset."""
        return cls(
            day=_parse_day(day),
            priority=_parse_enum(TaskPriority, priority, "priority"),
            status=_parse_enum(TaskStatus, status, "status"),
            user_id=None if _unset(user_id) else str(user_id).strip(),
            department=None if _unset(department) else str(department).strip(),
        )


class ScopeKind(str, Enum):
    OWN = "own"
    ALL_USERS = "all_users"


@dataclass(frozen=True)
class BaseScope:
    """Whose tasks a query may return.

    OWN pins the query to the caller whatever the predicates say. ALL_USERS is
    only handed out to admins.
    """

    kind: ScopeKind
    caller_id: str

    @classmethod
    def own(cls, caller_id: str) -> "BaseScope":
        return cls(ScopeKind.OWN, caller_id)

    @classmethod
    def all_users(cls, caller_id: str) -> "BaseScope":
        return cls(ScopeKind.ALL_USERS, caller_id)

    @classmethod
    def for_caller(cls, caller_id: str, is_admin: bool, view_all: bool = False) -> "BaseScope":
        """ALL_USERS only when an admin explicitly asks to see every user's tasks."""
        if is_admin and view_all:
            return cls.all_users(caller_id)
        return cls.own(caller_id)


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive range on a timestamp column (UTC)."""

    column: str
    lower: datetime
    upper: datetime

    def contains(self, value: datetime | None) -> bool:
        value = ensure_utc(value)
        return value is not None and self.lower <= value <= self.upper


@dataclass(frozen=True)
class QuerySpec:
    """Declarative task query: equality and range predicates plus ordering.

    equals holds (column, value) pairs sorted by column so that equal
    filters compare equal. department filters on the owner's profile.
    """

    equals: tuple[tuple[str, str], ...] = ()
    ranges: tuple[RangeFilter, ...] = ()
    department: str | None = None
    order_by: str = "created_at"
    descending: bool = True

    def equals_map(self) -> dict[str, str]:
        return dict(self.equals)

    def with_range(self, column: str, lower: datetime, upper: datetime) -> "QuerySpec":
        """Return a copy with one more inclusive range predicate."""
        return QuerySpec(
            equals=self.equals,
            ranges=(*self.ranges, RangeFilter(column, lower, upper)),
            department=self.department,
            order_by=self.order_by,
            descending=self.descending,
        )

    def matches(self, row: Any, owner_department: str | None = None) -> bool:
        """Return True if row (any object with task attributes) satisfies the spec.

        Used by in-memory repositories; the SQL repository applies the same
        predicates in the WHERE clause.
        """
        for column, expected in self.equals:
            actual = getattr(row, column, None)
            if str(getattr(actual, "value", actual)) != expected:
                return False
        for rng in self.ranges:
            if not rng.contains(getattr(row, rng.column, None)):
                return False
        if self.department is not None and owner_department != self.department:
            return False
        return True


def compose(
    predicates: FilterPredicates,
    base_scope: BaseScope,
    tz: tzinfo = UTC,
) -> QuerySpec:
    """Combine predicates and scope into a QuerySpec ordered newest first.

    Unset predicates add nothing, so composing all-"all" predicates equals
    composing empty ones. A day expands to the inclusive local-day range in tz,
    expressed in UTC.
    """
    equals: dict[str, str] = {}
    department: str | None = None

    if base_scope.kind is ScopeKind.OWN:
        equals["user_id"] = base_scope.caller_id
    else:
        if predicates.user_id is not None:
            equals["user_id"] = predicates.user_id
        department = predicates.department

    if predicates.status is not None:
        equals["status"] = predicates.status.value
    if predicates.priority is not None:
        equals["priority"] = predicates.priority.value

    ranges: tuple[RangeFilter, ...] = ()
    if predicates.day is not None:
        lower, upper = local_day_bounds(predicates.day, tz)
        ranges = (RangeFilter("created_at", lower, upper),)

    return QuerySpec(
        equals=tuple(sorted(equals.items())),
        ranges=ranges,
        department=department,
    )
