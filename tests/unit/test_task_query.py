"""Filter/query composition: scope, predicates, local-day ranges."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from taskdesk.application.services.task_query import (
    BaseScope,
    FilterPredicates,
    QuerySpec,
    ScopeKind,
    compose,
)
from taskdesk.domain.enums import TaskPriority, TaskStatus
from taskdesk.domain.exceptions import ValidationException
from tests.fakes import InMemoryTaskRepository


def test_compose_with_all_filters_equals_compose_with_none() -> None:
    scope = BaseScope.own("u1")
    explicit_all = FilterPredicates.from_params(
        day="all", priority="all", status="all", user_id="all", department="all"
    )
    blank = FilterPredicates.from_params(day="", priority="", status="")
    assert compose(explicit_all, scope) == compose(FilterPredicates(), scope)
    assert compose(blank, scope) == compose(FilterPredicates(), scope)


def test_own_scope_pins_user_id_whatever_the_predicates_say() -> None:
    predicates = FilterPredicates(user_id="someone-else", department="Sales")
    spec = compose(predicates, BaseScope.own("u1"))
    assert spec.equals_map() == {"user_id": "u1"}
    assert spec.department is None


def test_all_users_scope_uses_user_and_department_predicates() -> None:
    predicates = FilterPredicates(
        user_id="u7", department="Sales", status=TaskStatus.COMPLETED
    )
    spec = compose(predicates, BaseScope.all_users("admin"))
    assert spec.equals_map() == {"user_id": "u7", "status": "completed"}
    assert spec.department == "Sales"


def test_for_caller_only_grants_all_users_to_admins_asking_for_it() -> None:
    assert BaseScope.for_caller("u1", is_admin=False, view_all=True).kind is ScopeKind.OWN
    assert BaseScope.for_caller("a1", is_admin=True, view_all=False).kind is ScopeKind.OWN
    assert BaseScope.for_caller("a1", is_admin=True, view_all=True).kind is ScopeKind.ALL_USERS


def test_compose_orders_newest_first() -> None:
    spec = compose(FilterPredicates(), BaseScope.own("u1"))
    assert spec.order_by == "created_at"
    assert spec.descending is True


def test_equal_predicates_compose_to_equal_specs_regardless_of_order() -> None:
    a = compose(
        FilterPredicates(status=TaskStatus.PENDING, priority=TaskPriority.HIGH),
        BaseScope.own("u1"),
    )
    b = compose(
        FilterPredicates(priority=TaskPriority.HIGH, status=TaskStatus.PENDING),
        BaseScope.own("u1"),
    )
    assert a == b


def test_day_filter_is_inclusive_local_day_in_caller_zone() -> None:
    tz = ZoneInfo("Africa/Kampala")  # UTC+3
    day = date(2026, 4, 29)
    spec = compose(FilterPredicates(day=day), BaseScope.own("u1"), tz=tz)
    (rng,) = spec.ranges
    last_moment = datetime(2026, 4, 29, 23, 59, 59, 999000, tzinfo=tz)
    next_day = datetime(2026, 4, 30, 0, 0, 0, 0, tzinfo=tz)
    first_moment = datetime(2026, 4, 29, 0, 0, 0, tzinfo=tz)
    assert rng.contains(last_moment)
    assert rng.contains(first_moment)
    assert not rng.contains(next_day)
    assert not rng.contains(first_moment - timedelta(microseconds=1))
    assert rng.lower == datetime(2026, 4, 28, 21, 0, tzinfo=UTC)


def test_from_params_rejects_unknown_values() -> None:
    with pytest.raises(ValidationException) as exc_info:
        FilterPredicates.from_params(status="archived")
    assert exc_info.value.details["field"] == "status"
    with pytest.raises(ValidationException):
        FilterPredicates.from_params(priority="urgent")
    with pytest.raises(ValidationException):
        FilterPredicates.from_params(day="29/04/2026")


def test_with_range_keeps_existing_predicates() -> None:
    base = compose(FilterPredicates(status=TaskStatus.PENDING), BaseScope.own("u1"))
    lower = datetime(2026, 4, 1, tzinfo=UTC)
    upper = datetime(2026, 4, 30, tzinfo=UTC)
    extended = base.with_range("created_at", lower, upper)
    assert extended.equals == base.equals
    assert len(extended.ranges) == 1
    assert isinstance(extended, QuerySpec)


async def test_regular_user_with_own_scope_only_sees_own_tasks() -> None:
    repo = InMemoryTaskRepository()
    repo.add("u1", "mine")
    repo.add("u2", "theirs")
    repo.add("u1", "mine too", status=TaskStatus.COMPLETED)
    spec = compose(
        FilterPredicates.from_params(user_id="u2"),
        BaseScope.for_caller("u1", is_admin=False, view_all=True),
    )
    rows = await repo.list_tasks(spec)
    assert {t.user_id for t in rows} == {"u1"}
    assert [t.title for t in rows] == ["mine too", "mine"]
