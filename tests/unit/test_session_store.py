"""SessionStore: session reads and subscription lifetime."""

import pytest

from taskdesk.application.dtos.session import SessionChange
from taskdesk.application.services.session_store import SessionStore
from taskdesk.domain.enums import AuthEvent
from tests.fakes import FakeAuthBackend


async def test_get_current_session_returns_backend_session() -> None:
    backend = FakeAuthBackend()
    session = backend.add_session("u1")
    store = SessionStore(backend, session.access_token)
    assert await store.get_current_session() == session


async def test_no_token_means_no_session_without_calling_backend() -> None:
    backend = FakeAuthBackend()
    store = SessionStore(backend, None)
    assert await store.get_current_session() is None
    assert backend.calls == 0


async def test_backend_failure_reads_as_signed_out() -> None:
    backend = FakeAuthBackend()
    session = backend.add_session("u1")
    backend.fail = True
    store = SessionStore(backend, session.access_token)
    assert await store.get_current_session() is None


def test_close_releases_every_subscription() -> None:
    backend = FakeAuthBackend()
    store = SessionStore(backend, None)
    received: list[SessionChange] = []
    store.on_session_change(received.append)
    store.on_session_change(received.append)
    assert len(backend.handlers) == 2
    store.close()
    assert backend.handlers == []
    assert store.subscription_count == 0
    backend.emit(SessionChange(AuthEvent.SIGNED_OUT, "u1"))
    assert received == []


def test_unsubscribe_is_idempotent() -> None:
    backend = FakeAuthBackend()
    store = SessionStore(backend, None)
    unsubscribe = store.on_session_change(lambda change: None)
    unsubscribe()
    unsubscribe()
    assert backend.handlers == []
    assert store.subscription_count == 0
    store.close()
    store.close()


def test_context_manager_closes_store() -> None:
    backend = FakeAuthBackend()
    with SessionStore(backend, None) as store:
        store.on_session_change(lambda change: None)
    assert store.closed
    assert backend.handlers == []
    with pytest.raises(RuntimeError):
        store.on_session_change(lambda change: None)
