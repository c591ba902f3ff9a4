"""Shared test fixtures."""

from __future__ import annotations

import pytest

from audit_common import ActorSnapshot
from auditable import bootstrap
from auditable.factory import AuditEventFactory
from auditable.publisher import SinkPublisher
from auditable.sinks import MemorySink


class StaticActorProvider:
    def __init__(self, actor: ActorSnapshot | None):
        self.actor = actor

    def current_actor(self) -> ActorSnapshot | None:
        return self.actor


@pytest.fixture(autouse=True)
def _reset_bootstrap():
    bootstrap.reset()
    yield
    bootstrap.reset()


@pytest.fixture
def actor() -> ActorSnapshot:
    return ActorSnapshot(
        sub="kc-123",
        email="ada@example.com",
        username="ada",
        first_name="Ada",
        last_name="Lovelace",
        role="ADMIN",
    )


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def publisher(sink: MemorySink, actor: ActorSnapshot) -> SinkPublisher:
    factory = AuditEventFactory(service_name="test-service", actor_provider=StaticActorProvider(actor))
    return SinkPublisher(sink, factory=factory)