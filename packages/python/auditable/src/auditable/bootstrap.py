"""Process-wide wiring: configuration -> sink -> publisher.

Hosts that need nothing special rely on ``AUDIT_*`` environment variables;
others call :func:`configure` once at startup.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from audit_common import AuditConfig

from auditable.actor import ActorProvider, load_actor_provider
from auditable.errors import SinkError
from auditable.factory import AuditEventFactory
from auditable.publisher import AuditPublisher, SinkPublisher
from auditable.sinks import HttpSink, JsonlSink, LoggingSink, MemorySink, Sink

log = logging.getLogger(__name__)

_publisher: AuditPublisher | None = None


@lru_cache(maxsize=1)
def get_config() -> AuditConfig:
    """Return the global AuditConfig (resolved once, cached)."""
    return AuditConfig()


def build_sink(cfg: AuditConfig) -> Sink:
    if cfg.sink == "jsonl":
        return JsonlSink(cfg.events_dir)
    if cfg.sink == "http":
        return HttpSink(cfg.http_url, token=cfg.http_token or None, timeout=cfg.publish_timeout)
    if cfg.sink == "logging":
        return LoggingSink()
    if cfg.sink == "memory":
        return MemorySink()
    raise SinkError(f"Unknown sink: {cfg.sink!r}")


def build_publisher(
    cfg: AuditConfig,
    actor_provider: ActorProvider | None = None,
) -> SinkPublisher:
    if actor_provider is None:
        try:
            actor_provider = load_actor_provider(cfg.actor_provider)
        except Exception as exc:
            log.warning("Actor provider %r unavailable, actor info will be empty: %s", cfg.actor_provider, exc)
    factory = AuditEventFactory(service_name=cfg.service_name, actor_provider=actor_provider)
    log.info("Configuring %s audit publisher for service %s", cfg.sink, factory.service_name)
    return SinkPublisher(
        build_sink(cfg),
        factory=factory,
        destination_suffix=cfg.destination_suffix,
        background=cfg.background_publish,
    )


def configure(
    publisher: AuditPublisher | None = None,
    *,
    config: AuditConfig | None = None,
    actor_provider: ActorProvider | None = None,
) -> AuditPublisher:
    """Install the process-wide publisher used by ``@auditable`` by default."""
    global _publisher
    if publisher is None:
        publisher = build_publisher(config or get_config(), actor_provider=actor_provider)
    _publisher = publisher
    return publisher


def get_publisher() -> AuditPublisher:
    """Return the process-wide publisher, building it from config on first use."""
    if _publisher is None:
        return configure()
    return _publisher


def reset() -> None:
    """Forget the installed publisher and cached config."""
    global _publisher
    _publisher = None
    get_config.cache_clear()
