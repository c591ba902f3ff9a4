"""Transports that receive finished audit documents.

A sink takes a destination name and the flat event document and reports
whether the transport accepted it. Sinks may raise; the publisher contains
the failure.
"""

from __future__ import annotations

import json
import logging
import threading
from collections import defaultdict
from pathlib import Path
from typing import Any, Protocol

import httpx

from audit_common import DEFAULT_PUBLISH_TIMEOUT

from auditable.errors import SinkError

log = logging.getLogger(__name__)


class Sink(Protocol):
    def send(self, destination: str, document: dict[str, Any]) -> bool: ...


class JsonlSink:
    """Appends one JSON line per event to ``<events_dir>/<destination>.jsonl``."""

    def __init__(self, events_dir: Path):
        self.events_dir = Path(events_dir)
        self._lock = threading.Lock()

    def path_for(self, destination: str) -> Path:
        if not destination or "/" in destination or destination.startswith("."):
            raise SinkError(f"Invalid destination name: {destination!r}")
        return self.events_dir / f"{destination}.jsonl"

    def send(self, destination: str, document: dict[str, Any]) -> bool:
        path = self.path_for(destination)
        line = json.dumps(document, default=str)
        with self._lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "a") as f:
                f.write(line + "\n")
        return True


class HttpSink:
    """POSTs each document to ``<base_url>/<destination>``."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_PUBLISH_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        if not base_url:
            raise SinkError("HttpSink requires a base URL (AUDIT_HTTP_URL)")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = client or httpx.Client(headers=headers)

    def send(self, destination: str, document: dict[str, Any]) -> bool:
        resp = self._client.post(f"{self.base_url}/{destination}", json=document, timeout=self.timeout)
        if not resp.is_success:
            log.warning("Audit sink %s answered %s", self.base_url, resp.status_code)
        return resp.is_success

    def close(self) -> None:
        self._client.close()


class MemorySink:
    """Keeps documents in memory, keyed by destination."""

    def __init__(self) -> None:
        self.documents: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self._lock = threading.Lock()

    def send(self, destination: str, document: dict[str, Any]) -> bool:
        with self._lock:
            self.documents[destination].append(document)
        return True

    def all(self) -> list[dict[str, Any]]:
        with self._lock:
            return [doc for docs in self.documents.values() for doc in docs]

    def clear(self) -> None:
        with self._lock:
            self.documents.clear()


class LoggingSink:
    """Writes each document to a logger at INFO."""

    def __init__(self, logger: logging.Logger | None = None):
        self._log = logger or logging.getLogger("auditable.events")

    def send(self, destination: str, document: dict[str, Any]) -> bool:
        self._log.info("%s %s", destination, json.dumps(document, default=str))
        return True
