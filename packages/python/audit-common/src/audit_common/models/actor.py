"""Actor snapshot model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

ACTOR_FIELDS = ("sub", "email", "username", "first_name", "last_name", "role")


class ActorSnapshot(BaseModel):
    """Read-only view of whoever initiated the wrapped call.

    Every field is optional: an empty snapshot means the actor is unknown.
    """

    model_config = ConfigDict(frozen=True)

    sub: str | None = None
    email: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in ACTOR_FIELDS)
