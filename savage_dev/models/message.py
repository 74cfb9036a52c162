# Role: Single chat message schema for the session log (id + role + content + timestamp).
# Frozen so a logged turn can never be edited after it is appended.

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]


def _new_message_id() -> str:
    return str(uuid.uuid4())


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_message_id)
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
