# Role: Per-session state container. Holds the append-only message log, the pending input buffer
# and the outstanding-request flag. Owned by exactly one ChatSession.

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

from savage_dev.models.message import Message


class ChatState(BaseModel):
    session_id: str
    messages: List[Message] = Field(default_factory=list)

    input_text: str = ""

    # Key line: the single gate that serializes submissions.
    is_loading: bool = False

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
