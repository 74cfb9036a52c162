# Role: Request/response shapes shared by the HTTP routers. Kept apart from the domain models so the
# wire format can stay stable if ChatState grows.

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from savage_dev.models.message import Message, Role
from savage_dev.models.state import ChatState


class MessageOut(BaseModel):
    id: str
    role: Role
    content: str
    timestamp: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageOut":
        return cls(id=message.id, role=message.role, content=message.content, timestamp=message.timestamp)


class StateSnapshot(BaseModel):
    session_id: str
    messages: List[MessageOut]
    input_text: str
    is_loading: bool

    @classmethod
    def from_state(cls, state: ChatState) -> "StateSnapshot":
        return cls(
            session_id=state.session_id,
            messages=[MessageOut.from_message(m) for m in state.messages],
            input_text=state.input_text,
            is_loading=state.is_loading,
        )


class SessionCreated(BaseModel):
    session_id: str


class ChatRequest(BaseModel):
    session_id: str
    user_message: str


class ChatResponse(BaseModel):
    session_id: str
    accepted: bool
    user_message: Optional[MessageOut] = None
    assistant_message: Optional[MessageOut] = None


class InputUpdate(BaseModel):
    text: str
