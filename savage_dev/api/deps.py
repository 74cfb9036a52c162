# Role: Shared dependencies for the routers. One SessionManager per process, created on first use
# so importing the API never needs credentials (tests override get_session_manager).

from __future__ import annotations

from typing import Optional

from fastapi import HTTPException

from savage_dev.core.chat_session import ChatSession
from savage_dev.core.session_manager import SessionManager

_session_manager: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager


def lookup_session(manager: SessionManager, session_id: str) -> ChatSession:
    session = manager.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session
