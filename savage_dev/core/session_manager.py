# Role: In-memory session store. Owns lifecycle of ChatSession controllers:
# create/get by session_id, drop, and cleanup of idle sessions. Nothing is persisted.

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from savage_dev.core.chat_session import ChatSession
from savage_dev.llm.gemini_client import GeminiClient


class SessionManager:
    def __init__(self, client: Optional[GeminiClient] = None, session_ttl_minutes: int = 60) -> None:
        # Key line: lazy-init so constructing the manager never needs credentials.
        self._client = client
        self._sessions: Dict[str, ChatSession] = {}
        self._ttl = timedelta(minutes=session_ttl_minutes)

    def _get_client(self) -> GeminiClient:
        if self._client is None:
            self._client = GeminiClient()
        return self._client

    def create(self) -> ChatSession:
        return self.get_or_create(str(uuid.uuid4()))

    def get(self, session_id: str) -> Optional[ChatSession]:
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> ChatSession:
        # Reuse existing session or initialize a fresh one.
        session = self._sessions.get(session_id)
        if session is None:
            session = ChatSession(session_id, client=self._get_client())
            self._sessions[session_id] = session
        return session

    def drop(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)

    def cleanup_expired(self) -> int:
        # Role: drop inactive sessions to avoid unbounded growth (best for long-running servers).
        # A session with a request in flight is never dropped.
        now = datetime.now(timezone.utc)
        to_delete = [
            sid
            for sid, session in self._sessions.items()
            if not session.is_loading and (now - session.updated_at) > self._ttl
        ]
        for sid in to_delete:
            del self._sessions[sid]
        return len(to_delete)
