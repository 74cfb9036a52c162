# Role: Chat Session Controller. Owns one session's message log, input buffer and outstanding-request flag.
# One submission = one user message now, one generation call, one assistant message (reply or in-character fallback).

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

import savage_dev.config as config
from savage_dev.llm.gemini_client import GeminiClient, GenerationResult
from savage_dev.models.message import Message, Role
from savage_dev.models.state import ChatState
from savage_dev.prompts.fallback_replies import EMPTY_REPLY, ERROR_REPLY
from savage_dev.prompts.system_prompt import build_system_prompt

logger = logging.getLogger(__name__)


class ChatSession:
    def __init__(
        self,
        session_id: str,
        client: Optional[GeminiClient] = None,
        system_instruction: Optional[str] = None,
    ) -> None:
        # Key line: the client is injectable for testing/mocking; one client can serve many sessions.
        self._client = client or GeminiClient()
        self._system_instruction = system_instruction or build_system_prompt()
        self._state = ChatState(session_id=session_id)

    @property
    def session_id(self) -> str:
        return self._state.session_id

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._state.messages)

    @property
    def input_text(self) -> str:
        return self._state.input_text

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def updated_at(self) -> datetime:
        return self._state.updated_at

    def snapshot(self) -> ChatState:
        return self._state.model_copy(deep=True)

    def set_input(self, text: str) -> None:
        self._state.input_text = text
        self._touch()

    async def submit(self, text: Optional[str] = None) -> Optional[Message]:
        """
        Submit one user turn and wait for the assistant turn.

        Returns the appended assistant message, or None when the submission was
        rejected (blank text, or a request is already outstanding). Everything up
        to the generation call runs before the first await, so the user message is
        in the log even if the call never succeeds.
        """
        raw = self._state.input_text if text is None else text
        if not raw.strip() or self._state.is_loading:
            return None

        user_text = raw.strip()
        self._append("user", user_text)
        self._state.input_text = ""
        self._state.is_loading = True

        if config.DEBUG:
            logger.debug("session=%s submitting prompt=%r", self.session_id, user_text[:200])

        try:
            content = await self._generate_reply(user_text)
            return self._append("assistant", content)
        finally:
            self._state.is_loading = False
            self._touch()

    async def _generate_reply(self, prompt: str) -> str:
        # 1) Call the client once
        # 2) Failure (raised or reported) -> ERROR_REPLY, details go to the log only
        # 3) Empty success -> EMPTY_REPLY; otherwise the service text as-is
        try:
            result: GenerationResult = await self._client.generate(prompt, self._system_instruction)
        except Exception:
            logger.exception("AI Error: generation raised for session=%s", self.session_id)
            return ERROR_REPLY

        if not result.ok:
            logger.error("AI Error: session=%s %s", self.session_id, result.error)
            return ERROR_REPLY

        if not result.text:
            logger.warning("AI returned no text for session=%s", self.session_id)
            return EMPTY_REPLY

        if config.DEBUG:
            logger.debug("session=%s reply preview=%r", self.session_id, result.text[:200])

        return result.text

    def _append(self, role: Role, content: str) -> Message:
        message = Message(role=role, content=content)
        self._state.messages.append(message)
        self._touch()
        return message

    def _touch(self) -> None:
        self._state.updated_at = datetime.now(timezone.utc)
