# Role: Minimal async wrapper around the Gemini API. Centralizes model name, temperature and error handling,
# so the rest of the code calls a single method: generate(prompt, system_instruction) -> GenerationResult.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from google import genai
from google.genai import types

from savage_dev.config import require_api_key

logger = logging.getLogger(__name__)

MODEL_NAME = "gemini-3-flash-preview"


@dataclass(frozen=True)
class GenerationResult:
    ok: bool
    text: Optional[str] = None
    error: Optional[str] = None


class GeminiClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> None:
        # Key lines:
        # - Reads secrets from env (no secrets in code); raises MissingApiKeyError when absent.
        # - temperature=None leaves the service default in place.
        self.api_key = api_key or require_api_key()
        self.model_name = model or MODEL_NAME
        self.temperature = temperature

        self.client = genai.Client(api_key=self.api_key)

    async def generate(self, prompt: str, system_instruction: str) -> GenerationResult:
        # 1) Validate prompt
        # 2) Call Gemini (single text completion, persona as system instruction)
        # 3) Map failures and empty text into the result instead of raising
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must be non-empty.")

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=self.temperature,
        )

        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            )
            text = getattr(resp, "text", None)
        except Exception as e:
            logger.debug("Gemini call failed: %r", e)
            return GenerationResult(ok=False, error=f"Gemini API call failed: {e!r}")

        # Key line: the reply is passed on untouched; only a missing or "" text counts as empty.
        if not isinstance(text, str) or not text:
            return GenerationResult(ok=True, text=None)

        return GenerationResult(ok=True, text=text)
