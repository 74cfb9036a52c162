"""
test_gemini_client.py - GeminiClient tests

The google-genai SDK is mocked; checks cover:
1. Credential resolution at construction
2. Request shape (model, contents, system instruction)
3. Mapping of SDK failures and empty text into GenerationResult
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from savage_dev.config import MissingApiKeyError
from savage_dev.core.chat_session import ChatSession
from savage_dev.llm.gemini_client import MODEL_NAME, GeminiClient, GenerationResult
from savage_dev.prompts.fallback_replies import ERROR_REPLY

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_genai_client():
    """Patched genai.Client whose aio.models.generate_content is an AsyncMock."""
    with patch("savage_dev.llm.gemini_client.genai.Client") as MockClient:
        instance = MagicMock()
        instance.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text="Use a database."))
        MockClient.return_value = instance
        yield MockClient


@pytest.fixture
def client(mock_genai_client) -> GeminiClient:
    return GeminiClient(api_key="test-api-key")


def _generate_mock(client: GeminiClient) -> AsyncMock:
    return client.client.aio.models.generate_content


# =============================================================================
# 1. Construction
# =============================================================================


class TestGeminiClientInit:
    """Credential and model resolution."""

    def test_explicit_key(self, mock_genai_client):
        """An explicit key is passed to the SDK."""
        c = GeminiClient(api_key="abc")

        assert c.api_key == "abc"
        assert c.model_name == MODEL_NAME
        mock_genai_client.assert_called_once_with(api_key="abc")

    def test_key_from_env(self, mock_genai_client, no_api_key, monkeypatch):
        """GEMINI_API_KEY is read from the environment."""
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")

        assert GeminiClient().api_key == "from-env"

    def test_fallback_env_name(self, mock_genai_client, no_api_key, monkeypatch):
        """API_KEY is honoured when GEMINI_API_KEY is absent."""
        monkeypatch.setenv("API_KEY", "fallback")

        assert GeminiClient().api_key == "fallback"

    def test_missing_key_raises(self, mock_genai_client, no_api_key):
        """No credential -> MissingApiKeyError, SDK never constructed."""
        with pytest.raises(MissingApiKeyError):
            GeminiClient()
        mock_genai_client.assert_not_called()

    def test_model_override(self, mock_genai_client):
        """Model can be overridden for experiments."""
        assert GeminiClient(api_key="k", model="gemini-2.5-flash").model_name == "gemini-2.5-flash"


# =============================================================================
# 2. generate()
# =============================================================================


class TestGenerate:
    """Request shape and result mapping."""

    @pytest.mark.asyncio
    async def test_success(self, client: GeminiClient):
        """Text is returned in an ok result."""
        result = await client.generate("Where do I keep my users?", "be rude")

        assert result == GenerationResult(ok=True, text="Use a database.")

    @pytest.mark.asyncio
    async def test_request_shape(self, client: GeminiClient):
        """Model, prompt and system instruction reach the SDK."""
        await client.generate("What is REST?", "You are a tutor.")

        kwargs = _generate_mock(client).await_args.kwargs
        assert kwargs["model"] == MODEL_NAME
        assert kwargs["contents"] == "What is REST?"
        assert kwargs["config"].system_instruction == "You are a tutor."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["\n  Use a queue.  \n", "   "])
    async def test_text_returned_verbatim(self, client: GeminiClient, text: str):
        """Padded or whitespace-only text comes back untouched."""
        _generate_mock(client).return_value = SimpleNamespace(text=text)

        result = await client.generate("q", "s")

        assert result == GenerationResult(ok=True, text=text)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, ""])
    async def test_empty_text(self, client: GeminiClient, text):
        """Absent or empty text is an ok result without text."""
        _generate_mock(client).return_value = SimpleNamespace(text=text)

        result = await client.generate("q", "s")

        assert result.ok is True
        assert result.text is None

    @pytest.mark.asyncio
    async def test_response_without_text_attribute(self, client: GeminiClient):
        """A response object lacking .text is treated as empty."""
        _generate_mock(client).return_value = object()

        result = await client.generate("q", "s")

        assert result == GenerationResult(ok=True, text=None)

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_failed_result(self, client: GeminiClient):
        """SDK exceptions do not escape; they are reported."""
        _generate_mock(client).side_effect = ConnectionError("network down")

        result = await client.generate("q", "s")

        assert result.ok is False
        assert result.text is None
        assert "network down" in result.error

    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", ["", "   "])
    async def test_blank_prompt_rejected(self, client: GeminiClient, prompt: str):
        """Blank prompts are a caller bug."""
        with pytest.raises(ValueError):
            await client.generate(prompt, "s")
        _generate_mock(client).assert_not_awaited()


# =============================================================================
# 3. Through a ChatSession
# =============================================================================


class TestWithChatSession:
    """The real client wired into the controller, SDK mocked."""

    @pytest.mark.asyncio
    async def test_insult_reaches_log_verbatim(self, client: GeminiClient):
        """Service text lands in the log exactly as the SDK returned it."""
        insult = "\nWeather? Go debug a cloud, script kiddie.\n"
        _generate_mock(client).return_value = SimpleNamespace(text=insult)
        session = ChatSession("s-verbatim", client=client)

        reply = await session.submit("How's the weather?")

        assert reply.content == insult
        assert [(m.role, m.content) for m in session.messages] == [
            ("user", "How's the weather?"),
            ("assistant", insult),
        ]
        assert session.is_loading is False

    @pytest.mark.asyncio
    async def test_sdk_failure_becomes_error_reply(self, client: GeminiClient):
        """An SDK exception ends as the in-character error message."""
        _generate_mock(client).side_effect = TimeoutError("read timed out")
        session = ChatSession("s-error", client=client)

        reply = await session.submit("What is REST?")

        assert reply.content == ERROR_REPLY
        assert session.is_loading is False
