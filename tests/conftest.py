"""
Pytest fixtures shared by the SAVAGE_DEV tests.

No test talks to the network: the generation client is replaced by FakeClient,
and the google-genai SDK is mocked where GeminiClient itself is under test.
"""

import pytest

from savage_dev.core.chat_session import ChatSession

from fakes import FakeClient

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_client() -> FakeClient:
    """Client that answers "Use a database."."""
    return FakeClient()


@pytest.fixture
def session(fake_client: FakeClient) -> ChatSession:
    """ChatSession wired to fake_client."""
    s = ChatSession("test-session", client=fake_client)
    fake_client.observe = s
    return s


@pytest.fixture
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every credential variable from the environment."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
