from unittest.mock import AsyncMock, MagicMock

import pytest

from botbuilder.core import MemoryStorage

from tests.factories import CountingConversationState, RecordingAdapter, luis_result

ENV_VARS = [
    "MICROSOFT_APP_ID", "MicrosoftAppId", "MICROSOFT_APP_PASSWORD", "MicrosoftAppPassword",
    "MICROSOFT_APP_TENANT_ID", "MicrosoftAppTenantId", "MICROSOFT_APP_TYPE", "MicrosoftAppType",
    "QNA_KNOWLEDGEBASE_ID", "QNA_ENDPOINT_KEY", "QNA_ENDPOINT_HOST", "QNA_TIMEOUT_MS",
    "LUIS_APP_ID", "LUIS_API_KEY", "LUIS_API_HOST_NAME", "LUIS_TIMEOUT_MS",
    "INTENT_DEBUG_REPLIES", "APPLICATIONINSIGHTS_CONNECTION_STRING", "PORT",
    "DEPLOY_SITE", "DEPLOY_USERNAME", "DEPLOY_PASSWORD", "DEPLOY_URL", "DEPLOY_ZIP_PATH", "DEPLOY_TIMEOUT", "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Cada test arranca sin configuración heredada del entorno."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def adapter():
    return RecordingAdapter()


@pytest.fixture
def conversation_state():
    return CountingConversationState(MemoryStorage())


@pytest.fixture
def qna_maker():
    mock = MagicMock()
    mock.get_answers = AsyncMock(return_value=[])
    return mock


@pytest.fixture
def recognizer():
    mock = MagicMock()
    mock.recognize = AsyncMock(return_value=luis_result("None", 0.42))
    return mock
