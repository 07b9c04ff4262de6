import pytest
from unittest.mock import AsyncMock, MagicMock

from core.exceptions import ExternalServiceError, ValidationError
from core.usecase import ChatbotUseCase


@pytest.fixture
def chatbot():
    mock = AsyncMock()
    mock.validate_config = MagicMock(return_value=[])
    mock.send_message.return_value = {
        "reply": "Try three sets of ten.",
        "conversation_id": "conv-1",
        "timestamp": "2024-01-01T00:00:00Z",
    }
    mock.health_check.return_value = {"status": "ok"}
    return mock


@pytest.mark.asyncio
async def test_send_message_trims_text(chatbot):
    reply = await ChatbotUseCase(chatbot).send_message("user-1", "  How many reps?  ", "conv-1")

    assert reply["conversation_id"] == "conv-1"
    chatbot.send_message.assert_awaited_once_with("How many reps?", "user-1", "conv-1")


@pytest.mark.asyncio
@pytest.mark.parametrize("message", [None, "", "   "])
async def test_send_message_requires_text(chatbot, message):
    with pytest.raises(ValidationError, match="Message is required and cannot be empty"):
        await ChatbotUseCase(chatbot).send_message("user-1", message)


@pytest.mark.asyncio
async def test_send_message_length_limit(chatbot):
    with pytest.raises(ValidationError, match=r"max 2000 characters"):
        await ChatbotUseCase(chatbot).send_message("user-1", "x" * 2001)


@pytest.mark.asyncio
async def test_send_message_wraps_upstream_failure(chatbot):
    chatbot.send_message.side_effect = ExternalServiceError(
        "ChatBot API is not available", unavailable=True
    )

    with pytest.raises(ExternalServiceError) as exc_info:
        await ChatbotUseCase(chatbot).send_message("user-1", "hello")

    assert str(exc_info.value) == "Failed to process ChatBot request"
    assert exc_info.value.unavailable is True


@pytest.mark.asyncio
async def test_health_check_invalid_config(chatbot):
    chatbot.validate_config.return_value = ["CHATBOT_API_URL is not configured"]

    with pytest.raises(ValidationError, match="ChatBot configuration invalid"):
        await ChatbotUseCase(chatbot).health_check()
    chatbot.health_check.assert_not_called()


@pytest.mark.asyncio
async def test_health_check(chatbot):
    assert await ChatbotUseCase(chatbot).health_check() == {"status": "ok"}
