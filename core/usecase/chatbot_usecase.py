import logging
from typing import Any, Dict, Optional

from core.exceptions import ExternalServiceError, ValidationError
from core.interface import ChatbotInterface

MAX_MESSAGE_LENGTH = 2000


class ChatbotUseCase:
    """
    Validates chat messages and relays them to the chatbot service.
    """

    def __init__(self, chatbot: ChatbotInterface):
        self.chatbot = chatbot
        self.logger = logging.getLogger(__name__)

    async def send_message(
        self, user_id: str, message: Optional[str], conversation_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send a user's message to the chatbot.

        Args:
            user_id: The sender
            message: Message text, trimmed before sending
            conversation_id: Existing conversation to continue

        Returns:
            Dictionary with reply, conversation_id and timestamp

        Raises:
            ValidationError: If the message is empty or too long
            ExternalServiceError: If the chatbot cannot answer
        """
        text = (message or "").strip()
        if not text:
            raise ValidationError("Message is required and cannot be empty")
        if len(text) > MAX_MESSAGE_LENGTH:
            raise ValidationError(f"Message is too long (max {MAX_MESSAGE_LENGTH} characters)")

        try:
            return await self.chatbot.send_message(text, user_id, conversation_id)
        except ExternalServiceError as e:
            self.logger.error(f"Chatbot request failed for user {user_id}: {e}")
            raise ExternalServiceError(
                "Failed to process ChatBot request", unavailable=e.unavailable
            ) from e

    async def health_check(self) -> Dict[str, Any]:
        problems = self.chatbot.validate_config()
        if problems:
            raise ValidationError(f"ChatBot configuration invalid: {', '.join(problems)}")
        return await self.chatbot.health_check()
