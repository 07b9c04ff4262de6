from .chatbot_client import ChatbotClient

__all__ = ["ChatbotClient"]
