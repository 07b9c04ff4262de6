from typing import Optional

from fastapi import Request

from core.interface import CacheInterface, ChatbotInterface, FileStorageInterface


def get_cache(request: Request) -> Optional[CacheInterface]:
    """
    Dependency for the Redis cache, or None when caching is disabled.
    """
    return getattr(request.app.state, "cache", None)


def get_chatbot_client(request: Request) -> ChatbotInterface:
    return request.app.state.chatbot


def get_file_storage(request: Request) -> FileStorageInterface:
    return request.app.state.storage
