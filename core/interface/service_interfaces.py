from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional


class CacheInterface(ABC):
    """Key/value cache holding JSON-serializable values."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        pass

    @abstractmethod
    async def invalidate(self, key_or_pattern: str) -> int:
        """
        Delete a key, or every key matching a pattern containing `*`.

        Returns:
            Number of deleted keys
        """
        pass

    @abstractmethod
    async def get_with_cache(
        self,
        key: str,
        fetch: Callable[[], Awaitable[Any]],
        ttl: Optional[int] = None,
    ) -> Any:
        """
        Return the cached value or fetch, store and return it.

        Args:
            key: Cache key without prefix
            fetch: Coroutine factory producing the fresh value
            ttl: Expiry in seconds, defaults to the configured TTL

        Returns:
            The cached or freshly fetched value
        """
        pass


class ChatbotInterface(ABC):
    """Client for the upstream conversational assistant."""

    @abstractmethod
    async def send_message(
        self, message: str, user_id: str, conversation_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Forward a message and return the assistant's reply.

        Returns:
            Dictionary with reply, conversation_id and timestamp

        Raises:
            ExternalServiceError: If the upstream fails after all retries
        """
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    def validate_config(self) -> List[str]:
        """Return configuration problems, empty when the config is usable."""
        pass


class FileStorageInterface(ABC):
    """Storage backend for uploaded media."""

    @abstractmethod
    async def save_file(
        self, content: bytes, filename: str, folder: str, content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Persist a file.

        Returns:
            Dictionary with publicId, url, bytes, format and createdAt
        """
        pass

    @abstractmethod
    async def delete_file(self, public_id: str) -> bool:
        pass

    @abstractmethod
    async def get_file_info(self, public_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def file_exists(self, public_id: str) -> bool:
        pass
