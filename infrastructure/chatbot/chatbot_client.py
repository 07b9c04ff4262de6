import asyncio
from typing import Any, Dict, List, Optional

import httpx

from utils.logging_config import setup_logger
from core.exceptions import ExternalServiceError
from core.interface import ChatbotInterface


class ChatbotClient(ChatbotInterface):
    """
    Proxy to the external chatbot API.

    Failed requests are retried with exponential backoff
    (backoff_base, 2 x backoff_base, 4 x backoff_base, ...).
    """

    def __init__(
        self,
        api_url: str,
        api_token: Optional[str] = None,
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        client: Optional[httpx.AsyncClient] = None,
        backoff_base: float = 1.0,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_token = api_token
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.logger = setup_logger("infrastructure.chatbot", "chatbot.log")

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if api_token:
            headers["x-auth-token"] = api_token
        self.client = client or httpx.AsyncClient(
            base_url=self.api_url,
            headers=headers,
            timeout=httpx.Timeout(timeout=timeout_seconds if timeout_seconds > 0 else None),
        )

    def validate_config(self) -> List[str]:
        errors = []
        if not self.api_url:
            errors.append("CHATBOT_API_URL is not configured")
        elif not self.api_url.startswith(("http://", "https://")):
            errors.append("CHATBOT_API_URL must be a valid HTTP/HTTPS URL")
        if self.timeout_seconds <= 0:
            errors.append("CHATBOT_TIMEOUT_SECONDS must be a positive number")
        if self.max_retries < 0:
            errors.append("CHATBOT_MAX_RETRIES must be non-negative")
        return errors

    @staticmethod
    def _upstream_error(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or f"HTTP {response.status_code}"
        return f"HTTP {response.status_code}"

    async def _post_chat(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self.client.post("/api/chat", json=payload)
        except httpx.ConnectError as e:
            raise ExternalServiceError("ChatBot API is not available", unavailable=True) from e
        except httpx.TimeoutException as e:
            raise ExternalServiceError("ChatBot API request timeout") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"ChatBot API Error: {e}") from e

        if response.is_error:
            raise ExternalServiceError(f"ChatBot API Error: {self._upstream_error(response)}")
        return response.json()

    async def send_message(
        self, message: str, user_id: str, conversation_id: Optional[str] = None
    ) -> Dict[str, Any]:
        payload = {"message": message, "user_id": user_id, "conversation_id": conversation_id}
        self.logger.info(f"Sending message to ChatBot API ({len(message)} chars)")

        attempt = 0
        while True:
            try:
                return await self._post_chat(payload)
            except ExternalServiceError as e:
                self.logger.error(f"ChatBot API attempt {attempt + 1} failed: {e}")
                if attempt >= self.max_retries:
                    raise
                await asyncio.sleep(self.backoff_base * (2 ** attempt))
                attempt += 1

    async def health_check(self) -> Dict[str, Any]:
        try:
            response = await self.client.get("/api/health")
        except httpx.ConnectError as e:
            raise ExternalServiceError("ChatBot API is not available", unavailable=True) from e
        except httpx.TimeoutException as e:
            raise ExternalServiceError("ChatBot API health check timeout", unavailable=True) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError("ChatBot API health check failed", unavailable=True) from e

        if response.is_error:
            raise ExternalServiceError("ChatBot API health check failed", unavailable=True)
        return response.json()

    async def close(self) -> None:
        await self.client.aclose()
