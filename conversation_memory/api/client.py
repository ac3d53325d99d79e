"""HTTP client for storing and searching conversation embeddings."""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from conversation_memory.metrics import get_instruments
from conversation_memory.models.conversations import (
    ConversationData,
    SearchParams,
    SearchResponse,
    StoreResponse,
)
from conversation_memory.utils.config_validator import DEFAULT_API_BASE_URL

logger = logging.getLogger(__name__)

STORE_PATH = "/api/store-conversation-embedding"
SEARCH_PATH = "/api/search-conversation-embeddings"

CONNECTION_ERROR_MESSAGE = "Failed to connect to conversation embedding service"
STORE_ERROR_MESSAGE = "Failed to store conversation"
SEARCH_ERROR_MESSAGE = "Failed to search conversations"


class _CallFailed(Exception):
    """Internal signal carrying the caller-facing error message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmbeddingApiClient:
    """
    Sole point of contact with the conversation embedding service.

    Both operations always resolve to a response object. Remote-reported
    failures surface the service's ``error`` message (or a fixed fallback),
    and unreachable-service failures surface a fixed connection message.
    No retries are attempted.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def store_conversation(self, data: ConversationData) -> StoreResponse:
        """Store a conversation and its messages for later similarity search."""
        logger.debug(
            f"Storing conversation {data.conversation_id} "
            f"({len(data.messages)} messages)"
        )
        try:
            response = await self._post(
                "store", STORE_PATH, data, StoreResponse, STORE_ERROR_MESSAGE
            )
        except _CallFailed as e:
            return StoreResponse(
                success=False,
                conversation_id=data.conversation_id,
                messages=0,
                error=e.message,
            )

        if not response.conversation_id:
            response.conversation_id = data.conversation_id
        return response

    async def search_conversations(self, params: SearchParams) -> SearchResponse:
        """Search stored conversations by free-text query."""
        logger.debug(f"Searching conversations: query='{params.query[:50]}'")
        try:
            return await self._post(
                "search", SEARCH_PATH, params, SearchResponse, SEARCH_ERROR_MESSAGE
            )
        except _CallFailed as e:
            return SearchResponse(success=False, matches=[], error=e.message)

    async def _post(
        self,
        operation: str,
        path: str,
        request: Any,
        model: type[BaseModel],
        fallback: str,
    ) -> Any:
        url = f"{self.base_url}{path}"

        with get_instruments().track_api_call(operation) as outcome:
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    transport=self._transport,
                    follow_redirects=True,
                ) as client:
                    response = await client.post(url, json=request.to_payload())
            except httpx.RequestError as e:
                outcome["status"] = "transport_error"
                logger.warning(f"{operation} request to {url} failed: {e!r}")
                raise _CallFailed(CONNECTION_ERROR_MESSAGE) from e

            if response.is_error:
                outcome["status"] = "remote_error"
                message = _remote_error(response) or fallback
                logger.warning(
                    f"{operation} rejected by service "
                    f"(HTTP {response.status_code}): {message}"
                )
                raise _CallFailed(message)

            try:
                return model.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                outcome["status"] = "invalid_response"
                logger.warning(f"Unexpected {operation} response body: {e}")
                raise _CallFailed(fallback) from e


def _remote_error(response: httpx.Response) -> Optional[str]:
    """Extract the service's error message from a failed response, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
