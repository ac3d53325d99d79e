"""
Pytest configuration and shared fixtures for conversation-memory tests.
"""

import os
from typing import Callable, Optional

import httpx
import pytest

# Keep test runs from writing ~/.conversation-memory/logs/server.log
os.environ.setdefault("CONVERSATION_MEMORY_LOGGING_FILE_ENABLED", "false")

from conversation_memory.api.client import EmbeddingApiClient  # noqa: E402
from conversation_memory.models.conversations import (  # noqa: E402
    ConversationData,
    SearchParams,
    SearchResponse,
    StoreResponse,
)

TEST_BASE_URL = "https://embeddings.test"


class FakeApiClient:
    """Stands in for EmbeddingApiClient, recording requests and replaying canned responses."""

    def __init__(
        self,
        store_response: Optional[StoreResponse] = None,
        search_response: Optional[SearchResponse] = None,
    ):
        self.store_response = store_response or StoreResponse(
            success=True, conversation_id="", messages=1
        )
        self.search_response = search_response or SearchResponse(success=True, matches=[])
        self.stored: list[ConversationData] = []
        self.searches: list[SearchParams] = []

    async def store_conversation(self, data: ConversationData) -> StoreResponse:
        self.stored.append(data)
        response = self.store_response.model_copy()
        if not response.conversation_id:
            response.conversation_id = data.conversation_id
        return response

    async def search_conversations(self, params: SearchParams) -> SearchResponse:
        self.searches.append(params)
        return self.search_response


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], EmbeddingApiClient]:
    """Build an EmbeddingApiClient whose HTTP calls are answered by *handler*."""

    def _make(handler):
        return EmbeddingApiClient(
            base_url=TEST_BASE_URL,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def fake_client_cls():
    return FakeApiClient


@pytest.fixture
def fake_client():
    return FakeApiClient()


@pytest.fixture
def enriched_match_payload():
    """A search hit as the embedding service returns it with includeContext."""
    return {
        "id": 41,
        "conversation_id": 7,
        "role": "assistant",
        "content": "Use pytest fixtures for shared setup.",
        "created_at": "2025-03-01T10:00:00Z",
        "similarity": 0.873,
        "conversation": {
            "conversation_id": "notes_testing_md",
            "title": "notes/testing.md",
            "created_at": "2025-03-01T09:59:00Z",
        },
        "context": [
            {
                "id": 40,
                "role": "user",
                "content": "How should I share setup between tests?",
                "created_at": "2025-03-01T09:59:30Z",
            },
            {
                "id": 41,
                "role": "assistant",
                "content": "Use pytest fixtures for shared setup.",
                "created_at": "2025-03-01T10:00:00Z",
            },
        ],
    }


@pytest.fixture
def plain_match_payload():
    """A search hit without conversation enrichment."""
    return {
        "id": 12,
        "conversation_id": 3,
        "role": "user",
        "content": "Deploy on Fridays is forbidden.",
        "created_at": "2025-02-11T08:00:00Z",
        "similarity": 0.5,
    }
