"""Client for the remote conversation embedding service."""

from conversation_memory.api.client import (
    CONNECTION_ERROR_MESSAGE,
    EmbeddingApiClient,
)

__all__ = ["EmbeddingApiClient", "CONNECTION_ERROR_MESSAGE"]
