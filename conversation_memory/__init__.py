"""Conversation Memory MCP Server - vector memory tools backed by a remote embedding service."""

__version__ = "1.0.0"

from conversation_memory.api.client import EmbeddingApiClient
from conversation_memory.models.conversations import ConversationData, ConversationMessage

__all__ = ["EmbeddingApiClient", "ConversationData", "ConversationMessage"]
