"""Data models for conversation storage and search."""

from conversation_memory.models.conversations import (
    ContextMessage,
    ConversationData,
    ConversationMessage,
    EnrichedMatch,
    MatchConversation,
    MessageMatch,
    SearchParams,
    SearchResponse,
    StoreResponse,
)

__all__ = [
    "ConversationMessage",
    "ConversationData",
    "StoreResponse",
    "SearchParams",
    "MessageMatch",
    "MatchConversation",
    "ContextMessage",
    "EnrichedMatch",
    "SearchResponse",
]
