"""Data models for conversations exchanged with the embedding service."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Role = Literal["user", "assistant", "system"]


class _CamelModel(BaseModel):
    """Base for payloads the remote service speaks in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """Serialize for the wire, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ConversationMessage(_CamelModel):
    """One turn of a conversation. Unknown keys are kept and sent on."""

    model_config = ConfigDict(extra="allow")

    role: Role
    content: str
    metadata: Optional[dict[str, str]] = None


class ConversationData(_CamelModel):
    """
    A storable conversation.

    conversation_id is supplied by the caller and must stay stable across
    re-saves of the same logical path.
    """

    conversation_id: str
    title: Optional[str] = None
    summary: Optional[str] = None
    messages: list[ConversationMessage]
    metadata: Optional[dict[str, str]] = None


class StoreResponse(_CamelModel):
    """Result of a store call."""

    success: bool
    conversation_id: str = ""
    messages: int = 0
    error: Optional[str] = None


class SearchParams(_CamelModel):
    """Parameters for a similarity search."""

    query: str
    conversation_id: Optional[str] = None
    match_count: Optional[int] = None
    match_threshold: Optional[float] = None
    include_context: Optional[bool] = None


class MessageMatch(BaseModel):
    """A stored message matched by a search, with its similarity (0.0-1.0)."""

    id: Optional[Union[int, str]] = None
    conversation_id: Optional[Union[int, str]] = None
    role: str
    content: str
    created_at: Optional[str] = None
    similarity: float


class MatchConversation(BaseModel):
    conversation_id: str
    title: Optional[str] = None
    created_at: Optional[str] = None


class ContextMessage(BaseModel):
    id: Optional[Union[int, str]] = None
    role: str
    content: str
    created_at: Optional[str] = None


class EnrichedMatch(MessageMatch):
    """A match carrying its parent conversation and neighbouring messages."""

    conversation: MatchConversation
    context: list[ContextMessage] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """Result of a search call; matches keep the order the service returned."""

    success: bool
    # Enriched first: plain matches lack "conversation" and fall through.
    matches: list[
        Annotated[
            Union[EnrichedMatch, MessageMatch], Field(union_mode="left_to_right")
        ]
    ] = Field(default_factory=list)
    error: Optional[str] = None

    @field_validator("matches", mode="before")
    @classmethod
    def null_matches_as_empty(cls, v):
        return [] if v is None else v
