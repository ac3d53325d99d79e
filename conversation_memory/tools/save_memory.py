"""Tool for saving content into the conversation embedding store."""

import logging
import re
from typing import Optional

from fastmcp.exceptions import ToolError
from pydantic import TypeAdapter, ValidationError

from conversation_memory.api.client import EmbeddingApiClient
from conversation_memory.models.conversations import (
    ConversationData,
    ConversationMessage,
)

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")
_MESSAGE_LIST = TypeAdapter(list[ConversationMessage])


def derive_conversation_id(path: str) -> str:
    """
    Map a content path to a conversation ID.

    Every character outside [A-Za-z0-9] becomes "_". The mapping is lossy:
    "notes/a-b" and "notes_a.b" share an ID.
    """
    return _NON_ALPHANUMERIC.sub("_", path)


def _decode_messages(content: str) -> Optional[list[ConversationMessage]]:
    """Decode content as a JSON message list, or None if it is not one.

    Every decoded message must carry non-empty content.
    """
    try:
        messages = _MESSAGE_LIST.validate_json(content)
    except ValidationError:
        return None
    if not all(message.content for message in messages):
        return None
    return messages


def build_messages(content: str) -> list[ConversationMessage]:
    """
    Turn raw tool content into conversation messages.

    Content that looks like JSON and decodes to a list of role/content
    messages is used as-is. Anything else, including malformed JSON, is
    wrapped as a single assistant message.
    """
    if content.strip().startswith(("[", "{")):
        messages = _decode_messages(content)
        if messages is not None:
            return messages
        logger.debug("Structured-looking content is not a message list; storing as text")

    return [ConversationMessage(role="assistant", content=content)]


async def save_memory(
    client: EmbeddingApiClient,
    content: str,
    path: str,
    type: Optional[str] = None,
    source: Optional[str] = None,
    parent_path: Optional[str] = None,
) -> str:
    """
    Store content in the embedding service under an ID derived from its path.

    Args:
        client: EmbeddingApiClient instance
        content: Text or a JSON list of {"role", "content"} messages
        path: Unique identifier path for the content
        type: Content type (default "markdown")
        source: Source of the content (default "api")
        parent_path: Path of the parent content, used as the title

    Returns:
        Confirmation text with the conversation ID and message count

    Raises:
        ToolError: If the service reports a failure
    """
    conversation_id = derive_conversation_id(path)
    logger.info(f"Saving memory: path='{path}' -> {conversation_id}, {len(content)} chars")

    request = ConversationData(
        conversation_id=conversation_id,
        title=parent_path or path,
        messages=build_messages(content),
        metadata={
            "source": source or "api",
            "type": type or "markdown",
            "originalPath": path,
        },
    )

    response = await client.store_conversation(request)

    if not response.success:
        raise ToolError(f"Error storing content: {response.error or 'Unknown error'}")

    return (
        f"Successfully stored content with conversation ID: {response.conversation_id}\n"
        f"Messages processed: {response.messages or 0}"
    )
