"""Tool for searching stored conversations by similarity."""

import logging
import math
from typing import Optional, Union

from fastmcp.exceptions import ToolError

from conversation_memory.api.client import EmbeddingApiClient
from conversation_memory.models.conversations import (
    EnrichedMatch,
    MessageMatch,
    SearchParams,
)

logger = logging.getLogger(__name__)

NO_MATCHES_TEXT = "No matching content found for your query."


def similarity_percent(similarity: float) -> int:
    """Similarity as a whole percentage, rounding halves up (0.875 -> 88)."""
    return math.floor(similarity * 100 + 0.5)


def format_match(match: Union[MessageMatch, EnrichedMatch]) -> str:
    """Render one match as a readable text block."""
    text = f"--- Match ({similarity_percent(match.similarity)}% similarity) ---\n"
    text += f"{match.role}: {match.content}\n"

    if isinstance(match, EnrichedMatch):
        conversation = match.conversation
        text += f"\nFrom conversation: {conversation.title or conversation.conversation_id}\n"

        if match.context:
            text += "\nContext:\n"
            for ctx in match.context:
                text += f"{ctx.role}: {ctx.content}\n"

    return text


async def search_memory(
    client: EmbeddingApiClient,
    query: str,
    max_matches: Optional[int] = None,
) -> str:
    """
    Search stored content and render the matches as text.

    Matches keep the order the service returned them in, each block
    separated by a blank line.

    Raises:
        ToolError: If the service reports a failure
    """
    logger.info(f"Searching memory: query='{query[:50]}', max_matches={max_matches}")

    response = await client.search_conversations(
        SearchParams(query=query, match_count=max_matches, include_context=True)
    )

    if not response.success:
        raise ToolError(f"Error searching content: {response.error or 'Unknown error'}")

    if not response.matches:
        return NO_MATCHES_TEXT

    logger.info(f"Found {len(response.matches)} matches")
    return "\n\n".join(format_match(match) for match in response.matches)
