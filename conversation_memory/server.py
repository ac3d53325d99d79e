"""Conversation memory MCP server with STDIO transport."""

import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from conversation_memory import __version__
from conversation_memory.api.client import EmbeddingApiClient
from conversation_memory.metrics import setup_metrics
from conversation_memory.tools import (
    save_memory,
    save_memory_prompt,
    search_memory,
    search_memory_prompt,
)
from conversation_memory.utils.config import load_config
from conversation_memory.utils.logging import setup_logging

mcp = FastMCP("conversation-memory", version=__version__)

# Initialize configuration, logging and metrics
config = load_config()
logger = setup_logging(config)
setup_metrics()

api_client = EmbeddingApiClient(
    base_url=config["api"]["base_url"],
    timeout=config["api"]["timeout"],
)

logger.info(f"Embedding service: {api_client.base_url}")


@mcp.tool(name="save-memory", description="Save content to vector database")
async def save_memory_tool(
    content: Annotated[str, Field(description="The content to store")],
    path: Annotated[str, Field(description="Unique identifier path for the content")],
    type: Annotated[
        Optional[str], Field(description="Content type (e.g., 'markdown')")
    ] = None,
    source: Annotated[Optional[str], Field(description="Source of the content")] = None,
    parentPath: Annotated[
        Optional[str],
        Field(description="Path of the parent content (if applicable)"),
    ] = None,
) -> str:
    """
    Store content as a conversation in the embedding service.

    Content that is a JSON list of {"role", "content"} messages is stored
    message by message; anything else becomes a single assistant message.
    The conversation ID is the path with non-alphanumerics replaced by "_".
    """
    return await save_memory(
        api_client,
        content,
        path,
        type=type,
        source=source,
        parent_path=parentPath,
    )


@mcp.tool(name="search-memory", description="Search for information in vector database")
async def search_memory_tool(
    query: Annotated[str, Field(description="The search query")],
    maxMatches: Annotated[
        Optional[int], Field(description="Maximum number of matches to return")
    ] = None,
) -> str:
    """Search stored conversations and return matches with surrounding context."""
    return await search_memory(api_client, query, max_matches=maxMatches)


@mcp.prompt(name="save-memory", description="Suggest saving content with the save-memory tool")
def save_memory_prompt_template(
    path: Annotated[str, Field(description="Unique identifier path for the content")],
    content: Annotated[str, Field(description="The content to store")],
) -> str:
    return save_memory_prompt(path, content)


@mcp.prompt(
    name="search-memory", description="Suggest searching with the search-memory tool"
)
def search_memory_prompt_template(
    query: Annotated[str, Field(description="The search query")],
) -> str:
    return search_memory_prompt(query)


def main():
    """Entry point for the conversation-memory console script."""
    try:
        logger.info("Conversation Memory MCP Server running on STDIO")
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Error starting server: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
