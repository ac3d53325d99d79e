"""MCP tools and prompts for the conversation memory server."""

from conversation_memory.tools.prompts import save_memory_prompt, search_memory_prompt
from conversation_memory.tools.save_memory import save_memory
from conversation_memory.tools.search_memory import search_memory

__all__ = [
    "save_memory",
    "search_memory",
    "save_memory_prompt",
    "search_memory_prompt",
]
