"""Prompt templates suggesting the memory tools to the calling agent."""


def save_memory_prompt(path: str, content: str) -> str:
    return (
        f'Please help me store the following content with path "{path}":\n\n'
        f"{content}\n\n"
        "You can use the save-memory tool to save this information."
    )


def search_memory_prompt(query: str) -> str:
    return (
        f"Please search for information about: {query}\n\n"
        "You can use the search-memory tool to find relevant information."
    )
