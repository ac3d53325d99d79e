"""Integration tests for MCP tool and prompt endpoints."""

import pytest
from fastmcp import Client

from conversation_memory import server
from conversation_memory.models.conversations import SearchResponse, StoreResponse
from conversation_memory.server import mcp


class TestMCPRegistration:
    """Test tool and prompt registration."""

    @pytest.mark.asyncio
    async def test_server_identity(self):
        """Test the name and version advertised during initialization."""
        assert mcp.name == "conversation-memory"

        async with Client(mcp) as client:
            server_info = client.initialize_result.serverInfo

        assert server_info.name == "conversation-memory"
        assert server_info.version == "1.0.0"

    @pytest.mark.asyncio
    async def test_tool_count(self):
        """Test exactly the two memory tools are registered."""
        tools = await mcp.get_tools()
        assert set(tools) == {"save-memory", "search-memory"}

    @pytest.mark.asyncio
    async def test_save_memory_schema(self):
        tool = await mcp.get_tool("save-memory")
        assert tool.description == "Save content to vector database"

        schema = tool.parameters
        assert set(schema["properties"]) == {"content", "path", "type", "source", "parentPath"}
        assert set(schema["required"]) == {"content", "path"}

    @pytest.mark.asyncio
    async def test_search_memory_schema(self):
        tool = await mcp.get_tool("search-memory")
        assert tool.description == "Search for information in vector database"

        schema = tool.parameters
        assert set(schema["properties"]) == {"query", "maxMatches"}
        assert schema["required"] == ["query"]

    @pytest.mark.asyncio
    async def test_prompt_count(self):
        prompts = await mcp.get_prompts()
        assert set(prompts) == {"save-memory", "search-memory"}


class TestMCPCalls:
    """Test tool and prompt calls through an in-memory client."""

    @pytest.fixture(autouse=True)
    def _fake_api(self, monkeypatch, fake_client):
        monkeypatch.setattr(server, "api_client", fake_client)
        return fake_client

    @pytest.mark.asyncio
    async def test_save_memory_call(self, fake_client):
        fake_client.store_response = StoreResponse(success=True, messages=1)

        async with Client(mcp) as client:
            result = await client.call_tool(
                "save-memory",
                {"content": "hello world", "path": "notes/hello.md", "parentPath": "notes"},
            )

        assert result.is_error is False
        assert result.content[0].text == (
            "Successfully stored content with conversation ID: notes_hello_md\n"
            "Messages processed: 1"
        )
        (request,) = fake_client.stored
        assert request.title == "notes"

    @pytest.mark.asyncio
    async def test_save_memory_empty_content(self, fake_client):
        async with Client(mcp) as client:
            result = await client.call_tool("save-memory", {"content": "", "path": "a"})

        assert result.is_error is False
        assert result.content[0].text.startswith(
            "Successfully stored content with conversation ID: a\n"
        )
        (request,) = fake_client.stored
        assert request.messages[0].content == ""

    @pytest.mark.asyncio
    async def test_save_memory_error_is_flagged(self, fake_client):
        fake_client.store_response = StoreResponse(success=False, error="disk full")

        async with Client(mcp) as client:
            result = await client.call_tool(
                "save-memory",
                {"content": "hello", "path": "notes/hello.md"},
                raise_on_error=False,
            )

        assert result.is_error is True
        assert result.content[0].text == "Error storing content: disk full"

    @pytest.mark.asyncio
    async def test_search_memory_call(self, fake_client, enriched_match_payload):
        fake_client.search_response = SearchResponse.model_validate(
            {"success": True, "matches": [enriched_match_payload]}
        )

        async with Client(mcp) as client:
            result = await client.call_tool(
                "search-memory", {"query": "shared setup", "maxMatches": 2}
            )

        assert result.is_error is False
        assert result.content[0].text.startswith("--- Match (87% similarity) ---\n")
        assert fake_client.searches[0].match_count == 2

    @pytest.mark.asyncio
    async def test_search_memory_no_matches(self):
        async with Client(mcp) as client:
            result = await client.call_tool("search-memory", {"query": "nothing"})

        assert result.content[0].text == "No matching content found for your query."

    @pytest.mark.asyncio
    async def test_search_memory_error_is_flagged(self, fake_client):
        fake_client.search_response = SearchResponse(success=False, error="boom")

        async with Client(mcp) as client:
            result = await client.call_tool(
                "search-memory", {"query": "anything"}, raise_on_error=False
            )

        assert result.is_error is True
        assert result.content[0].text == "Error searching content: boom"

    @pytest.mark.asyncio
    async def test_prompts_return_single_user_message(self, fake_client):
        async with Client(mcp) as client:
            save = await client.get_prompt(
                "save-memory", {"path": "notes/a.md", "content": "body"}
            )
            search = await client.get_prompt("search-memory", {"query": "release"})

        assert len(save.messages) == 1
        assert save.messages[0].role == "user"
        assert 'store the following content with path "notes/a.md"' in save.messages[0].content.text
        assert len(search.messages) == 1
        assert search.messages[0].content.text.startswith(
            "Please search for information about: release"
        )
        assert fake_client.stored == []
        assert fake_client.searches == []


class TestMain:
    """Test process exit codes of the console entry point."""

    def test_startup_failure_exits_with_1(self, monkeypatch):
        def fail():
            raise OSError("stdin closed")

        monkeypatch.setattr(mcp, "run", fail)

        with pytest.raises(SystemExit) as exc_info:
            server.main()

        assert exc_info.value.code == 1

    def test_keyboard_interrupt_exits_with_0(self, monkeypatch):
        def interrupt():
            raise KeyboardInterrupt

        monkeypatch.setattr(mcp, "run", interrupt)

        with pytest.raises(SystemExit) as exc_info:
            server.main()

        assert exc_info.value.code == 0
