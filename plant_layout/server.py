"""Main MCP server implementation for plant layout generation."""

import asyncio
import json
import logging
from typing import Optional

from mcp import Tool
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import TextContent

from .config.settings import LayoutSettings, load_settings
from .knowledge.catalog import KnowledgeBase, load_knowledge_base
from .tools.layout_tools import PlantLayoutTools

logger = logging.getLogger(__name__)

SERVER_NAME = "plant-layout-mcp"
SERVER_VERSION = "0.1.0"


class PlantLayoutMCPServer:
    """MCP Server exposing the deterministic plant layout engine."""

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        settings: Optional[LayoutSettings] = None,
    ):
        """Initialize the MCP server.

        The knowledge base is loaded here so configuration errors surface at
        startup rather than during a tool call.
        """
        self.knowledge_base = knowledge_base or load_knowledge_base()
        self.settings = settings or load_settings()

        self.layout_tools = PlantLayoutTools(self.knowledge_base, self.settings)

        # Create MCP server instance
        self.server = Server(SERVER_NAME)

        # Register handlers
        self._register_handlers()

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List all available tools."""
            return self.layout_tools.get_tools()

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Route tool calls to the layout tools."""
            result = await self.layout_tools.handle_tool(name, arguments)
            return [TextContent(type="text", text=json.dumps(result, indent=2))]

    async def run(self):
        """Run the MCP server."""
        from mcp.server.stdio import stdio_server

        logger.info(
            f"Starting {SERVER_NAME} with industries: {sorted(self.knowledge_base.industries)}"
        )
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=SERVER_VERSION,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )


def main():
    """Main entry point for the MCP server."""
    logging.basicConfig(level=logging.INFO)
    server = PlantLayoutMCPServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
