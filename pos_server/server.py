"""MCP Server for the POS terminal."""

import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.types import Resource, Tool, TextContent
from pydantic import AnyUrl

from .config import load_settings
from .messages import LANGUAGES
from .presenter import render_cart_panel, render_session, session_payload
from .terminal import PosTerminal, build_terminal

# Configure logging (stdout carries the MCP protocol)
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger("pos-mcp-server")

# Initialize server
app = Server("pos-mcp-server")

# Global state
terminal: PosTerminal


@app.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return [
        Resource(
            uri=AnyUrl("pos://cart"),
            name="Purchase List",
            mimeType="application/json",
            description="Items currently in the cart",
        ),
        Resource(
            uri=AnyUrl("pos://session"),
            name="Terminal Session",
            mimeType="application/json",
            description="Code input, staged product, status and cart",
        ),
    ]


@app.read_resource()
async def read_resource(uri: AnyUrl) -> str:
    """Read a resource by URI."""
    uri_str = str(uri)

    if uri_str == "pos://cart":
        return terminal.state.model_dump_json(include={"cart"}, indent=2)

    elif uri_str == "pos://session":
        import json

        return json.dumps(session_payload(terminal.state, terminal.language), indent=2, ensure_ascii=False)

    raise ValueError(f"Unknown resource: {uri}")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="pos_enter_code",
            description="Type a product code into the code field without looking it up",
            inputSchema={
                "type": "object",
                "properties": {
                    "code": {"type": "string", "description": "Product code (barcode)"},
                },
                "required": ["code"],
            },
        ),
        Tool(
            name="pos_lookup_product",
            description="Look up a product by code and stage it for adding to the cart",
            inputSchema={
                "type": "object",
                "properties": {
                    "code": {
                        "type": "string",
                        "description": "Product code (optional, defaults to the current code field)",
                    },
                },
            },
        ),
        Tool(
            name="pos_add_to_cart",
            description="Add the staged product to the purchase list",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="pos_remove_from_cart",
            description="Remove a line from the purchase list by line id or by 1-based position",
            inputSchema={
                "type": "object",
                "properties": {
                    "line_id": {"type": "string", "description": "Line id from pos_get_cart"},
                    "position": {"type": "integer", "description": "1-based position in the list"},
                },
            },
        ),
        Tool(
            name="pos_get_cart",
            description="Get the current purchase list",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="pos_purchase",
            description="Submit the purchase list as a transaction",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="pos_get_status",
            description="Show both terminal panels (lookup and purchase list)",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="pos_set_language",
            description="Set the message language",
            inputSchema={
                "type": "object",
                "properties": {
                    "language": {"type": "string", "enum": list(LANGUAGES), "description": "Language code"},
                },
                "required": ["language"],
            },
        ),
    ]


async def handle_tool(name: str, arguments: Optional[dict[str, Any]]) -> str:
    """Run a tool against the terminal and return its text answer."""
    arguments = arguments or {}
    language = terminal.language

    if name == "pos_enter_code":
        code = arguments.get("code")
        if code is None:
            return "Error: code parameter required"
        terminal.enter_code(code)
        return render_session(terminal.state, language)

    elif name == "pos_lookup_product":
        terminal.lookup(arguments.get("code"))
        return render_session(terminal.state, language)

    elif name == "pos_add_to_cart":
        if not terminal.state.can_add:
            return "No product staged. Look up a product first."
        terminal.add_to_cart()
        return render_session(terminal.state, language)

    elif name == "pos_remove_from_cart":
        line_id = arguments.get("line_id")
        position = arguments.get("position")
        if line_id:
            terminal.remove_line(line_id)
        elif position is not None:
            terminal.remove_at(int(position) - 1)
        else:
            return "Error: line_id or position required"
        return "\n".join(render_cart_panel(terminal.state, language))

    elif name == "pos_get_cart":
        state = terminal.state
        result_lines = render_cart_panel(state, language)
        if state.cart:
            result_lines.append("\nLine ids:")
            for i, item in enumerate(state.cart, 1):
                result_lines.append(f"  {i}. {item.line_id} ({item.code})")
        return "\n".join(result_lines)

    elif name == "pos_purchase":
        receipt = terminal.purchase()
        if receipt is not None:
            logger.info(f"Purchase completed, total {receipt.total}")
        return render_session(terminal.state, language)

    elif name == "pos_get_status":
        return render_session(terminal.state, language)

    elif name == "pos_set_language":
        terminal.set_language(arguments.get("language", ""))
        return f"Language set to {terminal.language}"

    return f"Unknown tool: {name}"


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle tool calls."""
    try:
        return [TextContent(type="text", text=await handle_tool(name, arguments))]
    except Exception as e:
        logger.error(f"Error executing tool {name}: {e}", exc_info=True)
        return [
            TextContent(
                type="text",
                text=f"Error: {str(e)}",
            )
        ]


async def main(env_file: Optional[str] = None) -> None:
    """Main entry point."""
    global terminal

    settings = load_settings(env_file)
    terminal = build_terminal(settings)

    if settings.operator_code:
        logger.info(f"Operator code configured: {settings.operator_code}")
    else:
        logger.info("No operator code configured (POS_OPERATOR_CODE). Backend default applies.")

    logger.info("Starting POS MCP Server...")

    # Import and run the server
    from mcp.server.stdio import stdio_server

    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options(),
            )
    finally:
        terminal.close()


if __name__ == "__main__":
    asyncio.run(main())
