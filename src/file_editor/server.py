"""MCP server exposing the file editor toolsets.

Each toolset method is registered as an MCP tool under its own name. The
toolsets return response dicts; this module maps them onto the protocol:
a success response becomes the tool's text result and an error response is
raised as ``ToolError`` so the client receives ``isError: true`` with the
message.
"""

import functools
import inspect
import logging
from collections.abc import Awaitable, Callable

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from file_editor import __version__
from file_editor.config import FileEditorSettings
from file_editor.tools import EditingTools, FileEditorToolset, FileSystemTools
from file_editor.utils.responses import is_error_response

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Tools for reading, searching and editing text files. All paths must be absolute. "
    "Line numbers are 1-based. Read a file with show_line_numbers=true before editing it "
    "and echo the current text of the line you target."
)


def get_toolsets(settings: FileEditorSettings) -> list[FileEditorToolset]:
    """Instantiate every toolset served by the file editor."""
    return [FileSystemTools(settings), EditingTools(settings)]


def as_mcp_tool(tool: Callable[..., Awaitable[dict]]) -> Callable[..., Awaitable[str]]:
    """Adapt a toolset method to the MCP result convention.

    The wrapper keeps the method's name, docstring and parameters so FastMCP
    derives the same input schema; only the return type changes to ``str``.
    """

    @functools.wraps(tool)
    async def handler(*args, **kwargs) -> str:
        response = await tool(*args, **kwargs)
        if is_error_response(response):
            logger.info(f"Tool {tool.__name__} failed: {response['error']}")
            raise ToolError(response["message"])
        return response["message"]

    handler.__signature__ = inspect.signature(tool).replace(return_annotation=str)
    handler.__annotations__ = {**getattr(tool, "__annotations__", {}), "return": str}
    return handler


def create_server(settings: FileEditorSettings | None = None) -> FastMCP:
    """Build a FastMCP server with all file editor tools registered.

    Args:
        settings: File editor settings. Defaults to FileEditorSettings()

    Returns:
        Configured (not yet running) FastMCP server

    Example:
        >>> server = create_server(load_settings())
        >>> server.run(transport="stdio")
    """
    if settings is None:
        settings = FileEditorSettings()

    server = FastMCP(settings.server.name, instructions=SERVER_INSTRUCTIONS)

    for toolset in get_toolsets(settings):
        for tool in toolset.get_tools():
            server.add_tool(
                as_mcp_tool(tool), name=tool.__name__, description=inspect.getdoc(tool)
            )
            logger.debug(f"Registered tool {tool.__name__} from {type(toolset).__name__}")

    logger.info(
        f"Created {settings.server.name} server v{__version__} "
        f"(workspace_root={settings.workspace_root}, writes_enabled={settings.writes_enabled})"
    )
    return server


def run_server(settings: FileEditorSettings) -> None:
    """Create the server and serve until the client disconnects."""
    server = create_server(settings)
    logger.info(f"Serving over {settings.server.transport}")
    server.run(transport=settings.server.transport)
