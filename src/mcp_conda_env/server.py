"""MCP server implementation."""
import asyncio
import json
from typing import Any, Dict, List

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions
from mcp.server import stdio

from mcp_conda_env.config import get_config
from mcp_conda_env.conda.packages import list_packages
from mcp_conda_env.environments.environment import (
    provision,
    remove_environment,
    resolve_envpath,
)
from mcp_conda_env.errors import ProvisionError, log_error
from mcp_conda_env.logging import configure_logging, get_logger

logger = get_logger("server")

SERVER_NAME = "mcp-conda-env"
SERVER_VERSION = "0.1.0"

_ENV_PROPERTY = {
    "type": "string",
    "description": "Environment path, or a bare name placed under the environment root",
}
_STRING_LIST = {"type": "array", "items": {"type": "string"}}

tools = [
    types.Tool(
        name="conda_env_provision",
        description="Create a fresh conda environment with pinned package versions",
        inputSchema={
            "type": "object",
            "properties": {
                "env": _ENV_PROPERTY,
                "packages": {**_STRING_LIST, "description": "conda specifiers such as pandas=1.4.3"},
                "channels": {**_STRING_LIST, "description": "Additional conda channels"},
                "pip": {**_STRING_LIST, "description": "PyPI specifiers such as requests==2.31.0"},
                "paths": {**_STRING_LIST, "description": "Local package directories to pip install"},
            },
            "required": ["env", "packages"],
        },
    ),
    types.Tool(
        name="conda_env_list_packages",
        description="List packages installed in a conda environment",
        inputSchema={
            "type": "object",
            "properties": {"env": _ENV_PROPERTY},
            "required": ["env"],
        },
    ),
    types.Tool(
        name="conda_env_remove",
        description="Delete a conda environment directory",
        inputSchema={
            "type": "object",
            "properties": {"env": _ENV_PROPERTY},
            "required": ["env"],
        },
    ),
]


def _result(payload: Dict[str, Any]) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps(payload))]


async def handle_tool_call(name: str, arguments: Dict[str, Any]) -> list[types.TextContent]:
    """Dispatch one tool call; failures are reported in the payload."""
    try:
        logger.debug(f"Tool call received: {name} with arguments {arguments}")
        config = get_config()

        if name == "conda_env_provision":
            envpath = resolve_envpath(arguments["env"], config)
            await provision(
                envpath,
                arguments["packages"],
                channels=arguments.get("channels"),
                pip=arguments.get("pip"),
                paths=arguments.get("paths"),
                config=config,
            )
            return _result({"success": True, "data": {"envpath": str(envpath)}})

        elif name == "conda_env_list_packages":
            envpath = resolve_envpath(arguments["env"], config)
            if not envpath.exists():
                return _result({"success": False, "error": f"Unknown environment: {envpath}"})
            packages = await list_packages(envpath, config)
            return _result({
                "success": True,
                "data": {
                    "envpath": str(envpath),
                    "packages": [
                        {"name": p.name, "version": p.version, "channel": p.channel, "full": p.full}
                        for p in packages
                    ],
                },
            })

        elif name == "conda_env_remove":
            envpath = resolve_envpath(arguments["env"], config)
            if not remove_environment(envpath):
                return _result({"success": False, "error": f"Unknown environment: {envpath}"})
            return _result({"success": True, "data": {"message": "Environment removed"}})

        return _result({"success": False, "error": f"Unknown tool: {name}"})

    except ProvisionError as e:
        log_error(e, {"tool": name}, logger)
        error = e.to_error_data()
        return _result({
            "success": False,
            "error": error.message,
            "code": error.code,
            "details": error.data,
        })
    except Exception as e:
        log_error(e, {"tool": name}, logger)
        return _result({"success": False, "error": str(e)})


async def init_server() -> Server:
    logger.info(f"Registered tools: {', '.join(t.name for t in tools)}")

    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        logger.debug("Tools requested")
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> list[types.TextContent]:
        return await handle_tool_call(name, arguments)

    return server


async def serve() -> None:
    configure_logging()
    logger.info("Starting MCP conda environment server")
    server = await init_server()
    async with stdio.stdio_server() as (read_stream, write_stream):
        init_options = InitializationOptions(
            server_name=SERVER_NAME,
            server_version=SERVER_VERSION,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=False),
                logging=types.LoggingCapability(),
            ),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())
