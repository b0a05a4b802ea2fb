"""Test MCP server tool handling."""
import json
from pathlib import Path

import pytest
from mcp.types import INVALID_PARAMS

from mcp_conda_env.config import set_config
from mcp_conda_env.server import handle_tool_call, init_server, tools


def payload(result) -> dict:
    [content] = result
    assert content.type == "text"
    return json.loads(content.text)


def test_tool_definitions():
    names = [t.name for t in tools]
    assert names == ["conda_env_provision", "conda_env_list_packages", "conda_env_remove"]
    provision_tool = tools[0]
    assert provision_tool.inputSchema["required"] == ["env", "packages"]


@pytest.mark.asyncio
async def test_init_server():
    server = await init_server()
    assert server.name == "mcp-conda-env"


@pytest.mark.asyncio
async def test_provision_tool(fake_conda, config):
    set_config(config)

    data = payload(await handle_tool_call(
        "conda_env_provision",
        {"env": "analysis", "packages": ["python=3.9", "pandas==1.4.3"]},
    ))

    envpath = config.env_root / "analysis"
    assert data == {"success": True, "data": {"envpath": str(envpath)}}
    assert (envpath / "bin" / "python").exists()


@pytest.mark.asyncio
async def test_provision_tool_reports_validation_errors(fake_conda, config):
    set_config(config)

    data = payload(await handle_tool_call(
        "conda_env_provision", {"env": "analysis", "packages": ["pandas"]}
    ))

    assert data["success"] is False
    assert data["error"] == "versions must be explicitly specified for 'pandas'"
    assert data["details"] == {"packages": ["pandas"]}
    assert data["code"] == INVALID_PARAMS


@pytest.mark.asyncio
async def test_list_packages_tool(fake_conda, config):
    set_config(config)
    envpath = config.env_root / "analysis"
    envpath.mkdir(parents=True)
    fake_conda.list_output = json.dumps([{"name": "pandas", "version": "1.4.3", "channel": "conda-forge"}])

    data = payload(await handle_tool_call("conda_env_list_packages", {"env": "analysis"}))

    assert data["success"] is True
    assert data["data"]["packages"] == [
        {"name": "pandas", "version": "1.4.3", "channel": "conda-forge", "full": "pandas=1.4.3"}
    ]


@pytest.mark.asyncio
async def test_unknown_environment(config, tmp_path: Path):
    set_config(config)

    for tool in ("conda_env_list_packages", "conda_env_remove"):
        data = payload(await handle_tool_call(tool, {"env": "missing"}))
        assert data["success"] is False
        assert "Unknown environment" in data["error"]


@pytest.mark.asyncio
async def test_remove_tool(config):
    set_config(config)
    (config.env_root / "old" / "conda-meta").mkdir(parents=True)

    data = payload(await handle_tool_call("conda_env_remove", {"env": "old"}))

    assert data["success"] is True
    assert not (config.env_root / "old").exists()


@pytest.mark.asyncio
async def test_unknown_tool():
    data = payload(await handle_tool_call("nope", {}))
    assert data == {"success": False, "error": "Unknown tool: nope"}


@pytest.mark.asyncio
async def test_missing_argument_is_reported(config):
    set_config(config)
    data = payload(await handle_tool_call("conda_env_provision", {"env": "x"}))
    assert data["success"] is False
    assert "packages" in data["error"]


@pytest.mark.asyncio
async def test_remove_tool_keeps_plain_directories(config, tmp_path: Path):
    set_config(config)
    documents = tmp_path / "important"
    documents.mkdir()
    (documents / "thesis.tex").write_text("")

    data = payload(await handle_tool_call("conda_env_remove", {"env": str(documents)}))

    assert data["success"] is False
    assert "Unknown environment" in data["error"]
    assert (documents / "thesis.tex").exists()
