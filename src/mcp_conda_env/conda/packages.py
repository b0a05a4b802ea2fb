"""Inspecting conda installations and environments."""

import json
from pathlib import Path
from typing import Optional

from mcp_conda_env.config import ProvisionConfig, get_config
from mcp_conda_env.conda.binaries import find_conda, get_python_binary
from mcp_conda_env.conda.commands import run_command
from mcp_conda_env.errors import CommandError
from mcp_conda_env.types import InstalledPackage

VERSION_SNIPPET = "import platform; print(platform.python_version())"


async def list_python_version(envpath: Path) -> str:
    """Python version of the interpreter in ``envpath``.

    Called on the base installation to pick a default version for new
    environments.
    """
    cmd = [str(get_python_binary(envpath)), "-c", VERSION_SNIPPET]
    returncode, stdout, stderr = await run_command(*cmd)
    if returncode != 0:
        raise CommandError(cmd, returncode, stdout, stderr)
    return stdout.strip()


def parse_conda_list(output: str) -> list[InstalledPackage]:
    return [
        InstalledPackage(
            name=entry["name"],
            version=entry["version"],
            channel=entry.get("channel", ""),
        )
        for entry in json.loads(output or "[]")
    ]


async def list_packages(
    envpath: Path, config: Optional[ProvisionConfig] = None
) -> list[InstalledPackage]:
    """Packages installed in a conda environment.

    The ``full`` specifiers can be pasted back into ``packages=`` to pin an
    environment that was created with version checking disabled.
    """
    conda = find_conda(config or get_config())
    cmd = [str(conda.binary), "list", "--prefix", str(envpath), "--json"]
    returncode, stdout, stderr = await run_command(*cmd)
    if returncode != 0:
        raise CommandError(cmd, returncode, stdout, stderr)
    return parse_conda_list(stdout)
