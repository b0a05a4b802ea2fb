"""Package installation through conda and pip."""

from pathlib import Path
from typing import Mapping, Optional, Sequence

from mcp_conda_env.conda.binaries import get_python_binary
from mcp_conda_env.conda.commands import run_command
from mcp_conda_env.errors import CommandError
from mcp_conda_env.logging import get_logger

logger = get_logger(__name__)


def build_create_command(
    envpath: Path,
    conda: Path,
    python_version: Optional[str],
    packages: Sequence[str],
    channels: Sequence[str],
) -> list[str]:
    cmd = [str(conda), "create", "--yes", "--prefix", str(envpath)]

    if python_version and not any(p.startswith("python=") for p in packages):
        cmd.append(f"python={python_version}")
    cmd.extend(packages)

    for channel in channels:
        cmd.extend(["-c", channel])

    return cmd


async def conda_create(
    envpath: Path,
    conda: Path,
    python_version: Optional[str],
    packages: Sequence[str],
    channels: Sequence[str],
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """Create a conda environment at ``envpath`` holding ``packages``.

    ``env`` is the process environment for conda, normally the base
    installation activated with ``activated_environ``.
    """
    cmd = build_create_command(envpath, conda, python_version, packages, channels)

    logger.info(
        {
            "event": "conda_create",
            "envpath": str(envpath),
            "python": python_version,
            "packages": list(packages),
            "channels": list(channels),
        }
    )

    returncode, stdout, stderr = await run_command(*cmd, env=env)
    if returncode != 0:
        raise CommandError(cmd, returncode, stdout, stderr)


def build_pip_command(envpath: Path, args: Sequence[str]) -> list[str]:
    return [str(get_python_binary(envpath)), "-m", "pip", "install", *args]


async def pip_install(envpath: Path, args: Sequence[str]) -> int:
    """Run ``pip install`` with the environment's interpreter, returning its exit code."""
    cmd = build_pip_command(envpath, args)
    logger.info({"event": "pip_install", "envpath": str(envpath), "args": list(args)})

    returncode, _, stderr = await run_command(*cmd)
    if returncode != 0:
        logger.warning(
            {"event": "pip_install_failed", "returncode": returncode, "stderr": stderr}
        )
    return returncode
