"""External command execution."""

import asyncio
import os
from pathlib import Path
from typing import Mapping, Optional, Union

from mcp_conda_env.logging import get_logger

logger = get_logger(__name__)


async def run_command(
    *args: Union[str, Path],
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> tuple[int, str, str]:
    """Run a command and return (returncode, stdout, stderr)."""

    cmd = [str(a) for a in args]
    cmd_env = dict(os.environ if env is None else env)

    logger.debug({"event": "cmd_exec", "cmd": cmd})

    process = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=cwd,
        env=cmd_env,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    stdout_b, stderr_b = await process.communicate()
    stdout = stdout_b.decode(errors="replace") if stdout_b else ""
    stderr = stderr_b.decode(errors="replace") if stderr_b else ""

    if stdout:
        logger.debug({"event": "cmd_stdout", "cmd": cmd, "output": stdout})
    if stderr:
        logger.debug({"event": "cmd_stderr", "cmd": cmd, "output": stderr})

    logger.debug(
        {"event": "cmd_complete", "cmd": cmd, "returncode": process.returncode}
    )

    return process.returncode, stdout, stderr
