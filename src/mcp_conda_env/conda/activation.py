"""Activated process environments for running conda commands."""

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from mcp_conda_env.conda.binaries import get_env_bin_dirs

# Variables that would leak another interpreter's setup into conda
_CLEARED_VARS = ("PYTHONHOME", "PYTHONPATH", "VIRTUAL_ENV")


def activated_environ(
    envpath: Path, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Copy of ``environ`` (default ``os.environ``) with ``envpath`` activated.

    The process environment itself is never modified, so concurrent
    provisioning calls cannot see each other's activation.
    """
    envpath = Path(envpath)
    env = dict(os.environ if environ is None else environ)

    bin_dirs = os.pathsep.join(str(d) for d in get_env_bin_dirs(envpath))
    current_path = env.get("PATH")
    env["PATH"] = f"{bin_dirs}{os.pathsep}{current_path}" if current_path else bin_dirs
    env["CONDA_PREFIX"] = str(envpath)
    env["CONDA_DEFAULT_ENV"] = str(envpath)
    env["CONDA_SHLVL"] = "1"

    for var in _CLEARED_VARS:
        env.pop(var, None)

    return env
