"""Locating conda and environment binaries."""

import os
import shutil
import sys
from pathlib import Path
from typing import Optional

from mcp_conda_env.config import ProvisionConfig, CONDA_EXE_VAR
from mcp_conda_env.errors import CondaNotFoundError
from mcp_conda_env.logging import get_logger
from mcp_conda_env.types import CondaInstallation, PackageManager

logger = get_logger(__name__)


def _locate_executable(config: ProvisionConfig) -> Optional[Path]:
    if config.conda_exe:
        return Path(config.conda_exe)

    if os.environ.get(CONDA_EXE_VAR):
        return Path(os.environ[CONDA_EXE_VAR])

    for manager in PackageManager:
        found = shutil.which(manager.value)
        if found:
            return Path(found)

    return None


def _require_executable(config: ProvisionConfig) -> Path:
    exe = _locate_executable(config)
    if exe is None:
        raise CondaNotFoundError("no conda or mamba executable on PATH")
    return exe


def _manager_for(exe: Path) -> PackageManager:
    return PackageManager.MAMBA if exe.stem.lower() == "mamba" else PackageManager.CONDA


def _base_dir(exe: Path) -> Path:
    # <base>/bin/conda, <base>/condabin/conda, <base>\Scripts\conda.exe
    base_dir = exe.resolve().parent.parent
    logger.debug({"event": "conda_dir_resolved", "exe": str(exe), "base_dir": str(base_dir)})
    return base_dir


def get_conda_dir(config: ProvisionConfig) -> Path:
    """Base installation directory of the conda used for provisioning."""
    return _base_dir(_require_executable(config))


def get_conda_binary(
    base_dir: Path, manager: PackageManager = PackageManager.CONDA
) -> Path:
    """Path to the package manager binary inside a base installation."""
    match sys.platform:
        case "win32":
            binary = base_dir / "Scripts" / f"{manager.value}.exe"
        case _:
            binary = base_dir / "bin" / manager.value

    if not binary.exists():
        raise CondaNotFoundError(str(binary))
    return binary


def find_conda(config: ProvisionConfig) -> CondaInstallation:
    exe = _require_executable(config)
    base_dir = _base_dir(exe)
    manager = _manager_for(exe)
    return CondaInstallation(
        base_dir=base_dir,
        binary=get_conda_binary(base_dir, manager),
        manager=manager,
    )


def get_python_binary(envpath: Path) -> Path:
    """Path to the interpreter of a conda environment."""
    match sys.platform:
        case "win32":
            return Path(envpath) / "python.exe"
        case _:
            return Path(envpath) / "bin" / "python"


def get_env_bin_dirs(envpath: Path) -> list[Path]:
    """Directories a conda activation puts on PATH."""
    envpath = Path(envpath)
    match sys.platform:
        case "win32":
            return [
                envpath,
                envpath / "Library" / "mingw-w64" / "bin",
                envpath / "Library" / "usr" / "bin",
                envpath / "Library" / "bin",
                envpath / "Scripts",
                envpath / "bin",
            ]
        case _:
            return [envpath / "bin"]
