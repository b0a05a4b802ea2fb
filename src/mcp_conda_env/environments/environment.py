"""Conda environment lifecycle management."""

import shutil
from pathlib import Path
from typing import Optional, Sequence, Union

from mcp_conda_env.config import ProvisionConfig, get_config
from mcp_conda_env.conda.activation import activated_environ
from mcp_conda_env.conda.binaries import find_conda
from mcp_conda_env.conda.install import build_pip_command, conda_create, pip_install
from mcp_conda_env.conda.packages import list_python_version
from mcp_conda_env.errors import PathInstallError, PipInstallError
from mcp_conda_env.logging import get_logger
from mcp_conda_env.types import ProvisionRequest
from mcp_conda_env.versions import (
    CONDA_PIN_PATTERN,
    PIP_PIN_PATTERN,
    check_versions,
    normalize_packages,
    requested_python_version,
)

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _unlink(path: Path, ignore_errors: bool = False) -> None:
    if path.is_symlink() or path.is_file():
        path.unlink(missing_ok=ignore_errors)
    elif path.exists():
        shutil.rmtree(path, ignore_errors=ignore_errors)


def is_conda_environment(envpath: PathLike) -> bool:
    return (Path(envpath) / "conda-meta").is_dir()


def resolve_envpath(name_or_path: PathLike, config: Optional[ProvisionConfig] = None) -> Path:
    """Map a bare environment name into the configured root; paths pass through."""
    candidate = Path(name_or_path)
    if candidate.is_absolute() or len(candidate.parts) > 1:
        return candidate
    return (config or get_config()).env_root / candidate


async def provision(
    envpath: PathLike,
    packages: Sequence[str],
    channels: Optional[Sequence[str]] = None,
    pip: Optional[Sequence[str]] = None,
    paths: Optional[Sequence[PathLike]] = None,
    config: Optional[ProvisionConfig] = None,
) -> None:
    """Create a fresh conda environment at ``envpath`` holding ``packages``.

    Anything already at ``envpath`` is deleted first. If creation or any
    install step fails, the directory is removed again before the error
    propagates.
    """
    config = config or get_config()
    channels = list(config.channels if channels is None else channels)
    pip = list(pip or [])
    paths = [str(p) for p in paths or []]

    packages = normalize_packages(packages)
    check_versions(packages, CONDA_PIN_PATTERN, config.check_versions)

    conda = find_conda(config)

    version = requested_python_version(packages)
    if version is None:
        version = await list_python_version(conda.base_dir)

    envpath = Path(envpath)
    logger.info(
        {
            "event": "provisioning_environment",
            "envpath": str(envpath),
            "python": version,
            "manager": conda.manager.value,
        }
    )

    success = False
    try:
        _unlink(envpath)
        envpath.mkdir(parents=True)

        await conda_create(
            envpath.resolve(),
            conda.binary,
            version,
            packages,
            channels,
            env=activated_environ(conda.base_dir),
        )

        if pip:
            check_versions(pip, PIP_PIN_PATTERN, config.check_versions)
            returncode = await pip_install(envpath, pip)
            if returncode != 0:
                raise PipInstallError(build_pip_command(envpath, pip), returncode)

        for path in paths:
            returncode = await pip_install(envpath, [path])
            if returncode == 0:
                continue
            if config.path_install_fatal:
                raise PathInstallError(path, build_pip_command(envpath, [path]), returncode)
            logger.warning({"event": "path_install_skipped", "path": path})

        success = True
    finally:
        if not success:
            logger.debug({"event": "removing_failed_environment", "envpath": str(envpath)})
            _unlink(envpath, ignore_errors=True)

    logger.info({"event": "environment_provisioned", "envpath": str(envpath)})


async def provision_request(
    request: ProvisionRequest, config: Optional[ProvisionConfig] = None
) -> None:
    await provision(
        request.envpath,
        request.packages,
        channels=request.channels,
        pip=request.pip,
        paths=request.paths,
        config=config,
    )


def remove_environment(envpath: PathLike) -> bool:
    """Delete a conda environment, returning whether one existed.

    Directories without a ``conda-meta`` folder are left alone.
    """
    envpath = Path(envpath)
    if envpath.is_symlink() or not is_conda_environment(envpath):
        return False
    shutil.rmtree(envpath)
    logger.info({"event": "environment_removed", "envpath": str(envpath)})
    return True
