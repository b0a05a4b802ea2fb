"""Provisioning configuration."""
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

import appdirs

APP_NAME = "mcp-conda-env"
DEFAULT_CHANNELS = ["conda-forge"]

CHECK_VERSIONS_VAR = "MCP_CONDA_ENV_CHECK_VERSIONS"
ENV_ROOT_VAR = "MCP_CONDA_ENV_ROOT"
CHANNELS_VAR = "MCP_CONDA_ENV_CHANNELS"
CONDA_EXE_VAR = "CONDA_EXE"

_FALSE_VALUES = {"0", "false", "no", "off"}


def default_env_root() -> Path:
    return Path(appdirs.user_data_dir(APP_NAME)) / "envs"


@dataclass(frozen=True)
class ProvisionConfig:
    """Settings applied to every provisioning call.

    ``check_versions`` should only be disabled while developing, to let conda
    pick versions that can then be read back with ``list_packages`` and pinned.
    """
    check_versions: bool = True
    channels: list[str] = field(default_factory=lambda: list(DEFAULT_CHANNELS))
    conda_exe: Optional[str] = None
    env_root: Path = field(default_factory=default_env_root)
    path_install_fatal: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProvisionConfig":
        environ = os.environ if environ is None else environ
        kwargs = {}

        check = environ.get(CHECK_VERSIONS_VAR)
        if check is not None:
            kwargs["check_versions"] = check.strip().lower() not in _FALSE_VALUES

        channels = environ.get(CHANNELS_VAR)
        if channels:
            kwargs["channels"] = [c.strip() for c in channels.split(",") if c.strip()]

        if environ.get(CONDA_EXE_VAR):
            kwargs["conda_exe"] = environ[CONDA_EXE_VAR]

        if environ.get(ENV_ROOT_VAR):
            kwargs["env_root"] = Path(environ[ENV_ROOT_VAR])

        return cls(**kwargs)


# Application-owned configuration, built lazily from the environment
_CONFIG: Optional[ProvisionConfig] = None


def get_config() -> ProvisionConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = ProvisionConfig.from_env()
    return _CONFIG


def set_config(config: ProvisionConfig) -> None:
    global _CONFIG
    _CONFIG = config


def set_check_versions(value: bool) -> None:
    """Toggle version pin checking for the rest of the session."""
    set_config(replace(get_config(), check_versions=bool(value)))


def reset_config() -> None:
    global _CONFIG
    _CONFIG = None
