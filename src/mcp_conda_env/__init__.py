"""Pinned conda environment provisioning."""

from mcp_conda_env.config import (
    ProvisionConfig,
    get_config,
    reset_config,
    set_check_versions,
    set_config,
)
from mcp_conda_env.environments.environment import (
    provision,
    provision_request,
    remove_environment,
    resolve_envpath,
)
from mcp_conda_env.conda.packages import list_packages, list_python_version
from mcp_conda_env.errors import (
    CommandError,
    CondaNotFoundError,
    PathInstallError,
    PipInstallError,
    ProvisionError,
    VersionPinError,
)
from mcp_conda_env.types import InstalledPackage, ProvisionRequest

__all__ = [
    "CommandError",
    "CondaNotFoundError",
    "InstalledPackage",
    "PathInstallError",
    "PipInstallError",
    "ProvisionConfig",
    "ProvisionError",
    "ProvisionRequest",
    "VersionPinError",
    "get_config",
    "list_packages",
    "list_python_version",
    "provision",
    "provision_request",
    "remove_environment",
    "reset_config",
    "resolve_envpath",
    "set_check_versions",
    "set_config",
]
