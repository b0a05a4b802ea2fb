"""Error types for conda environment provisioning."""
import logging
from typing import Any, Dict, Optional, Sequence

from mcp.types import (
    ErrorData,
    INVALID_REQUEST,
    INVALID_PARAMS,
    INTERNAL_ERROR,
)

from mcp_conda_env.logging import log_with_data


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log an error with context."""
    logger = logger or logging.getLogger(__name__)

    error_info: Dict[str, Any] = {
        "error_type": error.__class__.__name__,
        "error_message": str(error),
    }
    if context:
        error_info["context"] = context
    if isinstance(error, ProvisionError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    log_with_data(logger, logging.ERROR, "Provisioning error occurred", error_info)


class ProvisionError(Exception):
    """Base error class for environment provisioning."""
    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(code=self.code, message=str(self), data=self.details)


class VersionPinError(ProvisionError):
    """One or more specifiers are missing an explicit version pin."""
    def __init__(self, packages: Sequence[str]):
        self.packages = list(packages)
        quoted = ", ".join(f"'{p}'" for p in self.packages)
        super().__init__(
            f"versions must be explicitly specified for {quoted}",
            code=INVALID_PARAMS,
            details={"packages": self.packages},
        )


class CondaNotFoundError(ProvisionError):
    """No usable conda installation."""
    def __init__(self, location: str):
        super().__init__(
            f"conda binary not found: {location}",
            code=INVALID_REQUEST,
            details={"location": location},
        )


class CommandError(ProvisionError):
    """An external command exited with a non-zero status."""
    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
        message: Optional[str] = None,
    ):
        self.command = [str(c) for c in command]
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        if message is None:
            message = f"command failed ({returncode}): {' '.join(self.command)}"
            detail = stderr.strip() or stdout.strip()
            if detail:
                message = f"{message}\n{detail}"
        super().__init__(
            message,
            code=INTERNAL_ERROR,
            details={"command": self.command, "returncode": returncode},
        )


class PipInstallError(CommandError):
    """pip failed to install the additional PyPI packages."""
    def __init__(self, command: Sequence[str], returncode: int):
        super().__init__(
            command,
            returncode,
            message="failed to install additional packages via pip",
        )


class PathInstallError(CommandError):
    """pip failed to install a package from a local directory."""
    def __init__(self, path: str, command: Sequence[str], returncode: int):
        self.path = path
        super().__init__(
            command,
            returncode,
            message=f"failed to install package from '{path}' via pip",
        )
        self.details["path"] = path
