"""Version pin checks for package specifiers."""
import re
from typing import Iterable, Optional

from mcp_conda_env.errors import VersionPinError

# conda pins use a single "=" followed directly by a version number
CONDA_PIN_PATTERN = r"[^=<>]=[0-9]"
PIP_PIN_PATTERN = r"=="

_PYTHON_SPEC = re.compile(r"^python=+")


def normalize_packages(packages: Iterable[str]) -> list[str]:
    """Coerce pip-style ``==`` pins to the ``=`` notation conda expects."""
    return [p.replace("==", "=", 1) for p in packages]


def check_versions(specs: Iterable[str], pattern: str, check: bool = True) -> None:
    """Raise VersionPinError naming every spec that lacks a pin."""
    if not check:
        return

    failed = [s for s in specs if not re.search(pattern, s)]
    if failed:
        raise VersionPinError(failed)


def requested_python_version(packages: Iterable[str]) -> Optional[str]:
    """Version from the first ``python=`` specifier, if any."""
    for p in packages:
        if _PYTHON_SPEC.match(p):
            return _PYTHON_SPEC.sub("", p, count=1)
    return None
