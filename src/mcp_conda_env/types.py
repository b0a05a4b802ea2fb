"""Core type definitions"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

PackageManager = Enum('PackageManager', {'CONDA': 'conda', 'MAMBA': 'mamba'})


@dataclass(frozen=True)
class ProvisionRequest:
    """Everything needed to build one environment"""
    envpath: Path
    packages: list[str]
    channels: list[str] | None = None
    pip: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CondaInstallation:
    """Base conda installation used to create environments"""
    base_dir: Path
    binary: Path
    manager: PackageManager = PackageManager.CONDA


@dataclass(frozen=True)
class InstalledPackage:
    """Package record reported by ``conda list``"""
    name: str
    version: str
    channel: str

    @property
    def full(self) -> str:
        return f"{self.name}={self.version}"
