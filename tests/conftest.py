import asyncio
import shutil
from pathlib import Path

import pytest

from mcp_conda_env.config import ProvisionConfig, reset_config
from mcp_conda_env.conda import install, packages


class FakeConda:
    """Stands in for the conda and pip processes."""

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self.binary = base_dir / "bin" / "conda"
        self.calls: list[list[str]] = []
        self.envs: list[dict[str, str] | None] = []
        self.create_delays: dict[str, float] = {}
        self.base_python_version = "3.10.4"
        self.create_returncode = 0
        self.pip_returncodes: dict[str, int] = {}
        self.list_output = "[]"

    async def run(self, *args, env=None, cwd=None):
        cmd = [str(a) for a in args]
        self.calls.append(cmd)
        self.envs.append(None if env is None else dict(env))

        if cmd[1:3] == ["-m", "pip"]:
            return self.pip_returncodes.get(cmd[-1], 0), "", "pip error"

        if cmd[1] == "-c":
            return 0, f"{self.base_python_version}\n", ""

        if cmd[1] == "create":
            if self.create_returncode != 0:
                return self.create_returncode, "", "PackagesNotFoundError"
            prefix = Path(cmd[cmd.index("--prefix") + 1])
            await asyncio.sleep(self.create_delays.get(prefix.name, 0))
            (prefix / "bin").mkdir(parents=True, exist_ok=True)
            (prefix / "bin" / "python").write_text("")
            (prefix / "conda-meta").mkdir(exist_ok=True)
            return 0, "", ""

        if cmd[1] == "list":
            return 0, self.list_output, ""

        raise AssertionError(f"unexpected command: {cmd}")

    def commands(self, kind: str) -> list[list[str]]:
        if kind == "pip":
            return [c for c in self.calls if c[1:3] == ["-m", "pip"]]
        return [c for c in self.calls if c[1] == kind]


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fake_conda(tmp_path: Path, monkeypatch) -> FakeConda:
    (tmp_path / "miniforge" / "bin").mkdir(parents=True)
    base_dir = (tmp_path / "miniforge").resolve()
    (base_dir / "bin" / "conda").write_text("")

    fake = FakeConda(base_dir)
    monkeypatch.setattr(install, "run_command", fake.run)
    monkeypatch.setattr(packages, "run_command", fake.run)
    return fake


@pytest.fixture
def config(fake_conda: FakeConda, tmp_path: Path) -> ProvisionConfig:
    return ProvisionConfig(
        conda_exe=str(fake_conda.binary),
        env_root=tmp_path / "envs",
    )


@pytest.fixture
def conda_exe() -> str:
    exe = shutil.which("conda")
    if exe is None:
        pytest.skip("conda is not installed")
    return exe
