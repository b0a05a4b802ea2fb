from pathlib import Path

from mcp_conda_env.config import (
    ProvisionConfig,
    default_env_root,
    get_config,
    reset_config,
    set_check_versions,
)


def test_defaults():
    config = ProvisionConfig()
    assert config.check_versions is True
    assert config.channels == ["conda-forge"]
    assert config.conda_exe is None
    assert config.path_install_fatal is True
    assert config.env_root == default_env_root()
    assert config.env_root.name == "envs"


def test_from_env():
    config = ProvisionConfig.from_env({
        "MCP_CONDA_ENV_CHECK_VERSIONS": "false",
        "MCP_CONDA_ENV_CHANNELS": "bioconda, conda-forge",
        "CONDA_EXE": "/opt/conda/bin/conda",
        "MCP_CONDA_ENV_ROOT": "/srv/envs",
    })
    assert config.check_versions is False
    assert config.channels == ["bioconda", "conda-forge"]
    assert config.conda_exe == "/opt/conda/bin/conda"
    assert config.env_root == Path("/srv/envs")


def test_from_env_keeps_checking_for_truthy_values():
    assert ProvisionConfig.from_env({"MCP_CONDA_ENV_CHECK_VERSIONS": "1"}).check_versions
    assert ProvisionConfig.from_env({}).check_versions


def test_set_check_versions_persists_for_session(monkeypatch):
    monkeypatch.delenv("MCP_CONDA_ENV_CHECK_VERSIONS", raising=False)
    assert get_config().check_versions is True

    set_check_versions(False)
    assert get_config().check_versions is False
    assert get_config() is get_config()

    reset_config()
    assert get_config().check_versions is True
