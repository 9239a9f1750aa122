from pathlib import Path

import pytest

import musicals.config as cfg_module


@pytest.fixture()
def clean_env(monkeypatch):
    # setenv records the variables so values loaded from a secrets file are undone
    for name in ("ADMIN_USERNAME", "ADMIN_PASSWORD"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_load_reads_toml_and_secrets_file(tmp_path, clean_env):
    config = tmp_path / "config.toml"
    config.write_text('[site]\ntitle = "Musicals"\n[database]\npath = "x/y.db"\n')
    secrets = tmp_path / "secrets"
    secrets.write_text('# admin\nADMIN_USERNAME=boss\nADMIN_PASSWORD="pw"\n')

    cfg = cfg_module.load(config, secrets)

    assert cfg_module.get_site(cfg) == {"title": "Musicals"}
    assert cfg_module.get_database_path(cfg) == Path("x/y.db")
    assert cfg_module.get_admin_credentials(cfg) == ("boss", "pw")


def test_shell_environment_wins(tmp_path, monkeypatch):
    monkeypatch.setenv("ADMIN_USERNAME", "shell-user")
    monkeypatch.setenv("ADMIN_PASSWORD", "shell-pw")
    secrets = tmp_path / "secrets"
    secrets.write_text("ADMIN_USERNAME=file-user\n")

    cfg = cfg_module.load(tmp_path / "missing.toml", secrets)

    assert cfg_module.get_admin_credentials(cfg) == ("shell-user", "shell-pw")


def test_defaults(tmp_path, clean_env):
    cfg = cfg_module.load(tmp_path / "missing.toml", tmp_path / "missing-secrets")
    assert cfg_module.get_database_path(cfg) == Path("data/musicals.db")
    assert cfg_module.get_server(cfg) == {}
    assert cfg_module.get_admin_credentials(cfg) == ("", "")
