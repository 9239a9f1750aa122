import os
import tomllib
from pathlib import Path
from typing import Any

_DEFAULT_CONFIG_PATH = Path("config.toml")
_DEFAULT_ENV_PATH = Path("secrets")

_ENV_SECRETS = {
    "ADMIN_USERNAME": "admin_username",
    "ADMIN_PASSWORD": "admin_password",
}


def load(path: Path = _DEFAULT_CONFIG_PATH, env_path: Path = _DEFAULT_ENV_PATH) -> dict[str, Any]:
    """Load config from TOML (if present), then overlay any secrets from .env."""
    cfg: dict[str, Any] = {}
    if path.exists():
        with open(path, "rb") as f:
            cfg = tomllib.load(f)
    _load_env(env_path, cfg)
    return cfg


def _load_env(env_path: Path, cfg: dict) -> None:
    """
    Parse a .env file and inject values into the config dict.

    Supported variable names:
      ADMIN_USERNAME  -> cfg["secrets"]["admin_username"]
      ADMIN_PASSWORD  -> cfg["secrets"]["admin_password"]

    Shell environment variables take precedence over .env values.
    """
    # Pick up anything already set in the shell first
    _apply_env_vars(cfg)

    if not env_path.exists():
        return

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            # Shell environment takes precedence over .env file
            if key not in os.environ:
                os.environ[key] = value

    _apply_env_vars(cfg)


def _apply_env_vars(cfg: dict) -> None:
    secrets = cfg.setdefault("secrets", {})
    for env_name, key in _ENV_SECRETS.items():
        if v := os.environ.get(env_name):
            secrets[key] = v


def get_site(cfg: dict) -> dict:
    return cfg.get("site", {})


def get_server(cfg: dict) -> dict:
    return cfg.get("server", {})


def get_database_path(cfg: dict) -> Path:
    return Path(cfg.get("database", {}).get("path", "data/musicals.db"))


def get_admin_credentials(cfg: dict) -> tuple[str, str]:
    """(username, password) for the admin panel. Empty strings mean nobody can log in."""
    secrets = cfg.get("secrets", {})
    return secrets.get("admin_username", ""), secrets.get("admin_password", "")
