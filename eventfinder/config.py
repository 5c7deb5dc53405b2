import os
import tomllib
from pathlib import Path
from typing import Any

from eventfinder.errors import ConfigError

_DEFAULT_CONFIG_PATH = Path("config.toml")
_DEFAULT_ENV_PATH = Path("secrets")


def load(path: Path = _DEFAULT_CONFIG_PATH, env_path: Path = _DEFAULT_ENV_PATH) -> dict[str, Any]:
    """Load config from TOML (defaults if the file is missing), then overlay secrets."""
    cfg: dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "rb") as f:
                cfg = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    _load_env(env_path, cfg)
    return cfg


def _load_env(env_path: Path, cfg: dict) -> None:
    """
    Parse a .env style file and inject values into the config dict.

    Supported variable names:
      TICKETMASTER_API_KEY  -> cfg["secrets"]["ticketmaster_api_key"]

    Shell environment variables take precedence over file values.
    """
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
            if key not in os.environ:
                os.environ[key] = value

    _apply_env_vars(cfg)


def _apply_env_vars(cfg: dict) -> None:
    secrets = cfg.setdefault("secrets", {})
    if v := os.environ.get("TICKETMASTER_API_KEY"):
        secrets["ticketmaster_api_key"] = v


def get_api(cfg: dict) -> dict:
    return cfg.get("api", {})


def get_site(cfg: dict) -> dict:
    return cfg.get("site", {})


def get_output_dir(cfg: dict) -> Path:
    return Path(get_site(cfg).get("output_dir", "output"))


def get_api_key(cfg: dict) -> str:
    key = cfg.get("secrets", {}).get("ticketmaster_api_key")
    if not key:
        raise ConfigError(
            "No Ticketmaster API key configured. Set TICKETMASTER_API_KEY "
            "in the environment or in the 'secrets' file."
        )
    return key
