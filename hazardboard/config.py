"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/hazardboard.db"
    seed_default_admin: bool = True
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"
    session_max_age_days: int = 7
    cookie_secure: bool = False
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    """Build Settings by merging YAML values over env/defaults."""
    y = _yaml
    overrides: dict = {}
    db_url = y.get("database", {}).get("url")
    if db_url:
        overrides["database_url"] = db_url
    admin = y.get("default_admin", {})
    if "seed" in admin:
        overrides["seed_default_admin"] = admin["seed"]
    if "username" in admin:
        overrides["default_admin_username"] = admin["username"]
    if "password" in admin:
        overrides["default_admin_password"] = admin["password"]
    session = y.get("session", {})
    if "max_age_days" in session:
        overrides["session_max_age_days"] = session["max_age_days"]
    if "cookie_secure" in session:
        overrides["cookie_secure"] = session["cookie_secure"]
    if "log_level" in y:
        overrides["log_level"] = y["log_level"]
    return Settings(**overrides)
