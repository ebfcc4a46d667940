import os
import yaml
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from storage.naming import ALLOWED_TYPES

ROOT_DIR = Path(__file__).parent.parent
CONFIG_DIR = ROOT_DIR / "config"


class Settings(BaseModel):
    """Static gateway configuration, built once at startup."""

    token_key: str = ""
    host: str = "0.0.0.0"
    port: int = 3002
    base_url: str = "localhost:3002"
    media_dir: Path = Path("media")
    log_level: str = "INFO"
    allowed_types: List[str] = Field(default_factory=lambda: list(ALLOWED_TYPES))
    max_files: int = Field(10, ge=1)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @property
    def upload_dir(self) -> Path:
        return self.media_dir / "upload"


def read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_settings(config_file: Optional[Path] = None, env: Optional[dict] = None) -> Settings:
    """Merge code defaults, the YAML file and the environment (highest wins)."""
    data = read_yaml(config_file or CONFIG_DIR / "settings.yaml")
    server = data.get("server") or {}
    storage = data.get("storage") or {}
    uploads = data.get("uploads") or {}
    values = {
        "host": server.get("host"),
        "port": server.get("port"),
        "base_url": server.get("base_url"),
        "media_dir": storage.get("media_dir"),
        "log_level": (data.get("logging") or {}).get("level"),
        "allowed_types": uploads.get("allowed_types"),
        "max_files": uploads.get("max_files"),
        "cors_origins": (data.get("cors") or {}).get("allow_origins"),
    }

    env = os.environ if env is None else env
    for key, var in (
        ("token_key", "TOKEN_KEY"),
        ("host", "HOST"),
        ("port", "PORT"),
        ("base_url", "BASE_URL"),
        ("media_dir", "MEDIA_DIR"),
        ("log_level", "LOG_LEVEL"),
    ):
        if env.get(var):
            values[key] = env[var]

    return Settings(**{k: v for k, v in values.items() if v is not None})


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return load_settings()
