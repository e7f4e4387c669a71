"""Configuration module for TaskDesk."""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


@dataclass
class AuthConfig:
    """Token signing and password hashing settings."""
    jwt_secret_key: str = field(default_factory=lambda: os.getenv("JWT_SECRET_KEY", ""))
    token_expire_days: int = field(default_factory=lambda: int(os.getenv("TOKEN_EXPIRE_DAYS", "30")))
    bcrypt_rounds: int = field(default_factory=lambda: int(os.getenv("BCRYPT_ROUNDS", "12")))

    @property
    def token_expire_seconds(self) -> int:
        return self.token_expire_days * 86400


@dataclass
class StorageConfig:
    """Where the JSON stores live."""
    data_dir: Path = field(default_factory=lambda: Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR))))
    users_filename: str = "users.json"
    tasks_filename: str = "tasks.json"

    @property
    def users_file(self) -> Path:
        return self.data_dir / self.users_filename

    @property
    def tasks_file(self) -> Path:
        return self.data_dir / self.tasks_filename


@dataclass
class ApiConfig:
    """HTTP server settings."""
    # Comma separated, e.g. "http://localhost:3000,https://app.example.com"
    cors_origins: List[str] = field(default_factory=lambda: [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ])
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    host: str = field(default_factory=lambda: os.getenv("API_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "5000")))


@dataclass
class Config:
    """Main configuration container."""
    auth: AuthConfig = field(default_factory=AuthConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


def load_config() -> Config:
    """Load configuration from environment variables."""
    return Config()
