"""
Configuration management.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _default_storage_file() -> str:
    data_dir = os.getenv("DATA_DIR", "./data")
    return os.getenv("STORAGE_FILE", os.path.join(data_dir, "local_storage.json"))


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Data
    data_dir: str = field(default_factory=lambda: os.getenv("DATA_DIR", "./data"))
    storage_file: str = field(default_factory=_default_storage_file)
    storage_key: str = field(default_factory=lambda: os.getenv("STORAGE_KEY", "leasingData"))

    # Translation
    anthropic_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY") or None,
        repr=False,
    )
    translation_model: str = field(
        default_factory=lambda: os.getenv("TRANSLATION_MODEL", "claude-sonnet-4-20250514")
    )
    translation_max_tokens: int = field(
        default_factory=lambda: int(os.getenv("TRANSLATION_MAX_TOKENS", "4096"))
    )

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    @property
    def translation_enabled(self) -> bool:
        return bool(self.anthropic_api_key)

    def to_dict(self) -> dict:
        """Convert config to dictionary. The API key is never included."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "data_dir": self.data_dir,
            "storage_file": self.storage_file,
            "storage_key": self.storage_key,
            "translation_enabled": self.translation_enabled,
            "translation_model": self.translation_model,
            "translation_max_tokens": self.translation_max_tokens,
        }
