"""
Configuration for histograph.

Settings are read from ``<base>/config.yaml``. A missing file or missing keys
fall back to defaults.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_BASE_PATH = Path.home() / ".histograph"
CONFIG_FILENAME = "config.yaml"
BASE_PATH_ENV = "HISTOGRAPH_BASE_PATH"

DEFAULT_CONFIG_TEMPLATE = """# histograph configuration

storage:
  # Maximum number of object files open at once per store (0 = unbounded)
  max_concurrency: 64
  # Flush object contents to disk before a put completes
  fsync: false
"""


def get_base_path(data_dir: Optional[Path] = None) -> Path:
    """Get the base path for histograph data.

    Priority: explicit argument > HISTOGRAPH_BASE_PATH env var > default path.
    """
    if data_dir:
        return Path(data_dir)
    env_path = os.getenv(BASE_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_BASE_PATH


@dataclass
class HistographConfig:
    """Storage settings."""
    max_concurrency: int = 64
    fsync: bool = False

    def __post_init__(self):
        if self.max_concurrency < 0:
            raise ValueError(f"max_concurrency must be >= 0, got {self.max_concurrency}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistographConfig":
        storage = (data or {}).get("storage") or {}
        return cls(
            max_concurrency=int(storage.get("max_concurrency", cls.max_concurrency)),
            fsync=_as_bool(storage.get("fsync", cls.fsync)),
        )

    @classmethod
    def load(cls, base_path: Path) -> "HistographConfig":
        """Load config.yaml from base_path, or defaults if it does not exist."""
        config_path = Path(base_path) / CONFIG_FILENAME
        if not config_path.exists():
            return cls()
        return cls.from_dict(yaml.safe_load(config_path.read_text()) or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "storage": {
                "max_concurrency": self.max_concurrency,
                "fsync": self.fsync,
            }
        }


def _as_bool(value: Any) -> bool:
    # `config set` writes strings
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
