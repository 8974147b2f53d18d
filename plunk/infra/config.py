"""
Client Configuration
--------------------
Immutable settings for a Plunk client, loadable from YAML with
environment variable overrides.

Rules:
- The API key is never printed
- Environment overrides file config, explicit arguments override both
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
import os

import yaml

from plunk.infra.logging import get_logger

DEFAULT_BASE_URL = "https://api.useplunk.com"
DEFAULT_API_VERSION = "v1"
DEFAULT_TIMEOUT = 60.0

ENV_PREFIX = "PLUNK_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class PlunkConfig:
    """Configuration for a Plunk client."""
    api_key: str = field(repr=False)
    api_version: str = DEFAULT_API_VERSION
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT  # Seconds
    use_isolate: Optional[bool] = None  # Decode responses off the event loop

    def __post_init__(self):
        if not self.api_key:
            raise ValueError("api_key must not be empty")
        if not self.api_version:
            raise ValueError("api_version must not be empty")
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def endpoint(self) -> str:
        """Versioned API root, e.g. https://api.useplunk.com/v1."""
        return f"{self.base_url.rstrip('/')}/{self.api_version.strip('/')}"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def _read_file(path: Path) -> Dict[str, Any]:
    logger = get_logger("infra.config")

    if not path.exists():
        logger.warning(f"Config file not found: {path}")
        return {}

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    # Accept either a top-level 'plunk:' section or a flat mapping
    section = data.get("plunk", data)
    if not isinstance(section, dict):
        raise ValueError(f"'plunk' section in {path} must be a mapping")

    logger.info(f"Loaded config from {path}")
    return dict(section)


def _read_env() -> Dict[str, Any]:
    values: Dict[str, Any] = {}

    for key in ("api_key", "api_version", "base_url"):
        env_value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
        if env_value is not None:
            values[key] = env_value

    timeout = os.getenv(f"{ENV_PREFIX}TIMEOUT")
    if timeout is not None:
        values["timeout"] = float(timeout)

    use_isolate = os.getenv(f"{ENV_PREFIX}USE_ISOLATE")
    if use_isolate is not None:
        values["use_isolate"] = _parse_bool(use_isolate)

    return values


def load_config(path: Optional[Union[str, Path]] = None, **overrides: Any) -> PlunkConfig:
    """
    Build a PlunkConfig from a YAML file, the environment, and overrides.

    Args:
        path: Optional YAML file. A missing file is skipped with a warning.
        **overrides: Explicit values; None values are ignored.

    Raises:
        ValueError: If no API key is found or a value is invalid.
    """
    values: Dict[str, Any] = {}
    if path is not None:
        values.update(_read_file(Path(path)))
    values.update(_read_env())
    values.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(values) - {"api_key", "api_version", "base_url", "timeout", "use_isolate"}
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    if not values.get("api_key"):
        raise ValueError(f"No API key configured (set {ENV_PREFIX}API_KEY)")

    if "timeout" in values:
        values["timeout"] = float(values["timeout"])

    return PlunkConfig(**values)
