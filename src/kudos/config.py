"""Configuration loader.

Loads settings from ~/.kudos/config.json. The GitHub token is never read
from the file; it comes from GITHUB_TOKEN or GH_TOKEN in the environment.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_HOME = Path.home() / ".kudos"
DEFAULT_CONFIG_PATH = DEFAULT_HOME / "config.json"
DEFAULT_API_BASE_URL = "https://api.github.com"

FETCH_BACKENDS = frozenset({"gh", "http"})


@dataclass
class KudosConfig:
    """Runtime configuration.

    Attributes:
        fetch_backend: 'gh' to shell out to the gh CLI, 'http' for the REST API.
        gh_path: gh executable name or path.
        api_base_url: Base URL for the HTTP backend.
        http_timeout: Timeout in seconds for the HTTP backend.
        github_token: Bearer token for the HTTP backend (from the environment).
        db_path: SQLite file holding contributor notes.
        log_dir: Directory for the JSONL event log.
        log_max_size_mb: Rotation threshold for the event log.
    """

    fetch_backend: str = "gh"
    gh_path: str = "gh"
    api_base_url: str = DEFAULT_API_BASE_URL
    http_timeout: float = 10.0
    github_token: str | None = None
    db_path: Path = field(default_factory=lambda: DEFAULT_HOME / "memory.db")
    log_dir: Path = field(default_factory=lambda: DEFAULT_HOME / "logs")
    log_max_size_mb: float = 10.0

    def __post_init__(self) -> None:
        """Validate config and set defaults."""
        if self.fetch_backend not in FETCH_BACKENDS:
            raise ValueError(
                f"fetch_backend must be one of {sorted(FETCH_BACKENDS)}, "
                f"got {self.fetch_backend!r}"
            )

        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be positive")

        if self.github_token is None:
            self.github_token = (
                os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN") or None
            )


def load_config(config_path: Path | None = None) -> KudosConfig:
    """Load KudosConfig from a JSON file.

    The config file should have this structure:
    ```json
    {
      "github": {
        "backend": "http",
        "gh_path": "/usr/local/bin/gh",
        "api_base_url": "https://api.github.com",
        "timeout": 10.0
      },
      "memory": {"db_path": "~/.kudos/memory.db"},
      "logging": {"dir": "~/.kudos/logs", "max_size_mb": 10}
    }
    ```

    Args:
        config_path: Path to config file. Uses DEFAULT_CONFIG_PATH if None.

    Returns:
        KudosConfig instance with loaded values.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return KudosConfig()

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON in %s: %s. Using defaults.", path, e)
        return KudosConfig()
    except OSError as e:
        logger.warning("Cannot read %s: %s. Using defaults.", path, e)
        return KudosConfig()

    if not isinstance(data, dict):
        logger.warning("Config in %s is not an object. Using defaults.", path)
        return KudosConfig()

    return _parse_config(data)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    return value if isinstance(value, dict) else {}


def _parse_config(data: dict[str, Any]) -> KudosConfig:
    """Parse config dictionary into KudosConfig.

    Invalid values are dropped in favour of the defaults.
    """
    github = _section(data, "github")
    memory = _section(data, "memory")
    logging_data = _section(data, "logging")

    backend = github.get("backend", "gh")
    if backend not in FETCH_BACKENDS:
        logger.warning("Unknown github.backend %r, using 'gh'", backend)
        backend = "gh"

    gh_path = github.get("gh_path", "gh")
    if not isinstance(gh_path, str) or not gh_path:
        gh_path = "gh"

    api_base_url = github.get("api_base_url", DEFAULT_API_BASE_URL)
    if not isinstance(api_base_url, str) or not api_base_url:
        api_base_url = DEFAULT_API_BASE_URL

    timeout = github.get("timeout", 10.0)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        timeout = 10.0

    paths: dict[str, Path] = {}
    if isinstance(memory.get("db_path"), str):
        paths["db_path"] = Path(memory["db_path"]).expanduser()
    if isinstance(logging_data.get("dir"), str):
        paths["log_dir"] = Path(logging_data["dir"]).expanduser()

    max_size_mb = logging_data.get("max_size_mb", 10.0)
    if isinstance(max_size_mb, bool) or not isinstance(max_size_mb, (int, float)) or max_size_mb <= 0:
        max_size_mb = 10.0

    return KudosConfig(
        fetch_backend=backend,
        gh_path=gh_path,
        api_base_url=api_base_url.rstrip("/"),
        http_timeout=float(timeout),
        log_max_size_mb=float(max_size_mb),
        **paths,
    )
