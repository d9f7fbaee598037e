"""Centralized credential and request configuration.

Credentials are stored in the workspace-tasks repo root by default:
    .env                              - environment overrides
    google/token.json                 - Google authorized-user token
    google/service_account_key.json   - Google service account key

This module auto-loads the .env file on import, so the settings below
are available to every workspace-tasks module.
"""

import os
from dataclasses import dataclass
from pathlib import Path

# __file__ is src/workspace_tasks/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent
GOOGLE_DIR = REPO_ROOT / "google"

ENV_FILE = REPO_ROOT / ".env"

DEFAULT_TIMEOUT = 30.0
DEFAULT_NUM_RETRIES = 3


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            # Environment variables take precedence
            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def google_token_path() -> Path:
    """Path of the authorized-user token file."""
    override = os.environ.get("WORKSPACE_TASKS_TOKEN")
    return Path(override) if override else GOOGLE_DIR / "token.json"


def service_account_path() -> Path:
    """Path of the service account key file."""
    override = os.environ.get("WORKSPACE_TASKS_SERVICE_ACCOUNT")
    return Path(override) if override else GOOGLE_DIR / "service_account_key.json"


def ensure_google_dir() -> Path:
    """Create google credentials directory if it doesn't exist.

    Returns:
        Path to google directory.
    """
    GOOGLE_DIR.mkdir(parents=True, exist_ok=True)
    return GOOGLE_DIR


@dataclass(frozen=True)
class RequestOptions:
    """Transport settings applied to every Tasks API client.

    Attributes:
        timeout: Socket timeout in seconds for each HTTP request.
        num_retries: Retries with exponential backoff on 5xx/429 responses.
    """

    timeout: float = DEFAULT_TIMEOUT
    num_retries: int = DEFAULT_NUM_RETRIES


def get_request_options() -> RequestOptions:
    """Build request options from the environment.

    Reads WORKSPACE_TASKS_TIMEOUT and WORKSPACE_TASKS_NUM_RETRIES.

    Raises:
        ValueError: If a value is not a number or is negative.
    """
    raw_timeout = os.environ.get("WORKSPACE_TASKS_TIMEOUT")
    raw_retries = os.environ.get("WORKSPACE_TASKS_NUM_RETRIES")

    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        num_retries = int(raw_retries) if raw_retries else DEFAULT_NUM_RETRIES
    except ValueError as e:
        raise ValueError(f"Invalid request option in environment: {e}") from e

    if timeout <= 0:
        raise ValueError(f"WORKSPACE_TASKS_TIMEOUT must be positive, got {timeout}")
    if num_retries < 0:
        raise ValueError(f"WORKSPACE_TASKS_NUM_RETRIES must be >= 0, got {num_retries}")

    return RequestOptions(timeout=timeout, num_retries=num_retries)


def get_credential_status() -> dict:
    """Get status of all configured credentials.

    Returns:
        Dictionary with credential status.
    """
    return {
        "repo_root": str(REPO_ROOT),
        "env_file": ENV_FILE.exists(),
        "google": {
            "token": google_token_path().exists(),
            "service_account": service_account_path().exists(),
        },
    }


# Auto-load .env from repo root on import
_loaded = _load_env_file(ENV_FILE)
