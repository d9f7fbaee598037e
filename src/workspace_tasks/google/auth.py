"""Credential providers for the Tasks API.

The tasks service only needs something it can await for a
``google.auth.credentials.Credentials``. Two file-backed providers are
included:

    TokenFileAuth       - authorized-user token (google/token.json)
    ServiceAccountAuth  - service account key, optionally delegated

Token refresh is left to google-auth: the HTTP layer refreshes expired
access tokens before each request.

Example:
    >>> auth = TokenFileAuth(scopes=["tasks"])
    >>> service = TasksService(auth)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from google.auth.credentials import Credentials
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials as UserCredentials

from workspace_tasks.config import google_token_path, service_account_path
from workspace_tasks.google.exceptions import (
    CredentialsNotFoundError,
    GoogleAuthError,
    ScopeMismatchError,
)

logger = logging.getLogger(__name__)


SCOPES = {
    "tasks": "https://www.googleapis.com/auth/tasks",
    "tasks_readonly": "https://www.googleapis.com/auth/tasks.readonly",
}


def resolve_scopes(scopes: list[str]) -> list[str]:
    """Resolve scope names to full URLs."""
    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
            )
    return resolved


class AuthManager(Protocol):
    """Anything that can hand out credentials for an API client."""

    async def get_authenticated_client(self) -> Credentials: ...


class TokenFileAuth:
    """Authorized-user credentials loaded from a token file.

    The file uses the format written by google-auth-oauthlib and
    ``Credentials.to_json()``: token, refresh_token, client_id,
    client_secret, token_uri and scopes.
    """

    def __init__(
        self,
        token_path: str | Path | None = None,
        scopes: list[str] | None = None,
    ):
        """Initialize token file authentication.

        Args:
            token_path: Path to the token file. Defaults to google/token.json.
            scopes: Scope names (e.g., ["tasks"]) or full URLs. Defaults to ["tasks"].
        """
        self.token_path = Path(token_path) if token_path else google_token_path()
        self.required_scopes = resolve_scopes(scopes or ["tasks"])
        self._credentials: UserCredentials | None = None

    def _load(self) -> UserCredentials:
        if not self.token_path.exists():
            raise CredentialsNotFoundError(str(self.token_path))

        try:
            with open(self.token_path) as f:
                info = json.load(f)
        except json.JSONDecodeError as e:
            raise GoogleAuthError(f"Invalid JSON in token file: {e}") from e

        token_scopes = info.get("scopes") or []
        if isinstance(token_scopes, str):
            token_scopes = token_scopes.split()

        missing = set(self.required_scopes) - set(token_scopes)
        if missing:
            raise ScopeMismatchError(missing)

        try:
            credentials = UserCredentials.from_authorized_user_info(info, scopes=token_scopes)
        except ValueError as e:
            raise GoogleAuthError(f"Invalid token file {self.token_path}: {e}") from e

        logger.info(f"Loaded token with scopes: {set(token_scopes)}")
        return credentials

    async def get_authenticated_client(self) -> UserCredentials:
        """Return cached credentials, loading them on first use.

        Raises:
            CredentialsNotFoundError: If the token file is missing.
            ScopeMismatchError: If the token lacks a required scope.
            GoogleAuthError: If the token file is malformed.
        """
        if self._credentials is None:
            self._credentials = self._load()
        return self._credentials


class ServiceAccountAuth:
    """Service account credentials for server-to-server access.

    Note: a plain service account only sees its own task lists. To act on
    a user's tasks in a Google Workspace domain, pass ``subject`` and grant
    the account domain-wide delegation.
    """

    def __init__(
        self,
        key_path: str | Path | None = None,
        scopes: list[str] | None = None,
        subject: str | None = None,
    ):
        """Initialize service account authentication.

        Args:
            key_path: Path to service account JSON key file.
            scopes: Scope names (e.g., ["tasks"]) or full URLs. Defaults to ["tasks"].
            subject: Email of a user to impersonate.

        Raises:
            CredentialsNotFoundError: If key file not found.
            GoogleAuthError: If key file is invalid.
        """
        self.key_path = Path(key_path) if key_path else service_account_path()

        if not self.key_path.exists():
            raise CredentialsNotFoundError(str(self.key_path))

        self.scopes = resolve_scopes(scopes or ["tasks"])

        try:
            with open(self.key_path) as f:
                key_data = json.load(f)
        except json.JSONDecodeError as e:
            raise GoogleAuthError(f"Invalid JSON in key file: {e}") from e

        if key_data.get("type") != "service_account":
            raise GoogleAuthError(
                f"Invalid key file: expected type 'service_account', "
                f"got '{key_data.get('type')}'"
            )

        self.client_email = key_data.get("client_email", "")
        self.project_id = key_data.get("project_id", "")

        credentials = service_account.Credentials.from_service_account_info(
            key_data,
            scopes=self.scopes,
        )
        if subject:
            credentials = credentials.with_subject(subject)
            logger.info(f"Created delegated credentials for: {subject}")
        self._credentials = credentials

        logger.info(f"Service account initialized: {self.client_email}")

    @property
    def email(self) -> str:
        """Get the service account email address."""
        return self.client_email

    async def get_authenticated_client(self) -> service_account.Credentials:
        """Return the service account credentials."""
        return self._credentials
