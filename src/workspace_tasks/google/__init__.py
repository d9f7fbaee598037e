"""Google authentication for the Tasks API."""

from workspace_tasks.google.auth import (
    SCOPES,
    AuthManager,
    ServiceAccountAuth,
    TokenFileAuth,
    resolve_scopes,
)
from workspace_tasks.google.exceptions import (
    CredentialsNotFoundError,
    GoogleAuthError,
    ScopeMismatchError,
)

__all__ = [
    "AuthManager",
    "TokenFileAuth",
    "ServiceAccountAuth",
    "SCOPES",
    "resolve_scopes",
    "GoogleAuthError",
    "CredentialsNotFoundError",
    "ScopeMismatchError",
]
