"""
Authentication Module

Verifies bearer tokens on mutating routes and yields the caller's identity.

Token format: ``<principal_id>.<hex HMAC-SHA256(AUTH_SECRET, principal_id)>``.
The identity is taken from the verified token only; request bodies are never
trusted for it.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import get_settings


logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller."""

    id: str


def get_auth_secret() -> str:
    """Get the token signing secret from validated config."""
    secret = get_settings().auth_secret
    if not secret:
        raise ValueError("AUTH_SECRET environment variable is required for authentication")
    return secret


def _sign(principal_id: str, secret: str) -> str:
    return hmac.new(secret.encode(), principal_id.encode(), hashlib.sha256).hexdigest()


def issue_token(principal_id: str, secret: Optional[str] = None) -> str:
    """Mint a bearer token for ``principal_id``."""
    if not principal_id or "." in principal_id:
        raise ValueError("principal_id must be non-empty and must not contain '.'")
    return f"{principal_id}.{_sign(principal_id, secret or get_auth_secret())}"


def parse_token(token: str, secret: str) -> Optional[Principal]:
    """Return the principal for a valid token, None otherwise."""
    principal_id, sep, signature = token.rpartition(".")
    if not sep or not principal_id or not signature:
        return None
    if not hmac.compare_digest(signature, _sign(principal_id, secret)):
        return None
    return Principal(id=principal_id)


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> Principal:
    """
    Verify the bearer token and return the caller.

    Raises:
        HTTPException: 401 if the token is missing or invalid,
            500 if the server has no signing secret configured
    """
    try:
        secret = get_auth_secret()
    except ValueError:
        logger.error("Protected route called but AUTH_SECRET is not configured")
        raise HTTPException(
            status_code=500,
            detail="Server authentication not configured"
        )

    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    principal = parse_token(credentials.credentials, secret)
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid authentication token")

    return principal
