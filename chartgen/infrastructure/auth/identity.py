"""Caller identity resolution for Supabase access tokens."""

import asyncio
import logging
from dataclasses import dataclass

import jwt

from chartgen.config.constants import Role
from chartgen.config.settings import Settings
from chartgen.infrastructure.database.connection import SupabaseRestClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller: token subject, profile role and the raw token."""

    subject: str
    role: str
    access_token: str | None = None


def bearer_token(authorization: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header, or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class SupabaseAuthenticator:
    """Resolves an access token to a CallerIdentity.

    The token signature, expiry and audience are checked locally; the role
    comes from the profiles table and defaults to ``public``.
    """

    def __init__(self, settings: Settings, rest: SupabaseRestClient):
        self.settings = settings
        self.rest = rest

    def decode(self, token: str) -> dict | None:
        """Decode and verify a Supabase access token. None if it is not valid."""
        try:
            return jwt.decode(
                token,
                self.settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience=self.settings.supabase_jwt_audience,
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.info("Rejected access token: %s", e)
            return None

    async def lookup_role(self, subject: str, token: str) -> str:
        """Read the caller's role from the profiles table."""
        try:
            rows = await asyncio.wait_for(
                self.rest.select(
                    self.settings.profiles_table,
                    {"select": "role", "id": f"eq.{subject}"},
                    access_token=token,
                ),
                timeout=self.settings.auth_timeout,
            )
        except Exception as e:
            logger.warning("Failed to load profile for %s: %s", subject, e)
            return Role.PUBLIC.value

        if not rows:
            return Role.PUBLIC.value
        role = rows[0].get("role")
        if not isinstance(role, str) or not role.strip():
            return Role.PUBLIC.value
        return role.strip().lower()

    async def resolve(self, token: str | None) -> CallerIdentity | None:
        """
        Resolve a bearer token to the caller's identity.

        Returns:
            CallerIdentity, or None when the token is absent or invalid
        """
        if not token:
            return None

        claims = self.decode(token)
        if claims is None:
            return None

        subject = str(claims["sub"])
        role = await self.lookup_role(subject, token)
        logger.debug("Resolved caller %s with role %s", subject, role)
        return CallerIdentity(subject=subject, role=role, access_token=token)
