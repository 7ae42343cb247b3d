"""Authentication infrastructure module."""

from chartgen.infrastructure.auth.identity import CallerIdentity, SupabaseAuthenticator, bearer_token

__all__ = ["CallerIdentity", "SupabaseAuthenticator", "bearer_token"]
