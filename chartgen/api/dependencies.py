"""FastAPI dependencies."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Header

from chartgen.config.settings import Settings, get_settings
from chartgen.infrastructure.auth.identity import CallerIdentity, SupabaseAuthenticator, bearer_token
from chartgen.infrastructure.database.connection import SupabaseRestClient

settings_dep = Annotated[Settings, Depends(get_settings)]


async def get_rest_client(settings: settings_dep) -> AsyncIterator[SupabaseRestClient]:
    """One Supabase REST client per request, shared by auth and execution."""
    async with SupabaseRestClient(settings) as rest:
        yield rest


rest_dep = Annotated[SupabaseRestClient, Depends(get_rest_client)]


async def get_caller_identity(
    settings: settings_dep,
    rest: rest_dep,
    authorization: Annotated[str | None, Header()] = None,
) -> CallerIdentity | None:
    """Resolve the bearer credential; None when it is absent or invalid."""
    authenticator = SupabaseAuthenticator(settings, rest)
    return await authenticator.resolve(bearer_token(authorization))


identity_dep = Annotated[CallerIdentity | None, Depends(get_caller_identity)]
