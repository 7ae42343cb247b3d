"""Database connection utilities."""

from chartgen.infrastructure.database.connection import ExecutionChannelError, SupabaseRestClient

__all__ = ["ExecutionChannelError", "SupabaseRestClient"]
