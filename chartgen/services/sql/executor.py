"""SQL executor service."""

import asyncio
import logging
from typing import Any

from chartgen.config.settings import Settings
from chartgen.infrastructure.auth.identity import CallerIdentity
from chartgen.infrastructure.database.connection import ExecutionChannelError, SupabaseRestClient
from chartgen.services.sql.models import QueryPlan

logger = logging.getLogger(__name__)


class SQLExecutionError(Exception):
    """The validated query could not be executed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SQLExecutor:
    """
    Executes a validated plan through the RPC execution channel.

    The caller's role has already been checked by the orchestrator; the
    channel applies its own row-level policy on top, using the caller's token.
    """

    def __init__(self, settings: Settings, rest: SupabaseRestClient):
        """Initialize SQL executor."""
        self.settings = settings
        self.rest = rest

    async def execute(self, plan: QueryPlan, identity: CallerIdentity) -> list[Any]:
        """
        Execute the plan's SQL once.

        Args:
            plan: Normalized plan; its SQL already passed the safety validator
            identity: Authorized caller

        Returns:
            Raw rows from the channel

        Raises:
            SQLExecutionError: channel error, transport error or timeout. Not retried.
        """
        logger.info("Executing SQL for %s: %s", identity.subject, plan.sql)
        try:
            rows = await asyncio.wait_for(
                self.rest.rpc(plan.sql, access_token=identity.access_token),
                timeout=self.settings.execution_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("SQL execution timed out after %.1fs", self.settings.execution_timeout)
            raise SQLExecutionError(
                f"query timed out after {self.settings.execution_timeout:g} seconds"
            ) from e
        except ExecutionChannelError as e:
            raise SQLExecutionError(e.message) from e

        logger.info(f"SQL executed successfully: {len(rows)} rows returned")
        return rows
