"""SQL validation service."""

import logging

from chartgen.config.validation import validate_sql
from chartgen.services.sql.models import ValidationOutcome

logger = logging.getLogger(__name__)


class SQLValidationService:
    """Validates SQL queries using the rules in config/validation.py."""

    @staticmethod
    def validate(sql: object) -> ValidationOutcome:
        """
        Validate a candidate SQL query.

        The rejected SQL only ever reaches the server log, never the caller.

        Args:
            sql: Candidate SQL, usually straight from the language model

        Returns:
            ValidationOutcome with the trimmed SQL, or the rejection reason
        """
        outcome = validate_sql(sql)

        if not outcome.is_valid:
            logger.warning(
                "SQL validation failed (%s, matched=%r): %r",
                outcome.reason.value if outcome.reason else "unknown",
                outcome.matched,
                sql,
            )
        else:
            logger.info("SQL validation passed")

        return outcome
