"""
Constants, enums, and static values.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class ChartKind(str, Enum):
    """Chart types the frontend can render."""

    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    DOUGHNUT = "doughnut"

    @classmethod
    def resolve(cls, value: object) -> "ChartKind | None":
        """Match *value* against the known kinds, case-insensitively."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Role(str, Enum):
    """Caller roles issued by the profile table."""

    PUBLIC = "public"
    STAFF = "staff"
    ADMIN = "admin"


class FailureKind(str, Enum):
    """Terminal failure kinds of the chart pipeline."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    OUT_OF_DOMAIN = "out_of_domain"
    PLANNING_FAILED = "planning_failed"
    UNSAFE_SQL = "unsafe_or_malformed_sql"
    EXECUTION_FAILED = "execution_failed"
    UNEXPECTED_ERROR = "unexpected_error"


FAILURE_STATUS_CODES: dict[FailureKind, int] = {
    FailureKind.BAD_REQUEST: 400,
    FailureKind.UNAUTHORIZED: 401,
    FailureKind.FORBIDDEN: 403,
    FailureKind.OUT_OF_DOMAIN: 400,
    FailureKind.PLANNING_FAILED: 422,
    FailureKind.UNSAFE_SQL: 422,
    FailureKind.EXECUTION_FAILED: 500,
    FailureKind.UNEXPECTED_ERROR: 500,
}


class FailureMessage(str, Enum):
    """Caller-facing messages for each failure kind."""

    BAD_REQUEST = "Missing 'prompt' string."
    UNAUTHORIZED = "Authentication required."
    FORBIDDEN = "Only staff and admin users can generate charts."
    OUT_OF_DOMAIN = (
        "This query doesn't relate to municipal complaints data. Please ask about "
        "complaints, categories, wards, status, or resolution times."
    )
    PLANNING_FAILED = (
        "Could not generate a valid PostgreSQL query from the prompt. "
        "Please try rephrasing your request."
    )
    UNSAFE_SQL = (
        "The generated query was rejected by the safety policy. "
        "Please try rephrasing your request."
    )
    EXECUTION_FAILED = "SQL execution failed: {message}. The query may contain unsupported syntax."
    UNEXPECTED_ERROR = "Unexpected error generating chart. Please try again."


class PipelineStep(str, Enum):
    """Pipeline states, in the order a successful request visits them."""

    RECEIVED = "received"
    AUTHORIZATION = "authorization"
    RELEVANCE = "relevance"
    PLANNING = "planning"
    VALIDATION = "validation"
    EXECUTION = "execution"
    TRANSFORM = "transform"
    RESPONSE = "response"


class PipelineStepDescription(str, Enum):
    """Pipeline step descriptions."""

    AUTHORIZATION = "Check the caller's identity and role"
    RELEVANCE = "Classify whether the prompt is about municipal complaints"
    PLANNING = "Ask the language model for a query plan"
    VALIDATION = "Validate the plan's SQL and fill display defaults"
    EXECUTION = "Run the validated SQL through the execution channel"
    TRANSFORM = "Shape the rows into a chart series and a preview"


class PipelineStatus(str, Enum):
    """Pipeline execution status."""

    COMPLETED = "completed"


def log_pipeline_step(step: PipelineStep) -> None:
    """Announce *step* in the service log."""
    description = PipelineStepDescription.__members__.get(step.name)
    if description is None:
        logger.info(step.value)
        return
    logger.info("%s: %s", step.value, description.value)
