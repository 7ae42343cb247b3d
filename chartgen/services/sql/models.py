"""SQL service models."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from chartgen.config.constants import ChartKind


class RejectionReason(str, Enum):
    """Why the safety validator turned a query down."""

    NOT_A_SELECT = "not_a_select"
    FORBIDDEN_KEYWORD = "forbidden_keyword"
    UNSUPPORTED_DIALECT_FUNCTION = "unsupported_dialect_function"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result from SQL validation."""

    is_valid: bool
    sql: str | None = None
    reason: RejectionReason | None = None
    matched: str | None = None

    @classmethod
    def accept(cls, sql: str) -> "ValidationOutcome":
        return cls(is_valid=True, sql=sql)

    @classmethod
    def reject(cls, reason: RejectionReason, matched: str | None = None) -> "ValidationOutcome":
        return cls(is_valid=False, reason=reason, matched=matched)


class QueryPlan(BaseModel):
    """A validated, defaulted plan. Immutable for the rest of the request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sql: str
    chart_kind: ChartKind = Field(ChartKind.BAR, alias="chartType")
    title: str
    name_column: str = Field("name", alias="nameColumn")
    value_column: str = Field("value", alias="valueColumn")
