"""Plan normalizer: validated SQL plus display defaults."""

import logging
from collections.abc import Mapping
from typing import Any

from chartgen.config.constants import ChartKind
from chartgen.services.sql.models import QueryPlan
from chartgen.services.sql.validation import SQLValidationService

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Generated Chart"
DEFAULT_NAME_COLUMN = "name"
DEFAULT_VALUE_COLUMN = "value"


def _text_or_default(value: Any, default: str) -> str:
    """Return *value* if it is a non-blank string, else *default*."""
    if isinstance(value, str) and value.strip():
        return value
    return default


class PlanNormalizer:
    """Turns a raw model plan into a QueryPlan, or None when its SQL is rejected."""

    def __init__(self, validator: SQLValidationService | None = None):
        self.validator = validator or SQLValidationService()

    def normalize(self, raw: Mapping[str, Any] | None) -> QueryPlan | None:
        """
        Validate ``raw["sql"]`` and fill defaults for the display fields.

        Normalizing the dump of an already-normalized plan returns an equal plan.
        """
        if not isinstance(raw, Mapping):
            return None

        outcome = self.validator.validate(raw.get("sql"))
        if not outcome.is_valid or outcome.sql is None:
            return None

        chart_kind = ChartKind.resolve(raw.get("chartType")) or ChartKind.BAR

        plan = QueryPlan(
            sql=outcome.sql,
            chart_kind=chart_kind,
            title=_text_or_default(raw.get("title"), DEFAULT_TITLE),
            name_column=_text_or_default(raw.get("nameColumn"), DEFAULT_NAME_COLUMN),
            value_column=_text_or_default(raw.get("valueColumn"), DEFAULT_VALUE_COLUMN),
        )
        logger.debug("Normalized plan: %s", plan.model_dump(by_alias=True, mode="json"))
        return plan
