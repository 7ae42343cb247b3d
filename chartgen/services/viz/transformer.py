"""Pure-Python result transformer: rows to chart series and preview."""

import math
from collections.abc import Mapping
from typing import Any

from chartgen.services.sql.models import QueryPlan
from chartgen.services.viz.models import ChartRecord, TransformResult

PREVIEW_ROW_LIMIT = 50
UNKNOWN_NAME = "Unknown"
ROW_NUMBER_KEY = "rowNumber"


def _unwrap(row: Any) -> dict[str, Any]:
    """Return the row's columns; RPC rows may arrive wrapped as ``{"result": {...}}``."""
    if isinstance(row, Mapping):
        inner = row.get("result")
        if isinstance(inner, Mapping) and inner:
            return dict(inner)
        return dict(row)
    return {}


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _first_present(row: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if not _is_missing(value):
            return value
    return None


def _to_number(value: Any) -> int | float:
    """Coerce *value* to a finite number, 0 on failure. Integral values stay ints."""
    if value is None:
        return 0
    try:
        number = float(value)
    except (ValueError, TypeError, OverflowError):
        return 0
    if not math.isfinite(number):
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if number.is_integer():
        return int(number)
    return number


def build_chart_record(row: dict[str, Any], plan: QueryPlan) -> ChartRecord:
    """Map one row through the plan's name/value columns with literal fallbacks."""
    name = _first_present(row, plan.name_column, "name")
    value = _first_present(row, plan.value_column, "value")
    return ChartRecord(
        name=UNKNOWN_NAME if name is None else str(name),
        value=_to_number(value),
    )


def transform(
    rows: list[Any],
    plan: QueryPlan,
    preview_limit: int = PREVIEW_ROW_LIMIT,
) -> TransformResult:
    """
    Build the full chart series and a preview of the first *preview_limit* rows.

    The preview keeps every original column and prepends a 1-based row number.
    """
    unwrapped = [_unwrap(row) for row in rows or []]

    series = [build_chart_record(row, plan) for row in unwrapped]
    preview = [
        {ROW_NUMBER_KEY: index, **row}
        for index, row in enumerate(unwrapped[:preview_limit], start=1)
    ]

    return TransformResult(series=series, preview=preview, total_records=len(series))
