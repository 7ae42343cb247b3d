"""Visualization service models."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel


class ChartRecord(BaseModel):
    """One chart point per result row."""

    name: str
    value: int | float


@dataclass
class TransformResult:
    """Chart series, bounded preview and the series length."""

    series: list[ChartRecord] = field(default_factory=list)
    preview: list[dict[str, Any]] = field(default_factory=list)
    total_records: int = 0
