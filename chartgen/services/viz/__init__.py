"""Result-to-chart transformation."""

from chartgen.services.viz.models import ChartRecord, TransformResult
from chartgen.services.viz.transformer import build_chart_record, transform

__all__ = ["ChartRecord", "TransformResult", "build_chart_record", "transform"]
