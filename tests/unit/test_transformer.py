"""Tests for the result transformer."""

from chartgen.services.sql.models import QueryPlan
from chartgen.services.viz.models import ChartRecord
from chartgen.services.viz.transformer import build_chart_record, transform


def _plan(name_column="name", value_column="value"):
    return QueryPlan(
        sql="SELECT 1", title="t", name_column=name_column, value_column=value_column
    )


def test_transform_maps_plan_columns():
    rows = [{"ward": "North", "total": 12}, {"ward": "South", "total": "7.5"}]
    result = transform(rows, _plan("ward", "total"))
    assert result.series == [
        ChartRecord(name="North", value=12.0),
        ChartRecord(name="South", value=7.5),
    ]
    assert result.total_records == 2


def test_transform_falls_back_to_literal_name_value():
    rows = [{"name": "Roads", "value": 3}]
    result = transform(rows, _plan("category", "count"))
    assert result.series == [ChartRecord(name="Roads", value=3.0)]


def test_transform_defaults_for_missing_values():
    rows = [{"other": 1}, {"name": None, "value": "n/a"}, {"name": "  ", "value": None}]
    result = transform(rows, _plan())
    assert [r.name for r in result.series] == ["Unknown", "Unknown", "Unknown"]
    assert [r.value for r in result.series] == [0.0, 0.0, 0.0]


def test_transform_keeps_zero_name():
    record = build_chart_record({"name": 0, "value": 2}, _plan())
    assert record == ChartRecord(name="0", value=2.0)


def test_transform_non_finite_values_become_zero():
    rows = [{"name": "a", "value": "NaN"}, {"name": "b", "value": float("inf")}]
    result = transform(rows, _plan())
    assert [r.value for r in result.series] == [0.0, 0.0]


def test_transform_unwraps_result_envelope():
    rows = [{"result": {"name": "Water", "value": 4}}, {"name": "Roads", "value": 2}]
    result = transform(rows, _plan())
    assert result.series == [
        ChartRecord(name="Water", value=4.0),
        ChartRecord(name="Roads", value=2.0),
    ]
    assert result.preview[0] == {"rowNumber": 1, "name": "Water", "value": 4}


def test_transform_empty_result_envelope_is_not_unwrapped():
    result = transform([{"result": {}, "name": "x", "value": 1}], _plan())
    assert result.series == [ChartRecord(name="x", value=1.0)]


def test_transform_non_mapping_rows():
    result = transform([None, "row", 5], _plan())
    assert result.total_records == 3
    assert all(r == ChartRecord(name="Unknown", value=0.0) for r in result.series)


def test_preview_is_bounded_and_numbered():
    rows = [{"name": f"n{i}", "value": i, "extra": "kept"} for i in range(120)]
    result = transform(rows, _plan())
    assert result.total_records == 120
    assert len(result.series) == 120
    assert len(result.preview) == 50
    assert result.preview[0] == {"rowNumber": 1, "name": "n0", "value": 0, "extra": "kept"}
    assert result.preview[-1]["rowNumber"] == 50


def test_preview_limit_is_configurable():
    rows = [{"name": "a", "value": 1}] * 5
    assert len(transform(rows, _plan(), preview_limit=2).preview) == 2


def test_original_row_number_column_wins():
    result = transform([{"rowNumber": 99, "name": "a", "value": 1}], _plan())
    assert result.preview[0]["rowNumber"] == 99


def test_transform_empty_rows():
    result = transform([], _plan())
    assert result.series == []
    assert result.preview == []
    assert result.total_records == 0


def test_transform_keeps_row_order():
    rows = [{"name": "b", "value": 1}, {"name": "a", "value": 9}]
    assert [r.name for r in transform(rows, _plan()).series] == ["b", "a"]


def test_transform_oversized_integer_becomes_zero():
    result = transform([{"name": "huge", "value": 10**400}, {"name": "ok", "value": 3}], _plan())
    assert [r.value for r in result.series] == [0, 3]


def test_integral_values_serialize_as_ints():
    rows = [{"name": "a", "value": 42}, {"name": "b", "value": "7"}, {"name": "c", "value": 2.5}]
    dumped = [r.model_dump(mode="json") for r in transform(rows, _plan()).series]
    assert dumped == [{"name": "a", "value": 42}, {"name": "b", "value": 7}, {"name": "c", "value": 2.5}]
    assert isinstance(dumped[0]["value"], int)
    assert isinstance(dumped[1]["value"], int)
