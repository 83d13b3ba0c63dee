"""Unit tests for result shaping and query options."""

from __future__ import annotations

import pytest

from doclog.domain.exceptions import InvalidQueryShapeError
from doclog.domain.services import project_records, shape_results, sort_records
from doclog.domain.value_objects import QueryOptions, SortDirection


@pytest.mark.unit
class TestSortRecords:
    """Tests for sort_records."""

    def test_single_key_ascending(self) -> None:
        records = [{"age": 3}, {"age": 1}, {"age": 2}]

        result = sort_records(records, {"age": SortDirection.ASCENDING})

        assert result == [{"age": 1}, {"age": 2}, {"age": 3}]

    def test_single_key_descending(self) -> None:
        records = [{"age": 3}, {"age": 1}, {"age": 2}]

        result = sort_records(records, {"age": SortDirection.DESCENDING})

        assert result == [{"age": 3}, {"age": 2}, {"age": 1}]

    def test_does_not_mutate_input(self) -> None:
        records = [{"age": 2}, {"age": 1}]
        sort_records(records, {"age": SortDirection.ASCENDING})
        assert records == [{"age": 2}, {"age": 1}]

    def test_equal_values_keep_order(self) -> None:
        records = [{"k": 1, "id": "a"}, {"k": 0, "id": "b"}, {"k": 1, "id": "c"}]

        asc = sort_records(records, {"k": SortDirection.ASCENDING})
        desc = sort_records(records, {"k": SortDirection.DESCENDING})

        assert [r["id"] for r in asc] == ["b", "a", "c"]
        assert [r["id"] for r in desc] == ["a", "c", "b"]

    def test_last_listed_key_is_primary(self) -> None:
        """Each field is a stable pass, so the last field dominates."""
        records = [
            {"name": "b", "age": 1},
            {"name": "a", "age": 2},
            {"name": "a", "age": 1},
        ]

        result = sort_records(
            records, {"age": SortDirection.ASCENDING, "name": SortDirection.ASCENDING}
        )

        assert result == [
            {"name": "a", "age": 1},
            {"name": "a", "age": 2},
            {"name": "b", "age": 1},
        ]

    def test_missing_values_sort_first(self) -> None:
        records = [{"age": 3}, {}, {"age": 1}, {"age": None}]

        asc = sort_records(records, {"age": SortDirection.ASCENDING})
        desc = sort_records(records, {"age": SortDirection.DESCENDING})

        assert asc == [{}, {"age": None}, {"age": 1}, {"age": 3}]
        assert desc == [{"age": 3}, {"age": 1}, {}, {"age": None}]

    def test_mixed_types_keep_comparable_values_ordered(self) -> None:
        records = [{"v": "x"}, {"v": 2}, {}, {"v": True}, {"v": 1}, {"v": "a"}]

        result = sort_records(records, {"v": SortDirection.ASCENDING})

        assert [r.get("v") for r in result] == [None, 1, 2, "a", "x", True]

    def test_nested_values_sort_by_json(self) -> None:
        records = [{"v": [2]}, {"v": {"k": 1}}, {"v": [1, 5]}]

        result = sort_records(records, {"v": SortDirection.ASCENDING})

        assert [r["v"] for r in result] == [{"k": 1}, [1, 5], [2]]


@pytest.mark.unit
class TestProjectRecords:
    """Tests for project_records."""

    def test_keeps_truthy_fields_in_projection_order(self) -> None:
        records = [{"name": "a", "age": 3, "notes": "x"}]

        result = project_records(records, {"notes": 1, "name": 1, "age": 0})

        assert result == [{"notes": "x", "name": "a"}]
        assert list(result[0]) == ["notes", "name"]

    def test_never_introduces_fields(self) -> None:
        result = project_records([{"name": "a"}], {"name": 1, "age": 1})
        assert result == [{"name": "a"}]

    def test_empty_projection(self) -> None:
        assert project_records([{"name": "a"}], {}) == [{}]


@pytest.mark.unit
class TestQueryOptions:
    """Tests for QueryOptions and shape_results."""

    def test_coerce_mapping(self) -> None:
        options = QueryOptions.coerce({"sort": {"age": -1}, "projection": {"age": 1}})

        assert options.sort == {"age": SortDirection.DESCENDING}
        assert options.projection == {"age": 1}

    def test_coerce_none(self) -> None:
        assert QueryOptions.coerce(None) == QueryOptions()

    def test_unknown_option(self) -> None:
        with pytest.raises(InvalidQueryShapeError, match="Unknown query options"):
            QueryOptions.coerce({"limit": 3})

    @pytest.mark.parametrize("direction", [0, 2, "asc", True, None])
    def test_invalid_sort_direction(self, direction: object) -> None:
        with pytest.raises(InvalidQueryShapeError, match="must be 1 or -1"):
            QueryOptions(sort={"age": direction})  # type: ignore[dict-item]

    def test_shape_results_sorts_then_projects(self) -> None:
        records = [{"name": "a", "age": 3}, {"name": "b", "age": 1}]
        options = QueryOptions(sort={"age": 1}, projection={"name": 1})  # type: ignore[dict-item]

        assert shape_results(records, options) == [{"name": "b"}, {"name": "a"}]

    def test_shape_results_without_options(self) -> None:
        records = [{"name": "a"}]
        assert shape_results(records, QueryOptions()) == records
