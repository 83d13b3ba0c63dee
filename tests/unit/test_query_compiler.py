"""Unit tests for the query compiler."""

from __future__ import annotations

import pytest

from doclog.domain.entities import (
    And,
    Eq,
    FieldQuery,
    Gt,
    In,
    InvalidOperator,
    InvalidPredicate,
    Lt,
    Or,
    Text,
)
from doclog.domain.exceptions import InvalidQueryShapeError
from doclog.domain.services import (
    PredicateCompiler,
    compile_operator,
    compile_query,
    strict_equals,
)


@pytest.mark.unit
class TestOperatorEvaluator:
    """Tests for compile_operator."""

    @pytest.mark.parametrize(
        "expected, value, result",
        [
            (3, 3, True),
            (3, 4, False),
            ("a", "a", True),
            ("1", 1, False),
            (True, 1, False),
            (None, None, True),
            ([1, 2], [1, 2], True),
        ],
    )
    def test_eq(self, expected: object, value: object, result: bool) -> None:
        """$eq is strict equality."""
        assert compile_operator(Eq(expected))(value) is result
        assert strict_equals(value, expected) is result

    def test_gt_and_lt(self) -> None:
        """Numeric comparisons."""
        gt = compile_operator(Gt(1))
        lt = compile_operator(Lt(1))

        assert gt(3) is True
        assert gt(1) is False
        assert gt(1.5) is True
        assert lt(0) is True
        assert lt(1) is False

    @pytest.mark.parametrize("value", ["5", None, [5], {"n": 5}, True])
    def test_comparison_on_non_numeric_is_false(self, value: object) -> None:
        """Non-numeric field values never pass $gt / $lt."""
        assert compile_operator(Gt(0))(value) is False
        assert compile_operator(Lt(100))(value) is False

    def test_non_numeric_bound_is_false(self) -> None:
        """A non-numeric bound never matches."""
        assert compile_operator(Gt("a"))(5) is False
        assert compile_operator(Lt("z"))("a") is False

    def test_in(self) -> None:
        """$in is membership by strict equality."""
        op = compile_operator(In(("x", 2)))

        assert op("x") is True
        assert op(2) is True
        assert op("2") is False
        assert op(None) is False
        assert compile_operator(In(()))("x") is False

    def test_in_does_not_confuse_bool_and_int(self) -> None:
        assert compile_operator(In((1, 0)))(True) is False

    def test_invalid_operator_fails_closed(self) -> None:
        """Unrecognized operators evaluate to False."""
        seen: list[object] = []
        op = compile_operator(InvalidOperator({"$regex": "."}), on_invalid=seen.append)

        assert op("anything") is False
        assert seen == [InvalidOperator({"$regex": "."})]

    def test_invalid_operator_strict(self) -> None:
        with pytest.raises(InvalidQueryShapeError):
            compile_operator(InvalidOperator({}), strict=True)


@pytest.mark.unit
class TestQueryCompiler:
    """Tests for compile_query."""

    def test_empty_query_matches_everything(self) -> None:
        matches = compile_query(FieldQuery({}))

        assert matches({}) is True
        assert matches({"name": "a", "age": 3}) is True

    def test_all_fields_must_match(self) -> None:
        matches = compile_query(FieldQuery({"name": Eq("a"), "age": Gt(1)}))

        assert matches({"name": "a", "age": 3}) is True
        assert matches({"name": "a", "age": 1}) is False
        assert matches({"name": "b", "age": 3}) is False

    def test_missing_field_reads_as_none(self) -> None:
        assert compile_query(FieldQuery({"age": Eq(None)}))({"name": "a"}) is True
        assert compile_query(FieldQuery({"age": Gt(0)}))({"name": "a"}) is False

    def test_unnamed_fields_ignored(self) -> None:
        matches = compile_query(FieldQuery({"name": Eq("a")}))
        assert matches({"name": "a", "extra": [1, 2, 3]}) is True


@pytest.mark.unit
class TestPredicateCompiler:
    """Tests for PredicateCompiler."""

    @pytest.fixture
    def compiler(self) -> PredicateCompiler:
        return PredicateCompiler(full_text_fields=["notes", "title"])

    def test_empty_and_matches(self, compiler: PredicateCompiler) -> None:
        assert compiler.compile(And(()))({"x": 1}) is True

    def test_empty_or_never_matches(self, compiler: PredicateCompiler) -> None:
        assert compiler.compile(Or(()))({"x": 1}) is False

    def test_and_or(self, compiler: PredicateCompiler) -> None:
        young = FieldQuery({"age": Lt(18)})
        named_a = FieldQuery({"name": Eq("a")})

        both = compiler.compile(And((young, named_a)))
        either = compiler.compile(Or((young, named_a)))

        assert both({"name": "a", "age": 10}) is True
        assert both({"name": "a", "age": 30}) is False
        assert either({"name": "a", "age": 30}) is True
        assert either({"name": "b", "age": 30}) is False

    def test_text_is_word_bounded(self, compiler: PredicateCompiler) -> None:
        matches = compiler.compile(Text("cat"))

        assert matches({"notes": "The cat sat"}) is True
        assert matches({"notes": "category"}) is False
        assert matches({"notes": "a foo bar"}) is False

    def test_text_is_case_insensitive(self, compiler: PredicateCompiler) -> None:
        assert compiler.compile(Text("CAT"))({"notes": "the Cat sat"}) is True

    def test_text_scans_any_full_text_field(self, compiler: PredicateCompiler) -> None:
        matches = compiler.compile(Text("foo"))

        assert matches({"notes": "nothing", "title": "foo fighters"}) is True
        assert matches({"body": "foo"}) is False

    def test_text_reads_values_as_strings(self, compiler: PredicateCompiler) -> None:
        assert compiler.compile(Text("42"))({"notes": 42}) is True
        assert compiler.compile(Text("None"))({"notes": None}) is False

    def test_text_reads_non_strings_as_json(self, compiler: PredicateCompiler) -> None:
        assert compiler.compile(Text("true"))({"notes": True}) is True
        assert compiler.compile(Text("dog"))({"notes": ["cat", "dog"]}) is True
        assert compiler.compile(Text("k"))({"notes": {"k": 1}}) is True

    def test_text_without_full_text_fields(self) -> None:
        compiler = PredicateCompiler()
        assert compiler.compile(Text("foo"))({"notes": "foo"}) is False

    def test_text_invalid_pattern(self, compiler: PredicateCompiler) -> None:
        with pytest.raises(InvalidQueryShapeError, match="not a valid pattern"):
            compiler.compile(Text("foo("))

    def test_invalid_predicate_fails_closed(self, compiler: PredicateCompiler) -> None:
        assert compiler.compile(InvalidPredicate({"$nor": []}))({}) is False

    def test_invalid_predicate_strict(self) -> None:
        compiler = PredicateCompiler(strict=True)
        with pytest.raises(InvalidQueryShapeError):
            compiler.compile(Or((InvalidPredicate({"$nor": []}),)))

    def test_invalid_node_hook(self) -> None:
        seen: list[object] = []
        compiler = PredicateCompiler(on_invalid=seen.append)

        compiler.compile(And((FieldQuery({"a": InvalidOperator(5)}), InvalidPredicate(1))))

        assert seen == [InvalidOperator(5), InvalidPredicate(1)]
