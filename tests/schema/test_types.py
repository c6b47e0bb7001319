import pytest

from ensemble_lab.datasets.catalog import DIAMONDS_SCHEMA
from ensemble_lab.schema.types import (
    Categorical,
    DatasetSchema,
    Numeric,
    OrderedCategorical,
)
from ensemble_lab.utils.errors import InvalidArgumentError, SchemaMismatchError


def test_categorical_levels_become_tuple():
    c = Categorical(["a", "b", "c"])

    assert c.levels == ("a", "b", "c")
    assert c.n_indicators == 2
    assert not c.ordered


def test_ordered_categorical_is_categorical():
    c = OrderedCategorical(("low", "high"))

    assert isinstance(c, Categorical)
    assert c.ordered
    assert c.kind == "ordered"


@pytest.mark.parametrize("levels", [(), ("a", "b", "a")])
def test_invalid_levels_rejected(levels):
    with pytest.raises(InvalidArgumentError):
        Categorical(levels)


def test_single_level_has_no_indicators():
    assert Categorical(("only",)).n_indicators == 0


def test_schema_keeps_declared_order():
    schema = DatasetSchema.from_mapping(
        {"b": Numeric(), "a": Categorical(("x", "y")), "c": Numeric()}
    )

    assert schema.names == ["b", "a", "c"]
    assert schema.numeric_columns() == ["b", "c"]
    assert schema.categorical_columns() == ["a"]
    assert len(schema) == 3
    assert "a" in schema
    assert "z" not in schema


def test_duplicate_names_rejected():
    with pytest.raises(InvalidArgumentError):
        DatasetSchema((("a", Numeric()), ("a", Numeric())))


def test_unsupported_type_rejected():
    with pytest.raises(InvalidArgumentError):
        DatasetSchema((("a", "numeric"),))


def test_unknown_column_lookup():
    with pytest.raises(SchemaMismatchError) as exc:
        DIAMONDS_SCHEMA["weight"]

    assert exc.value.column == "weight"


def test_select_preserves_declared_order():
    sub = DIAMONDS_SCHEMA.select(["price", "carat", "cut"])

    assert sub.names == ["carat", "cut", "price"]


def test_select_unknown_raises():
    with pytest.raises(SchemaMismatchError):
        DIAMONDS_SCHEMA.select(["carat", "weight"])


def test_design_width_excludes_response():
    schema = DatasetSchema.from_mapping(
        {"y": Numeric(), "g": Categorical(("a", "b", "c")), "x": Numeric()}
    )

    assert schema.design_width("y") == 1 + 2
    assert schema.design_width() == 2 + 2


def test_exclude_response():
    assert "price" not in DIAMONDS_SCHEMA.numeric_columns(exclude=["price"])
