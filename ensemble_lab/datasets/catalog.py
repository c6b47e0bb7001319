# ensemble_lab/datasets/catalog.py
"""
Dataset catalog (FINAL / FROZEN)

Declared schemas for the datasets the comparison runs on.

diamonds
    ~54k round-cut diamonds; regression on ``price``.
    cut / color / clarity are ordered: levels are declared worst → best
    (color runs D..J as in the source data, D being the most colourless).

mushrooms
    UCI Agaricus/Lepiota records; classification of ``class``
    (e = edible, p = poisonous). Every attribute is a single-letter code,
    ``stalk-root`` uses ``?`` for missing.
"""
from __future__ import annotations

from typing import Dict

from ensemble_lab.schema.types import (
    Categorical,
    DatasetSchema,
    Numeric,
    OrderedCategorical,
)
from ensemble_lab.utils.errors import UserInputError

DIAMOND_CUTS = ("Fair", "Good", "Very Good", "Premium", "Ideal")
DIAMOND_COLORS = ("D", "E", "F", "G", "H", "I", "J")
DIAMOND_CLARITIES = ("I1", "SI2", "SI1", "VS2", "VS1", "VVS2", "VVS1", "IF")

DIAMONDS_SCHEMA = DatasetSchema.from_mapping(
    {
        "carat": Numeric(),
        "cut": OrderedCategorical(DIAMOND_CUTS),
        "color": OrderedCategorical(DIAMOND_COLORS),
        "clarity": OrderedCategorical(DIAMOND_CLARITIES),
        "depth": Numeric(),
        "table": Numeric(),
        "price": Numeric(),
        "x": Numeric(),
        "y": Numeric(),
        "z": Numeric(),
    }
)

# UCI mushroom codebook
_COLORS_STALK = ("n", "b", "c", "g", "o", "p", "e", "w", "y")
_SURFACE_STALK = ("f", "y", "k", "s")

MUSHROOMS_SCHEMA = DatasetSchema.from_mapping(
    {
        "class": Categorical(("e", "p")),
        "cap-shape": Categorical(("b", "c", "x", "f", "k", "s")),
        "cap-surface": Categorical(("f", "g", "y", "s")),
        "cap-color": Categorical(("n", "b", "c", "g", "r", "p", "u", "e", "w", "y")),
        "bruises": Categorical(("t", "f")),
        "odor": Categorical(("a", "l", "c", "y", "f", "m", "n", "p", "s")),
        "gill-attachment": Categorical(("a", "d", "f", "n")),
        "gill-spacing": Categorical(("c", "w", "d")),
        "gill-size": Categorical(("b", "n")),
        "gill-color": Categorical(
            ("k", "n", "b", "h", "g", "r", "o", "p", "u", "e", "w", "y")
        ),
        "stalk-shape": Categorical(("e", "t")),
        "stalk-root": Categorical(("b", "c", "u", "e", "z", "r", "?")),
        "stalk-surface-above-ring": Categorical(_SURFACE_STALK),
        "stalk-surface-below-ring": Categorical(_SURFACE_STALK),
        "stalk-color-above-ring": Categorical(_COLORS_STALK),
        "stalk-color-below-ring": Categorical(_COLORS_STALK),
        "veil-type": Categorical(("p", "u")),
        "veil-color": Categorical(("n", "o", "w", "y")),
        "ring-number": Categorical(("n", "o", "t")),
        "ring-type": Categorical(("c", "e", "f", "l", "n", "p", "s", "z")),
        "spore-print-color": Categorical(
            ("k", "n", "b", "h", "r", "o", "u", "w", "y")
        ),
        "population": Categorical(("a", "c", "n", "s", "v", "y")),
        "habitat": Categorical(("g", "l", "m", "p", "u", "w", "d")),
    }
)

_SCHEMAS: Dict[str, DatasetSchema] = {
    "diamonds": DIAMONDS_SCHEMA,
    "mushrooms": MUSHROOMS_SCHEMA,
}


def resolve_schema(name: str) -> DatasetSchema:
    if name not in _SCHEMAS:
        available = ", ".join(sorted(_SCHEMAS))
        raise UserInputError(f"Unknown schema {name!r}. Available: {available}")
    return _SCHEMAS[name]


def available_schemas() -> list[str]:
    return sorted(_SCHEMAS)
