"""
Test enum parsing.
"""

from layout_extractor.parsers.tree_sitter.node_types import Enum, EnumValue


def values_of(enum):
    return {value.name: value.value for value in enum.values}


def test_enum_declarations(load_header):
    """Scoped and unscoped enums keep their name and underlying type."""
    ast = load_header("enum.hpp")

    assert [declaration.name for declaration in ast] == [
        "EGameMode",
        "EShape",
        "ETextureFormat",
        "EFlags",
        "ESequence",
    ]
    assert all(isinstance(declaration, Enum) for declaration in ast)
    assert ast[0].base is None
    assert ast[1].base == "int8_t"
    assert ast[2].base == "uint16_t"


def test_enum_explicit_values(load_header):
    ast = load_header("enum.hpp")

    assert ast[0].values == [
        EnumValue(name="Singleplayer", value=0),
        EnumValue(name="Multiplayer", value=1),
        EnumValue(name="Count", value=2),
        EnumValue(name="Invalid", value=3),
    ]


def test_enum_implicit_values(load_header):
    """Implicit values count up from 0, negative literals stay negative."""
    ast = load_header("enum.hpp")

    assert values_of(ast[1]) == {
        "Rectangle": 0,
        "Circle": 1,
        "Triangle": 2,
        "Count": 3,
        "Invalid": -1,
    }


def test_enum_aliases(load_header):
    """An alias takes the value of the enumerator it names."""
    ast = load_header("enum.hpp")

    assert values_of(ast[2]) == {
        "RGB": 0,
        "RGBA": 1,
        "DXT": 2,
        "RGB_Unsigned": 0,
        "DXT_Unsigned": 2,
    }


def test_enum_shift_expressions(load_header):
    ast = load_header("enum.hpp")

    assert values_of(ast[3]) == {"None": 0, "Visible": 1, "Hidden": 2, "Dirty": 16}


def test_enum_counter_after_alias(load_header):
    """A literal moves the counter, an alias does not."""
    ast = load_header("enum.hpp")

    assert values_of(ast[4]) == {"A": 0, "B": 5, "C": 6, "D": 5, "E": 7}


def test_enum_to_dict(load_header):
    ast = load_header("enum.hpp")

    assert ast[1].to_dict()["type"] == "enum"
    assert ast[1].to_dict()["base"] == "int8_t"
    assert ast[1].to_dict()["values"][0] == {"name": "Rectangle", "value": 0}
    assert "base" not in ast[4].to_dict()
