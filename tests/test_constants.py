"""
Test constant resolution on hand-built declarations.
"""

from layout_extractor.parsers.constants import resolve_constants
from layout_extractor.parsers.tree_sitter.node_types import (
    Field,
    Namespace,
    Struct,
    TypeDescriptor,
)


def make_struct():
    return Struct(
        name="Pool",
        fields=[
            Field(name="kMax", type=TypeDescriptor(name="int32_t", static=True, constexpr=True), default=16),
            Field(name="kSize", type=TypeDescriptor(name="uint32_t", static=True), default="EPool::Size"),
            Field(name="items", type=TypeDescriptor(name="uint32_t", fixed_array="kMax")),
            Field(name="sized", type=TypeDescriptor(name="uint8_t", fixed_array="kSize")),
            Field(
                name="array",
                type=TypeDescriptor(
                    name="Array",
                    templates=[TypeDescriptor(name="float"), TypeDescriptor(name="kMax")],
                ),
            ),
            Field(name="other", type=TypeDescriptor(name="uint8_t", fixed_array="kOther")),
        ],
    )


def test_resolve_numeric_constant():
    resolved = resolve_constants([make_struct()])[0]

    assert resolved.fields[2].type == TypeDescriptor(name="uint32_t", fixed_array=16)
    assert resolved.fields[4].type.templates[1] == TypeDescriptor(name=16)


def test_resolve_symbolic_constant():
    resolved = resolve_constants([make_struct()])[0]

    assert resolved.fields[3].type == TypeDescriptor(name="uint8_t", fixed_array="EPool::Size", constant=True)


def test_resolve_unknown_constant():
    resolved = resolve_constants([make_struct()])[0]

    assert resolved.fields[5].type == TypeDescriptor(name="uint8_t", fixed_array="kOther")


def test_resolve_does_not_mutate_input():
    struct = make_struct()
    resolve_constants([struct])

    assert struct == make_struct()


def test_resolve_stays_within_aggregate():
    """Constants of one struct never leak into a sibling or nested struct."""
    inner = Struct(name="Inner", fields=[Field(name="data", type=TypeDescriptor(name="int", fixed_array="kMax"))])
    outer = make_struct()
    outer.nested = [inner]
    sibling = Struct(name="Sibling", fields=[Field(name="data", type=TypeDescriptor(name="int", fixed_array="kMax"))])

    resolved = resolve_constants([Namespace(name="game", children=[outer, sibling])])[0]

    assert resolved.children[0].nested[0].fields[0].type.fixed_array == "kMax"
    assert resolved.children[1].fields[0].type.fixed_array == "kMax"
    assert resolved.children[0].fields[2].type.fixed_array == 16


def test_resolve_array_dimensions():
    """Product sizes resolve when every factor is known."""
    struct = Struct(
        name="Grid",
        fields=[
            Field(name="kN", type=TypeDescriptor(name="uint32_t", static=True), default=3),
            Field(name="rows", type=TypeDescriptor(name="int", fixed_array="kN * 4")),
            Field(name="other", type=TypeDescriptor(name="int", fixed_array="kN * kOther")),
        ],
    )

    resolved = resolve_constants([struct])[0]

    assert resolved.fields[1].type.fixed_array == 12
    assert resolved.fields[2].type.fixed_array == "kN * kOther"
