"""
Test JSON conversion of layout declarations.
"""

from layout_extractor.parsers.tree_sitter.node_types import (
    Class,
    Enum,
    EnumValue,
    Field,
    Inherit,
    Namespace,
    Struct,
    TemplateParam,
    TypeDescriptor,
)


def test_field_to_dict():
    field = Field(name="isRunning", type=TypeDescriptor(name="bool"), offset=0)

    assert field.to_dict() == {"name": "isRunning", "type": {"name": "bool"}, "offset": 0}


def test_type_descriptor_to_dict_omits_defaults():
    descriptor = TypeDescriptor(
        name="uint8_t",
        namespaces=[],
        const=True,
        fixed_array=0x1B,
    )

    assert descriptor.to_dict() == {"const": True, "name": "uint8_t", "fixedArray": 0x1B}


def test_struct_to_dict():
    struct = Struct(
        name="Array",
        templates=[TemplateParam(name="T"), TemplateParam(name="N", type="uint32_t", default="4")],
        inherit=Inherit(name="Base", visibility="public", namespaces=["game"]),
        fields=[Field(name="items", type=TypeDescriptor(name="T", fixed_array="N"))],
    )

    assert struct.to_dict() == {
        "type": "struct",
        "name": "Array",
        "templates": [{"name": "T"}, {"name": "N", "type": "uint32_t", "default": "4"}],
        "inherit": {"visibility": "public", "namespaces": ["game"], "name": "Base"},
        "nested": [],
        "fields": [{"name": "items", "type": {"name": "T", "fixedArray": "N"}}],
    }


def test_class_to_dict():
    assert Class(name="IScriptable").to_dict()["type"] == "class"


def test_namespace_to_dict():
    namespace = Namespace(
        name="game",
        children=[Enum(name="EMode", values=[EnumValue(name="A", value=0)])],
    )

    assert namespace.to_dict() == {
        "type": "namespace",
        "name": "game",
        "children": [{"type": "enum", "name": "EMode", "values": [{"name": "A", "value": 0}]}],
    }
