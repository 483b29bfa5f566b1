"""
Render layout declarations back into canonical C++.

The output, parsed again, yields the same declarations. The tests use this
round trip as their oracle, and the parser logs the rendered text at debug
level.
"""
from typing import Iterable, List, Union

from .parsers.expressions import is_number
from .parsers.tree_sitter.node_types import (
    Declaration,
    Enum,
    Field,
    Inherit,
    Namespace,
    Struct,
    TemplateParam,
    TypeDescriptor,
)


def format_document(declarations: Iterable[Declaration]) -> str:
    """Render top-level declarations of one header."""
    return "".join(format_cpp(declaration, 0) for declaration in declarations)


def format_cpp(node: Declaration, indent: int = 0) -> str:
    """Render one declaration at the given indentation.

    Args:
        node: Declaration to render
        indent: Number of leading spaces

    Returns:
        C++ source text, newline terminated
    """
    if isinstance(node, Namespace):
        return _format_namespace(node, indent)
    if isinstance(node, Enum):
        return _format_enum(node, indent)
    if isinstance(node, Struct):
        return _format_struct(node, indent)
    raise TypeError(f"Cannot format declaration: {node!r}")


def _format_namespace(node: Namespace, indent: int) -> str:
    pad = _padding(indent)
    code = f"{pad}namespace {node.name} {{\n"
    for child in node.children:
        code += format_cpp(child, indent + 2)
    code += f"{pad}}}\n"
    return code


def _format_enum(node: Enum, indent: int) -> str:
    pad = _padding(indent)
    code = f"{pad}enum class {node.name} "
    if node.base is not None:
        code += f": {node.base} "
    code += "{\n"

    pad_value = _padding(indent + 2)
    values = []
    for value in node.values:
        if value.value is None:
            values.append(f"{pad_value}{value.name}")
        else:
            values.append(f"{pad_value}{value.name} = {_format_value(value.value)}")
    code += ",\n".join(values)
    code += "\n"

    code += f"{pad}}};\n"
    return code


def _format_struct(node: Struct, indent: int) -> str:
    pad = _padding(indent)
    code = ""
    if node.templates is not None:
        params = ", ".join(_format_template_param(param) for param in node.templates)
        code += f"{pad}template<{params}>\n"

    code += f"{pad}{node.kind} {node.name} "
    if node.inherit is not None:
        code += f": {_format_inherit(node.inherit)} "
    code += "{\n"

    for child in node.nested:
        code += format_cpp(child, indent + 2)
    for field in node.fields:
        code += format_field(field, indent + 2)

    code += f"{pad}}};\n"
    return code


def _format_template_param(param: TemplateParam) -> str:
    code = f"typename {param.name}" if param.type is None else f"{param.type} {param.name}"
    if param.default is not None:
        code += f" = {param.default}"
    return code


def _format_inherit(inherit: Inherit) -> str:
    code = ""
    if inherit.visibility:
        code += f"{inherit.visibility} "
    if inherit.namespaces:
        code += "::".join(inherit.namespaces) + "::"
    code += str(inherit.name)
    if inherit.templates is not None:
        code += "<" + ", ".join(format_type(template) for template in inherit.templates) + ">"
    return code


def format_field(field: Field, indent: int = 0) -> str:
    """Render a field, its trailing offset comment included."""
    code = f"{_padding(indent)}{format_type(field.type)} {field.name}"

    if field.type.bitfield is not None:
        code += f" : {field.type.bitfield}"

    size = field.type.fixed_array
    if size is not None:
        if is_number(size):
            code += f"[0x{int(size):X}]"
        else:
            code += f"[{size}]"

    if field.default is not None:
        code += f" = {_format_value(field.default)}"

    code += ";"

    if field.offset is not None:
        code += f" // {field.offset:X}"

    return code + "\n"


def format_type(node: TypeDescriptor) -> str:
    """Render a type: qualifiers, namespaces, name, template arguments, then ``*``/``&``."""
    qualifiers: List[str] = [
        qualifier
        for qualifier in ("static", "constexpr", "const", "volatile")
        if getattr(node, qualifier)
    ]
    code = "".join(f"{qualifier} " for qualifier in qualifiers)

    if node.namespaces:
        code += "::".join(node.namespaces) + "::"
    code += _format_value(node.name)

    if node.templates is not None:
        code += "<" + ", ".join(format_type(template) for template in node.templates) + ">"

    if node.ptr:
        code += "*"
    if node.ref:
        code += "&"
    return code


def _format_value(value: Union[int, float, str, None]) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _padding(length: int) -> str:
    return " " * length
