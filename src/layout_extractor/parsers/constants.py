"""
Constant resolution pass.

Substitutes named constants used as array sizes or template arguments with the
default value of the field of the same name in the same aggregate, e.g.::

    static constexpr int32_t kMax = 128;
    uint32_t fixedConstant[kMax];   // fixedArray: 128

The pass never mutates its input and never looks outside the aggregate.
"""
import copy
from dataclasses import replace
from typing import Dict, List, Optional, Union

from .expressions import Number, is_number, parse_number
from .tree_sitter.node_types import Declaration, Enum, Field, Namespace, Struct, TypeDescriptor

Defaults = Dict[str, Union[Number, str]]


def resolve_constants(declarations: List[Declaration]) -> List[Declaration]:
    """Return a resolved copy of a declaration forest."""
    return [resolve_declaration(declaration) for declaration in declarations]


def resolve_declaration(declaration: Declaration) -> Declaration:
    if isinstance(declaration, Namespace):
        return replace(declaration, children=resolve_constants(declaration.children))

    if isinstance(declaration, Struct):
        defaults = {
            field.name: field.default
            for field in declaration.fields
            if field.default is not None
        }
        return replace(
            declaration,
            templates=copy.deepcopy(declaration.templates),
            inherit=copy.deepcopy(declaration.inherit),
            nested=resolve_constants(declaration.nested),
            fields=[resolve_field(field, defaults) for field in declaration.fields],
        )

    if isinstance(declaration, Enum):
        return replace(declaration, values=[replace(value) for value in declaration.values])

    return copy.deepcopy(declaration)


def resolve_field(field: Field, defaults: Defaults) -> Field:
    return replace(field, type=resolve_type(field.type, defaults))


def resolve_type(descriptor: TypeDescriptor, defaults: Defaults) -> TypeDescriptor:
    """Resolve the fixed array size and template arguments of a descriptor."""
    resolved = replace(
        descriptor,
        namespaces=list(descriptor.namespaces) if descriptor.namespaces is not None else None,
        templates=None,
    )
    if descriptor.templates is not None:
        resolved.templates = [
            _resolve_template_argument(argument, defaults)
            for argument in descriptor.templates
        ]

    size = descriptor.fixed_array
    if isinstance(size, str):
        if size in defaults:
            _substitute(resolved, "fixed_array", defaults[size])
        else:
            count = _resolve_product(size, defaults)
            if count is not None:
                resolved.fixed_array = count

    return resolved


def _resolve_template_argument(argument: TypeDescriptor, defaults: Defaults) -> TypeDescriptor:
    resolved = resolve_type(argument, defaults)
    name = argument.name
    if (
        isinstance(name, str)
        and name in defaults
        and not argument.namespaces
        and argument.templates is None
    ):
        _substitute(resolved, "name", defaults[name])
    return resolved


def _substitute(descriptor: TypeDescriptor, attribute: str, value: Union[Number, str]) -> None:
    setattr(descriptor, attribute, value)
    if not is_number(value):
        # Symbolic constant (e.g. an enum member) left for external resolution.
        descriptor.constant = True


def _resolve_product(size: str, defaults: Defaults) -> Optional[Number]:
    """Element count of a multi-dimensional size such as ``"kN * 4"``.

    Returns None unless every factor is a literal or a numeric constant.
    """
    factors = size.split(" * ")
    if len(factors) < 2:
        return None

    count: Number = 1
    for factor in factors:
        value = defaults.get(factor, parse_number(factor))
        if not is_number(value):
            return None
        count *= value
    return count
