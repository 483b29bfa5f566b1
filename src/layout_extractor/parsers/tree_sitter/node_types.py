"""
Layout AST node types produced from a C++ concrete syntax tree.
These types describe data layout only: namespaces, aggregates, enums and fields.
"""
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union

Number = Union[int, float]


@dataclass
class TypeDescriptor:
    """Type of a field, template argument or base class.

    ``name`` is a number when the descriptor stands for a non-type template
    argument such as the ``4`` in ``Array<float, 4>``.
    """
    name: Optional[Union[str, Number]] = None
    namespaces: Optional[List[str]] = None
    templates: Optional[List["TypeDescriptor"]] = None
    ptr: bool = False
    ref: bool = False
    const: bool = False
    volatile: bool = False
    static: bool = False
    constexpr: bool = False
    bitfield: Optional[int] = None
    fixed_array: Optional[Union[int, str]] = None
    constant: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {}
        for flag in ("static", "constexpr", "const", "volatile"):
            if getattr(self, flag):
                result[flag] = True
        if self.namespaces:
            result["namespaces"] = list(self.namespaces)
        result["name"] = self.name
        if self.templates is not None:
            result["templates"] = [template.to_dict() for template in self.templates]
        if self.ptr:
            result["ptr"] = True
        if self.ref:
            result["ref"] = True
        if self.bitfield is not None:
            result["bitfield"] = self.bitfield
        if self.fixed_array is not None:
            result["fixedArray"] = self.fixed_array
        if self.constant:
            result["constant"] = True
        return result


@dataclass
class Field:
    """Data member of a struct or class."""
    name: str
    type: TypeDescriptor = field(default_factory=TypeDescriptor)
    offset: Optional[int] = None
    default: Optional[Union[Number, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name, "type": self.type.to_dict()}
        if self.offset is not None:
            result["offset"] = self.offset
        if self.default is not None:
            result["default"] = self.default
        return result


@dataclass
class TemplateParam:
    """Template parameter of a struct or class (``typename T``, ``uint32_t N``)."""
    name: str
    type: Optional[str] = None
    default: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.type is not None:
            result["type"] = self.type
        if self.default is not None:
            result["default"] = self.default
        return result


@dataclass
class Inherit:
    """Base class of a struct or class. Only the first base is kept."""
    name: Optional[str] = None
    visibility: Optional[str] = None
    namespaces: Optional[List[str]] = None
    templates: Optional[List[TypeDescriptor]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.visibility is not None:
            result["visibility"] = self.visibility
        if self.namespaces:
            result["namespaces"] = list(self.namespaces)
        result["name"] = self.name
        if self.templates is not None:
            result["templates"] = [template.to_dict() for template in self.templates]
        return result


@dataclass
class EnumValue:
    """Enumerator with its resolved value."""
    name: str
    value: Optional[Union[int, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name}
        if self.value is not None:
            result["value"] = self.value
        return result


@dataclass
class Declaration:
    """Base class for all layout declarations."""
    kind: ClassVar[str] = ""
    name: str

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass
class Namespace(Declaration):
    kind: ClassVar[str] = "namespace"
    children: List[Declaration] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind,
            "name": self.name,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class Enum(Declaration):
    kind: ClassVar[str] = "enum"
    base: Optional[str] = None
    values: List[EnumValue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.kind, "name": self.name}
        if self.base is not None:
            result["base"] = self.base
        result["values"] = [value.to_dict() for value in self.values]
        return result


@dataclass
class Struct(Declaration):
    kind: ClassVar[str] = "struct"
    templates: Optional[List[TemplateParam]] = None
    inherit: Optional[Inherit] = None
    nested: List[Declaration] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.kind, "name": self.name}
        if self.templates is not None:
            result["templates"] = [template.to_dict() for template in self.templates]
        if self.inherit is not None:
            result["inherit"] = self.inherit.to_dict()
        result["nested"] = [child.to_dict() for child in self.nested]
        result["fields"] = [member.to_dict() for member in self.fields]
        return result


@dataclass
class Class(Struct):
    kind: ClassVar[str] = "class"
