"""
Type descriptor handlers of the layout visitor.

Builds a TypeDescriptor from a type node and its declarator chain:
base name, namespaces, template arguments, pointer/reference/array
modifiers and qualifiers.
"""
import logging
from typing import List, Optional, Union

from tree_sitter import Node

from ..expressions import Number, evaluate_expression, is_number, parse_number
from .base_visitor import BaseTreeSitterVisitor, Frame
from .node_types import TypeDescriptor

logger = logging.getLogger(__name__)

POINTER_DECLARATORS = frozenset({"pointer_declarator", "abstract_pointer_declarator"})
REFERENCE_DECLARATORS = frozenset({"reference_declarator", "abstract_reference_declarator"})
ARRAY_DECLARATORS = frozenset({"array_declarator", "abstract_array_declarator"})
NAME_KINDS = frozenset({"field_identifier", "identifier", "type_identifier", "operator_name"})
QUALIFIERS = ("static", "constexpr", "const", "volatile")
CAST_NAMES = frozenset({"static_cast", "reinterpret_cast", "const_cast", "dynamic_cast"})
ARITHMETIC_KINDS = frozenset({"number_literal", "binary_expression", "parenthesized_expression"})
LITERAL_KINDS = frozenset({"true", "false", "null", "nullptr", "char_literal", "string_literal"})


def array_size(dimensions: List[Union[Number, str]]) -> Union[Number, str]:
    """Collapse array dimensions to their element count.

    Symbolic dimensions are kept as a product expression, ``int a[kN][4]``
    gives ``"kN * 4"``, so the constant resolution pass can finish it.
    """
    if all(is_number(dimension) for dimension in dimensions):
        count = 1
        for dimension in dimensions:
            count *= dimension
        return count
    if len(dimensions) == 1:
        return dimensions[0]
    return " * ".join(
        f"({dimension})" if isinstance(dimension, str) and " " in dimension else str(dimension)
        for dimension in dimensions
    )


class TypeDescriptorBuilder(BaseTreeSitterVisitor):
    """Handlers for type nodes. ``frame.parent`` is the descriptor being
    filled and ``frame.extra`` the declarator chain that modifies it."""

    def visit_primitive_type(self, frame: Frame) -> None:
        """Parse primitive types like ``bool``, ``void*`` or ``int32_t&``."""
        frame.parent.name = self.get_node_text(frame.node)
        self.apply_declarators(frame.parent, frame.extra)

    def visit_type_identifier(self, frame: Frame) -> None:
        frame.parent.name = self.get_node_text(frame.node)
        self.apply_declarators(frame.parent, frame.extra)

    def visit_sized_type_specifier(self, frame: Frame) -> None:
        frame.parent.name = self.get_node_text(frame.node)
        self.apply_declarators(frame.parent, frame.extra)

    def visit_placeholder_type_specifier(self, frame: Frame) -> None:
        # auto or decltype(auto)
        frame.parent.name = self.get_node_text(frame.node)
        self.apply_declarators(frame.parent, frame.extra)

    def visit_namespace_identifier(self, frame: Frame) -> None:
        frame.parent.name = self.get_node_text(frame.node)

    def visit_dependent_type(self, frame: Frame) -> None:
        """``typename T::Type`` resolves to its inner type."""
        inner = frame.node.named_children
        if inner:
            self.push(frame.parent, inner[-1], frame.extra)

    def visit_qualified_identifier(self, frame: Frame) -> None:
        """Peel ``scope::name`` pairs down to the innermost unqualified name."""
        node = frame.node
        namespaces = []
        while node is not None and node.type == "qualified_identifier":
            scope = node.child_by_field_name("scope")
            if scope is not None:
                namespaces.append(self.get_node_text(scope))
            node = node.child_by_field_name("name")

        frame.parent.namespaces = namespaces
        self.push(frame.parent, node, frame.extra)

    def visit_template_type(self, frame: Frame) -> None:
        """Parse template types like:

        - ``DynArray<int>``
        - ``DynArray<Handle<IScriptable>>``
        - ``HashMap<uint64_t, WeakHandle<GameObject>>``
        - ``Array<int, 10>``
        """
        descriptor = frame.parent
        descriptor.name = self.get_node_text(frame.node.child_by_field_name("name"))

        templates: List[TypeDescriptor] = []
        frames = []
        arguments = frame.node.child_by_field_name("arguments")
        for argument in arguments.named_children if arguments is not None else ():
            if argument.type == "comment":
                continue
            template = TypeDescriptor()
            if argument.type in ("type_descriptor", "number_literal"):
                frames.append(Frame(parent=template, node=argument))
            elif argument.type in LITERAL_KINDS:
                template.name = self.get_node_text(argument)
            else:
                template.name = evaluate_expression(argument, self.get_node_text)
            templates.append(template)

        descriptor.templates = templates
        self.apply_declarators(descriptor, frame.extra)
        self.push_all(frames)

    def visit_type_descriptor(self, frame: Frame) -> None:
        """Template argument: qualifiers, a type and an abstract declarator."""
        self.apply_qualifiers(frame.parent, frame.node)
        declarator = frame.node.child_by_field_name("declarator")
        self.push(
            frame.parent,
            frame.node.child_by_field_name("type"),
            self.collect_declarators(declarator),
        )

    def visit_number_literal(self, frame: Frame) -> None:
        """Non-type template argument, e.g. the ``4`` of ``Array<float, 4>``."""
        text = self.get_node_text(frame.node)
        value = parse_number(text)
        frame.parent.name = text if value is None else value

    # -- declarators --

    def collect_declarators(self, declarator: Optional[Node]) -> List[Node]:
        """Declarator chain from the outermost to the innermost declarator."""
        chain = []
        node = declarator
        while node is not None and node.type.endswith("_declarator"):
            chain.append(node)
            node = self._inner_declarator(node, ())
        return chain

    def declarator_name(self, declarator: Node) -> str:
        node = declarator
        while node is not None and node.type.endswith("_declarator"):
            node = self._inner_declarator(node, NAME_KINDS)
        return self.get_node_text(node if node is not None else declarator)

    @staticmethod
    def _inner_declarator(node: Node, name_kinds) -> Optional[Node]:
        inner = node.child_by_field_name("declarator")
        if inner is not None:
            return inner
        for child in node.named_children:
            if child.type.endswith("_declarator") or child.type in name_kinds:
                return child
        return None

    @staticmethod
    def is_function(declarators: List[Node]) -> bool:
        return any(declarator.type == "function_declarator" for declarator in declarators)

    def apply_declarators(self, descriptor: TypeDescriptor, declarators: Optional[List[Node]]) -> None:
        """Apply pointer, reference and array declarators in encountered order."""
        if not declarators:
            return

        dimensions = []
        for declarator in declarators:
            if declarator.type in POINTER_DECLARATORS:
                descriptor.ptr = True
            elif declarator.type in REFERENCE_DECLARATORS:
                descriptor.ref = True
            elif declarator.type in ARRAY_DECLARATORS:
                size = declarator.child_by_field_name("size")
                if size is not None:
                    dimensions.append(evaluate_expression(size, self.get_node_text))

        if dimensions:
            # The outermost declarator holds the last dimension.
            descriptor.fixed_array = array_size(list(reversed(dimensions)))

    def apply_qualifiers(self, descriptor: TypeDescriptor, node: Node) -> None:
        """Parse static, constexpr, const and volatile sibling tokens."""
        for child in node.children:
            if child.type not in ("type_qualifier", "storage_class_specifier"):
                continue
            qualifier = self.get_node_text(child)
            if qualifier in QUALIFIERS:
                setattr(descriptor, qualifier, True)

    # -- default values --

    def default_value(self, node: Node) -> Union[Number, str]:
        """Numeric literal when possible, otherwise the normalized source text."""
        node = self.strip_casts(node)
        if self._is_arithmetic(node):
            value = evaluate_expression(node, self.get_node_text)
            if is_number(value):
                return value

        text = self.get_node_text(node)
        value = parse_number(text)
        return text if value is None else value

    def strip_casts(self, node: Node) -> Node:
        """``static_cast<T>(N::F)`` and ``(T)N::F`` both reduce to ``N::F``."""
        while True:
            if node.type == "parenthesized_expression" and len(node.named_children) == 1:
                node = node.named_children[0]
            elif node.type == "cast_expression" and node.child_by_field_name("value") is not None:
                node = node.child_by_field_name("value")
            elif node.type == "call_expression" and self._is_cast(node):
                node = node.child_by_field_name("arguments").named_children[0]
            else:
                return node

    def _is_cast(self, node: Node) -> bool:
        function = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if function is None or arguments is None or function.type != "template_function":
            return False
        name = function.child_by_field_name("name")
        return (
            name is not None
            and self.get_node_text(name) in CAST_NAMES
            and len(arguments.named_children) == 1
        )

    def _is_arithmetic(self, node: Node) -> bool:
        if node.type not in ARITHMETIC_KINDS:
            return False
        if node.type == "number_literal":
            return True
        return all(
            self._is_arithmetic(child) for child in node.named_children
        )
