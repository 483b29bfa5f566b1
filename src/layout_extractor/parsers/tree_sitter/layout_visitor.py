"""
Layout visitor: turns a tree-sitter-cpp CST into layout declarations.
"""
import logging
from typing import Dict, List, Type, Union

from tree_sitter import Node

from ..expressions import SYMBOL_KINDS, evaluate_expression, parse_number
from ..offsets import parse_offset
from .base_visitor import Frame
from .node_types import (
    Class,
    Enum,
    EnumValue,
    Field,
    Inherit,
    Namespace,
    Struct,
    TemplateParam,
)
from .type_builder import TypeDescriptorBuilder

logger = logging.getLogger(__name__)

SPECIFIER_KINDS = frozenset({"struct_specifier", "class_specifier", "enum_specifier", "union_specifier"})


class LayoutVisitor(TypeDescriptorBuilder):
    """Visitor producing layout declarations in source order.

    Each handler appends the declaration it builds to ``frame.parent`` right
    away, then schedules its children. Children are pushed in reverse so the
    stack pops them in document order.
    """

    def visit_translation_unit(self, frame: Frame) -> None:
        self.push_all(
            Frame(parent=frame.parent, node=child)
            for child in frame.node.children
            if child.type in self.DECLARATION_KINDS
        )

    def visit_declaration_list(self, frame: Frame) -> None:
        # Body of a namespace, same rules as the translation unit.
        self.visit_translation_unit(frame)

    def visit_namespace_definition(self, frame: Frame) -> None:
        name = frame.node.child_by_field_name("name")
        body = frame.node.child_by_field_name("body")
        if name is None or body is None:
            return

        segments = self.namespace_segments(name)
        namespace = Namespace(name=segments[0])
        frame.parent.append(namespace)
        for segment in segments[1:]:
            child = Namespace(name=segment)
            namespace.children.append(child)
            namespace = child

        self.push(namespace.children, body)

    def namespace_segments(self, node: Node) -> List[str]:
        """Split ``a::b::c`` into ``["a", "b", "c"]``, one segment at a time."""
        segments = []
        pending = [node]
        while pending:
            current = pending.pop()
            if current.type == "namespace_identifier":
                segments.append(self.get_node_text(current))
            else:
                pending.extend(reversed(current.named_children))
        return segments

    def visit_enum_specifier(self, frame: Frame) -> None:
        name = frame.node.child_by_field_name("name")
        body = frame.node.child_by_field_name("body")
        if name is None or body is None:
            return

        enum = Enum(name=self.get_node_text(name))
        base = frame.node.child_by_field_name("base") or frame.node.child_by_field_name("underlying_type")
        if base is not None:
            enum.base = self.get_node_text(base)

        frame.parent.append(enum)
        self.push(enum, body)

    def visit_enumerator_list(self, frame: Frame) -> None:
        """Resolve every enumerator to an integer, or to text when symbolic.

        Implicit values continue from a running counter. A literal moves the
        counter past itself, aliases and expressions leave it untouched.
        """
        counter = 0
        resolved: Dict[str, Union[int, float, str]] = {}

        for enumerator in self.find_children_by_type(frame.node, "enumerator"):
            name = self.get_node_text(enumerator.child_by_field_name("name"))
            content = enumerator.child_by_field_name("value")

            if content is None:
                value = counter
                counter += 1
            else:
                literal = parse_number(self.get_node_text(content))
                if literal is not None:
                    value = literal
                    counter = int(literal) + 1
                elif content.type in SYMBOL_KINDS:
                    text = self.get_node_text(content)
                    value = resolved.get(text, text)
                else:
                    value = evaluate_expression(content, self.get_node_text)

            resolved[name] = value
            frame.parent.values.append(EnumValue(name=name, value=value))

    def visit_struct_specifier(self, frame: Frame) -> None:
        self._visit_aggregate(frame, Struct)

    def visit_class_specifier(self, frame: Frame) -> None:
        self._visit_aggregate(frame, Class)

    def _visit_aggregate(self, frame: Frame, factory: Type[Struct]) -> None:
        node = frame.node
        body = node.child_by_field_name("body")
        if body is None:
            # Ignore forward declaration.
            return

        name = node.child_by_field_name("name")
        if name is None:
            return

        aggregate = factory(name=self.get_node_text(name))
        if frame.extra is not None:
            aggregate.templates = frame.extra
        frame.parent.append(aggregate)

        frames = []
        base = self.find_child_by_type(node, "base_class_clause")
        if base is not None:
            aggregate.inherit = Inherit()
            frames.append(Frame(parent=aggregate.inherit, node=base))
        frames.append(Frame(parent=aggregate, node=body))
        self.push_all(frames)

    def visit_base_class_clause(self, frame: Frame) -> None:
        # NOTE: only the first base class is kept.
        frames = []
        for child in frame.node.children:
            if child.type == ",":
                break
            if child.is_named and child.type not in ("comment", "attribute_declaration"):
                frames.append(Frame(parent=frame.parent, node=child))
        self.push_all(frames)

    def visit_access_specifier(self, frame: Frame) -> None:
        frame.parent.visibility = self.get_node_text(frame.node)

    def visit_template_declaration(self, frame: Frame) -> None:
        parameters = frame.node.child_by_field_name("parameters")
        templates = self.template_params(parameters) if parameters is not None else []

        for child in frame.node.named_children:
            if child.type in ("template_parameter_list", "requires_clause", "comment"):
                continue
            if child.type in ("struct_specifier", "class_specifier"):
                self.push(frame.parent, child, templates)
            elif child.type != "field_declaration":
                # Member templates are methods or static variables, never layout.
                self.push(frame.parent, child)
            return

    def template_params(self, node: Node) -> List[TemplateParam]:
        templates = []
        for param in node.named_children:
            kind = param.type
            if kind == "type_parameter_declaration":
                name = self.find_child_by_type(param, "type_identifier")
                if name is not None:
                    templates.append(TemplateParam(name=self.get_node_text(name)))
            elif kind == "optional_type_parameter_declaration":
                name = param.child_by_field_name("name")
                default = param.child_by_field_name("default_type")
                if name is not None:
                    templates.append(TemplateParam(
                        name=self.get_node_text(name),
                        default=self.get_node_text(default) if default is not None else None,
                    ))
            elif kind in ("parameter_declaration", "optional_parameter_declaration"):
                type_node = param.child_by_field_name("type")
                declarator = param.child_by_field_name("declarator")
                if type_node is None or declarator is None:
                    continue
                default = param.child_by_field_name("default_value")
                templates.append(TemplateParam(
                    name=self.declarator_name(declarator),
                    type=self.get_node_text(type_node),
                    default=self.get_node_text(default) if default is not None else None,
                ))
            elif kind != "comment":
                logger.debug(f"Skipping template parameter: {self.get_node_text(param)}")
        return templates

    def visit_field_declaration_list(self, frame: Frame) -> None:
        aggregate = frame.parent
        children = frame.node.children
        frames = []

        for index, child in enumerate(children):
            if child.type == "field_declaration":
                following = children[index + 1] if index + 1 < len(children) else None
                # Associate comment with this field to extract offset information
                comment = following if following is not None and following.type == "comment" else None
                frames.append(Frame(parent=aggregate, node=child, extra=comment))
            elif child.type == "template_declaration":
                frames.append(Frame(parent=aggregate.nested, node=child))

        # Functions, constructors and access specifiers are ignored.
        self.push_all(frames)

    def visit_field_declaration(self, frame: Frame) -> None:
        aggregate = frame.parent
        node = frame.node

        type_node = node.child_by_field_name("type")
        if type_node is None:
            return
        declarator = node.child_by_field_name("declarator")

        if type_node.type in SPECIFIER_KINDS:
            if type_node.child_by_field_name("body") is not None:
                self.push(aggregate.nested, type_node)
            # Elaborated type of a member, e.g. `class Foo* foo;`
            type_node = type_node.child_by_field_name("name")
            if type_node is None:
                return

        if declarator is None:
            return

        declarators = self.collect_declarators(declarator)
        if self.is_function(declarators):
            return

        field = Field(name=self.declarator_name(declarator))
        if frame.extra is not None:
            field.offset = parse_offset(self.get_node_text(frame.extra))

        self.apply_qualifiers(field.type, node)

        bitfield = self.find_child_by_type(node, "bitfield_clause")
        if bitfield is not None and bitfield.named_children:
            field.type.bitfield = evaluate_expression(bitfield.named_children[0], self.get_node_text)

        default = node.child_by_field_name("default_value")
        if default is not None:
            field.default = self.default_value(default)

        aggregate.fields.append(field)
        self.push(field.type, type_node, declarators)
