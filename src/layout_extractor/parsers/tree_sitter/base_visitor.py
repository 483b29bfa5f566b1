"""
Base visitor for Tree-sitter CST traversal.
Drives an explicit work stack instead of native recursion and dispatches each
frame to a ``visit_<node kind>`` handler.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from tree_sitter import Node, Tree

from .node_types import Declaration

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """Unit of work on the traversal stack.

    Attributes:
        parent: Container the handler writes into (a declaration list, an
            aggregate or a type descriptor)
        node: Tree-sitter node to handle
        extra: Optional context attached by the producer of the frame
    """
    parent: Any
    node: Node
    extra: Any = None


class BaseTreeSitterVisitor:
    """Base visitor for Tree-sitter CST nodes.

    Handlers are looked up by node kind. Kinds listed in ``IGNORED_KINDS`` are
    silently dropped, any other kind without a handler is logged and skipped.
    """

    # Node kinds that may appear where a declaration is expected.
    DECLARATION_KINDS = frozenset({
        "namespace_definition",
        "enum_specifier",
        "struct_specifier",
        "class_specifier",
        "union_specifier",
        "template_declaration",
    })

    # Constructs that never contribute to the data layout.
    IGNORED_KINDS = frozenset({
        "function_definition",
        "concept_definition",
        "alias_declaration",
        "requires_clause",
        "union_specifier",
        "compound_statement",
    })

    def __init__(self, source: bytes, verbose: bool = False):
        self.source = source
        self.verbose = verbose
        self.stack: List[Frame] = []

    def visit_tree(self, tree: Tree) -> List[Declaration]:
        """Entry point for tree traversal.

        Args:
            tree: Tree-sitter CST of a single header

        Returns:
            Top-level declarations in source order
        """
        root: List[Declaration] = []
        self.stack = [Frame(parent=root, node=tree.root_node)]
        while self.stack:
            self.visit(self.stack.pop())
        return root

    def visit(self, frame: Frame) -> None:
        """Dispatch a frame to the handler of its node kind."""
        kind = frame.node.type
        if kind in self.IGNORED_KINDS:
            return
        visitor = getattr(self, f"visit_{kind}", None)
        if visitor is None:
            self.generic_visit(frame)
            return
        visitor(frame)

    def generic_visit(self, frame: Frame) -> None:
        """Called for nodes that don't have a specific visitor method."""
        logger.warning(f"Missing implementation for node type: {frame.node.type}")
        if self.verbose:
            logger.debug(self.get_node_text(frame.node))

    def push(self, parent: Any, node: Optional[Node], extra: Any = None) -> None:
        if node is None:
            return
        self.stack.append(Frame(parent=parent, node=node, extra=extra))

    def push_all(self, frames: Iterable[Frame]) -> None:
        """Schedule frames so they are handled in the given order."""
        self.stack.extend(reversed(list(frames)))

    def get_node_text(self, node: Node) -> str:
        """Get the source text for a node."""
        return self.source[node.start_byte:node.end_byte].decode("utf8")

    @staticmethod
    def find_child_by_type(node: Node, kind: str) -> Optional[Node]:
        for child in node.children:
            if child.type == kind:
                return child
        return None

    @staticmethod
    def find_children_by_type(node: Node, kind: str) -> List[Node]:
        return [child for child in node.children if child.type == kind]
