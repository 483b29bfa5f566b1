"""Tree-sitter based header parsing into layout declarations."""

from dataclasses import dataclass, field
from typing import List, Optional, Union
from pathlib import Path
import logging

from tree_sitter import Parser

from ..formatter import format_document
from ..parsers.constants import resolve_constants
from ..parsers.tree_sitter.layout_visitor import LayoutVisitor
from ..parsers.tree_sitter.node_types import Declaration
from .language_registry import LanguageRegistry

# Set up logger
logger = logging.getLogger(__name__)


class ParserUnavailableError(RuntimeError):
    """Raised when the tree-sitter grammar for a language cannot be loaded."""


@dataclass
class Document:
    """Layout declarations extracted from one header."""

    path: Path
    ast: List[Declaration]

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "ast": [declaration.to_dict() for declaration in self.ast],
        }


@dataclass
class ParseResult:
    documents: List[Document] = field(default_factory=list)
    errors: int = 0


def nice_path(path: Union[str, Path]) -> str:
    return f'"{path}"'


class HeaderParser:
    """Parses C++ headers into layout declarations.

    Each instance owns its tree-sitter parser handle. Use one instance per
    thread; instances share no mutable state.
    """

    def __init__(
        self,
        parser: Optional[Parser] = None,
        registry: Optional[LanguageRegistry] = None,
        language: str = "cpp",
        verbose: bool = False,
    ):
        """Initialize the header parser.

        Args:
            parser: Tree-sitter parser to use, created from the registry when omitted
            registry: Language registry providing the parser
            language: Language identifier of the grammar
            verbose: Log node details when a node kind is not supported
        """
        if parser is None:
            registry = registry or LanguageRegistry()
            parser = registry.get_parser(language)
            if parser is None:
                raise ParserUnavailableError(f"No tree-sitter grammar available for {language}")
        self.parser = parser
        self.verbose = verbose

    def parse(self, code: str) -> List[Declaration]:
        """Parse header source text.

        Args:
            code: C++ header source

        Returns:
            Top-level declarations in source order
        """
        source = bytes(code, "utf8")
        tree = self.parser.parse(source)

        raw = LayoutVisitor(source, verbose=self.verbose).visit_tree(tree)
        ast = resolve_constants(raw)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("```cpp")
            for line in format_document(ast).splitlines():
                logger.debug(line)
            logger.debug("```")

        return ast

    def parse_file(self, path: Union[str, Path]) -> List[Declaration]:
        with open(path, "r", encoding="utf8") as f:
            return self.parse(f.read())


def parse_cpp(code: str, parser: Optional[HeaderParser] = None) -> List[Declaration]:
    """Parse header source text with a new or given HeaderParser."""
    return (parser or HeaderParser()).parse(code)


def parse_files(
    files: List[Union[str, Path]],
    verbose: bool = False,
    parser: Optional[HeaderParser] = None,
) -> ParseResult:
    """Parse headers one by one.

    A file failing to parse is dropped and counted, the others still go
    through.

    Args:
        files: Paths of the headers to parse
        verbose: Log the full error of failing files
        parser: Parser to use, a new HeaderParser when omitted

    Returns:
        Parsed documents and the number of files that failed
    """
    parser = parser or HeaderParser(verbose=verbose)
    result = ParseResult()

    for file in files:
        try:
            if verbose:
                logger.info(nice_path(file))
            ast = parser.parse_file(file)
            result.documents.append(Document(path=Path(file), ast=ast))
        except Exception:
            result.errors += 1
            if not verbose:
                logger.error(f"Failed to parse file {nice_path(file)}.")
            else:
                logger.exception(f"Failed to parse file {nice_path(file)}:")

    return result
