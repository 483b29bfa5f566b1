"""Tree-sitter language detection and registration."""

from typing import Dict, Optional
from pathlib import Path

from tree_sitter import Language, Parser
from tree_sitter_language_pack import get_language, get_parser


class LanguageRegistry:
    """Manages header detection and Tree-sitter language mappings.

    Parsers are cached per registry. Tree-sitter parsers are not safe to share
    between threads, so each worker should own its registry.
    """

    # Extension to language mapping
    EXTENSION_MAP = {
        ".h": "cpp",
        ".hpp": "cpp",
        ".hxx": "cpp",
        ".hh": "cpp",
    }

    def __init__(self, extensions: Optional[Dict[str, str]] = None):
        """Initialize with an optional extension mapping.

        Args:
            extensions: Extension to language mapping overriding EXTENSION_MAP
        """
        self.extensions = dict(extensions) if extensions is not None else dict(self.EXTENSION_MAP)
        self.languages: Dict[str, Language] = {}
        self.parsers: Dict[str, Parser] = {}

    def detect_language(self, file_path: Path) -> Optional[str]:
        """Detect language from file extension.

        Args:
            file_path: Path to the file

        Returns:
            Language identifier or None if unknown
        """
        ext = Path(file_path).suffix.lower()
        return self.extensions.get(ext)

    def get_language(self, language_id: str) -> Optional[Language]:
        """Get or create a Tree-sitter language.

        Args:
            language_id: Language identifier (e.g., 'cpp')

        Returns:
            Tree-sitter Language object or None if not supported
        """
        if language_id not in self.languages:
            try:
                self.languages[language_id] = get_language(language_id)
            except (LookupError, ValueError):
                return None

        return self.languages[language_id]

    def get_parser(self, language_id: str) -> Optional[Parser]:
        """Get or create a Tree-sitter parser.

        Args:
            language_id: Language identifier (e.g., 'cpp')

        Returns:
            Tree-sitter Parser object or None if not supported
        """
        if language_id not in self.parsers:
            try:
                self.parsers[language_id] = get_parser(language_id)
            except (LookupError, ValueError):
                return None

        return self.parsers[language_id]
