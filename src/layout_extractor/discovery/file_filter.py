"""
Header discovery for the layout extractor.
Uses PathSpec for .gitignore-style pattern matching and identify for text file detection.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union
from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern
from identify import identify
import logging

from ..treesitter.language_registry import LanguageRegistry

logger = logging.getLogger(__name__)

# Directories and files that never hold SDK headers
COMMON_IGNORE_PATTERNS: List[str] = [
    ".git",
    ".git/**",
    ".idea",
    ".idea/**",
    ".vscode",
    ".vscode/**",
    ".vs",
    ".vs/**",
    ".cache",
    ".cache/**",
    "build",
    "build/**",
    "cmake-build-*",
    "cmake-build-*/**",
    "out",
    "out/**",
    "*~",
    "*.bak",
    "*.swp",
]

# Inline implementation headers carry function bodies only
DEFAULT_EXCLUDE_PATTERNS: List[str] = ["*-inl.hpp"]


class HeaderFilter:
    """Finds C++ headers under a directory using PathSpec and identify."""

    def __init__(
        self,
        exclude_patterns: Optional[Iterable[str]] = None,
        registry: Optional[LanguageRegistry] = None,
        language: str = "cpp",
    ):
        """
        Initialize with optional exclusion patterns.

        Args:
            exclude_patterns: Extra gitwildmatch patterns to skip, ``*-inl.hpp`` by default
            registry: Language registry deciding which extensions are headers
            language: Language identifier headers must map to
        """
        patterns = COMMON_IGNORE_PATTERNS.copy()
        if exclude_patterns is None:
            exclude_patterns = DEFAULT_EXCLUDE_PATTERNS
        patterns.extend(exclude_patterns)
        self.spec = PathSpec.from_lines(GitWildMatchPattern, patterns)
        self.registry = registry or LanguageRegistry()
        self.language = language

    def _matches_ignore_pattern(self, path: Union[str, Path]) -> bool:
        """Check if a root-relative path matches any ignore patterns."""
        return self.spec.match_file(Path(path).as_posix())

    def is_text_file(self, path: Union[str, Path]) -> bool:
        """
        Check if a file is a text file using identify.

        Args:
            path: Path to the file to check

        Returns:
            bool: True if file is text, False otherwise
        """
        try:
            tags = identify.tags_from_path(str(path))
            return "text" in tags
        except ValueError as e:
            logger.debug(f"identify failed for {path}: {e}")
            return False

    def is_header(self, path: Union[str, Path]) -> bool:
        return self.registry.detect_language(Path(path)) == self.language

    def should_ignore(self, path: Union[str, Path], root_dir: Union[str, Path]) -> bool:
        """
        Determine if a file under root_dir should be skipped.

        Args:
            path: Path to check
            root_dir: Directory the ignore patterns are relative to

        Returns:
            bool: True if path should be ignored, False otherwise
        """
        relative = Path(path).relative_to(root_dir)
        if self._matches_ignore_pattern(relative):
            return True
        if not self.is_header(path):
            return True
        return not self.is_text_file(path)

    def find_headers(self, root_dir: Union[str, Path]) -> List[str]:
        """
        Find all headers in directory that aren't ignored.

        Args:
            root_dir: Root directory to search

        Returns:
            List[str]: Sorted list of header paths
        """
        root_path = Path(root_dir)
        result = []

        for path in root_path.rglob("*"):
            if path.is_file() and not self.should_ignore(path, root_path):
                result.append(str(path))

        return sorted(result)
