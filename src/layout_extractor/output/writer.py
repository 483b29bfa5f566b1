"""
JSON output of parsed headers.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from ..treesitter.parser import Document

logger = logging.getLogger(__name__)


def output_path_for(source: Union[str, Path], source_root: Union[str, Path], output_root: Union[str, Path]) -> Path:
    """Mirror a header path below output_root, with a ``.json`` suffix."""
    relative = Path(source).relative_to(source_root)
    return Path(output_root) / relative.with_suffix(".json")


def dump_document(document: Document, minify: bool = False, indent: int = 2) -> str:
    data = document.to_dict()["ast"]
    if minify:
        return json.dumps(data, separators=(",", ":"))
    return json.dumps(data, indent=indent)


def write_document(
    document: Document,
    source_root: Union[str, Path],
    output_root: Union[str, Path],
    minify: bool = False,
    indent: int = 2,
) -> Path:
    """Write the declarations of one header as a JSON array.

    Args:
        document: Parsed header
        source_root: Directory the header path is relative to
        output_root: Directory receiving the JSON files
        minify: Write compact JSON
        indent: Indentation of pretty-printed JSON

    Returns:
        Path of the written file
    """
    file_path = output_path_for(document.path, source_root, output_root)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(dump_document(document, minify, indent), encoding="utf8")
    logger.debug(f"Wrote {file_path}")
    return file_path


def write_documents(
    documents: List[Document],
    source_root: Union[str, Path],
    output_root: Union[str, Path],
    minify: bool = False,
    indent: int = 2,
) -> List[Path]:
    return [
        write_document(document, source_root, output_root, minify, indent)
        for document in documents
    ]
