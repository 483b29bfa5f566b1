from pathlib import Path

import pytest

from layout_extractor.formatter import format_document
from layout_extractor.treesitter.parser import HeaderParser

HEADERS_DIR = Path(__file__).parent / "headers"


@pytest.fixture(scope="session")
def parser():
    return HeaderParser()


@pytest.fixture
def load_header(parser):
    """Parse a header from tests/headers and check it survives a format round trip."""

    def _load(name, round_trip=True):
        ast = parser.parse_file(HEADERS_DIR / name)
        if round_trip:
            assert parser.parse(format_document(ast)) == ast
        return ast

    return _load
