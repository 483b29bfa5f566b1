"""
Test JSON output.
"""

import json
from pathlib import Path

from layout_extractor.output.writer import dump_document, output_path_for, write_documents
from layout_extractor.parsers.tree_sitter.node_types import Field, Struct, TypeDescriptor
from layout_extractor.treesitter.parser import Document


def make_document(path):
    struct = Struct(
        name="GameApp",
        fields=[Field(name="isRunning", type=TypeDescriptor(name="bool"), offset=0)],
    )
    return Document(path=Path(path), ast=[struct])


def test_output_path_for(tmp_path):
    source_root = tmp_path / "include" / "RED4ext"

    path = output_path_for(source_root / "Scripting" / "Natives.hpp", source_root, tmp_path / "types")

    assert path == tmp_path / "types" / "Scripting" / "Natives.json"


def test_dump_document():
    document = make_document("GameApp.hpp")

    pretty = dump_document(document)
    compact = dump_document(document, minify=True)

    assert json.loads(pretty) == json.loads(compact)
    assert json.loads(compact) == [
        {
            "type": "struct",
            "name": "GameApp",
            "nested": [],
            "fields": [{"name": "isRunning", "type": {"name": "bool"}, "offset": 0}],
        }
    ]
    assert "\n" in pretty
    assert "\n" not in compact
    assert " " not in compact


def test_write_documents(tmp_path):
    source_root = tmp_path / "src"
    documents = [
        make_document(source_root / "GameApp.hpp"),
        make_document(source_root / "Scripting" / "IScriptable.hpp"),
    ]

    written = write_documents(documents, source_root, tmp_path / "types")

    assert written == [
        tmp_path / "types" / "GameApp.json",
        tmp_path / "types" / "Scripting" / "IScriptable.json",
    ]
    assert json.loads(written[1].read_text())[0]["name"] == "GameApp"


def test_dump_document_matches_to_dict():
    document = make_document("GameApp.hpp")

    assert json.loads(dump_document(document)) == document.to_dict()["ast"]
