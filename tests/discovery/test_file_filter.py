"""
Test header discovery.
"""

from pathlib import Path

from layout_extractor.discovery.file_filter import HeaderFilter


def write(path: Path, content: str = "#pragma once\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_find_headers(tmp_path):
    """Only C++ headers outside ignored locations are listed, sorted."""
    write(tmp_path / "GameApp.hpp")
    write(tmp_path / "Scripting" / "IScriptable.hpp")
    write(tmp_path / "Scripting" / "Natives.h")
    write(tmp_path / "Scripting" / "IScriptable-inl.hpp")
    write(tmp_path / "Api.cpp")
    write(tmp_path / "README.md", "# SDK\n")
    write(tmp_path / ".git" / "HEAD.hpp")
    write(tmp_path / "build" / "Generated.hpp")

    headers = HeaderFilter().find_headers(tmp_path)

    assert headers == sorted(
        [
            str(tmp_path / "GameApp.hpp"),
            str(tmp_path / "Scripting" / "IScriptable.hpp"),
            str(tmp_path / "Scripting" / "Natives.h"),
        ]
    )


def test_custom_exclude_patterns(tmp_path):
    write(tmp_path / "GameApp.hpp")
    write(tmp_path / "Detail" / "Impl.hpp")
    write(tmp_path / "GameApp-inl.hpp")

    headers = HeaderFilter(exclude_patterns=["Detail/"]).find_headers(tmp_path)

    assert headers == sorted([str(tmp_path / "GameApp.hpp"), str(tmp_path / "GameApp-inl.hpp")])


def test_should_ignore(tmp_path):
    header_filter = HeaderFilter()
    header = write(tmp_path / "GameApp.hpp")
    inline = write(tmp_path / "GameApp-inl.hpp")
    source = write(tmp_path / "GameApp.cpp")

    assert header_filter.should_ignore(header, tmp_path) is False
    assert header_filter.should_ignore(inline, tmp_path) is True
    assert header_filter.should_ignore(source, tmp_path) is True


def test_is_header():
    header_filter = HeaderFilter()

    assert header_filter.is_header("RED4ext/GameApp.hpp")
    assert header_filter.is_header("RED4ext/Api.h")
    assert not header_filter.is_header("RED4ext/Api.cpp")
    assert not header_filter.is_header("RED4ext/Api.py")
