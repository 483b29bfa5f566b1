"""
Test configuration loading.
"""

import pytest

from layout_extractor import config as config_module
from layout_extractor.config import ExtractorConfig, load_config


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory with an empty user config directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "user_config_dir", lambda name: str(tmp_path / "user"))
    return tmp_path


def test_defaults(isolated):
    config = load_config()

    assert config == ExtractorConfig()
    assert config.sources.include_dir == "include/RED4ext"
    assert config.sources.exclude_patterns == ["*-inl.hpp"]
    assert config.output.path == "types"
    assert config.output.minify is False
    assert config.treesitter.language == "cpp"


def test_explicit_config(isolated):
    path = isolated / "custom.yaml"
    path.write_text(
        "log_level: debug\n"
        "sources:\n"
        "  include_dir: include/SDK\n"
        "  exclude_patterns: ['*-inl.hpp', 'Detail/']\n"
        "output:\n"
        "  path: out/types\n"
        "  minify: true\n"
    )

    config = load_config(str(path))

    assert config.log_level == "debug"
    assert config.sources.include_dir == "include/SDK"
    assert config.sources.exclude_patterns == ["*-inl.hpp", "Detail/"]
    assert config.output.path == "out/types"
    assert config.output.minify is True
    assert config.output.indent == 2
    assert config.treesitter.header_extensions == [".h", ".hpp", ".hxx", ".hh"]


def test_local_config(isolated):
    (isolated / "layout-extractor.yaml").write_text("output:\n  indent: 4\n")

    assert load_config().output.indent == 4


def test_user_config(isolated):
    user_dir = isolated / "user"
    user_dir.mkdir()
    (user_dir / "config.yaml").write_text("verbose: true\n")

    assert load_config().verbose is True


def test_empty_config_falls_through(isolated):
    (isolated / "layout-extractor.yaml").write_text("")

    assert load_config() == ExtractorConfig()


def test_missing_explicit_config(isolated):
    with pytest.raises(FileNotFoundError):
        load_config(str(isolated / "missing.yaml"))


def test_output_path_expands_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))

    assert config_module.OutputConfig(path="~/types").path == str(tmp_path / "types")
