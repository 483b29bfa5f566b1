"""
Configuration management for the layout extractor.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
import yaml
import os
import logging
from platformdirs import user_config_dir

APP_NAME = "layout-extractor"
LOCAL_CONFIG_NAME = "layout-extractor.yaml"


@dataclass
class SourceConfig:
    include_dir: str = "include/RED4ext"
    exclude_patterns: List[str] = None

    def __post_init__(self):
        if self.exclude_patterns is None:
            self.exclude_patterns = ["*-inl.hpp"]


@dataclass
class OutputConfig:
    path: str = "types"
    minify: bool = False
    indent: int = 2

    def __post_init__(self):
        # Expand ~ to home directory in output path
        self.path = os.path.expanduser(self.path)


@dataclass
class TreeSitterConfig:
    language: str = "cpp"
    header_extensions: List[str] = None

    def __post_init__(self):
        if self.header_extensions is None:
            self.header_extensions = [".h", ".hpp", ".hxx", ".hh"]


@dataclass
class ExtractorConfig:
    name: str = "Layout Extractor"
    log_level: str = "info"
    verbose: bool = False
    sources: SourceConfig = None
    output: OutputConfig = None
    treesitter: TreeSitterConfig = None

    def __post_init__(self):
        if self.sources is None:
            self.sources = SourceConfig()
        if self.output is None:
            self.output = OutputConfig()
        if self.treesitter is None:
            self.treesitter = TreeSitterConfig()


def get_config_search_paths() -> List[str]:
    """Get list of paths to search for config file."""
    return [
        f"./{LOCAL_CONFIG_NAME}",
        str(Path(user_config_dir(APP_NAME)) / "config.yaml"),
    ]


def load_config(config_path: Optional[str] = None) -> ExtractorConfig:
    """Load configuration from YAML file."""
    logger = logging.getLogger(__name__)

    # If config_path is explicitly provided, only try that one
    if config_path:
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file not found: {config_path}")
        search_paths = [config_path]
    else:
        search_paths = get_config_search_paths()

    # Try each path in order
    for path in search_paths:
        abs_path = os.path.abspath(path)
        if os.path.exists(abs_path):
            logger.info(f"Loading configuration from {abs_path}")
            with open(abs_path, "r") as f:
                config_data = yaml.safe_load(f)

            if not config_data:
                logger.warning(f"Config file {abs_path} is empty, trying next location")
                continue

            logger.debug(f"Loaded configuration data: {config_data}")

            # Convert nested dictionaries to appropriate config objects
            if "sources" in config_data and isinstance(config_data["sources"], dict):
                config_data["sources"] = SourceConfig(**config_data["sources"])

            if "output" in config_data and isinstance(config_data["output"], dict):
                config_data["output"] = OutputConfig(**config_data["output"])

            if "treesitter" in config_data and isinstance(config_data["treesitter"], dict):
                config_data["treesitter"] = TreeSitterConfig(**config_data["treesitter"])

            return ExtractorConfig(**config_data)

    logger.debug(f"No configuration found in: {', '.join(search_paths)}, using defaults")
    return ExtractorConfig()
