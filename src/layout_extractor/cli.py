"""
Command line entry point: parse SDK headers and write their layout as JSON.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import yaml

from layout_extractor.config import ExtractorConfig, load_config
from layout_extractor.discovery.file_filter import HeaderFilter
from layout_extractor.output.writer import write_documents
from layout_extractor.treesitter.language_registry import LanguageRegistry
from layout_extractor.treesitter.parser import (
    HeaderParser,
    ParserUnavailableError,
    nice_path,
    parse_files,
)

logger = logging.getLogger("layout_extractor.cli")


def configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def run(config: ExtractorConfig, sdk_path: Path) -> int:
    """Main pipeline: discover, parse, write."""
    if not sdk_path.is_dir():
        logger.error(f"Failed to find SDK in {nice_path(sdk_path)}.")
        return 1

    src_path = sdk_path / config.sources.include_dir
    if not src_path.is_dir():
        logger.error(f"Failed to find {nice_path(config.sources.include_dir)} directory in SDK.")
        return 1

    output_path = Path(config.output.path)
    if output_path.exists() and not output_path.is_dir():
        logger.error(f"Output path is not a directory {nice_path(output_path)}.")
        return 1
    output_path.mkdir(parents=True, exist_ok=True)

    registry = LanguageRegistry(
        {extension: config.treesitter.language for extension in config.treesitter.header_extensions}
    )

    logger.info(f"Listing all source files in {nice_path(src_path)}...")
    header_filter = HeaderFilter(
        exclude_patterns=config.sources.exclude_patterns,
        registry=registry,
        language=config.treesitter.language,
    )
    files = header_filter.find_headers(src_path)

    try:
        parser = HeaderParser(registry=registry, language=config.treesitter.language, verbose=config.verbose)
    except ParserUnavailableError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Parsing {len(files)} source files...")
    result = parse_files(files, verbose=config.verbose, parser=parser)

    written = write_documents(
        result.documents,
        src_path,
        output_path,
        minify=config.output.minify,
        indent=config.output.indent,
    )

    declarations = sum(len(document.ast) for document in result.documents)
    logger.info(f"Found {declarations} declarations in {len(written)} files.")
    if result.errors:
        logger.warning(f"Failed to parse {result.errors} files.")
    return 0


@click.command()
@click.option("--sdk", "sdk_path", required=True, type=click.Path(path_type=Path), help="Path to RED4ext.SDK.")
@click.option("--output", "output_path", default=None, help="Path to output JSON types.")
@click.option("--minify/--no-minify", default=None, help="Minify JSON output.")
@click.option("--verbose", is_flag=True, default=False, help="Log parsing details and full errors.")
@click.option("--config", "config_path", default=None, help="Path to a YAML configuration file.")
def main(
    sdk_path: Path,
    output_path: Optional[str],
    minify: Optional[bool],
    verbose: bool,
    config_path: Optional[str],
) -> None:
    """Extract layout reflection metadata from C++ headers."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, TypeError, yaml.YAMLError) as e:
        configure_logging("info", verbose)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if output_path is not None:
        config.output.path = output_path
    if minify is not None:
        config.output.minify = minify
    if verbose:
        config.verbose = True

    configure_logging(config.log_level, config.verbose)
    sys.exit(run(config, sdk_path))


if __name__ == "__main__":
    main()
