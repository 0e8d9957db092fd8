"""
Main CLI entry point for converting assistant configuration files.

This module provides the command-line interface around the conversion
engine. It:
- Reads a source file and parses it with the source format's adapter
- Converts the canonical package to the target format
- Prints conversion warnings and the quality score
- Writes the result (unless --dry-run or the score is too low)

Usage:
    python -m cli.main --convert-file AGENTS.md --target-format cursor \
                       --output .cursor/rules/project.mdc
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from adapters import default_registry
from adapters.kiro import INCLUSION_MODES
from core.canonical_models import PackageMetadata
from core.config import ConfigManager
from core.detection import detect_format
from core.errors import MissingConfigurationError
from core.registry import FormatRegistry

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    formats = setup_registry().list_formats()

    parser = argparse.ArgumentParser(
        description='Convert AI assistant rules, agents and prompts between tool formats',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # AGENTS.md to a Cursor rule
  %(prog)s --convert-file AGENTS.md --target-format cursor \\
           --output .cursor/rules/project.mdc

  # Cursor rule to a Kiro steering file that loads for test files
  %(prog)s --convert-file .cursor/rules/testing.mdc --target-format kiro \\
           --inclusion fileMatch --file-match-pattern "**/*.test.ts"

  # Guess the format of a file
  %(prog)s --detect some-rules.md
        """
    )

    parser.add_argument(
        '--convert-file',
        type=Path,
        help='Source file to convert'
    )

    parser.add_argument(
        '--output',
        type=Path,
        help='Output file path (auto-generated if not specified)'
    )

    parser.add_argument(
        '--detect',
        type=Path,
        metavar='FILE',
        help='Print the detected format of FILE and exit'
    )

    parser.add_argument(
        '--source-format',
        type=str,
        choices=formats,
        help='Source format name (auto-detected if not specified)'
    )

    parser.add_argument(
        '--target-format',
        type=str,
        choices=formats,
        help='Target format name (auto-detected from --output if not specified)'
    )

    # Package identity
    parser.add_argument('--id', dest='package_id', help='Package id (default: file stem)')
    parser.add_argument('--name', help='Package display name (default: file stem)')
    parser.add_argument('--version', dest='package_version', help='Package version')
    parser.add_argument('--author', help='Package author')
    parser.add_argument('--description', help='Package description (default: taken from the document)')
    parser.add_argument(
        '--tag',
        action='append',
        dest='tags',
        default=[],
        help='Package tag (repeatable)'
    )

    # Converter options
    parser.add_argument(
        '--inclusion',
        choices=list(INCLUSION_MODES),
        help='[Kiro] Inclusion mode (required for Kiro output)'
    )

    parser.add_argument(
        '--file-match-pattern',
        help='[Kiro] File pattern for fileMatch inclusion'
    )

    parser.add_argument(
        '--domain',
        help='[Kiro] Domain label; also replaces the document title'
    )

    parser.add_argument(
        '--glob',
        action='append',
        dest='globs',
        help='[Cursor] File glob the rule applies to (repeatable)'
    )

    parser.add_argument(
        '--always-apply',
        action='store_true',
        default=None,
        help='[Cursor] Mark the rule as always applied'
    )

    parser.add_argument(
        '--model',
        help='[Claude] Model alias (sonnet, opus, haiku, inherit)'
    )

    # Behaviour
    parser.add_argument(
        '--min-quality',
        type=int,
        help='Fail without writing when the quality score is below this value'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be done without writing files'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output with detailed logging'
    )

    parser.add_argument(
        '--config',
        type=Path,
        help='Configuration file (default: ./promptbridge.yaml if present)'
    )

    return parser


def setup_registry() -> FormatRegistry:
    """
    Initialize format registry with all available adapters.

    Returns:
        FormatRegistry with registered adapters
    """
    return default_registry()


def setup_logging(config: ConfigManager, verbose: bool = False):
    """Configure logging from the config file; --verbose forces DEBUG."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=config.log_format, stream=sys.stderr, force=True)


def build_package_metadata(args, source_file: Path) -> PackageMetadata:
    """Package identity from flags, defaulting id/name to the file stem."""
    stem = source_file.name.split('.')[0] or source_file.stem
    if stem.upper() == 'AGENTS':
        stem = source_file.parent.name or stem
    return PackageMetadata(
        id=args.package_id or stem,
        name=args.name or stem,
        description=args.description,
        author=args.author,
        tags=tuple(args.tags or ()),
        version=args.package_version,
    )


def build_conversion_options(args, config: ConfigManager, target_format: str) -> Dict[str, Any]:
    """Config file defaults for the target format, overridden by flags."""
    options = config.converter_options(target_format)
    if target_format == 'kiro':
        if args.inclusion:
            options['inclusion'] = args.inclusion
        if args.file_match_pattern:
            options['fileMatchPattern'] = args.file_match_pattern
        if args.domain:
            options['domain'] = args.domain
    elif target_format == 'cursor':
        if args.globs:
            options['globs'] = list(args.globs)
        if args.always_apply is not None:
            options['alwaysApply'] = args.always_apply
        if args.package_version:
            options['version'] = args.package_version
        if args.author:
            options['author'] = args.author
        if args.tags:
            options['tags'] = list(args.tags)
    elif target_format == 'claude':
        if args.model:
            options['model'] = args.model
    return options


def detect_file(path: Path, registry: FormatRegistry) -> int:
    """Print the detected format of a file."""
    path = path.expanduser().resolve()
    if not path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    adapter = registry.detect_format(path)
    if adapter is None:
        content = path.read_text(encoding='utf-8')
        adapter = registry.sniff_format(content)
        if adapter is None:
            detected = detect_format(content)
            if detected:
                # recognised but not convertible (e.g. continue JSON)
                print(detected)
                return 0
            print(f"Error: Cannot detect format for: {path}", file=sys.stderr)
            return 1

    print(adapter.format_name)
    return 0


def convert_single_file(args, config: ConfigManager) -> int:
    """
    Convert a single file from one format to another.

    Args:
        args: Parsed command-line arguments
        config: Loaded configuration

    Returns:
        Exit code (0 for success, 1 for error)
    """
    registry = setup_registry()

    # 1. Validate source file
    source_file = args.convert_file.expanduser().resolve()
    if not source_file.exists():
        print(f"Error: File not found: {source_file}", file=sys.stderr)
        return 1
    if source_file.is_dir():
        print(f"Error: Path is a directory, not a file: {source_file}", file=sys.stderr)
        return 1

    content = source_file.read_text(encoding='utf-8')

    # 2. Determine source adapter (explicit, from path, or from content)
    if args.source_format:
        source_adapter = registry.get_adapter(args.source_format)
    else:
        source_adapter = registry.detect_format(source_file) or registry.sniff_format(content)
    if not source_adapter:
        print(f"Error: Cannot auto-detect format for: {source_file}", file=sys.stderr)
        return 1

    # 3. Determine target adapter (explicit or from output path)
    if args.target_format:
        target_adapter = registry.get_adapter(args.target_format)
    elif args.output:
        target_adapter = registry.detect_format(args.output)
        if not target_adapter:
            print(f"Error: Cannot auto-detect target format from: {args.output}", file=sys.stderr)
            return 1
    else:
        print("Error: --target-format or --output required for conversion", file=sys.stderr)
        return 1

    # 4. Determine output path
    if args.output:
        output_file = args.output.expanduser().resolve()
    else:
        output_file = target_adapter.output_path(source_file)

    metadata = build_package_metadata(args, source_file)
    options = build_conversion_options(args, config, target_adapter.format_name)
    min_quality = args.min_quality if args.min_quality is not None else config.min_quality

    logger.info(f"Converting {source_file} -> {output_file}")
    logger.info(f"  Source format: {source_adapter.format_name}")
    logger.info(f"  Target format: {target_adapter.format_name}")

    # 5. Parse and convert
    package = source_adapter.to_canonical(content, metadata)
    try:
        result = target_adapter.from_canonical(package, options)
    except MissingConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    if result.lossy_conversion or args.verbose:
        print(f"Quality score: {result.quality_score}/100", file=sys.stderr)

    if result.quality_score < min_quality:
        print(
            f"Error: Quality score {result.quality_score} is below the minimum {min_quality}; "
            f"not writing {output_file}",
            file=sys.stderr,
        )
        return 1

    if args.dry_run:
        print(f"Would write to: {output_file}")
        if args.verbose:
            print("--- Output content ---")
            print(result.content)
        return 0

    # 6. Write output
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(result.content)

    logger.info(f"Successfully converted to {output_file}")
    return 0


def main(argv: Optional[list] = None):
    """
    Main entry point for CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    config = ConfigManager(args.config)
    setup_logging(config, args.verbose)

    if args.detect:
        return detect_file(args.detect, setup_registry())

    if not args.convert_file:
        print("Error: --convert-file or --detect is required", file=sys.stderr)
        return 1

    try:
        return convert_single_file(args, config)
    except KeyboardInterrupt:
        print("\nConversion cancelled by user", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc(file=sys.stderr)
        return 1


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
