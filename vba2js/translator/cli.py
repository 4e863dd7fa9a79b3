"""Command line interface for vba2js."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml
from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JavascriptLexer

from vba2js.core.config import Settings, get_settings
from vba2js.core.errors import ConversionError, format_conversion_error
from vba2js.core.logging import get_logger, setup_logging

from .translator import VbaTranslator

logger = get_logger(__name__)


def convert_file(
    source_path: str | Path,
    output_path: str | Path | None = None,
    *,
    overwrite: bool = False,
    encoding: str = "utf-8",
    settings: Settings | None = None,
) -> tuple[Path | None, str]:
    """
    Convert a VBA file to JavaScript.

    Args:
        source_path: File to read
        output_path: Where to write the JavaScript; nothing is written when None
        overwrite: Allow replacing an existing output file
        encoding: Encoding for reading and writing
        settings: Converter settings (defaults to the environment)

    Returns:
        (written path or None, generated JavaScript)

    Raises:
        FileNotFoundError: If the source does not exist
        FileExistsError: If the output exists and overwrite is False
        UnicodeDecodeError: If the source is not valid in ``encoding``
        ConversionError: If the source cannot be converted
    """
    source_path = Path(source_path)
    if not source_path.is_file():
        raise FileNotFoundError(f"Source file not found: {source_path}")

    if output_path is not None:
        output_path = Path(output_path)
        if output_path.exists() and not overwrite:
            raise FileExistsError(f"{output_path} already exists (use --overwrite to replace it)")

    source = source_path.read_text(encoding=encoding)
    logger.info("Read %s", source_path)
    javascript = VbaTranslator(settings).convert(source)

    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(javascript, encoding=encoding)

    return output_path, javascript


def colorize(javascript: str) -> str:
    """Highlight JavaScript for a terminal."""
    return highlight(javascript, JavascriptLexer(), TerminalFormatter())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vba2js",
        description="Translate a VBA macro file into JavaScript.",
    )
    parser.add_argument(
        "source",
        type=Path,
        help="Path to the VBA file to translate.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the JavaScript here instead of standard output.",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Allow overwriting an existing output file.",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Encoding to use when reading and writing files (default: utf-8).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with converter settings.",
    )
    parser.add_argument(
        "--color",
        action="store_true",
        help="Syntax-highlight JavaScript printed to the terminal.",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level (DEBUG, INFO, WARNING, ...).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress informational output.",
    )
    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_yaml(args.config) if args.config else get_settings()
    if args.log_level:
        settings = settings.model_copy(update={"LOG_LEVEL": args.log_level.upper()})
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1

    setup_logging(settings)

    try:
        written_path, javascript = convert_file(
            args.source,
            args.output,
            overwrite=args.overwrite,
            encoding=args.encoding,
            settings=settings,
        )
    except (FileNotFoundError, FileExistsError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"Error: cannot decode {args.source} as {args.encoding}: {exc}", file=sys.stderr)
        return 1
    except ConversionError as exc:
        source = args.source.read_text(encoding=args.encoding, errors="replace")
        print(format_conversion_error(exc, source), file=sys.stderr)
        return 1

    if written_path is None:
        sys.stdout.write(colorize(javascript) if args.color else javascript)
    elif not args.quiet:
        print(f"Wrote {written_path}")

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
