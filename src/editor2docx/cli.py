"""Command-line interface for editor2docx.

Converts an HTML export of the rich-text editor into a Word document.

Examples
--------
Basic conversion (writes minutes.docx next to the input):
    $ editor2docx minutes.html

Set the document title and the image directory:
    $ editor2docx minutes.html --title "Board minutes" --output-dir ./images

Read from stdin:
    $ cat minutes.html | editor2docx - --out minutes.docx

Use environment variables for defaults:
    $ export EDITOR2DOCX_LOG_LEVEL=DEBUG
    $ export EDITOR2DOCX_VERIFY_TLS=true
    $ editor2docx minutes.html
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from editor2docx.constants import DEFAULT_HTML_PARSER, DEFAULT_NETWORK_TIMEOUT
from editor2docx.converter import convert
from editor2docx.exceptions import DependencyError, Editor2DocxError
from editor2docx.logging_utils import configure_logging
from editor2docx.options import ConverterOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_CONVERSION_ERROR = 1
EXIT_INPUT_ERROR = 2


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with EDITOR2DOCX_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'log_level', 'output_dir')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set
    """
    return os.environ.get(f"EDITOR2DOCX_{key.upper().replace('-', '_')}")


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Use EDITOR2DOCX_* environment variables as argument defaults.

    Command-line arguments still take precedence.
    """
    for action in parser._actions:
        if not action.dest or action.dest in ("help", "version", "input"):
            continue
        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        # String defaults still pass through the action's type converter
        if isinstance(action, argparse._StoreTrueAction):
            action.default = env_value.lower() in ("true", "1", "yes", "on")
        elif action.choices and env_value not in action.choices:
            logging.warning(
                f"Invalid choice for EDITOR2DOCX_{action.dest.upper()}: {env_value}. Choices: {list(action.choices)}"
            )
        else:
            action.default = env_value


def _get_version() -> str:
    try:
        from importlib.metadata import version

        return version("editor2docx")
    except Exception:
        return "unknown"


def positive_float(value: str) -> float:
    """Validate positive number for argparse."""
    try:
        fvalue = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not a valid number")
    if fvalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive number")
    return fvalue


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="editor2docx",
        description="Convert rich-text editor HTML into a Word (.docx) document.",
    )
    parser.add_argument("input", help="HTML file to convert, or '-' to read from stdin")
    parser.add_argument("--out", "-o", help="Output .docx path (default: input path with .docx suffix)")
    parser.add_argument("--title", help="Document title")
    parser.add_argument(
        "--output-dir",
        help="Directory for materialized images (default: 'files'; a file path uses its directory)",
    )
    parser.add_argument(
        "--parser",
        dest="html_parser",
        default=DEFAULT_HTML_PARSER,
        choices=["html.parser", "lxml", "html5lib"],
        help="BeautifulSoup tree builder",
    )
    parser.add_argument(
        "--verify-tls",
        action="store_true",
        help="Verify TLS certificates when downloading images (off by default)",
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=DEFAULT_NETWORK_TIMEOUT,
        help="Image download timeout in seconds",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose log format with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"editor2docx {_get_version()}")

    apply_env_vars_to_parser(parser)
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _default_output_path(source: str) -> Path:
    if source == "-":
        return Path("document.docx")
    return Path(source).with_suffix(".docx")


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        html = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read input {parsed_args.input}: {e}")
        return EXIT_INPUT_ERROR

    if not html.strip():
        logger.error("Input is empty")
        return EXIT_INPUT_ERROR

    output_path = Path(parsed_args.out) if parsed_args.out else _default_output_path(parsed_args.input)
    options = ConverterOptions(
        html_parser=parsed_args.html_parser,
        verify_tls=parsed_args.verify_tls,
        network_timeout=parsed_args.timeout,
    )

    try:
        data = convert(html, title=parsed_args.title, output_dir=parsed_args.output_dir, options=options)
    except DependencyError as e:
        logger.error(str(e))
        return EXIT_CONVERSION_ERROR
    except Editor2DocxError as e:
        logger.error(f"Conversion failed: {e}")
        if e.original_error is not None:
            logger.debug("Caused by", exc_info=e.original_error)
        return EXIT_CONVERSION_ERROR

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as e:
        logger.error(f"Cannot write {output_path}: {e}")
        return EXIT_CONVERSION_ERROR

    logger.info(f"Converted {parsed_args.input} -> {output_path}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
