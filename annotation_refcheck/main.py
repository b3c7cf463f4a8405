#!/usr/bin/env python3
"""annotation_refcheck/main.py — CLI entry-point.

Usage examples
--------------
    # Check every doc comment of a dump file
    annotation-refcheck check project.refcheck.json

    # Use a config file and JSON output
    annotation-refcheck check project.refcheck.json -c refcheck.json -f json

    # Ignore framework annotations and one issue kind
    annotation-refcheck check project.refcheck.json \\
        --exception Route --exception Groups \\
        --suppress ConstReferenceConstNotFound

    # List available checkers
    annotation-refcheck list-checkers

Exit codes
----------
    0   Success (no diagnostics with severity ERROR).
    1   One or more diagnostics with severity ERROR were emitted.
    2   Infrastructure failure (missing file, bad dump, bad config).

The module doubles as ``python -m annotation_refcheck`` via the
companion ``annotation_refcheck/__main__.py``.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from annotation_refcheck import __version__
from annotation_refcheck.checkers import (
    DEFAULT_REGISTRY,
    CheckerRunner,
    Diagnostic,
)
from annotation_refcheck.config import (
    OUTPUT_FORMATS,
    AnalysisConfig,
    load_config,
)
from annotation_refcheck.dump import load_dump
from annotation_refcheck.errors import RefcheckError

_log = logging.getLogger("annotation_refcheck")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``annotation_refcheck`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("annotation_refcheck")
    root.setLevel(level)
    root.handlers[:] = [handler]


def _resolve_path(raw: str, label: str = "file") -> Path:
    """Resolve *raw* to an absolute ``Path``, raising on missing files."""
    p = Path(raw).expanduser().resolve()
    if not p.exists():
        _log.error("%s not found: %s", label, p)
        raise SystemExit(EXIT_INFRA)
    return p


def _open_output(dest: Optional[str]) -> TextIO:
    """Return a writable text stream.

    *dest* ``None`` or ``"-"`` → ``sys.stdout``; otherwise open the path
    for writing (creating parent directories as needed).
    """
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


def _emit_diagnostics(
    diagnostics: List[Diagnostic],
    fmt: str,
    stream: TextIO,
) -> None:
    """Write *diagnostics* to *stream* in the chosen format."""
    for diag in diagnostics:
        if fmt == "json":
            stream.write(diag.to_json_str() + "\n")
        else:
            stream.write(diag.to_gcc_format() + "\n")


# ===========================================================================
# Sub-command implementations
# ===========================================================================

def cmd_check(args: argparse.Namespace) -> int:
    """Check the doc comments of a dump file.

    Workflow:
        1. Load the optional config file; apply CLI overrides.
        2. Load the dump (symbol table + declarations).
        3. Run the selected checkers.
        4. Emit diagnostics and return an appropriate exit code.
    """
    dump_path = _resolve_path(args.dump_file, "dump file")

    if args.config:
        config = load_config(_resolve_path(args.config, "config file"))
    else:
        config = AnalysisConfig()

    if args.format is not None:
        config.format = args.format
    if args.checkers:
        config.checkers = list(args.checkers)
    if args.preset:
        config.presets.extend(args.preset)
    if args.suppress:
        config.suppress.extend(args.suppress)

    for warning in config.validate(DEFAULT_REGISTRY):
        _log.warning("config: %s", warning)

    dump = load_dump(dump_path)

    runner = CheckerRunner(
        suppressions=config.build_suppressions(),
        options=config.checker_options(args.exception or ()),
    )
    results = runner.run(
        dump.code_base, dump.declarations, checkers=config.checkers
    )

    out = _open_output(args.output)
    try:
        if config.format == "summary":
            _emit_diagnostics(results.diagnostics, "gcc", out)
            out.write(results.summary() + "\n")
        else:
            _emit_diagnostics(results.diagnostics, config.format, out)
    finally:
        if out is not sys.stdout:
            out.close()

    return EXIT_ERROR if results.error_count > 0 else EXIT_OK


def cmd_list_checkers(args: argparse.Namespace) -> int:
    """Print the registered checkers with their issue kinds."""
    enabled = {cls.name for cls in DEFAULT_REGISTRY.get_enabled()}
    for name in DEFAULT_REGISTRY.names:
        cls = DEFAULT_REGISTRY.get_by_name(name)
        if cls is None:
            continue
        state = "" if name in enabled else " (disabled by default)"
        print(f"  {name:25s} {cls.description}{state}")
        print(f"  {'':25s} IDs: {', '.join(sorted(cls.error_ids))}")
        print()
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    """Construct the full CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="annotation-refcheck",
        description=(
            "Report doc-comment annotations, ::class expressions and\n"
            "constant references whose classes are not declared."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              annotation-refcheck check project.refcheck.json
              annotation-refcheck check project.refcheck.json -c refcheck.json -f json
              annotation-refcheck list-checkers
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- check -------------------------------------------------------------
    p_check = subparsers.add_parser(
        "check",
        help="Check the doc comments of a dump file.",
        description="Load a dump file and report undeclared class references.",
    )
    p_check.add_argument("dump_file", help="Path to the JSON dump file.")
    p_check.add_argument(
        "-c", "--config",
        default=None,
        metavar="FILE",
        help="JSON config file.",
    )
    p_check.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help='Output file ("-" or omit for stdout).',
    )
    p_check.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: gcc, or the config file's).",
    )
    p_check.add_argument(
        "--checkers", nargs="*", default=None,
        help="Checker names to run (default: all enabled).",
    )
    p_check.add_argument(
        "--exception", action="append", default=None, metavar="TOKEN",
        help="Token to skip (repeatable).",
    )
    p_check.add_argument(
        "--preset", action="append", default=None, metavar="NAME",
        help="Exception preset to apply (repeatable).",
    )
    p_check.add_argument(
        "--suppress", nargs="*", default=None, metavar="ISSUE",
        help="Issue kinds to suppress.",
    )
    p_check.set_defaults(func=cmd_check)

    # --- list-checkers -----------------------------------------------------
    p_list = subparsers.add_parser(
        "list-checkers",
        help="List available checkers and exit.",
    )
    p_list.set_defaults(func=cmd_list_checkers)

    return parser


# ===========================================================================
# Main entry point
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except RefcheckError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130  # Standard UNIX convention for SIGINT
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
