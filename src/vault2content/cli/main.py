"""Command-line interface for vault2content.

This module provides the command-line interface for vault2content, allowing users to
publish the public part of a vault into a content directory. It handles command-line
argument parsing, rule set assembly, record rendering and exit codes.

Key Features:
    - Rule sets from YAML files, with gitignore-style additions from the command line
    - Per-entry records in text or JSON Lines format
    - Run summary with human-readable byte totals
    - Optional tree view of the published entries
    - Clean rebuild of the destination and index page generation

Exit Codes:
    0: Successful completion
    1: Runtime or filesystem error during execution
    2: Command-line syntax or configuration error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe while writing output

Example:
    # Publish a vault with the rules found in its root
    $ vault2content ~/vault ./content

    # Display version information
    $ vault2content --version
"""

import argparse
import os
import sys
from typing import Any, Dict, List, Optional, TextIO

from vault2content.cli.argparser import create_parser, validate_args
from vault2content.config import find_config_file, load_rule_set
from vault2content.exceptions import ConfigurationError
from vault2content.exclusion_rules.glob_rules import read_ignore_file
from vault2content.output_strategies import JSONOutputStrategy, OutputStrategy, TextOutputStrategy
from vault2content.rule_set import RuleSet
from vault2content.sync import IndexPage, VaultSynchronizer
from vault2content.tree_copier.copy_report import CopyRecord, CopyReport


def build_rule_set(args: argparse.Namespace) -> RuleSet:
    """Assemble the rule set described by the command-line arguments.

    The base rule set comes from ``--config``, or from a configuration file in the
    vault root, or from ``RuleSet.default()``. Globs from ``-e``/``-i`` are appended to
    the configured globs and ``--folder-match`` overrides the configured mode.

    Args:
        args: Parsed command-line arguments.

    Returns:
        The validated rule set.

    Raises:
        ConfigurationError: If the configuration or an ignore file is invalid.
    """
    config_path = args.config if args.config is not None else find_config_file(args.source)
    rule_set = load_rule_set(config_path) if config_path is not None else RuleSet.default()

    extra_globs: List[str] = []
    for kind, value in args.exclusions or []:
        if kind == "file":
            try:
                extra_globs.extend(read_ignore_file(value))
            except FileNotFoundError as e:
                raise ConfigurationError(str(e), key="excluded_globs")
        else:
            extra_globs.append(value)

    changes: Dict[str, Any] = {}
    if extra_globs:
        changes["excluded_globs"] = list(rule_set.excluded_globs) + extra_globs
    if args.folder_match is not None:
        changes["folder_match"] = args.folder_match
    return rule_set.replace(**changes) if changes else rule_set


def create_strategy(output_format: str) -> OutputStrategy:
    """Return the output strategy for a ``--format`` value."""
    if output_format == "json":
        return JSONOutputStrategy()
    return TextOutputStrategy()


def run(args: argparse.Namespace, output: TextIO) -> CopyReport:
    """Publish the vault described by ``args``, writing records and extras to ``output``.

    Args:
        args: Parsed and validated command-line arguments.
        output: Stream receiving the records, the tree and, if requested, the summary.

    Returns:
        The CopyReport of the run.
    """
    rule_set = build_rule_set(args)
    strategy = create_strategy(args.format)
    synchronizer = VaultSynchronizer(
        rule_set,
        clean=not args.no_clean,
        write_index=not args.no_index,
        index_page=IndexPage(title=args.index_title),
        follow_symlinks=not args.no_follow_symlinks,
    )

    def write_record(record: CopyRecord) -> None:
        output.write(strategy.format_record(record))

    on_record = None if args.quiet else write_record
    report = synchronizer.sync(args.source, args.destination, on_record=on_record)

    if args.tree:
        output.write(report.get_tree_representation() + "\n")

    if args.summary in ("stdout", "file"):
        output.write(strategy.format_summary(report))
    elif args.summary == "stderr":
        print(strategy.format_summary(report), end="", file=sys.stderr)

    return report


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the vault2content command-line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.

    Exit codes:
        0: Successful completion
        1: Runtime or filesystem error during execution
        2: Command-line syntax or configuration error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe while writing output
    """
    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args(argv)

    try:
        validate_args(args)
        if args.output is not None:
            with open(args.output, "w", encoding="utf-8") as output:
                run(args, output)
        else:
            run(args, sys.stdout)
            sys.stdout.flush()
    except (ConfigurationError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(2)
    except BrokenPipeError:
        # Silence the interpreter's own flush of the closed stdout at shutdown
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(141)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
