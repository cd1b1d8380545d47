"""Command-line argument parsing for vault2content.

This module defines the command-line interface for vault2content,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from vault2content import __version__
from vault2content.types import FolderMatchMode

# Entries of ``namespace.exclusions``: ("file", path) for -e, ("pattern", glob) for -i
Exclusion = Tuple[str, str]


class ExclusionAction(argparse.Action):
    """Action collecting -e/--exclude and -i/--ignore values in command-line order.

    Both options append to the shared ``exclusions`` destination so that patterns read
    from ignore files and individual patterns keep the relative order they were given
    in, which matters for gitignore negations.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        if values is None:
            return
        kind = "file" if option_string in ("-e", "--exclude") else "pattern"
        exclusions: Optional[List[Exclusion]] = getattr(namespace, "exclusions", None)
        if exclusions is None:
            exclusions = []
        exclusions.append((kind, str(values)))
        namespace.exclusions = exclusions


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with vault2content's options.
    """
    description = """
    vault2content: Publish the public part of an Obsidian vault as site content.

    The tool walks a local vault, decides for every folder and file whether it may be
    published, and mirrors the admitted part into a content directory for a static
    site generator. Every visited entry is reported as copied, excluded or skipped,
    together with the reason.

    Exclusion Rules:
    - Folders, by path fragment (e.g. .obsidian, Work/Confidential)
    - File names (e.g. credentials.md)
    - Regular expressions on file names (e.g. ^_.*\\.md$)
    - gitignore-style globs on relative paths (e.g. Journal/, *.canvas)
    - Frontmatter fields (e.g. publish: false, draft: true)
    - Tags (e.g. private, personal)

    Rules are read from a YAML file given with -c/--config, or from vault2content.yaml
    in the vault root. Without either, built-in defaults are used.
    """

    epilog = """
    Examples:
      # Publish a vault with the default rules
      vault2content ~/vault ./content

      # Use an explicit rule file
      vault2content -c publish.yaml ~/vault ./content

      # Add gitignore-style exclusions from files and individual patterns
      vault2content -e ~/vault/.publishignore ~/vault ./content
      vault2content -i "Journal/" -i "*.canvas" ~/vault ./content

      # Match folder fragments anywhere in a path, not only on whole segments
      vault2content --folder-match substring ~/vault ./content

      # Keep existing content and do not generate an index page
      vault2content --no-clean --no-index ~/vault ./content

      # Write JSON records to a file and show the published tree
      vault2content --format json -o records.jsonl --tree ~/vault ./content

      # Display version information and exit
      vault2content -V
      vault2content --version
    """

    parser = argparse.ArgumentParser(
        prog="vault2content",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"vault2content {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "source",
        type=Path,
        help="Root directory of the local vault.",
    )
    parser.add_argument(
        "destination",
        type=Path,
        help="Content directory receiving the published files. Must not lie inside the vault.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="FILE",
        help="YAML rule file. Defaults to vault2content.yaml in the vault root, if present.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=str,
        metavar="FILE",
        action=ExclusionAction,
        dest="exclusions",
        help="Path to a gitignore-style file with additional globs (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        dest="exclusions",
        help=(
            "Individual gitignore-style glob to exclude, matched against paths relative to the vault "
            "root. Can be specified multiple times; patterns are processed in the order they appear, "
            "mixed with -e/--exclude options."
        ),
    )
    parser.add_argument(
        "--folder-match",
        choices=[mode.value for mode in FolderMatchMode],
        help="How excluded folder fragments are matched (default: from config, else segment).",
    )
    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Do not remove the destination's previous content before copying.",
    )
    parser.add_argument(
        "--no-index",
        action="store_true",
        help="Do not generate an index.md when the vault does not publish one.",
    )
    parser.add_argument(
        "--index-title",
        metavar="TITLE",
        default="Home",
        help="Title of the generated index page (default: Home).",
    )
    parser.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Skip symbolic links instead of following them.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Format of the per-entry records (default: text).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file for the records. If not specified, records are written to stdout.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not write per-entry records.",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Write the tree of published entries after the records.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file", "none"],
        default="stderr",
        help="Where to print the run summary. Valid destinations: stderr (default), stdout, file (requires -o), none",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
    if args.no_index and args.index_title != "Home":
        raise ValueError("--index-title cannot be combined with --no-index")
    if args.output is not None and not args.no_clean:
        destination = args.destination.resolve()
        output = args.output.resolve()
        if output == destination or destination in output.parents:
            raise ValueError(
                f"-o/--output {args.output} is inside {args.destination}, which is wiped before copying "
                "(use --no-clean or write the records elsewhere)"
            )
