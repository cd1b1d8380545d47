"""Plain-text output strategy for copy records."""

from humanfriendly import format_size

from vault2content.tree_copier.copy_report import CopyRecord, CopyReport
from vault2content.types import Disposition

from .base_strategy import OutputStrategy

# Wide enough for the longest disposition label
LABEL_WIDTH = 9


class TextOutputStrategy(OutputStrategy):
    """Renders one aligned line per record and a short multi-line summary.

    Copied entries show their path only; excluded and skipped entries add the reason.
    A warning attached to a record is rendered on a second line.

    Example:
        >>> from vault2content.types import EntryKind
        >>> strategy = TextOutputStrategy()
        >>> strategy.format_record(CopyRecord("Work", EntryKind.DIRECTORY, Disposition.EXCLUDED, 'folder "Work"'))
        'excluded  Work/ (folder "Work")\\n'
        >>> strategy.format_record(CopyRecord("a.md", EntryKind.FILE, Disposition.COPIED, "copied", size=3))
        'copied    a.md\\n'
    """

    def format_record(self, record: CopyRecord) -> str:
        path = record.path + "/" if record.is_dir else record.path
        line = f"{record.disposition.value:<{LABEL_WIDTH}} {path}"
        if record.disposition != Disposition.COPIED:
            line += f" ({record.reason})"
        line += "\n"
        if record.warning is not None:
            line += f"{'warning':<{LABEL_WIDTH}} {path}: {record.warning}\n"
        return line

    def format_summary(self, report: CopyReport) -> str:
        """Render the run's counters.

        Example:
            >>> from vault2content.types import EntryKind
            >>> report = CopyReport("content")
            >>> report.add(CopyRecord("a.md", EntryKind.FILE, Disposition.COPIED, "copied", size=2000))
            >>> print(TextOutputStrategy().format_summary(report), end="")
            Published notes: 1
            Files copied: 1 (2 KB)
            Directories: 0
            Excluded: 0
            Skipped: 0
            Warnings: 0
        """
        lines = [
            f"Published notes: {report.published_notes}",
            f"Files copied: {report.files_copied} ({format_size(report.bytes_copied)})",
            f"Directories: {report.directories_created}",
            f"Excluded: {report.excluded_count}",
            f"Skipped: {report.skipped_count}",
            f"Warnings: {len(report.warnings)}",
        ]
        return "\n".join(lines) + "\n"

    def get_file_extension(self) -> str:
        return ".txt"
