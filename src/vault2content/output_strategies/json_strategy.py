"""JSON Lines output strategy for copy records.

Each record becomes one JSON object on its own line, which keeps the output streamable
and easy to post-process with tools such as ``jq``.
"""

import json

from vault2content.tree_copier.copy_report import CopyRecord, CopyReport

from .base_strategy import OutputStrategy


class JSONOutputStrategy(OutputStrategy):
    """Output strategy that renders records and summaries as JSON Lines.

    Records are formatted as::

        {"type": "record", "path": "Notes/a.md", "kind": "file", "disposition": "copied",
         "reason": "copied", "size": 12}

    with an additional ``"warning"`` member when the record carries one. The summary is a
    single ``{"type": "summary", ...}`` object.

    Example:
        >>> from vault2content.types import Disposition, EntryKind
        >>> strategy = JSONOutputStrategy()
        >>> line = strategy.format_record(CopyRecord("x.csv", EntryKind.FILE, Disposition.SKIPPED, "unsupported format"))
        >>> json.loads(line)["reason"]
        'unsupported format'
    """

    def __init__(self) -> None:
        # Vault paths are frequently non-ASCII, keep them readable
        self.encoder = json.JSONEncoder(ensure_ascii=False)

    def format_record(self, record: CopyRecord) -> str:
        return self.encoder.encode({"type": "record", **record.as_dict()}) + "\n"

    def format_summary(self, report: CopyReport) -> str:
        summary = {
            "type": "summary",
            "published_notes": report.published_notes,
            "files_copied": report.files_copied,
            "bytes_copied": report.bytes_copied,
            "directories": report.directories_created,
            "excluded": report.excluded_count,
            "skipped": report.skipped_count,
            "warnings": len(report.warnings),
        }
        return self.encoder.encode(summary) + "\n"

    def get_file_extension(self) -> str:
        return ".jsonl"
