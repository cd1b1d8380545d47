"""Output strategy base class defining how copy records are rendered.

The tree copier only produces structured records; turning them into text is the job of
an output strategy chosen by the caller.
"""

from abc import ABC, abstractmethod

from vault2content.tree_copier.copy_report import CopyRecord, CopyReport


class OutputStrategy(ABC):
    """Abstract base class for rendering copy records and run summaries.

    Each concrete strategy renders one record per call, so records can be written while
    the copy is still running, and a summary once the run is over. Returned strings end
    with a newline.

    Example:
        >>> class PathOnlyStrategy(OutputStrategy):
        ...     def format_record(self, record):
        ...         return record.path + "\\n"
        ...
        ...     def format_summary(self, report):
        ...         return f"{len(report.records)} entries\\n"
        ...
        ...     def get_file_extension(self):
        ...         return ".txt"
        >>> from vault2content.types import Disposition, EntryKind
        >>> PathOnlyStrategy().format_record(CopyRecord("a.md", EntryKind.FILE, Disposition.COPIED, "copied"))
        'a.md\\n'
    """

    @abstractmethod
    def format_record(self, record: CopyRecord) -> str:
        """Render a single record.

        Args:
            record: The record to render.

        Returns:
            str: The rendered record, newline-terminated.
        """
        pass

    @abstractmethod
    def format_summary(self, report: CopyReport) -> str:
        """Render the summary of a finished run.

        Args:
            report: The report of the run.

        Returns:
            str: The rendered summary, newline-terminated.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get the file extension conventionally used for this output format.

        Returns:
            str: The extension including the dot.
        """
        pass
