"""Vault synchronization: clean destination, filtered copy, index page.

This module ties the pieces together the way a publishing run uses them. The vault is
expected to be present locally already; fetching it is left to the caller.
"""

import datetime
import shutil
from pathlib import Path
from typing import Callable, Optional

import yaml

from vault2content.frontmatter import parse_frontmatter
from vault2content.rule_set import RuleSet
from vault2content.tree_copier.copy_report import CopyRecord, CopyReport
from vault2content.tree_copier.tree_copier import FilteredTreeCopier, FrontmatterParser, check_roots
from vault2content.types import Disposition, EntryKind, PathType


class IndexPage:
    """Landing page written when the published tree has none of its own.

    Attributes:
        title (str): Value of the page's ``title`` frontmatter field.
        heading (Optional[str]): First-level heading. Defaults to the vault's directory
            name.
        filename (str): Name of the page at the destination root.

    Example:
        >>> page = IndexPage(title="Home")
        >>> print(page.render("my-vault", datetime.date(2024, 1, 15)))
        ---
        title: Home
        ---
        <BLANKLINE>
        # my-vault
        <BLANKLINE>
        ---
        <BLANKLINE>
        *Last updated: 15.01.2024*
        <BLANKLINE>
    """

    def __init__(self, title: str = "Home", heading: Optional[str] = None, filename: str = "index.md") -> None:
        self.title = title
        self.heading = heading
        self.filename = filename

    def render(self, vault_name: str, updated: datetime.date) -> str:
        """Render the page for a vault on a given date."""
        header = yaml.safe_dump({"title": self.title}, allow_unicode=True, default_flow_style=False)
        heading = self.heading or vault_name
        return f"---\n{header}---\n\n# {heading}\n\n---\n\n*Last updated: {updated:%d.%m.%Y}*\n"


class VaultSynchronizer:
    """Publishes a local vault into a content directory.

    A run removes the previous content (unless ``clean`` is False), copies the
    publishable part of the vault with a FilteredTreeCopier and finally writes an index
    page if the vault did not provide one.

    Attributes:
        rule_set (RuleSet): Rules deciding what gets published.
        clean (bool): Whether the destination is wiped before copying.
        index_page (Optional[IndexPage]): Page written when none was published, or None
            when ``write_index`` is False. Defaults to a fresh ``IndexPage()``.

    Example:
        >>> import tempfile
        >>> from pathlib import Path
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     vault = Path(tmp) / "vault"
        ...     vault.mkdir()
        ...     _ = (vault / "note.md").write_text("# Note")
        ...     report = VaultSynchronizer(RuleSet.default()).sync(vault, Path(tmp) / "content")
        ...     sorted(p.name for p in (Path(tmp) / "content").iterdir())
        ['index.md', 'note.md']
    """

    def __init__(
        self,
        rule_set: RuleSet,
        *,
        clean: bool = True,
        write_index: bool = True,
        index_page: Optional[IndexPage] = None,
        follow_symlinks: bool = True,
        frontmatter_parser: FrontmatterParser = parse_frontmatter,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.rule_set = rule_set
        self.clean = clean
        self.index_page: Optional[IndexPage] = None
        if write_index:
            self.index_page = index_page if index_page is not None else IndexPage()
        self._today = today
        self._copier = FilteredTreeCopier(
            rule_set, frontmatter_parser=frontmatter_parser, follow_symlinks=follow_symlinks
        )

    def sync(
        self,
        source: PathType,
        destination: PathType,
        on_record: Optional[Callable[[CopyRecord], None]] = None,
    ) -> CopyReport:
        """Run one synchronization.

        Args:
            source: Root of the local vault.
            destination: Content directory to (re)build.
            on_record: Optional callback receiving each record as it is produced.

        Returns:
            The CopyReport of the run, including the generated index page if any.

        Raises:
            FileNotFoundError: If the source doesn't exist.
            NotADirectoryError: If the source isn't a directory.
            ValueError: If destination and source overlap in a way that would make the
                run copy into the vault or wipe it.
            OSError: For any filesystem error; the destination is then left as is.
        """
        source_path = Path(source)
        destination_path = Path(destination)
        check_roots(source_path, destination_path)

        if self.clean:
            if destination_path.resolve() in source_path.resolve().parents:
                raise ValueError(f"Refusing to wipe {destination_path}: it contains the source tree {source_path}")
            if destination_path.exists():
                shutil.rmtree(destination_path)
        destination_path.mkdir(parents=True, exist_ok=True)

        report = self._copier.copy(source_path, destination_path, on_record=on_record)

        if self.index_page is not None:
            record = self._write_index_page(self.index_page, source_path, destination_path)
            if record is not None:
                report.add(record)
                if on_record is not None:
                    on_record(record)

        return report

    def _write_index_page(self, page: IndexPage, source: Path, destination: Path) -> Optional[CopyRecord]:
        index_path = destination / page.filename
        if index_path.exists():
            return None

        vault_name = source.resolve().name
        content = page.render(vault_name, self._today()).encode("utf-8")
        index_path.write_bytes(content)
        return CopyRecord(
            page.filename, EntryKind.FILE, Disposition.COPIED, "generated index page", size=len(content)
        )
