from .copy_report import CopyRecord, CopyReport, PublishedNode
from .tree_copier import FilteredTreeCopier

__all__ = ["CopyRecord", "CopyReport", "FilteredTreeCopier", "PublishedNode"]
