"""Outcome of evaluating one vault entry against the exclusion rules."""

from typing import Any, Optional

from vault2content.types import FrontmatterValue, RuleKind


def format_value(value: FrontmatterValue) -> str:
    """Render a frontmatter value the way it is written in YAML.

    Example:
        >>> format_value(False), format_value("yes"), format_value(["a", "b"])
        ('false', 'yes', '[a, b]')
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "[" + ", ".join(value) + "]"
    return str(value)


class RuleMatch:
    """The exclusion criterion that matched an entry.

    Attributes:
        kind (RuleKind): Which family of rules matched.
        value (str): The configured value that matched (folder fragment, file name,
            pattern source, ``key=value`` pair or tag).

    Example:
        >>> str(RuleMatch(RuleKind.FOLDER, "Work/Confidential"))
        'folder "Work/Confidential"'
        >>> str(RuleMatch(RuleKind.PATTERN, "^_"))
        'pattern ^_'
    """

    def __init__(self, kind: RuleKind, value: str) -> None:
        self.kind = kind
        self.value = value

    def describe(self) -> str:
        """Return a short human-readable description of the matched rule."""
        if self.kind == RuleKind.FOLDER:
            return f'folder "{self.value}"'
        if self.kind == RuleKind.GLOB:
            return f'glob "{self.value}"'
        if self.kind == RuleKind.FILENAME:
            return f'file name "{self.value}"'
        if self.kind == RuleKind.PATTERN:
            return f"pattern {self.value}"
        if self.kind == RuleKind.FRONTMATTER:
            return f"frontmatter {self.value}"
        return f'tag "{self.value}"'

    def __str__(self) -> str:
        return self.describe()

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, RuleMatch):
            return False
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        return f"RuleMatch(kind={self.kind.value!r}, value={self.value!r})"


class Decision:
    """Admit or exclude verdict for a single entry.

    Decisions are created through ``Decision.admit()`` and ``Decision.exclude()``. An
    excluding decision always carries the rule that matched.

    Attributes:
        admitted (bool): True if the entry may be published.
        rule (Optional[RuleMatch]): The matching rule for excluded entries, None otherwise.

    Example:
        >>> Decision.admit().admitted
        True
        >>> decision = Decision.exclude(RuleMatch(RuleKind.TAG, "private"))
        >>> decision.excluded, decision.reason
        (True, 'tag "private"')
    """

    def __init__(self, admitted: bool, rule: Optional[RuleMatch] = None) -> None:
        if admitted and rule is not None:
            raise ValueError("An admitting decision cannot carry a matched rule")
        if not admitted and rule is None:
            raise ValueError("An excluding decision must carry the matched rule")
        self.admitted = admitted
        self.rule = rule

    @classmethod
    def admit(cls) -> "Decision":
        return cls(True)

    @classmethod
    def exclude(cls, rule: RuleMatch) -> "Decision":
        return cls(False, rule)

    @property
    def excluded(self) -> bool:
        return not self.admitted

    @property
    def reason(self) -> Optional[str]:
        """Description of the matched rule, or None for admitted entries."""
        return self.rule.describe() if self.rule is not None else None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Decision):
            return False
        return self.admitted == other.admitted and self.rule == other.rule

    def __hash__(self) -> int:
        return hash((self.admitted, self.rule))

    def __repr__(self) -> str:
        if self.admitted:
            return "Decision(admit)"
        return f"Decision(exclude, {self.rule!r})"
