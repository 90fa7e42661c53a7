"""Pydantic models for schema comparison results.

- DiffKind, DiffCategory: classification of one change
- Difference: one detected change
- DiffSummary: counts derived from a difference list
- DiffResult: all differences between a source and a target database
"""

from collections import Counter
from enum import StrEnum
from functools import cached_property

from pydantic import BaseModel, Field, computed_field


class DiffKind(StrEnum):
    """Direction of a difference, relative to the source."""

    ADDED = "ADDED"  # exists in target but not in source
    REMOVED = "REMOVED"  # exists in source but not in target
    MODIFIED = "MODIFIED"  # exists in both with differing properties

    @property
    def marker(self) -> str:
        return _MARKERS[self]


_MARKERS = {DiffKind.ADDED: "+", DiffKind.REMOVED: "-", DiffKind.MODIFIED: "~"}


class DiffCategory(StrEnum):
    """Object category. Declaration order is the fixed rendering order."""

    SCHEMA = "SCHEMA"
    TABLE = "TABLE"
    COLUMN = "COLUMN"
    INDEX = "INDEX"
    FOREIGN_KEY = "FOREIGN_KEY"
    CONSTRAINT = "CONSTRAINT"
    VIEW = "VIEW"
    PROCEDURE = "PROCEDURE"
    FUNCTION = "FUNCTION"
    TRIGGER = "TRIGGER"


CATEGORY_ORDER: tuple[DiffCategory, ...] = tuple(DiffCategory)


class Difference(BaseModel):
    """A single difference between source and target.

    Example:
        >>> d = Difference(
        ...     kind=DiffKind.REMOVED,
        ...     category=DiffCategory.TABLE,
        ...     object_name="[dbo].[Users]",
        ...     description="Table [dbo].[Users] missing in target",
        ... )
        >>> d.format_line()
        '- [TABLE] [dbo].[Users]: Table [dbo].[Users] missing in target'
    """

    kind: DiffKind
    category: DiffCategory
    object_name: str
    property_name: str | None = None
    source_value: str | None = None
    target_value: str | None = None
    description: str
    migration_sql: str | None = None

    def format_line(self) -> str:
        """Format as one ``<marker> [<category>] <object>: <description>`` line."""
        return f"{self.kind.marker} [{self.category}] {self.object_name}: {self.description}"


class DiffSummary(BaseModel):
    """Summary counts for a difference list."""

    total_differences: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0
    by_category: dict[DiffCategory, int] = Field(default_factory=dict)

    @classmethod
    def from_differences(cls, differences: list[Difference]) -> "DiffSummary":
        kinds = Counter(d.kind for d in differences)
        categories = Counter(d.category for d in differences)
        return cls(
            total_differences=len(differences),
            added=kinds[DiffKind.ADDED],
            removed=kinds[DiffKind.REMOVED],
            modified=kinds[DiffKind.MODIFIED],
            by_category={c: categories[c] for c in CATEGORY_ORDER if categories[c]},
        )


class DiffResult(BaseModel):
    """All differences between two databases, in discovery order.

    Example:
        >>> result = DiffResult(source_database="dev", target_database="prod")
        >>> result.has_differences
        False
        >>> result.summary.total_differences
        0
    """

    source_database: str
    target_database: str
    differences: list[Difference] = Field(default_factory=list)

    @computed_field
    @cached_property
    def summary(self) -> DiffSummary:
        """Counts, derived once from ``differences``."""
        return DiffSummary.from_differences(self.differences)

    @property
    def has_differences(self) -> bool:
        return len(self.differences) > 0

    def filter_by_kind(self, kind: DiffKind) -> list[Difference]:
        return [d for d in self.differences if d.kind == kind]

    def filter_by_category(self, category: DiffCategory) -> list[Difference]:
        return [d for d in self.differences if d.category == category]

    def grouped_by_category(self) -> list[tuple[DiffCategory, list[Difference]]]:
        """Non-empty categories in the fixed order, with their differences."""
        groups = []
        for category in CATEGORY_ORDER:
            diffs = self.filter_by_category(category)
            if diffs:
                groups.append((category, diffs))
        return groups
