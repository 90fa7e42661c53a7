"""Pydantic models for sqlpulse configuration and comparison options."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Extraction and Comparison Options
# ============================================================================


class DumpOptions(BaseModel):
    """Which objects an extraction returns.

    Example:
        >>> DumpOptions().include_views
        True
    """

    model_config = ConfigDict(frozen=True)

    include_tables: bool = True
    include_views: bool = True
    include_procedures: bool = True
    include_functions: bool = True
    include_triggers: bool = True
    include_indexes: bool = True
    include_foreign_keys: bool = True
    include_constraints: bool = True
    schema_filter: tuple[str, ...] = ()
    table_filter: tuple[str, ...] = ()
    output_format: str = "sql"  # sql, json


class DiffOptions(BaseModel):
    """Options for one comparison run.

    Passed explicitly to the comparator; there is no global option state.
    ``ignore_whitespace`` normalizes view/procedure/function/trigger and
    check-constraint text before comparing.
    """

    model_config = ConfigDict(frozen=True)

    include_tables: bool = True
    include_views: bool = True
    include_procedures: bool = True
    include_functions: bool = True
    include_triggers: bool = True
    include_indexes: bool = True
    include_foreign_keys: bool = True
    include_constraints: bool = True
    schema_filter: tuple[str, ...] = ()
    table_filter: tuple[str, ...] = ()
    ignore_collation: bool = False
    ignore_whitespace: bool = True

    def to_dump_options(self) -> DumpOptions:
        """Extraction options matching this comparison's toggles and filters."""
        return DumpOptions(
            include_tables=self.include_tables,
            include_views=self.include_views,
            include_procedures=self.include_procedures,
            include_functions=self.include_functions,
            include_triggers=self.include_triggers,
            include_indexes=self.include_indexes,
            include_foreign_keys=self.include_foreign_keys,
            include_constraints=self.include_constraints,
            schema_filter=self.schema_filter,
            table_filter=self.table_filter,
        )


# ============================================================================
# Configuration File Models
# ============================================================================


class SnapshotProfile(BaseModel):
    """A named schema snapshot from sqlpulse.toml."""

    snapshot: Path
    description: str = ""


class SqlPulseConfig(BaseModel):
    """Complete configuration from sqlpulse.toml."""

    profiles: dict[str, SnapshotProfile] = Field(default_factory=dict)
    diff: DiffOptions = Field(default_factory=DiffOptions)
