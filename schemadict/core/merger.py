"""Merge base column descriptors with constraint lookups."""

from schemadict.core.lookups import ConstraintLookups
from schemadict.core.models import BaseColumn, ColumnMetaData


def merge_column(
    table_name: str,
    base: BaseColumn,
    lookups: ConstraintLookups,
    enrich: bool = True,
) -> ColumnMetaData:
    """
    Build the consolidated metadata record for one column.

    Primary keys, foreign keys and enums are matched by column name only;
    unique indexes by column and table name.

    Args:
        table_name: Owning table
        base: Descriptor from the schema walker
        lookups: Constraint lookups for the schema
        enrich: When False only the base descriptor is copied

    Returns:
        New ColumnMetaData record
    """
    meta = ColumnMetaData.from_base(table_name, base)
    if not enrich:
        return meta

    if lookups.primary_keys.exists(meta.name):
        meta.is_primary_key = True

    fk = lookups.foreign_keys.get(meta.name)
    if fk is not None:
        meta.is_foreign_key = True
        meta.target_table_fk = fk.target_table
        meta.delete_rule = fk.delete_rule
        meta.update_rule = fk.update_rule

    enum = lookups.enums.get(meta.name)
    if enum is not None:
        meta.has_enum = True
        meta.enum_name = enum.enum_name
        meta.enum_values = enum.values

    unique = lookups.uniques.get(meta.name, table_name)
    if unique is not None:
        meta.is_unique = True
        meta.unique_index_definition = unique.definition

    return meta


def merge_table(
    table_name: str,
    columns: list[BaseColumn],
    lookups: ConstraintLookups,
    enrich: bool = True,
) -> list[ColumnMetaData]:
    """Merge every column of a table, keeping catalog order."""
    return [merge_column(table_name, column, lookups, enrich) for column in columns]
