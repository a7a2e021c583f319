"""Builders for CREATE TABLE, CREATE VIEW and INSERT statements."""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from ..aliases import TableAliases
from ..fields import FieldInfo, MetaFieldInfo, quote_name
from ..exceptions import ValidationError
from ..nodes import ExtractNode, LoadNode, Node
from ..transformation import FieldRelation, FilterFunction, format_predicates
from .metadata import render_meta_field

INDENT = "\n    "
COLUMN_SEPARATOR = ",\n    "


def _quote(value: str) -> str:
    """Quote SQL string values."""
    return value.replace("'", "''")


def format_names(names: Sequence[str]) -> List[str]:
    """Wrap names in backticks unless they already contain one."""
    return [name if "`" in name else quote_name(name) for name in names]


def gen_primary_key(primary_key: Optional[str]) -> Optional[str]:
    """Build the PRIMARY KEY constraint from a comma separated column list."""
    if not primary_key or not primary_key.strip():
        return None
    columns = format_names([name for name in primary_key.split(",") if name.strip()])
    return f"PRIMARY KEY ({','.join(columns)}) NOT ENFORCED"


def gen_options(options: Dict[str, str]) -> str:
    """Build the WITH clause, sorted by option key."""
    if not options:
        return ""
    items = [f"'{_quote(key)}' = '{_quote(str(value))}'" for key, value in sorted(options.items())]
    return f"{INDENT}WITH ({INDENT}{COLUMN_SEPARATOR.join(items)}\n)"


def gen_column(node: Node, field: FieldInfo) -> str:
    """Build one column definition of CREATE TABLE."""
    if isinstance(field, MetaFieldInfo):
        return f"{quote_name(field.name)} {render_meta_field(node, field)}"
    return f"{quote_name(field.name)} {field.sql_type()}"


def gen_create_table_sql(node: Node) -> str:
    """Build CREATE TABLE for an extract or load node."""
    columns: List[str] = []
    primary_key = gen_primary_key(node.primary_key)
    if primary_key:
        columns.append(primary_key)
    columns.extend(gen_column(node, field) for field in node.fields)
    if isinstance(node, ExtractNode) and node.watermark_field is not None:
        columns.append(node.watermark_field.format())

    sql = f"CREATE TABLE `{node.gen_table_name()}`({INDENT}{COLUMN_SEPARATOR.join(columns)})"
    if node.partition_fields:
        partitions = ",".join(field.format() for field in node.partition_fields)
        sql += f"\nPARTITIONED BY ({partitions})"
    sql += gen_options(node.table_options())
    return sql


def gen_create_view_sql(node: Node) -> str:
    """Build the CREATE VIEW header of a transform node."""
    columns = COLUMN_SEPARATOR.join(quote_name(field.name) for field in node.fields)
    return f"CREATE VIEW `{node.gen_table_name()}` ({INDENT}{columns})"


def index_field_relations(node: Node, relations: Sequence[FieldRelation]) -> Dict[str, FieldRelation]:
    """Map output field name to its field relation.

    Raises:
        ValidationError: If a relation targets a field the node does not declare
    """
    relation_map: Dict[str, FieldRelation] = {}
    for relation in relations:
        name = relation.output_field.name
        if node.get_field(name) is None:
            raise ValidationError(
                f"output field '{name}' of a field relation is not declared by node {node.id}")
        relation_map[name] = relation
    return relation_map


def gen_select_items(
    fields: Sequence[FieldInfo],
    relation_map: Dict[str, FieldRelation],
    aliases: Optional[TableAliases] = None,
) -> List[str]:
    """Build the SELECT list for the declared fields of a node.

    Fields without a field relation are filled with a typed NULL so the list
    always matches the declared schema.
    """
    items: List[str] = []
    for field in fields:
        relation = relation_map.get(field.name)
        if relation is not None:
            items.append(f"{relation.input_field.format(aliases)} AS {field.format()}")
        else:
            items.append(f"CAST(NULL AS {field.sql_type()}) AS {field.format()}")
    return items


def gen_where(filters: Sequence[FilterFunction], aliases: Optional[TableAliases] = None) -> str:
    if not filters:
        return ""
    return f"{INDENT}WHERE {format_predicates(filters, aliases)}"


def gen_insert_sql(load_node: LoadNode, input_node: Node) -> str:
    """Build INSERT INTO ... SELECT from the single upstream node."""
    if not load_node.field_relations:
        raise ValidationError(f"field relations is empty for load node {load_node.id}")
    relation_map = index_field_relations(load_node, load_node.field_relations)
    items = gen_select_items(load_node.fields, relation_map)
    return (
        f"INSERT INTO `{load_node.gen_table_name()}`"
        f"{INDENT}SELECT{INDENT}{COLUMN_SEPARATOR.join(items)}"
        f"{INDENT}FROM `{input_node.gen_table_name()}`"
        f"{gen_where(load_node.filters)}"
    )
