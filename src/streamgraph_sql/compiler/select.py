"""SELECT bodies for transform nodes."""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

from ..aliases import TableAliases
from ..exceptions import UnsupportedOperationError, ValidationError
from ..fields import quote_name
from ..nodes import DistinctNode, Node, TransformNode
from ..relations import JoinRelation, NodeRelation, UnionNodeRelation
from ..transformation import format_predicates
from .statements import COLUMN_SEPARATOR, INDENT, gen_select_items, gen_where, index_field_relations

logger = logging.getLogger(__name__)

ROW_NUMBER_COLUMN = "row_num"


def gen_select(node: TransformNode, relation: NodeRelation, node_map: Dict[str, Node]) -> str:
    """Build the SELECT body of a transform node for its owning relation."""
    if isinstance(relation, UnionNodeRelation):
        raise UnsupportedOperationError("Union is not currently supported")
    if isinstance(relation, JoinRelation):
        return gen_join_select(node, relation, node_map)
    return gen_simple_select(node, relation, node_map)


def gen_simple_select(node: TransformNode, relation: NodeRelation, node_map: Dict[str, Node]) -> str:
    """SELECT over a single upstream node."""
    if len(relation.inputs) != 1:
        raise ValidationError(
            f"simple relation only supports one input node, got {len(relation.inputs)} for node {node.id}")
    input_node = node_map[relation.inputs[0]]
    relation_map = index_field_relations(node, node.field_relations)
    items = gen_select_items(node.fields, relation_map)
    if isinstance(node, DistinctNode):
        items.append(gen_row_number(node))

    sql = (
        f"SELECT{INDENT}{COLUMN_SEPARATOR.join(items)}"
        f"{INDENT}FROM `{input_node.gen_table_name()}`"
        f"{gen_where(node.filters)}"
    )
    return _wrap_distinct(node, sql)


def gen_join_select(node: TransformNode, relation: JoinRelation, node_map: Dict[str, Node]) -> str:
    """SELECT joining every other input onto the first one.

    Every input gets the alias ``t<nodeId>`` and all field references are
    rendered through it.
    """
    if len(relation.inputs) < 2:
        raise ValidationError(
            f"join relation requires at least two input nodes, got {len(relation.inputs)} for node {node.id}")
    aliases = TableAliases(relation.inputs)
    relation_map = index_field_relations(node, node.field_relations)
    items = gen_select_items(node.fields, relation_map, aliases)
    if isinstance(node, DistinctNode):
        items.append(gen_row_number(node, aliases))

    primary_id = relation.inputs[0]
    parts: List[str] = [
        f"SELECT{INDENT}{COLUMN_SEPARATOR.join(items)}",
        f"{INDENT}FROM `{node_map[primary_id].gen_table_name()}` {aliases.get(primary_id)}",
    ]
    for input_id in relation.inputs[1:]:
        conditions = relation.join_conditions.get(input_id)
        if not conditions:
            raise ValidationError(f"join condition is null for node id:{input_id}")
        parts.append(
            f"{INDENT}{relation.format()} `{node_map[input_id].gen_table_name()}` {aliases.get(input_id)}"
            f" ON {format_predicates(conditions, aliases)}"
        )
    parts.append(gen_where(node.filters, aliases))

    logger.debug(f"Join select for node {node.id} uses aliases for inputs {relation.inputs}")
    return _wrap_distinct(node, "".join(parts))


def gen_row_number(node: DistinctNode, aliases: Optional[TableAliases] = None) -> str:
    """Build the ROW_NUMBER() column ranking rows within each distinct key."""
    if not node.distinct_fields:
        raise ValidationError(f"distinct fields is empty for distinct node {node.id}")
    if node.order_field is None:
        raise ValidationError(f"order field is required for distinct node {node.id}")
    partition = ",".join(field.format(aliases) for field in node.distinct_fields)
    order = f"{node.order_field.format(aliases)} {node.order_direction.value}"
    return f"ROW_NUMBER() OVER (PARTITION BY {partition} ORDER BY {order}) AS {ROW_NUMBER_COLUMN}"


def _wrap_distinct(node: TransformNode, inner: str) -> str:
    if not isinstance(node, DistinctNode):
        return inner
    columns = COLUMN_SEPARATOR.join(quote_name(field.name) for field in node.fields)
    return f"SELECT{INDENT}{columns}{INDENT}FROM ({inner})\nWHERE {ROW_NUMBER_COLUMN} = 1"
