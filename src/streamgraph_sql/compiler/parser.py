"""Graph compiler: walks a stream graph and emits its SQL statements."""

from __future__ import annotations
import logging
from typing import Dict, Optional, Set

from ..exceptions import UnsupportedOperationError, ValidationError
from ..models import GroupInfo, StreamInfo
from ..nodes import ExtractNode, LoadNode, Node, TransformNode
from ..relations import NodeRelation
from .result import CompileResult
from .select import gen_select
from .statements import gen_create_table_sql, gen_create_view_sql, gen_insert_sql

logger = logging.getLogger(__name__)


class SqlCompiler:
    """Compiles every stream of a group into one statement batch.

    Each node is compiled at most once. A node is only compiled after all of
    the upstream nodes it reads from.
    """

    def __init__(self, group_info: GroupInfo):
        self.group_info = group_info
        self._parsed: Set[str] = set()
        self._in_progress: Set[str] = set()
        self._result = CompileResult()

    @classmethod
    def compile_stream(cls, stream_info: StreamInfo) -> CompileResult:
        """Compile a single stream graph."""
        group = GroupInfo(group_id=stream_info.stream_id, streams=[stream_info])
        return cls(group).compile()

    def compile(self) -> CompileResult:
        """Compile the group.

        Returns:
            CompileResult with DDL per node and DML in visit order

        Raises:
            ValidationError: If the graph is malformed
            UnsupportedOperationError: If the graph uses a feature that can not be compiled
        """
        self._parsed = set()
        self._in_progress = set()
        self._result = CompileResult()

        if not self.group_info.streams:
            raise ValidationError(f"streams is empty for group {self.group_info.group_id}")

        logger.info(f"Compiling group {self.group_info.group_id}")
        for stream in self.group_info.streams:
            self._compile_stream(stream)
        logger.info(
            f"Compiled group {self.group_info.group_id}: "
            f"{len(self._result.create_table_sqls)} DDL, {len(self._result.insert_sqls)} DML statements")
        return self._result

    def _compile_stream(self, stream: StreamInfo):
        if not stream.nodes:
            raise ValidationError(f"nodes is empty for stream {stream.stream_id}")
        if not stream.relations:
            raise ValidationError(f"relations is empty for stream {stream.stream_id}")

        logger.info(f"Compiling stream {stream.stream_id}")
        node_map: Dict[str, Node] = {}
        for node in stream.nodes:
            if node.id in node_map:
                raise ValidationError(f"duplicate node id {node.id} in stream {stream.stream_id}")
            node_map[node.id] = node

        relation_map: Dict[str, NodeRelation] = {}
        for relation in stream.relations:
            self._check_relation(relation, node_map)
            for output_id in relation.outputs:
                if output_id in relation_map:
                    raise ValidationError(
                        f"node {output_id} is the output of more than one relation")
                relation_map[output_id] = relation

        for relation in stream.relations:
            logger.info(f"Compiling relation {relation.type} {relation.inputs} -> {relation.outputs}")
            for output_id in relation.outputs:
                self._compile_node(node_map[output_id], relation, node_map, relation_map)

    @staticmethod
    def _check_relation(relation: NodeRelation, node_map: Dict[str, Node]):
        if not relation.inputs:
            raise ValidationError(f"inputs is empty for relation {relation.type}")
        if not relation.outputs:
            raise ValidationError(f"outputs is empty for relation {relation.type}")
        for node_id in relation.inputs + relation.outputs:
            if node_id not in node_map:
                raise ValidationError(f"can not find any node by node id:{node_id}")

    def _compile_node(
        self,
        node: Node,
        relation: Optional[NodeRelation],
        node_map: Dict[str, Node],
        relation_map: Dict[str, NodeRelation],
    ):
        if node.id in self._parsed:
            logger.warning(f"Node {node.id} has already been compiled, skipping")
            return
        if node.id in self._in_progress:
            raise ValidationError(f"cycle detected at node {node.id}")

        if isinstance(node, ExtractNode):
            self._register(self._result.extract_sqls, node, gen_create_table_sql(node))
            return

        if relation is None:
            raise ValidationError(f"no relation outputs node {node.id}")
        if len(relation.outputs) != 1:
            raise ValidationError(
                f"relation of node {node.id} must have exactly one output, got {len(relation.outputs)}")
        if isinstance(node, LoadNode) and len(relation.inputs) != 1:
            raise ValidationError(
                f"load node {node.id} must have exactly one input, got {len(relation.inputs)}")

        self._in_progress.add(node.id)
        for upstream_id in relation.inputs:
            if upstream_id not in self._parsed:
                self._compile_node(
                    node_map[upstream_id], relation_map.get(upstream_id), node_map, relation_map)
        self._in_progress.discard(node.id)

        if isinstance(node, LoadNode):
            insert_sql = gen_insert_sql(node, node_map[relation.inputs[0]])
            self._register(self._result.load_sqls, node, gen_create_table_sql(node))
            logger.debug(f"Insert for node {node.id}:\n{insert_sql}")
            self._result.insert_sqls.append(insert_sql)
        elif isinstance(node, TransformNode):
            if not node.field_relations:
                raise ValidationError(f"field relations is empty for transform node {node.id}")
            select_sql = gen_select(node, relation, node_map)
            self._register(
                self._result.transform_sqls, node, f"{gen_create_view_sql(node)} AS {select_sql}")
        else:
            raise UnsupportedOperationError(f"Unsupported node type {type(node).__name__}")

    def _register(self, section: Dict[str, str], node: Node, sql: str):
        logger.debug(f"DDL for node {node.id}:\n{sql}")
        section[node.id] = sql
        self._parsed.add(node.id)
