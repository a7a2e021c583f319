#!/usr/bin/env python3
"""
MySQL CDC Join to Hive Example for streamgraph-sql
==================================================

This example builds a stream graph in Python: two MySQL CDC tables are
joined, filtered and written to a partitioned Hive table. The compiled
batch is printed, and submitted when a SQL gateway is reachable.
"""

import logging

from streamgraph_sql import (
    FieldInfo,
    HiveLoadNode,
    InnerJoinNodeRelation,
    MySqlExtractNode,
    NodeRelation,
    SqlCompiler,
    SqlGatewayClient,
    GatewayConfig,
    StreamInfo,
    TransformNode,
)
from streamgraph_sql.formats import DecimalFormat, LongFormat, TimestampFormat
from streamgraph_sql.transformation import (
    CompareOperator,
    ConstantParam,
    FieldRelation,
    SingleValueFilterFunction,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def mysql_source(node_id: str, table: str, fields):
    return MySqlExtractNode(
        id=node_id,
        hostname="mysql-server.company.com",
        username="cdc_user",
        password="cdc_password",
        database="ecommerce",
        table_names=[table],
        server_id=5400 + int(node_id),
        fields=fields,
    )


def build_stream() -> StreamInfo:
    orders = mysql_source("1", "orders", [
        FieldInfo(name="id", format_info=LongFormat()),
        FieldInfo(name="customer_id", format_info=LongFormat()),
        FieldInfo(name="amount", format_info=DecimalFormat(precision=12, scale=2)),
        FieldInfo(name="created_at", format_info=TimestampFormat(precision=3)),
    ])
    customers = mysql_source("2", "customers", [
        FieldInfo(name="id", format_info=LongFormat()),
        FieldInfo(name="email"),
    ])

    enriched_fields = [
        FieldInfo(name="order_id", format_info=LongFormat()),
        FieldInfo(name="email"),
        FieldInfo(name="amount", format_info=DecimalFormat(precision=12, scale=2)),
        FieldInfo(name="created_at", format_info=TimestampFormat(precision=3)),
    ]
    enriched = TransformNode(
        id="3",
        fields=enriched_fields,
        field_relations=[
            FieldRelation(input_field=FieldInfo(name="id", node_id="1"), output_field=enriched_fields[0]),
            FieldRelation(input_field=FieldInfo(name="email", node_id="2"), output_field=enriched_fields[1]),
            FieldRelation(input_field=FieldInfo(name="amount", node_id="1"), output_field=enriched_fields[2]),
            FieldRelation(input_field=FieldInfo(name="created_at", node_id="1"), output_field=enriched_fields[3]),
        ],
        filters=[
            SingleValueFilterFunction(
                source=FieldInfo(name="amount", node_id="1"),
                compare_operator=CompareOperator.MORE_THAN_OR_EQUAL,
                target=ConstantParam(value=100),
            )
        ],
    )

    hive = HiveLoadNode(
        id="4",
        table_name="big_orders",
        catalog_name="hive",
        database="dw",
        hive_conf_dir="/opt/hive/conf",
        hive_version="3.1.2",
        fields=enriched_fields,
        partition_fields=[FieldInfo(name="created_at")],
        field_relations=[
            FieldRelation(input_field=FieldInfo(name=f.name), output_field=f) for f in enriched_fields
        ],
    )

    return StreamInfo(
        stream_id="big_orders",
        nodes=[orders, customers, enriched, hive],
        relations=[
            InnerJoinNodeRelation(
                inputs=["1", "2"],
                outputs=["3"],
                join_conditions={
                    "2": [SingleValueFilterFunction(
                        source=FieldInfo(name="customer_id", node_id="1"),
                        compare_operator=CompareOperator.EQUAL,
                        target=FieldInfo(name="id", node_id="2"),
                    )]
                },
            ),
            NodeRelation(inputs=["3"], outputs=["4"]),
        ],
    )


def main():
    print("🔗 MySQL CDC Join to Hive Example")
    print("=" * 60)

    result = SqlCompiler.compile_stream(build_stream())

    print("\n📝 Generated SQL:")
    for i, sql in enumerate(result.statements(), 1):
        print(f"\n-- Statement {i}")
        print(sql)

    client = SqlGatewayClient(GatewayConfig(host="localhost"))
    if client.health_check():
        client.submit(result)
        print("\n✅ Graph submitted successfully!")
    else:
        print("\n⚠️  SQL gateway not reachable, skipping submission")


if __name__ == "__main__":
    main()
