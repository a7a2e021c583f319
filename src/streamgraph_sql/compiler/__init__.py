"""Compile stream graphs into SQL statement batches."""

from .parser import SqlCompiler
from .result import CompileResult
from .metadata import render_meta_field
from .statements import gen_create_table_sql, gen_create_view_sql, gen_insert_sql

__all__ = [
    "SqlCompiler",
    "CompileResult",
    "render_meta_field",
    "gen_create_table_sql",
    "gen_create_view_sql",
    "gen_insert_sql",
]
