"""sqlitegen compilation layer: predicates and descriptors → SQLite SQL."""
from sqlitegen.compile.base import CompiledSQL, SQLCompiler
from sqlitegen.compile.predicate_builder import PredicateBuilder
from sqlitegen.compile.registry import OperatorRegistry, ReaderRegistry
from sqlitegen.compile.sink import Parameter, ParameterList, ParameterSink
from sqlitegen.compile.sqlite import SQLiteCompiler
from sqlitegen.compile.table_builder import TableBuilder, TableCreationOptions

__all__ = [
    "CompiledSQL",
    "SQLCompiler",
    "PredicateBuilder",
    "OperatorRegistry",
    "ReaderRegistry",
    "Parameter",
    "ParameterList",
    "ParameterSink",
    "SQLiteCompiler",
    "TableBuilder",
    "TableCreationOptions",
]
