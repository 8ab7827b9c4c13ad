"""sqlitegen schema models: SchemaDescriptor, WhereStatement, DialectSettings."""
from sqlitegen.schema.cache import DescriptorCache
from sqlitegen.schema.descriptor import (
    Collation,
    ColumnDescriptor,
    ForeignKeyDescriptor,
    ReferentialAction,
    SchemaDescriptor,
    SchemaDescriptorBuilder,
    UniqueConstraint,
)
from sqlitegen.schema.dialect import DEFAULT_SETTINGS, DialectSettings, DialectSettingsBuilder
from sqlitegen.schema.expressions import LogicOperator, Operator
from sqlitegen.schema.literals import DB_NULL, SqlLiteral
from sqlitegen.schema.predicate import ClauseGroup, Comparison, WhereStatement
from sqlitegen.schema.types import StorageClass, TypeClass, classify, storage_class
from sqlitegen.schema.values import (
    ComparisonValue,
    NullValue,
    PairValue,
    RawValue,
    ScalarValue,
    SequenceValue,
)

__all__ = [
    "DescriptorCache",
    "Collation",
    "ColumnDescriptor",
    "ForeignKeyDescriptor",
    "ReferentialAction",
    "SchemaDescriptor",
    "SchemaDescriptorBuilder",
    "UniqueConstraint",
    "DEFAULT_SETTINGS",
    "DialectSettings",
    "DialectSettingsBuilder",
    "LogicOperator",
    "Operator",
    "DB_NULL",
    "SqlLiteral",
    "ClauseGroup",
    "Comparison",
    "WhereStatement",
    "StorageClass",
    "TypeClass",
    "classify",
    "storage_class",
    "ComparisonValue",
    "NullValue",
    "PairValue",
    "RawValue",
    "ScalarValue",
    "SequenceValue",
]
