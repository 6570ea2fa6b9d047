"""
Next-value plugin for SQLAlchemy.

Sets generated values (distributed IDs, display codes, ...) on tagged
columns of new objects right before they are inserted.
"""

from modules.next_value.core import (
    GeneratorFunc,
    SkipField,
    SKIP_FIELD,
    FieldDescriptor,
    ModelSchema,
    GeneratorRegistry,
    all_fields,
    prioritized_primary_field,
    only_fields,
    NextValueException,
    ConfigurationException,
    UnregisteredTagError,
    InvokeFuncError,
    GenerationError,
)
from modules.next_value.engine import DispatchEngine
from modules.next_value.plugin import NextPlugin
from modules.next_value.schema import SQLAlchemyField, parse_schema, schema_of

__all__ = [
    "NextPlugin",
    "DispatchEngine",
    "GeneratorRegistry",
    "GeneratorFunc",
    "SkipField",
    "SKIP_FIELD",
    "FieldDescriptor",
    "ModelSchema",
    "SQLAlchemyField",
    "parse_schema",
    "schema_of",
    "all_fields",
    "prioritized_primary_field",
    "only_fields",
    "NextValueException",
    "ConfigurationException",
    "UnregisteredTagError",
    "InvokeFuncError",
    "GenerationError",
]
