"""
Core components for next-value module.
"""

from modules.next_value.core.interfaces import (
    GeneratorFunc,
    SkipField,
    SKIP_FIELD,
    FieldDescriptor,
    FieldSelector,
    ModelSchema,
    SchemaResolver,
    is_zero,
)

from modules.next_value.core.registry import GeneratorRegistry

from modules.next_value.core.selectors import (
    all_fields,
    prioritized_primary_field,
    only_fields,
)

from modules.next_value.core.exceptions import (
    NextValueException,
    ConfigurationException,
    UnregisteredTagError,
    InvokeFuncError,
    GenerationError,
)

__all__ = [
    # Interfaces
    "GeneratorFunc",
    "SkipField",
    "SKIP_FIELD",
    "FieldDescriptor",
    "FieldSelector",
    "ModelSchema",
    "SchemaResolver",
    "is_zero",
    # Registry
    "GeneratorRegistry",
    # Selectors
    "all_fields",
    "prioritized_primary_field",
    "only_fields",
    # Exceptions
    "NextValueException",
    "ConfigurationException",
    "UnregisteredTagError",
    "InvokeFuncError",
    "GenerationError",
]
