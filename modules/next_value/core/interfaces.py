"""
Core interfaces for the next-value module.

The dispatch engine only depends on these contracts. The schema layer
(modules.next_value.schema) implements FieldDescriptor on top of SQLAlchemy
mapper metadata; tests implement it with plain Python objects.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple


# ==============================================================================
# GENERATOR CONTRACT
# ==============================================================================

# (has_default_value, is_zero) -> value
#
# Returning a value sets the field. Raising SkipField leaves the field
# untouched. Raising anything else is reported as an InvokeFuncError.
GeneratorFunc = Callable[[bool, bool], Any]


class SkipField(Exception):
    """Raised by a generator to indicate that the field is to be skipped."""

    def __init__(self, message: str = "skip this field"):
        super().__init__(message)


# Shared instance so generators can simply `raise SKIP_FIELD`
SKIP_FIELD = SkipField()


_ZERO_TYPES = (str, bytes, bytearray, int, float, complex, Decimal, list, tuple, dict, set, frozenset)


def is_zero(value: Any) -> bool:
    """
    Check whether a value is the zero value of its type.

    None is always zero. Scalars and builtin containers are zero when falsy
    (0, "", b"", False, [], {}). Any other object (datetime, UUID, ...) is
    only zero when None.
    """
    if value is None:
        return True
    if isinstance(value, _ZERO_TYPES):
        return not value
    return False


# ==============================================================================
# SCHEMA CONTRACT
# ==============================================================================

class FieldDescriptor(ABC):
    """
    A single field of an entity schema.

    Descriptors are owned by the schema layer and are bound to a model class,
    not to an instance: value_of/set take the entity instance to operate on.
    """

    name: str
    tag_settings: Dict[str, str]
    has_default_value: bool

    @abstractmethod
    def value_of(self, instance: Any) -> Tuple[Any, bool]:
        """Return (current_value, is_zero) of this field on instance."""
        pass

    @abstractmethod
    def set(self, instance: Any, value: Any) -> None:
        """
        Write value into this field on instance.

        Raises:
            Exception: If the value cannot be assigned
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(name={self.name})>"


@dataclass
class ModelSchema:
    """Parsed schema of an entity class."""
    name: str
    model: type
    fields: List[FieldDescriptor] = field(default_factory=list)
    prioritized_primary_field: Optional[FieldDescriptor] = None

    def lookup_field(self, name: str) -> Optional[FieldDescriptor]:
        """Find a field by attribute name"""
        for f in self.fields:
            if f.name == name:
                return f
        return None


# (schema) -> fields to consider, in order
FieldSelector = Callable[[ModelSchema], Sequence[FieldDescriptor]]

# (entity) -> schema, or None when the entity type is not managed
SchemaResolver = Callable[[Any], Optional[ModelSchema]]
