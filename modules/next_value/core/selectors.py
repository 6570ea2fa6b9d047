"""
Field selectors: which fields of a schema the engine considers.

A selector must be a pure function of the schema. It is called once per
entity, so a batch of N entities calls it N times.
"""

from typing import List

from modules.next_value.core.interfaces import FieldDescriptor, FieldSelector, ModelSchema


def all_fields(schema: ModelSchema) -> List[FieldDescriptor]:
    """Default selector: every field in declaration order."""
    return schema.fields


def prioritized_primary_field(schema: ModelSchema) -> List[FieldDescriptor]:
    """
    Only the prioritized primary key field.

    Usage:
        plugin.set_fields(prioritized_primary_field)
    """
    if schema.prioritized_primary_field is None:
        return []
    return [schema.prioritized_primary_field]


def only_fields(*names: str) -> FieldSelector:
    """
    Build a selector restricted to the named fields.

    Declaration order is kept regardless of the order of names; names
    missing from a schema are ignored.

    Usage:
        plugin.set_fields(only_fields("id", "display_id"))
    """
    wanted = frozenset(names)

    def selector(schema: ModelSchema) -> List[FieldDescriptor]:
        return [f for f in schema.fields if f.name in wanted]

    return selector
