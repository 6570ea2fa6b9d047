"""
Tests for GeneratorRegistry and field selectors.
"""

import pytest

from modules.next_value import (
    GeneratorRegistry,
    all_fields,
    only_fields,
    parse_schema,
    prioritized_primary_field,
)
from conftest import User, Link, snowflake, display_id


def test_register_and_lookup():
    registry = GeneratorRegistry()
    registry.register("snowflake", snowflake)

    assert registry.lookup("snowflake") is snowflake
    assert registry.lookup("display_id") is None
    assert "snowflake" in registry
    assert len(registry) == 1


def test_last_registration_wins():
    registry = GeneratorRegistry()
    registry.register("snowflake", snowflake)
    registry.register("snowflake", display_id)

    assert registry.lookup("snowflake") is display_id
    assert registry.list_tags() == ["snowflake"]


def test_register_rejects_non_callable():
    registry = GeneratorRegistry()

    with pytest.raises(TypeError):
        registry.register("snowflake", 42)

    assert not registry.is_registered("snowflake")


def test_unregister():
    registry = GeneratorRegistry()
    registry.register("snowflake", snowflake)

    assert registry.unregister("snowflake") is True
    assert registry.unregister("snowflake") is False
    assert registry.lookup("snowflake") is None


def test_all_fields_keeps_declaration_order():
    schema = parse_schema(User)

    assert [f.name for f in all_fields(schema)] == ["id", "display_id", "name"]


def test_prioritized_primary_field_selector():
    assert [f.name for f in prioritized_primary_field(parse_schema(User))] == ["id"]
    assert prioritized_primary_field(parse_schema(Link)) == []


def test_only_fields_selector():
    selector = only_fields("name", "id", "missing")

    assert [f.name for f in selector(parse_schema(User))] == ["id", "name"]
