"""
SQLAlchemy implementation of the schema contract.

Tags live in the column info dictionary:

    class User(Base):
        __tablename__ = "users"

        id: Mapped[int] = mapped_column(BigInteger, primary_key=True, info={"next": "snowflake"})
        display_id: Mapped[str] = mapped_column(String(20), info={"next": "display_id"})

Info keys are matched case-insensitively; values are used verbatim as the
registry tag.
"""

from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import Column, inspect
from sqlalchemy.orm import ColumnProperty, Mapper

from modules.next_value.core.interfaces import FieldDescriptor, ModelSchema, is_zero
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


def _tag_settings(prop: ColumnProperty) -> Dict[str, str]:
    settings: Dict[str, str] = {}
    # Property-level info overrides column-level info
    for info in (prop.columns[0].info, prop.info):
        for key, value in info.items():
            if isinstance(key, str) and value is not None:
                settings[key.upper()] = str(value)
    return settings


class SQLAlchemyField(FieldDescriptor):
    """FieldDescriptor backed by a mapped column attribute."""

    def __init__(self, prop: ColumnProperty):
        column = prop.columns[0]

        self.name = prop.key
        self.column_name = column.name
        self.primary_key = bool(column.primary_key)
        self.tag_settings = _tag_settings(prop)
        self.has_default_value = (
            column.default is not None
            or column.server_default is not None
            or column.table.autoincrement_column is column
        )

    def value_of(self, instance: Any) -> Tuple[Any, bool]:
        value = getattr(instance, self.name)
        return value, is_zero(value)

    def set(self, instance: Any, value: Any) -> None:
        setattr(instance, self.name, value)


def _prioritized_primary_field(mapper: Mapper, fields: Dict[str, SQLAlchemyField]) -> Optional[SQLAlchemyField]:
    primary = [
        fields[prop.key]
        for prop in (mapper.get_property_by_column(column) for column in mapper.primary_key)
        if prop.key in fields
    ]
    if len(primary) == 1:
        return primary[0]
    for f in primary:
        if f.name == "id":
            return f
    return None


@lru_cache(maxsize=None)
def parse_schema(model: type) -> Optional[ModelSchema]:
    """
    Parse a mapped class into a ModelSchema.

    Results are cached per class.

    Args:
        model: Declarative model class

    Returns:
        ModelSchema, or None if the class is not mapped
    """
    mapper = inspect(model, raiseerr=False)
    if not isinstance(mapper, Mapper):
        return None

    fields: Dict[str, SQLAlchemyField] = {}
    for prop in mapper.column_attrs:
        # column_property() expressions are read-only
        if not isinstance(prop.columns[0], Column):
            continue
        fields[prop.key] = SQLAlchemyField(prop)

    schema = ModelSchema(
        name=mapper.class_.__name__,
        model=mapper.class_,
        fields=list(fields.values()),
        prioritized_primary_field=_prioritized_primary_field(mapper, fields),
    )
    logger.debug(
        f"Parsed schema {schema.name}: "
        f"{len(schema.fields)} fields, "
        f"tagged={[f.name for f in schema.fields if f.tag_settings]}"
    )
    return schema


def schema_of(entity: Any) -> Optional[ModelSchema]:
    """Schema of an entity instance, or None when its class is not mapped."""
    if entity is None or isinstance(entity, type):
        return None
    return parse_schema(type(entity))
