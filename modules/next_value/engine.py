"""
DispatchEngine - fills tagged fields of entities about to be inserted.

For every selected field carrying the configured tag key, the engine looks
up the generator registered for the tag value, calls it with
(has_default_value, is_zero) and writes the result back.

Failures are isolated per field: an unregistered tag or a failing generator
is collected and processing goes on with the next field and entity. The
caller decides what to do with the collected errors.
"""

from typing import Any, List, Optional

from modules.next_value.core.exceptions import (
    InvokeFuncError,
    NextValueException,
    UnregisteredTagError,
)
from modules.next_value.core.interfaces import (
    FieldSelector,
    ModelSchema,
    SchemaResolver,
    SkipField,
)
from modules.next_value.core.registry import GeneratorRegistry
from modules.next_value.core.selectors import all_fields
from modules.next_value.schema import schema_of
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


class DispatchEngine:
    """
    Per-create-operation dispatcher.

    Usage:
        engine = DispatchEngine(registry, key="NEXT")
        errors = engine.dispatch([user1, user2])
        if errors:
            raise GenerationError(errors)
    """

    def __init__(
        self,
        registry: GeneratorRegistry,
        key: str,
        fields: FieldSelector = all_fields,
        resolve_schema: SchemaResolver = schema_of,
    ):
        """
        Initialize dispatch engine.

        Args:
            registry: Generators by tag
            key: Tag key to read from field tag settings (upper-case)
            fields: Selector of the fields to consider per entity
            resolve_schema: Returns the schema of an entity, None if unmanaged
        """
        self.registry = registry
        self.key = key
        self.fields = fields
        self.resolve_schema = resolve_schema

    def dispatch(self, entities: Any) -> List[NextValueException]:
        """
        Generate values for a single entity or an ordered collection.

        A list or tuple is processed element by element, in order. The first
        element that is not a managed record stops the whole batch: it and
        the elements after it are left untouched, without an error.

        Args:
            entities: Entity instance, list/tuple of instances, or None

        Returns:
            Errors collected for the whole operation (empty on success)
        """
        errors: List[NextValueException] = []

        if entities is None:
            return errors

        if isinstance(entities, (list, tuple)):
            for index, entity in enumerate(entities):
                schema = self.resolve_schema(entity)
                if schema is None:
                    logger.debug(
                        f"Element {index} ({type(entity).__name__}) is not a managed record, "
                        f"stopping batch of {len(entities)}"
                    )
                    return errors
                self._dispatch_entity(schema, entity, errors)
            return errors

        schema = self.resolve_schema(entities)
        if schema is None:
            logger.debug(f"No schema for {type(entities).__name__}, nothing to generate")
            return errors

        self._dispatch_entity(schema, entities, errors)
        return errors

    def generate(self, entity: Any, schema: Optional[ModelSchema] = None) -> List[NextValueException]:
        """
        Generate values for one entity with a known schema.

        Args:
            entity: Entity instance
            schema: Schema of the entity; resolved when omitted

        Returns:
            Errors collected for this entity
        """
        errors: List[NextValueException] = []
        if schema is None:
            schema = self.resolve_schema(entity)
        if schema is not None:
            self._dispatch_entity(schema, entity, errors)
        return errors

    def _dispatch_entity(self, schema: ModelSchema, entity: Any, errors: List[NextValueException]) -> None:
        for field in self.fields(schema):
            if field is None:
                continue

            tag = field.tag_settings.get(self.key)
            if tag is None:
                continue

            fn = self.registry.lookup(tag)
            if fn is None:
                logger.debug(f"{schema.name}.{field.name}: no generator for tag '{tag}'")
                errors.append(UnregisteredTagError(tag, field=field.name))
                continue

            _, zero = field.value_of(entity)

            try:
                value = fn(field.has_default_value, zero)
            except SkipField:
                logger.debug(f"{schema.name}.{field.name}: generator '{tag}' skipped")
                continue
            except Exception as e:
                logger.debug(f"{schema.name}.{field.name}: generator '{tag}' failed: {e}")
                errors.append(InvokeFuncError(tag, e, field=field.name))
                continue

            # Best effort: a value the field refuses is dropped
            try:
                field.set(entity, value)
            except Exception as e:
                logger.debug(f"{schema.name}.{field.name}: could not set generated value: {e}")
                continue

            logger.debug(f"{schema.name}.{field.name}: set by generator '{tag}'")
