"""
NextPlugin - SQLAlchemy session plugin setting next values before INSERT.

Configure first, then install:

    plugin = NextPlugin()
    plugin.register("snowflake", snowflake_next)
    plugin.set_fields(prioritized_primary_field)   # optional
    plugin.initialize(SessionLocal)                # sessionmaker, Session, AsyncSession, ...

Once installed, the plugin may be shared by concurrent sessions as long as
it is not reconfigured; register/set_key/set_fields are not synchronized.
"""

from typing import Any, List, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session

from modules.next_value.core.exceptions import (
    ConfigurationException,
    GenerationError,
    NextValueException,
)
from modules.next_value.core.interfaces import FieldSelector, GeneratorFunc
from modules.next_value.core.registry import GeneratorRegistry
from modules.next_value.engine import DispatchEngine
from shared.utils.config import settings
from shared.utils.logger import log_error, setup_logger

logger = setup_logger(__name__)

FLUSH_EVENT = "before_flush"


class NextPlugin:
    """
    Registry of generators plus the flush hook using them.

    Only objects pending insertion (Session.new) are processed; updates and
    deletes never reach the generators.
    """

    name = "next"
    callback_name = "next:before_create"

    def __init__(self, key: Optional[str] = None, raise_on_error: Optional[bool] = None):
        """
        Initialize plugin.

        Args:
            key: Tag key to look for in column info (default: NEXT_TAG_KEY setting)
            raise_on_error: Abort the flush on generation errors
                            (default: NEXT_RAISE_ON_ERROR setting)
        """
        self.registry = GeneratorRegistry()
        self.engine = DispatchEngine(self.registry, key=settings.tag_key)
        if key is not None:
            self.set_key(key)

        self.raise_on_error = settings.NEXT_RAISE_ON_ERROR if raise_on_error is None else raise_on_error

    # ==========================================================================
    # CONFIGURATION
    # ==========================================================================

    @property
    def key(self) -> str:
        return self.engine.key

    def set_key(self, key: str) -> None:
        """
        Set the key searched in column info.

        Keys are case-insensitive. Changing the key only affects flushes
        that start afterwards.

        Raises:
            ConfigurationException: If key is empty
        """
        if not key:
            raise ConfigurationException("Tag key must be a non-empty string")
        self.engine.key = key.upper()
        logger.info(f"Tag key set to: {self.engine.key}")

    def set_fields(self, fn: FieldSelector) -> None:
        """
        Customize the scope of fields that may get a next value.
        Default scope is all fields in the schema.

        Example, only the prioritized primary field:

            plugin.set_fields(prioritized_primary_field)
        """
        if not callable(fn):
            raise ConfigurationException(f"Field selector must be callable, got {type(fn).__name__}")
        self.engine.fields = fn

    def register(self, tag: str, fn: GeneratorFunc) -> None:
        """Register the generator for fields tagged with tag."""
        self.registry.register(tag, fn)

    # ==========================================================================
    # INSTALLATION
    # ==========================================================================

    def initialize(self, target: Any) -> None:
        """
        Install the before-create hook on a session target.

        Args:
            target: Session instance or class, sessionmaker, AsyncSession
                    instance or class, or async_sessionmaker
        """
        target = self._resolve_target(target)

        if event.contains(target, FLUSH_EVENT, self._before_flush):
            logger.debug(f"{self.callback_name} already installed on {target!r}")
            return

        event.listen(target, FLUSH_EVENT, self._before_flush)
        logger.info(f"Installed {self.callback_name} on {target!r}")

    def remove(self, target: Any) -> None:
        """Uninstall the hook from a target previously passed to initialize()."""
        target = self._resolve_target(target)

        if event.contains(target, FLUSH_EVENT, self._before_flush):
            event.remove(target, FLUSH_EVENT, self._before_flush)
            logger.info(f"Removed {self.callback_name} from {target!r}")

    @staticmethod
    def _resolve_target(target: Any) -> Any:
        # Events are always dispatched by the sync session behind an AsyncSession
        if isinstance(target, AsyncSession):
            return target.sync_session
        if isinstance(target, type) and issubclass(target, AsyncSession):
            return target.sync_session_class
        if isinstance(target, async_sessionmaker):
            return target.kw.get("sync_session_class") or target.class_.sync_session_class
        return target

    # ==========================================================================
    # DISPATCH
    # ==========================================================================

    def before_create(self, entities: Any) -> List[NextValueException]:
        """
        Generate values for entities about to be created.

        Args:
            entities: Entity, or list/tuple of entities

        Returns:
            Collected errors, empty on success
        """
        return self.engine.dispatch(entities)

    def apply(self, entities: Any) -> None:
        """
        Same as before_create() but raise collected errors.

        Raises:
            GenerationError: If any field failed
        """
        errors = self.before_create(entities)
        if errors:
            raise GenerationError(errors)

    def _before_flush(self, session: Session, flush_context: Any, instances: Any) -> None:
        # instances (deprecated flush(objects) subset) is ignored: every pending
        # object of the session is processed
        pending = list(session.new)
        if not pending:
            return

        errors = self.before_create(pending)
        if not errors:
            return

        if self.raise_on_error:
            logger.warning(
                f"{len(errors)} generation error(s) for {len(pending)} new object(s), aborting flush"
            )
            raise GenerationError(errors)

        for error in errors:
            log_error(logger, error, context=self.callback_name)

    def __repr__(self) -> str:
        return f"<NextPlugin(key={self.key}, tags={self.registry.list_tags()})>"
