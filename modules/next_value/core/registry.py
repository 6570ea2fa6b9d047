"""
Registry of generator functions keyed by tag.

Unlike the module-level registries used for pluggable classes, a generator
registry belongs to one plugin instance: two plugins may map the same tag to
different generators.
"""

from typing import Dict, List, Optional

from modules.next_value.core.interfaces import GeneratorFunc
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


class GeneratorRegistry:
    """
    Mapping from tag value to generator function.

    Registration is expected to happen during setup. The registry is never
    mutated by dispatch, but it has no locking either: do not register while
    another thread is flushing through the same plugin.
    """

    def __init__(self):
        self._registry: Dict[str, GeneratorFunc] = {}

    def register(self, tag: str, fn: GeneratorFunc) -> None:
        """
        Register the generator for a tag. The last registration wins.

        Args:
            tag: Tag value as written in the column info (e.g. "snowflake")
            fn: Callable taking (has_default_value, is_zero)

        Raises:
            TypeError: If fn is not callable
        """
        if not callable(fn):
            raise TypeError(f"Generator for tag '{tag}' must be callable, got {type(fn).__name__}")

        if tag in self._registry:
            logger.warning(f"Generator '{tag}' already registered, overwriting")

        self._registry[tag] = fn
        logger.info(f"Registered generator: {tag}")

    def unregister(self, tag: str) -> bool:
        """Remove a generator. Returns False if the tag was not registered."""
        removed = self._registry.pop(tag, None) is not None
        if removed:
            logger.info(f"Unregistered generator: {tag}")
        return removed

    def lookup(self, tag: str) -> Optional[GeneratorFunc]:
        """Get the generator for a tag, or None"""
        return self._registry.get(tag)

    def is_registered(self, tag: str) -> bool:
        """Check if a tag has a generator"""
        return tag in self._registry

    def list_tags(self) -> List[str]:
        """Get list of registered tags"""
        return list(self._registry.keys())

    def __contains__(self, tag: str) -> bool:
        return self.is_registered(tag)

    def __len__(self) -> int:
        return len(self._registry)
