"""
Custom exceptions for next-value module.
"""

from typing import List, Optional, Sequence, Type, TypeVar

E = TypeVar("E", bound="NextValueException")


class NextValueException(Exception):
    """Base exception for next-value module."""
    pass


class ConfigurationException(NextValueException):
    """Exception raised for configuration errors."""
    pass


class UnregisteredTagError(NextValueException):
    """A field carries a tag that has no registered generator."""

    def __init__(self, tag: str, field: Optional[str] = None):
        self.tag = tag
        self.field = field
        super().__init__(f"next: unregistered tag {tag}")


class InvokeFuncError(NextValueException):
    """A registered generator raised something other than SkipField."""

    def __init__(self, tag: str, err: BaseException, field: Optional[str] = None):
        self.tag = tag
        self.err = err
        self.field = field
        self.__cause__ = err
        super().__init__(f"next: invoke func {tag}: {err}")

    def unwrap(self) -> BaseException:
        return self.err


class GenerationError(NextValueException):
    """
    All errors collected while preparing one create operation.

    Raised by the flush hook (and NextPlugin.apply) after every entity has
    been processed, so one failing field never hides the others.
    """

    def __init__(self, errors: Sequence[NextValueException]):
        self.errors: List[NextValueException] = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    def find(self, kind: Type[E]) -> Optional[E]:
        """Return the first collected error of the given class, if any."""
        for error in self.errors:
            if isinstance(error, kind):
                return error
        return None
