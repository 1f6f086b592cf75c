"""Typed exceptions raised by the anonymous data engine."""

from typing import Any, Optional


class AnonymousDataError(Exception):
    """Base class for anonymous data errors."""


class UnsupportedTypeError(AnonymousDataError):
    """Raised when no factory, customization or synthesizer can produce a type."""

    def __init__(self, type_: Any, cause: Optional[BaseException] = None):
        super().__init__(f"Unable to create instance of specified type {describe_type(type_)}.")
        self.type_ = type_
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class PopulationFailureError(AnonymousDataError):
    """Raised when constructing an instance or assigning one of its members fails."""

    def __init__(self, type_: Any, member: Optional[str], cause: Optional[BaseException] = None):
        target = describe_type(type_)
        if member:
            target = f"{target}.{member}"
        message = f"Unable to populate {target}."
        if cause is not None:
            message = f"{message} {type(cause).__name__}: {cause}"
        super().__init__(message)
        self.type_ = type_
        self.member = member
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


def describe_type(type_: Any) -> str:
    """Readable name for a type descriptor."""
    if isinstance(type_, type):
        return f"{type_.__module__}.{type_.__qualname__}"
    return repr(type_)
