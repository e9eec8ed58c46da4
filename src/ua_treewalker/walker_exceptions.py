"""
Tree Walker Exception Hierarchy

Contains all exception classes raised while compiling walk lists.
A miss during a walk is never an exception; it is a ``None`` result.
"""

from typing import List, Optional


class WalkerError(Exception):
    """
    Base exception for all tree walker operations.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


class InvalidConfigurationError(WalkerError):
    """
    Raised when a matcher cannot be compiled against the supplied lookups.

    The offending lookup (or lookup set) name is kept verbatim in ``name``.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class MatcherSyntaxError(InvalidConfigurationError):
    """
    Raised when matcher source text handed to a WalkList does not parse.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """

    def __init__(self, message: str, errors: Optional[List] = None):
        super().__init__(message)
        self.errors = errors or []


class WalkListLinkError(WalkerError):
    """
    Raised on a broken walk list invariant.

    This always indicates a bug in the compiler, e.g. a step that gets
    linked twice or a grammar rule the compiler does not know.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


__all__ = [
    "WalkerError",
    "InvalidConfigurationError",
    "MatcherSyntaxError",
    "WalkListLinkError",
]
