"""Parse tree capability consumed by the walker."""

from .node import ParseTree, UserAgentNode

__all__ = [
    "ParseTree",
    "UserAgentNode",
]
