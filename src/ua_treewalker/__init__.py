"""
UA Tree Walker - matcher engine for parsed user-agents

Compiles matcher expressions written in a small path language into walk
lists and evaluates them against the parse tree of a user-agent.
"""

__version__ = "0.1.0"

from .matcher import parse_matcher, ParseResult, ParseError
from .tree import ParseTree, UserAgentNode
from .treewalker import Range, Step, WalkList, WalkListBuilder, WalkResult
from .walker_exceptions import (
    WalkerError,
    InvalidConfigurationError,
    MatcherSyntaxError,
    WalkListLinkError,
)

__all__ = [
    "parse_matcher",
    "ParseResult",
    "ParseError",
    "ParseTree",
    "UserAgentNode",
    "Range",
    "Step",
    "WalkList",
    "WalkListBuilder",
    "WalkResult",
    "WalkerError",
    "InvalidConfigurationError",
    "MatcherSyntaxError",
    "WalkListLinkError",
]
