"""
Matcher path language.

Matchers describe where in a parsed user-agent a value lives and how to
transform it. The grammar lives in ``grammar.lark``; ``parse_matcher``
produces the Lark tree the walk list compiler consumes.

Example::

    from ua_treewalker.matcher import parse_matcher, pretty_print_tree

    result = parse_matcher('CleanVersion[agent.(1)product.(1)version]')
    if result.success:
        print(pretty_print_tree(result.tree))
"""

from .parser import (
    # Classes
    MatcherParser,
    ParseResult,
    ParseError,
    # Functions
    parse_matcher,
    unquote_value,
    # Utilities
    matcher_to_source,
    pretty_print_tree,
    get_lookup_names,
)

__all__ = [
    "MatcherParser",
    "ParseResult",
    "ParseError",
    "parse_matcher",
    "unquote_value",
    "matcher_to_source",
    "pretty_print_tree",
    "get_lookup_names",
]
