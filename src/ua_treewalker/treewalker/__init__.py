"""
Tree walker: compiled matchers and the steps they are made of.

Example::

    from ua_treewalker.treewalker import WalkList

    walk_list = WalkList('LookUp[BrandLookup;agent.(1)product.(1)name;"Unknown"]',
                         lookups={"BrandLookup": {"ff": "Firefox"}})
    result = walk_list.walk(name_node)
"""

from .ranges import (
    Range,
    ALL,
    UNBOUNDED,
    get_word_range,
    number_range_from_tree,
    word_range_from_tree,
)
from .steps import Step, WalkResult
from .walk_list import (
    WalkList,
    WalkListBuilder,
    Lookups,
    LookupSets,
)

__all__ = [
    "Range",
    "ALL",
    "UNBOUNDED",
    "get_word_range",
    "number_range_from_tree",
    "word_range_from_tree",
    "Step",
    "WalkResult",
    "WalkList",
    "WalkListBuilder",
    "Lookups",
    "LookupSets",
]
