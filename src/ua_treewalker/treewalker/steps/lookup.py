"""Lookup step: translate the value through a named lookup table."""

from typing import Mapping, Optional

from ...tree import ParseTree
from .base import Step, WalkResult


class StepLookup(Step):
    """
    Replace the value with its entry in a lookup table.

    Lookup tables are keyed on lowercase strings, so the value is
    lowercased before the lookup. Without a match the default is used; with
    no default the walk misses.

    Syntax: LookUp[OperatingSystemName;matcher;"Unknown"]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, lookup_name: str, lookup: Mapping[str, str], default_value: Optional[str] = None):
        super().__init__()
        self.lookup_name = lookup_name
        self.lookup = lookup
        self.default_value = default_value

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        result = self.lookup.get(actual_value.lower())

        if result is None:
            if self.default_value is None:
                return None
            return self.walk_next_step(tree, self.default_value)
        return self.walk_next_step(tree, result)

    def __str__(self) -> str:
        return f"Lookup(@{self.lookup_name} ; default={self.default_value})"
