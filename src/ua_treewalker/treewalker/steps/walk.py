"""
Navigation Steps.

Contains the steps that move through the parsed user-agent:
- StepDown: into the children with a given name
- StepUp: to the parent
- StepNext / StepPrev: to the neighbouring non-separator sibling

Navigation always forwards an empty value: a carried value belongs to the
node that was left.
"""

from typing import Iterator, Optional

from ...tree import ParseTree
from ..ranges import ALL, Range
from .base import Step, WalkResult

WILDCARD = "*"


class StepDown(Step):
    """
    Descend into the named children whose ordinal lies in a range.

    The wildcard name ``*`` selects every child, separators included.

    Syntax: .(1-2)product

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, number_range: Range = ALL, name: str = WILDCARD):
        super().__init__()
        self.number_range = number_range
        self.name = name

    def _matches(self, child: ParseTree) -> bool:
        return self.name == WILDCARD or child.name == self.name

    def get_children(self, tree: ParseTree) -> Iterator[ParseTree]:
        """Yield the children selected by name and range, left to right."""
        index = 0
        for child in tree.children:
            if not self._matches(child):
                continue
            index += 1
            if not self.number_range.is_unbounded and index > self.number_range.last:
                return
            if self.number_range.contains(index):
                yield child

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        for child in self.get_children(tree):
            child_result = self.walk_next_step(child, None)
            if child_result is not None:
                return child_result
        return None

    def __str__(self) -> str:
        return f"Down({self.number_range}{self.name})"


class StepUp(Step):
    """
    Ascend to the parent node.

    Syntax: ^

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        parent = tree.parent
        if parent is None:
            return None
        return self.walk_next_step(parent, None)

    def __str__(self) -> str:
        return "Up()"


class StepNext(Step):
    """
    Move to the next sibling that is not a separator.

    Syntax: >

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def _next(self, tree: ParseTree) -> Optional[ParseTree]:
        parent = tree.parent
        if parent is None:
            return None

        found_current = False
        for child in parent.children:
            if found_current:
                if self.tree_is_separator(child):
                    continue
                return child
            if child is tree:
                found_current = True
        return None  # There is no next

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        next_tree = self._next(tree)
        if next_tree is None:
            return None
        return self.walk_next_step(next_tree, None)

    def __str__(self) -> str:
        return "Next()"


class StepPrev(Step):
    """
    Move to the previous sibling that is not a separator.

    Syntax: <

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def _prev(self, tree: ParseTree) -> Optional[ParseTree]:
        parent = tree.parent
        if parent is None:
            return None

        prev_child = None
        for child in parent.children:
            if child is tree:
                return prev_child
            if not self.tree_is_separator(child):
                prev_child = child
        return None  # There is no previous

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        prev_tree = self._prev(tree)
        if prev_tree is None:
            return None
        return self.walk_next_step(prev_tree, None)

    def __str__(self) -> str:
        return "Prev()"
