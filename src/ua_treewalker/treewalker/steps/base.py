"""
Step base class and walk result.

A step is one instruction of a walk list. It receives the current tree node
and the value computed so far, does its navigation, comparison or
transformation, and hands the outcome to the next step. The result of the
last step travels back up the chain unchanged; a miss is ``None``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...logging_config import get_trace_logger
from ...tree import ParseTree
from ...walker_exceptions import WalkListLinkError


@dataclass(frozen=True)
class WalkResult:
    """
    Outcome of a successful walk.

    ``value`` is None when no step produced an explicit value; the node
    text is the value in that case.

    ::: This is-in-layer Domain-Layer.
    ::: This is a value-object.
    ::: This is stateless.
    """
    tree: ParseTree
    value: Optional[str]

    def get_value(self) -> str:
        """The explicit value, or the node text when there is none."""
        return self.tree.text if self.value is None else self.value

    def __str__(self) -> str:
        return f"WalkResult{{tree={self.tree.text}, value='{self.value}'}}"


class Step(ABC):
    """
    Abstract base for all walk list steps.

    Subclasses implement ``walk`` and call ``walk_next_step`` exactly once
    for every (node, value) pair they produce.

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self):
        self._position = -1
        self._next_step: Optional["Step"] = None
        self._linked = False
        self._verbose = False

    # --------------------------------------------------------
    # Linking (done once by the walk list)
    # --------------------------------------------------------

    def set_next_step(self, position: int, next_step: Optional["Step"], verbose: bool = False) -> None:
        """Assign position, forward link and verbosity. Allowed only once."""
        if self._linked:
            raise WalkListLinkError(
                f"Step {self} at position {self._position} is already linked"
            )
        self._position = position
        self._next_step = next_step
        self._verbose = verbose
        self._linked = True

    @property
    def position(self) -> int:
        return self._position

    @property
    def next_step(self) -> Optional["Step"]:
        return self._next_step

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def is_linked(self) -> bool:
        return self._linked

    # --------------------------------------------------------
    # Walking
    # --------------------------------------------------------

    @abstractmethod
    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        """Apply this step and everything after it."""

    def walk_next_step(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        """Forward (tree, value) to the next step, or finish the walk."""
        if self._next_step is None:
            return WalkResult(tree, value)

        if self._verbose:
            logger = get_trace_logger()
            prefix = "  " * (self._position + 1)
            logger.info("%sTree: >>>%s<<<", prefix, tree.text)
            logger.info("%sEnter step(%d): %s", prefix, self._next_step.position, self._next_step)
            result = self._next_step.walk(tree, value)
            logger.info(
                "%sLeave step(%d) (%s): %s",
                prefix, self._next_step.position, "-" if result is None else "+", self._next_step
            )
            return result

        return self._next_step.walk(tree, value)

    # --------------------------------------------------------
    # Helpers
    # --------------------------------------------------------

    @staticmethod
    def get_actual_value(tree: ParseTree, value: Optional[str]) -> str:
        """The effective string: the carried value, else the node text."""
        if value is None:
            return tree.text
        return value

    @staticmethod
    def tree_is_separator(tree: Optional[ParseTree]) -> bool:
        return tree is not None and tree.is_separator()

    def __repr__(self) -> str:
        return str(self)
