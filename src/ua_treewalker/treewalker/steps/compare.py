"""
Compare Steps.

Filters that let the walk continue only when the effective string passes a
test. Equals and NotEquals compare exactly; StartsWith, EndsWith, Contains
and IsInSet ignore case. IsNull inverts the outcome of the rest of the walk.
"""

from abc import abstractmethod
from typing import AbstractSet, Optional

from ...tree import ParseTree
from .base import Step, WalkResult


class _CompareStep(Step):
    """Shared skeleton: test the effective string, forward it when it passes."""

    @abstractmethod
    def matches(self, actual_value: str) -> bool:
        """Test the effective string."""

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        if self.matches(actual_value):
            return self.walk_next_step(tree, actual_value)
        return None


class StepEquals(_CompareStep):
    """
    Continue only when the value equals the literal.

    Syntax: ="Chrome"

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, desired_value: str):
        super().__init__()
        self.desired_value = desired_value

    def matches(self, actual_value: str) -> bool:
        return actual_value == self.desired_value

    def __str__(self) -> str:
        return f"Equals({self.desired_value})"


class StepNotEquals(_CompareStep):
    """
    Continue only when the value differs from the literal.

    Syntax: !="Chrome"

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, desired_value: str):
        super().__init__()
        self.desired_value = desired_value

    def matches(self, actual_value: str) -> bool:
        return actual_value != self.desired_value

    def __str__(self) -> str:
        return f"NotEquals({self.desired_value})"


class StepStartsWith(_CompareStep):
    """
    Syntax: {"Mozilla"

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, desired_value: str):
        super().__init__()
        self.desired_value = desired_value.lower()

    def matches(self, actual_value: str) -> bool:
        return actual_value.lower().startswith(self.desired_value)

    def __str__(self) -> str:
        return f"StartsWith({self.desired_value})"


class StepEndsWith(_CompareStep):
    """
    Syntax: }"Build"

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, desired_value: str):
        super().__init__()
        self.desired_value = desired_value.lower()

    def matches(self, actual_value: str) -> bool:
        return actual_value.lower().endswith(self.desired_value)

    def __str__(self) -> str:
        return f"EndsWith({self.desired_value})"


class StepContains(_CompareStep):
    """
    Syntax: ~"Android"

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, desired_value: str):
        super().__init__()
        self.desired_value = desired_value.lower()

    def matches(self, actual_value: str) -> bool:
        return self.desired_value in actual_value.lower()

    def __str__(self) -> str:
        return f"Contains({self.desired_value})"


class StepIsInSet(_CompareStep):
    """
    Continue only when the lowercased value is in a named lookup set.

    Syntax: ?MobileBrands

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, lookup_set_name: str, lookup_set: AbstractSet[str]):
        super().__init__()
        self.lookup_set_name = lookup_set_name
        self.lookup_set = lookup_set

    def matches(self, actual_value: str) -> bool:
        return actual_value.lower() in self.lookup_set

    def __str__(self) -> str:
        return f"IsInSet(@{self.lookup_set_name})"


class StepIsNull(Step):
    """
    Succeed exactly when the rest of the walk fails.

    The (node, value) this step received is the result on success; whatever
    the rest of the walk would have produced is discarded.

    Syntax: IsNull[agent.(1)product.(1)comments]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.walk_next_step(tree, value)
        if actual_value is None:
            return WalkResult(tree, value)
        return None

    def __str__(self) -> str:
        return "IsNull()"
