"""
Value Steps.

Steps that replace or rewrite the value carried along the walk:
- StepFixedString: a literal value
- StepWordRange: a selection of words
- StepConcat / StepConcatPrefix / StepConcatPostfix: add fixed text around the value
- StepCleanVersion: canonical version notation
- StepNormalizeBrand: canonical brand capitalisation
- StepBackToFull: drop the carried value, fall back to the node text
"""

import re
from typing import Optional

from ...tree import ParseTree
from ..ranges import Range, get_word_range
from .base import Step, WalkResult

_DOT_RUNS = re.compile(r"\.{2,}")
_WHITESPACE_RUNS = re.compile(r"\s+")
_WORD = re.compile(r"\S+")


def clean_version(version: str) -> str:
    """
    Canonicalise a version string.

    ``5_1_3`` becomes ``5.1.3``, ``1,2`` becomes ``1.2`` and ``1/2`` becomes
    ``1 2``; repeated dots and whitespace collapse into one.
    """
    result = version
    if "_" in result:
        result = result.replace("_", ".")
    if "/" in result:
        result = result.replace("/", " ")
    if "," in result:
        result = result.replace(", ", ".").replace(",", ".")
    result = _DOT_RUNS.sub(".", result)
    result = _WHITESPACE_RUNS.sub(" ", result)
    return result.strip()


def _normalize_word(match) -> str:
    word = match.group(0)
    if len(word) <= 3 and word.isupper():
        return word
    return word[0].upper() + word[1:].lower()


def normalize_brand(brand: str) -> str:
    """
    Canonicalise the capitalisation of a brand name.

    Every word gets an uppercase first letter and lowercase rest, except
    short all-caps words (``HTC``, ``LG``) which stay as they are.
    """
    return _WORD.sub(_normalize_word, brand)


class StepFixedString(Step):
    """
    Replace the value with a literal.

    Syntax: "Some value"

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, value: str):
        super().__init__()
        self.value = value

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        return self.walk_next_step(tree, self.value)

    def __str__(self) -> str:
        return f"FixedString({self.value})"


class StepWordRange(Step):
    """
    Keep only a range of words of the value.

    Syntax: [2-3]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, word_range: Range):
        super().__init__()
        self.word_range = word_range

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        filtered_value = get_word_range(actual_value, self.word_range)
        if filtered_value is None:
            return None
        return self.walk_next_step(tree, filtered_value)

    def __str__(self) -> str:
        return f"WordRange({self.word_range})"


class StepConcat(Step):
    """
    Syntax: Concat["prefix";matcher;"postfix"]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, prefix: str, postfix: str):
        super().__init__()
        self.prefix = prefix
        self.postfix = postfix

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        return self.walk_next_step(tree, self.prefix + actual_value + self.postfix)

    def __str__(self) -> str:
        return f"Concat({self.prefix};value;{self.postfix})"


class StepConcatPrefix(Step):
    """
    Syntax: Concat["prefix";matcher]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, prefix: str):
        super().__init__()
        self.prefix = prefix

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        return self.walk_next_step(tree, self.prefix + actual_value)

    def __str__(self) -> str:
        return f"ConcatPrefix({self.prefix})"


class StepConcatPostfix(Step):
    """
    Syntax: Concat[matcher;"postfix"]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def __init__(self, postfix: str):
        super().__init__()
        self.postfix = postfix

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        return self.walk_next_step(tree, actual_value + self.postfix)

    def __str__(self) -> str:
        return f"ConcatPostfix({self.postfix})"


class StepCleanVersion(Step):
    """
    Syntax: CleanVersion[matcher]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        return self.walk_next_step(tree, clean_version(actual_value))

    def __str__(self) -> str:
        return "CleanVersion()"


class StepNormalizeBrand(Step):
    """
    Syntax: NormalizeBrand[matcher]

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        actual_value = self.get_actual_value(tree, value)
        return self.walk_next_step(tree, normalize_brand(actual_value))

    def __str__(self) -> str:
        return "NormalizeBrand()"


class StepBackToFull(Step):
    """
    Forget the carried value so later steps see the full node text again.

    Syntax: @

    ::: This is-in-layer Domain-Layer.
    ::: This is a step.
    ::: This is immutable.
    """

    def walk(self, tree: ParseTree, value: Optional[str]) -> Optional[WalkResult]:
        return self.walk_next_step(tree, None)

    def __str__(self) -> str:
        return "BackToFull()"
