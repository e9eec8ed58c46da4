"""Number and word ranges used by Down and WordRange steps."""

import re
from dataclasses import dataclass
from typing import Optional

from lark import Tree

from ..walker_exceptions import InvalidConfigurationError

# Marks a range without upper bound
UNBOUNDED = -1

_WORD = re.compile(r"\S+")


@dataclass(frozen=True)
class Range:
    """
    Inclusive, one-based range ``first..last``.

    ``last == UNBOUNDED`` means "up to the end".

    ::: This is-in-layer Domain-Layer.
    ::: This is a value-object.
    ::: This is stateless.
    """
    first: int
    last: int

    def __post_init__(self):
        if self.first < 1:
            raise InvalidConfigurationError(f"Range must start at 1 or higher, got {self.first}")
        if self.last != UNBOUNDED and self.last < self.first:
            raise InvalidConfigurationError(
                f"Range end {self.last} lies before its start {self.first}"
            )

    @property
    def is_unbounded(self) -> bool:
        return self.last == UNBOUNDED

    def contains(self, index: int) -> bool:
        """Check whether a one-based index falls inside this range."""
        if index < self.first:
            return False
        return self.is_unbounded or index <= self.last

    def __str__(self) -> str:
        last = "" if self.is_unbounded else str(self.last)
        return f"[{self.first}:{last}]"


ALL = Range(1, UNBOUNDED)


def get_word_range(value: str, word_range: Range) -> Optional[str]:
    """
    Select words ``first..last`` of a value.

    Words are separated by runs of whitespace; the whitespace between the
    selected words is kept as it was.

    Args:
        value: The text to take the words from
        word_range: One-based inclusive word range

    Returns:
        The selected words, or None if the value has fewer than
        ``word_range.first`` words
    """
    words = list(_WORD.finditer(value))
    if len(words) < word_range.first:
        return None
    last = len(words) if word_range.is_unbounded else min(word_range.last, len(words))
    return value[words[word_range.first - 1].start():words[last - 1].end()]


# ============================================================
# PARSE TREE CONVERSION
# ============================================================

def number_range_from_tree(node: Optional[Tree]) -> Range:
    """
    Convert a ``number_range`` parse node into a Range.

    A step without a number range (``.product``) and the wildcard range
    (``.(*)product``) both select every matching child.
    """
    if node is None or node.data == "number_range_all":
        return ALL
    numbers = [int(str(child)) for child in node.children]
    if node.data == "number_range_start_to_end":
        return Range(numbers[0], numbers[1])
    if node.data == "number_range_single_value":
        return Range(numbers[0], numbers[0])
    raise InvalidConfigurationError(f"Unknown number range '{node.data}'")


def word_range_from_tree(node: Tree) -> Range:
    """Convert a ``word_range`` parse node into a Range."""
    numbers = [int(str(child)) for child in node.children]
    if node.data == "word_range_start_to_end":
        return Range(numbers[0], numbers[1])
    if node.data == "word_range_first_words":
        return Range(1, numbers[0])
    if node.data == "word_range_last_words":
        return Range(numbers[0], UNBOUNDED)
    if node.data == "word_range_single_word":
        return Range(numbers[0], numbers[0])
    raise InvalidConfigurationError(f"Unknown word range '{node.data}'")
