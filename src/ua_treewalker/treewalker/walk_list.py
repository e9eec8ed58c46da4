"""
Walk List - compiled matcher.

A matcher expression is compiled into a linear list of steps. The list is
evaluated against a node of a parsed user-agent and yields a WalkResult or
None (a miss).

Hash entry
----------
The start of most matchers (``agent.(1)product.(1)name="Chrome"``) can be
answered with a single hash lookup by the caller: all paths of a parsed
user-agent are indexed up front. The compiler therefore drops every step up
to the first construct such a lookup cannot represent and only keeps the
steps from there on. Callers invoke the walk list on the node where the
dropped prefix ended.

IsNull is the exception: its step is always kept, as it has to run the rest
of the walk to invert it.
"""

import logging
from typing import AbstractSet, Iterator, List, Mapping, Optional, Sequence, Union

from lark import Tree
from lark.visitors import Interpreter

from ..logging_config import get_trace_logger
from ..matcher import matcher_to_source, parse_matcher, unquote_value
from ..tree import ParseTree
from ..walker_exceptions import InvalidConfigurationError, MatcherSyntaxError, WalkListLinkError
from .ranges import number_range_from_tree, word_range_from_tree
from .steps import (
    Step,
    WalkResult,
    StepDown,
    StepUp,
    StepNext,
    StepPrev,
    StepEquals,
    StepNotEquals,
    StepStartsWith,
    StepEndsWith,
    StepContains,
    StepIsInSet,
    StepIsNull,
    StepFixedString,
    StepWordRange,
    StepConcat,
    StepConcatPrefix,
    StepConcatPostfix,
    StepCleanVersion,
    StepNormalizeBrand,
    StepBackToFull,
    StepLookup,
)

logger = logging.getLogger(__name__)

Lookups = Mapping[str, Mapping[str, str]]
LookupSets = Mapping[str, AbstractSet[str]]


# ============================================================
# COMPILER
# ============================================================

class WalkListBuilder(Interpreter):
    """
    Compiles a parsed matcher into a list of steps.

    Each grammar alias has a hook below. Matcher functions (CleanVersion,
    LookUp, ...) visit their inner matcher first and add their own step
    afterwards; path steps add their step and then visit the next one.

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a abstract-syntax-tree-transformer.
    ::: This depends-on `ua_treewalker.treewalker.steps`.
    """

    def __init__(self, lookups: Lookups, lookup_sets: LookupSets):
        self.lookups = lookups
        self.lookup_sets = lookup_sets
        self.steps: List[Step] = []
        # Steps before this point are covered by the caller's hash lookup
        self.found_hash_entry_point = False

    def build(self, tree: Tree) -> List[Step]:
        """Visit the parse tree and return the steps it compiles to."""
        self.visit(tree)
        return self.steps

    def _from_here_it_cannot_be_in_hash_map_anymore(self) -> None:
        self.found_hash_entry_point = True

    def _add(self, step: Step) -> None:
        if self.found_hash_entry_point:
            self.steps.append(step)

    def _visit_next(self, next_step: Optional[Tree]) -> None:
        if next_step is not None:
            self.visit(next_step)

    def __default__(self, tree: Tree):
        raise WalkListLinkError(f"Unsupported matcher construct '{tree.data}'")

    def start(self, tree: Tree) -> None:
        self.visit(tree.children[0])

    # --------------------------------------------------------
    # Matchers
    # --------------------------------------------------------

    def matcher_path(self, tree: Tree) -> None:
        self.visit(tree.children[0])

    def matcher_path_lookup(self, tree: Tree) -> None:
        lookup_token, matcher, default_token = tree.children
        self.visit(matcher)

        self._from_here_it_cannot_be_in_hash_map_anymore()

        lookup_name = str(lookup_token)
        lookup = self.lookups.get(lookup_name)
        if lookup is None:
            raise InvalidConfigurationError(f'Missing lookup "{lookup_name}"', name=lookup_name)

        default_value = None
        if default_token is not None:
            default_value = unquote_value(default_token)

        self._add(StepLookup(lookup_name, lookup, default_value))

    def matcher_clean_version(self, tree: Tree) -> None:
        self.visit(tree.children[0])
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepCleanVersion())

    def matcher_normalize_brand(self, tree: Tree) -> None:
        self.visit(tree.children[0])
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepNormalizeBrand())

    def matcher_concat(self, tree: Tree) -> None:
        prefix, matcher, postfix = tree.children
        self.visit(matcher)
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepConcat(unquote_value(prefix), unquote_value(postfix)))

    def matcher_concat_prefix(self, tree: Tree) -> None:
        prefix, matcher = tree.children
        self.visit(matcher)
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepConcatPrefix(unquote_value(prefix)))

    def matcher_concat_postfix(self, tree: Tree) -> None:
        matcher, postfix = tree.children
        self.visit(matcher)
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepConcatPostfix(unquote_value(postfix)))

    def matcher_word_range(self, tree: Tree) -> None:
        matcher, word_range = tree.children
        self.visit(matcher)
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepWordRange(word_range_from_tree(word_range)))

    def matcher_path_is_null(self, tree: Tree) -> None:
        # Always added, whatever the hash entry state
        self.steps.append(StepIsNull())
        self.visit(tree.children[0])

    # --------------------------------------------------------
    # Base paths
    # --------------------------------------------------------

    def path_variable(self, tree: Tree) -> None:
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._visit_next(tree.children[1])

    def path_fixed_value(self, tree: Tree) -> None:
        self._add(StepFixedString(unquote_value(tree.children[0])))

    def path_walk(self, tree: Tree) -> None:
        self._visit_next(tree.children[0])

    # --------------------------------------------------------
    # Path steps
    # --------------------------------------------------------

    def step_down(self, tree: Tree) -> None:
        number_range, name, next_step = tree.children
        self._add(StepDown(number_range_from_tree(number_range), str(name)))
        self._visit_next(next_step)

    def step_up(self, tree: Tree) -> None:
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepUp())
        self._visit_next(tree.children[0])

    def step_next(self, tree: Tree) -> None:
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepNext())
        self._visit_next(tree.children[0])

    def step_prev(self, tree: Tree) -> None:
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepPrev())
        self._visit_next(tree.children[0])

    def step_equals_value(self, tree: Tree) -> None:
        value, next_step = tree.children
        # The value itself is still part of the hash lookup
        self._add(StepEquals(unquote_value(value)))
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._visit_next(next_step)

    def step_not_equals_value(self, tree: Tree) -> None:
        value, next_step = tree.children
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepNotEquals(unquote_value(value)))
        self._visit_next(next_step)

    def step_starts_with_value(self, tree: Tree) -> None:
        value, next_step = tree.children
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepStartsWith(unquote_value(value)))
        self._visit_next(next_step)

    def step_ends_with_value(self, tree: Tree) -> None:
        value, next_step = tree.children
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepEndsWith(unquote_value(value)))
        self._visit_next(next_step)

    def step_contains_value(self, tree: Tree) -> None:
        value, next_step = tree.children
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepContains(unquote_value(value)))
        self._visit_next(next_step)

    def step_is_in_set(self, tree: Tree) -> None:
        set_token, next_step = tree.children
        self._from_here_it_cannot_be_in_hash_map_anymore()

        lookup_set_name = str(set_token)
        lookup_set = self.lookup_sets.get(lookup_set_name)
        if lookup_set is None:
            lookup = self.lookups.get(lookup_set_name)
            if lookup is not None:
                lookup_set = lookup.keys()
        if lookup_set is None:
            raise InvalidConfigurationError(
                f'Missing lookupSet "{lookup_set_name}"', name=lookup_set_name
            )

        self._add(StepIsInSet(lookup_set_name, lookup_set))
        self._visit_next(next_step)

    def step_word_range(self, tree: Tree) -> None:
        word_range, next_step = tree.children
        self._from_here_it_cannot_be_in_hash_map_anymore()
        self._add(StepWordRange(word_range_from_tree(word_range)))
        self._visit_next(next_step)

    def step_back_to_full(self, tree: Tree) -> None:
        self._add(StepBackToFull())
        self._visit_next(tree.children[0])


# ============================================================
# RUNTIME
# ============================================================

class WalkList:
    """
    A compiled matcher.

    Usage:
        walk_list = WalkList('agent.(1)product.(1)name="Chrome"^.(1)version',
                             lookups, lookup_sets)
        result = walk_list.walk(name_node, "Chrome")
        if result is not None:
            print(result.get_value())

    The list is immutable once built and can be shared between threads.
    Lookups and lookup sets are borrowed, not copied.

    ::: This is-in-layer Domain-Layer.
    ::: This is a walk-list.
    ::: This is immutable.
    """

    def __init__(
        self,
        required_pattern: Union[Tree, str],
        lookups: Optional[Lookups] = None,
        lookup_sets: Optional[LookupSets] = None,
        verbose: bool = False,
    ):
        if isinstance(required_pattern, str):
            result = parse_matcher(required_pattern)
            if not result.success:
                raise MatcherSyntaxError(
                    f"Invalid matcher {required_pattern!r}: "
                    + "; ".join(error.message for error in result.errors),
                    errors=result.errors,
                )
            tree = result.tree
            source = required_pattern
        else:
            tree = required_pattern
            source = None

        lookups = lookups if lookups is not None else {}
        lookup_sets = lookup_sets if lookup_sets is not None else {}
        steps = WalkListBuilder(lookups, lookup_sets).build(tree)
        self._setup(steps, lookups, lookup_sets, verbose)

        logger.debug("Compiled %d steps:%s", len(self._steps), self)
        if verbose:
            if source is None:
                source = matcher_to_source(tree)
            trace = get_trace_logger()
            trace.info("------------------------------------")
            trace.info("Required: %s", source)
            for i, step in enumerate(self._steps, start=1):
                trace.info("%d: %s", i, step)

    @classmethod
    def from_steps(
        cls,
        steps: Sequence[Step],
        lookups: Optional[Lookups] = None,
        lookup_sets: Optional[LookupSets] = None,
        verbose: bool = False,
    ) -> "WalkList":
        """
        Build a walk list from explicit, not yet linked steps.

        Args:
            steps: Steps in walk order; each step may only be used once
            lookups: Lookups the steps refer to
            lookup_sets: Lookup sets the steps refer to
            verbose: Trace every step entry and exit

        Returns:
            Linked WalkList
        """
        walk_list = cls.__new__(cls)
        walk_list._setup(
            list(steps),
            lookups if lookups is not None else {},
            lookup_sets if lookup_sets is not None else {},
            verbose,
        )
        return walk_list

    def _setup(self, steps: List[Step], lookups: Lookups, lookup_sets: LookupSets, verbose: bool) -> None:
        self._lookups = lookups
        self._lookup_sets = lookup_sets
        self._verbose = verbose
        self._uses_is_null: Optional[bool] = None
        self._link_steps(steps)
        self._steps = tuple(steps)

    def _link_steps(self, steps: List[Step]) -> None:
        next_step = None
        for i in range(len(steps) - 1, -1, -1):
            current = steps[i]
            current.set_next_step(i, next_step, self._verbose)
            next_step = current

    # --------------------------------------------------------
    # Evaluation
    # --------------------------------------------------------

    def walk(self, tree: ParseTree, value: Optional[str] = None) -> Optional[WalkResult]:
        """
        Evaluate the walk list starting at a tree node.

        Args:
            tree: Node where the walk starts
            value: Value known so far, or None to use the node text

        Returns:
            WalkResult on a hit, None on a miss
        """
        if not self._steps:
            return WalkResult(tree, value)

        first_step = self._steps[0]
        if not self._verbose:
            return first_step.walk(tree, value)

        trace = get_trace_logger()
        trace.info("Tree: >>>%s<<<", tree.text)
        trace.info("Enter step: %s", first_step)
        result = first_step.walk(tree, value)
        trace.info("Leave step (%s): %s", "-" if result is None else "+", first_step)
        return result

    # --------------------------------------------------------
    # Inspection
    # --------------------------------------------------------

    def first_step(self) -> Optional[Step]:
        return self._steps[0] if self._steps else None

    def uses_is_null(self) -> bool:
        """Whether the list contains an IsNull step."""
        if self._uses_is_null is None:
            step = self.first_step()
            found = False
            while step is not None:
                if isinstance(step, StepIsNull):
                    found = True
                    break
                step = step.next_step
            self._uses_is_null = found
        return self._uses_is_null

    @property
    def steps(self) -> Sequence[Step]:
        return self._steps

    @property
    def lookups(self) -> Lookups:
        return self._lookups

    @property
    def lookup_sets(self) -> LookupSets:
        return self._lookup_sets

    @property
    def verbose(self) -> bool:
        return self._verbose

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __str__(self) -> str:
        if not self._steps:
            return "Empty"
        return "".join(f" --> {step}" for step in self._steps)


__all__ = [
    "WalkList",
    "WalkListBuilder",
    "WalkResult",
    "Lookups",
    "LookupSets",
]
