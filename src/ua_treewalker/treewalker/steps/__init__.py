"""
Walk List Step Classes.

Step categories:
- base: Step, WalkResult
- walk: StepDown, StepUp, StepNext, StepPrev
- compare: StepEquals, StepNotEquals, StepStartsWith, StepEndsWith,
  StepContains, StepIsInSet, StepIsNull
- value: StepFixedString, StepWordRange, StepConcat, StepConcatPrefix,
  StepConcatPostfix, StepCleanVersion, StepNormalizeBrand, StepBackToFull
- lookup: StepLookup
"""

from .base import (
    Step,
    WalkResult,
)
from .walk import (
    StepDown,
    StepUp,
    StepNext,
    StepPrev,
)
from .compare import (
    StepEquals,
    StepNotEquals,
    StepStartsWith,
    StepEndsWith,
    StepContains,
    StepIsInSet,
    StepIsNull,
)
from .value import (
    StepFixedString,
    StepWordRange,
    StepConcat,
    StepConcatPrefix,
    StepConcatPostfix,
    StepCleanVersion,
    StepNormalizeBrand,
    StepBackToFull,
    clean_version,
    normalize_brand,
)
from .lookup import (
    StepLookup,
)

__all__ = [
    # Base
    "Step",
    "WalkResult",
    # Walk steps
    "StepDown",
    "StepUp",
    "StepNext",
    "StepPrev",
    # Compare steps
    "StepEquals",
    "StepNotEquals",
    "StepStartsWith",
    "StepEndsWith",
    "StepContains",
    "StepIsInSet",
    "StepIsNull",
    # Value steps
    "StepFixedString",
    "StepWordRange",
    "StepConcat",
    "StepConcatPrefix",
    "StepConcatPostfix",
    "StepCleanVersion",
    "StepNormalizeBrand",
    "StepBackToFull",
    "clean_version",
    "normalize_brand",
    # Lookup steps
    "StepLookup",
]
