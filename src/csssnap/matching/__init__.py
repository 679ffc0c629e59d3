from csssnap.matching.matcher import matches
from csssnap.matching.resolver import (
    MatchInputError,
    MatchResult,
    RuleMatch,
    UnmatchedProperty,
    resolve,
)

__all__ = [
    "MatchInputError",
    "MatchResult",
    "RuleMatch",
    "UnmatchedProperty",
    "matches",
    "resolve",
]
