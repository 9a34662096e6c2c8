"""partialfn: partial functions compiled from guarded clauses."""

from .outcome import DomainMissError, Matched, Outcome, Unmatched
from .patterns import (
    Alternation,
    Binding,
    Bindings,
    Constructor,
    Literal,
    Pattern,
    Predicate,
    Range,
    Seq,
    Wildcard,
    match_pattern,
)
from .clause import Clause
from .partial_fn import PartialFn
from .compiler import compile_clauses, find_satisfying
from .render import pattern_repr, render_clauses
from .helpers import (
    alt, bind, case, ctor, lit, partial_function, rng, seq, where, wildcard
)

__all__ = [
    # Outcome
    "DomainMissError", "Matched", "Outcome", "Unmatched",
    # Patterns
    "Alternation", "Binding", "Bindings", "Constructor", "Literal",
    "Pattern", "Predicate", "Range", "Seq", "Wildcard", "match_pattern",
    # Clauses and compilation
    "Clause", "PartialFn", "compile_clauses", "find_satisfying",
    # Rendering
    "pattern_repr", "render_clauses",
    # Helpers
    "alt", "bind", "case", "ctor", "lit", "partial_function", "rng", "seq",
    "where", "wildcard",
]
