"""Builder helpers for authoring partial functions.

These are the primary public API for writing clause lists. Plain values
given where a pattern is expected are treated as literals, so

    partial_function(
        case("foo", then=lambda: 1),
        case("bar", then=lambda: 2),
    )

reads like the match arms it stands for.
"""

from typing import Any

from partialfn.clause import Clause
from partialfn.compiler import compile_clauses
from partialfn.partial_fn import PartialFn
from partialfn.patterns import (
    Alternation,
    Binding,
    Constructor,
    Literal,
    Pattern,
    Predicate,
    Range,
    Seq,
    Wildcard,
)

_MISSING = object()


def as_pattern(value: Any) -> Pattern:
    if isinstance(value, Pattern):
        return value
    return Literal(value)


def wildcard() -> Wildcard:
    return Wildcard()


def lit(value: Any) -> Literal:
    return Literal(value)


def bind(name: str, inner: Any = _MISSING) -> Binding:
    """``name @ inner``; a bare ``bind(name)`` captures any value.

    ``bind(name, None)`` captures only ``None``.
    """
    if inner is _MISSING:
        return Binding(name)
    return Binding(name, as_pattern(inner))


def rng(lo: Any, hi: Any) -> Range:
    """Inclusive range ``lo..=hi``."""
    return Range(lo, hi)


def ctor(cls: type, /, *args: Any, **kwargs: Any) -> Constructor:
    return Constructor(
        cls,
        tuple(as_pattern(a) for a in args),
        {k: as_pattern(v) for k, v in kwargs.items()},
    )


def seq(*items: Any) -> Seq:
    return Seq(tuple(as_pattern(i) for i in items))


def alt(*patterns: Any) -> Alternation:
    return Alternation(tuple(as_pattern(p) for p in patterns))


def where(test: Any) -> Predicate:
    return Predicate(test)


def case(*patterns: Any, then: Any, when: Any = None) -> Clause:
    """One clause: ``p1 | p2 ... if when => then``."""
    return Clause(
        patterns=tuple(as_pattern(p) for p in patterns),
        transform=then,
        guard=when,
    )


def partial_function(*clauses: Clause) -> PartialFn[Any, Any]:
    return compile_clauses(clauses)
