"""Patterns as data.

A pattern is a structural test on a single value. Testing a pattern either
fails (``None``) or succeeds with a set of bindings: the variables the
pattern captured, keyed by name. Guards and transforms of a clause receive
those bindings as keyword arguments.

Pattern forms:
  - Wildcard      _                 matches anything, binds nothing
  - Literal       "foo", 3          equality test
  - Binding       a @ p             binds the whole value to ``a`` if ``p`` matches
  - Range         1..=10            inclusive bounds comparison
  - Constructor   Foo(a, _)         isinstance test plus positional/keyword sub-patterns
  - Seq           (x, _)            fixed-length list/tuple, element-wise
  - Alternation   p1 | p2           first alternative that matches
  - Predicate     where(fn)         escape hatch: ``fn(value)`` is truthy
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

type Bindings = Mapping[str, Any]

EMPTY_BINDINGS: Bindings = MappingProxyType({})

# Singletons compared by identity, as in a ``match`` statement.
_IDENTITY_LITERALS = (None, True, False)


# ---------------------------------------------------------------------------
# Pattern AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Wildcard:
    """Matches every value without binding anything."""


@dataclass(frozen=True)
class Literal:
    """Matches values equal to ``value``.

    Example: "foo" -> Literal("foo")
    """

    value: Any


@dataclass(frozen=True)
class Binding:
    """Binds the matched value to ``name``.

    Example: a       -> Binding("a")
    Example: a @ 1..=3 -> Binding("a", Range(1, 3))
    """

    name: str
    inner: Pattern = field(default_factory=Wildcard)

    def __post_init__(self) -> None:
        if not self.name.isidentifier():
            raise ValueError(f"Binding name must be an identifier, got {self.name!r}")


@dataclass(frozen=True)
class Range:
    """Inclusive range: matches ``lo <= value <= hi``.

    Values that do not compare with the bounds do not match.
    """

    lo: Any
    hi: Any


@dataclass(frozen=True)
class Constructor:
    """Matches instances of ``cls`` and their fields.

    Positional sub-patterns follow ``cls.__match_args__`` (dataclasses
    generate it); keyword sub-patterns are tested against attributes.

    Example: Foo(a) -> Constructor(Foo, (Binding("a"),))
    """

    cls: type
    args: tuple[Pattern, ...] = ()
    kwargs: Mapping[str, Pattern] = field(default_factory=lambda: EMPTY_BINDINGS)

    def __post_init__(self) -> None:
        match_args = getattr(self.cls, "__match_args__", ())
        if len(self.args) > len(match_args):
            raise TypeError(
                f"{self.cls.__name__}() accepts {len(match_args)} positional "
                f"sub-patterns ({len(self.args)} given)"
            )


@dataclass(frozen=True)
class Seq:
    """Matches a list or tuple of exactly ``len(items)`` elements.

    Strings, bytes, and other sequences are not matched.
    """

    items: tuple[Pattern, ...]


@dataclass(frozen=True)
class Alternation:
    """Matches with the first alternative that matches.

    Example: 1 | 2 -> Alternation((Literal(1), Literal(2)))
    """

    alternatives: tuple[Pattern, ...]

    def __post_init__(self) -> None:
        if not self.alternatives:
            raise ValueError("Alternation needs at least one alternative")


@dataclass(frozen=True)
class Predicate:
    """Matches when ``test(value)`` is truthy."""

    test: Callable[[Any], bool]


# Union of all pattern forms
Pattern = Wildcard | Literal | Binding | Range | Constructor | Seq | Alternation | Predicate


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def match_pattern(pattern: Pattern, value: Any) -> Bindings | None:
    """Test ``value`` against ``pattern``.

    Returns the captured bindings on success, ``None`` on failure. A pattern
    that captures the same name twice only matches when both captures are
    equal.
    """
    match pattern:
        case Wildcard():
            return EMPTY_BINDINGS
        case Literal(expected):
            if any(expected is s for s in _IDENTITY_LITERALS):
                hit = value is expected
            else:
                hit = value == expected
            return EMPTY_BINDINGS if hit else None
        case Binding(name, inner):
            inner_bindings = match_pattern(inner, value)
            if inner_bindings is None:
                return None
            return _merge(inner_bindings, {name: value})
        case Range(lo, hi):
            try:
                hit = lo <= value <= hi
            except TypeError:
                return None
            return EMPTY_BINDINGS if hit else None
        case Constructor(cls, args, kwargs):
            if not isinstance(value, cls):
                return None
            match_args = getattr(cls, "__match_args__", ())
            pairs = [(getattr(value, attr), p) for attr, p in zip(match_args, args)]
            for attr, p in kwargs.items():
                if not hasattr(value, attr):
                    return None
                pairs.append((getattr(value, attr), p))
            return _match_all(pairs)
        case Seq(items):
            if not isinstance(value, (list, tuple)) or len(value) != len(items):
                return None
            return _match_all(list(zip(value, items)))
        case Alternation(alternatives):
            for alt in alternatives:
                bindings = match_pattern(alt, value)
                if bindings is not None:
                    return bindings
            return None
        case Predicate(test):
            return EMPTY_BINDINGS if test(value) else None
    raise TypeError(f"Unknown pattern type: {type(pattern).__name__}")


def bound_names(pattern: Pattern) -> frozenset[str]:
    """Names a pattern may bind.

    For an alternation this is the union over its alternatives.
    """
    match pattern:
        case Binding(name, inner):
            return frozenset({name}) | bound_names(inner)
        case Constructor(_, args, kwargs):
            names: frozenset[str] = frozenset()
            for p in (*args, *kwargs.values()):
                names |= bound_names(p)
            return names
        case Seq(items):
            return frozenset().union(*(bound_names(p) for p in items))
        case Alternation(alternatives):
            return frozenset().union(*(bound_names(p) for p in alternatives))
        case _:
            return frozenset()


def _match_all(pairs: list[tuple[Any, Pattern]]) -> Bindings | None:
    bindings: Bindings = EMPTY_BINDINGS
    for value, p in pairs:
        sub = match_pattern(p, value)
        if sub is None:
            return None
        merged = _merge(bindings, sub)
        if merged is None:
            return None
        bindings = merged
    return bindings


def _merge(left: Bindings, right: Mapping[str, Any]) -> Bindings | None:
    if not right:
        return left
    if not left:
        return MappingProxyType(dict(right))
    merged = dict(left)
    for name, value in right.items():
        if name in merged and merged[name] != value:
            return None
        merged[name] = value
    return MappingProxyType(merged)
