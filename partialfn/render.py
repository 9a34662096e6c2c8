"""Render clause lists as text for diagnostics and the CLI.

Each clause is shown in the familiar arm layout:

      1  a @ 1..=10 | a @ 21..=30 if is_even => halve

Guards and transforms are shown by callable name; lambdas show as
``<guard>`` and ``<expr>``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from typing import Any

import jinja2

from .clause import Clause
from .patterns import (
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

_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
_ENV = jinja2.Environment(
    loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


def pattern_repr(pattern: Pattern) -> str:
    match pattern:
        case Wildcard():
            return "_"
        case Literal(value):
            return repr(value)
        case Binding(name, Wildcard()):
            return name
        case Binding(name, Alternation() as inner):
            return f"{name} @ ({pattern_repr(inner)})"
        case Binding(name, inner):
            return f"{name} @ {pattern_repr(inner)}"
        case Range(lo, hi):
            return f"{lo!r}..={hi!r}"
        case Constructor(cls, args, kwargs):
            parts = [pattern_repr(a) for a in args]
            parts += [f"{k}={pattern_repr(v)}" for k, v in kwargs.items()]
            return f"{cls.__name__}({', '.join(parts)})"
        case Seq((item,)):
            return f"({pattern_repr(item)},)"
        case Seq(items):
            return f"({', '.join(pattern_repr(i) for i in items)})"
        case Alternation(alternatives):
            return " | ".join(pattern_repr(a) for a in alternatives)
        case Predicate(test):
            return f"where({_callable_name(test, '<test>')})"
    raise TypeError(f"Unknown pattern type: {type(pattern).__name__}")


def _callable_name(fn: Callable[..., Any], lambda_label: str) -> str:
    name = getattr(fn, "__name__", None) or type(fn).__name__
    if name == "<lambda>":
        return lambda_label
    return name


def render_clauses(clauses: Iterable[Clause], title: str | None = None) -> str:
    """Render clauses, numbered from 1 in author order."""
    rows = [
        {
            "index": i,
            "patterns": [pattern_repr(p) for p in clause.patterns],
            "guard": (
                _callable_name(clause.guard, "<guard>")
                if clause.guard is not None
                else None
            ),
            "transform": _callable_name(clause.transform, "<expr>"),
        }
        for i, clause in enumerate(clauses, start=1)
    ]
    template = _ENV.get_template("clauses.txt.j2")
    return template.render(title=title, clauses=rows)
