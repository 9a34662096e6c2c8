"""Clause compiler.

Turns an ordered list of clauses into the two procedures backing a
PartialFn:

  evaluate(a)   -> Matched(transform(bindings)) | Unmatched(a)
  is_defined(a) -> bool

Both procedures run the same search (``find_satisfying``): clauses are
tried in order; within a clause each matching alternative, in listed order,
offers its bindings to the guard, which runs only after a pattern matched.
The first clause and alternative whose pattern and guard both hold wins.
The membership procedure stops there and never runs a transform.

Design principles:
- One search, two consumers: membership cannot disagree with evaluation.
- A domain-miss is an expected outcome, logged at DEBUG only.
- Exceptions raised by user patterns, guards, and transforms propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .clause import Clause
from .outcome import Matched, Outcome, Unmatched
from .partial_fn import PartialFn
from .patterns import Bindings

logger = logging.getLogger(__name__)


def find_satisfying(
    clauses: tuple[Clause, ...], arg: Any
) -> tuple[int, Bindings] | None:
    """Index and bindings of the first clause satisfied by ``arg``.

    Returns ``None`` when no clause's pattern and guard both hold.
    """
    for index, clause in enumerate(clauses):
        for bindings in clause.bind(arg):
            if clause.accepts(bindings):
                return index, bindings
    return None


def compile_clauses(clauses: Iterable[Clause]) -> PartialFn[Any, Any]:
    """Compile clauses, in author order, into a PartialFn.

    The clause list is copied; later changes to the caller's list do not
    affect the compiled function. An empty list compiles to the function
    defined nowhere.

    Raises TypeError if an element is not a Clause.
    """
    frozen = tuple(clauses)
    for i, clause in enumerate(frozen):
        if not isinstance(clause, Clause):
            raise TypeError(
                f"clauses[{i}]: expected Clause, got {type(clause).__name__}"
            )

    logger.debug("Compiled partial function from %d clause(s)", len(frozen))

    def evaluate(arg: Any) -> Outcome[Any, Any]:
        found = find_satisfying(frozen, arg)
        if found is None:
            logger.debug("No clause satisfied by %r", arg)
            return Unmatched(arg)
        index, bindings = found
        logger.debug("Clause %d satisfied by %r with bindings %s", index, arg, bindings)
        return Matched(frozen[index].apply(bindings))

    def is_defined(arg: Any) -> bool:
        return find_satisfying(frozen, arg) is not None

    return PartialFn(evaluate, is_defined)
