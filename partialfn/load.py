"""Reading clause lists out of plain Python files.

A clause file is ordinary Python that defines one or more ``*_clauses()``
factories. It runs with the builder vocabulary (``case``, ``bind``,
``rng``, ...) already in scope, so it needs no imports of its own:

    def status_clauses():
        return [
            case(rng(200, 299), then=lambda: "success"),
            case(wildcard(), then=lambda: "unknown"),
        ]
"""

from __future__ import annotations

from typing import Any

from partialfn.clause import Clause

FACTORY_SUFFIX = "_clauses"


def _run_clause_file(path: str) -> dict[str, Any] | str:
    """Execute ``path`` and return the names it defined, or an error string."""
    try:
        with open(path) as f:
            source = f.read()
    except OSError as e:
        return f"cannot open clause file: {e}"

    scope: dict[str, Any] = {"__name__": "__partialfn_clauses__"}
    try:
        exec("from partialfn import *", scope)
        exec("from partialfn.helpers import *", scope)
    except Exception as e:
        return f"builder vocabulary unavailable: {e}"
    preloaded = set(scope)

    try:
        exec(compile(source, path, "exec"), scope)
    except Exception as e:
        return f"clause file failed while running: {type(e).__name__}: {e}"
    return {name: obj for name, obj in scope.items() if name not in preloaded}


def load_clauses_from_file(path: str) -> tuple[Clause, ...] | str:
    """Clauses built by the first working ``*_clauses()`` factory in ``path``.

    Factories are called in definition order. One that raises, or that
    returns anything other than a list or tuple of :class:`Clause`, is
    skipped; if none works, the problem with the last one is reported.

    Never raises: every failure comes back as a message string.
    """
    defined = _run_clause_file(path)
    if isinstance(defined, str):
        return defined

    factories = [
        (name, obj)
        for name, obj in defined.items()
        if name.endswith(FACTORY_SUFFIX) and not name.startswith("_") and callable(obj)
    ]
    if not factories:
        return f"clause file defines no {FACTORY_SUFFIX}() factory"

    problem = ""
    for name, factory in factories:
        try:
            built = factory()
        except Exception as e:
            problem = f"{name}() raised {type(e).__name__}: {e}"
            continue
        match built:
            case list() | tuple() if all(isinstance(c, Clause) for c in built):
                return tuple(built)
            case _:
                problem = f"{name}() gave a {type(built).__name__}, not a list of Clause"
    return problem
