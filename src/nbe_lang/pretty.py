"""Pretty printing of terms and values."""

from __future__ import annotations
from typing import List, Tuple

from .syntax import (
    Term, Var, App, Abs, Let, Type, Pi, Nat, Zero, Suc, NatElim, Eq, Refl, EqElim,
)
from .core import Environment, Value
from .quote import quote

APP_PREC = 2
PI_PREC = 1
ABS_LET_PREC = 0


def parens_if(cond: bool, text: str) -> str:
    return f"({text})" if cond else text


def pretty(prec: int, term: Term) -> str:
    """Render ``term`` in a context of precedence ``prec``."""
    if isinstance(term, Var):
        return term.name

    elif isinstance(term, App):
        if isinstance(term.func, Suc):
            return _pretty_suc(prec, term.arg)
        return parens_if(prec > APP_PREC,
                         f"{pretty(APP_PREC, term.func)} {pretty(APP_PREC + 1, term.arg)}")

    elif isinstance(term, Abs):
        params = [term.param]
        body = term.body
        while isinstance(body, Abs):
            params.append(body.param)
            body = body.body
        return parens_if(prec > ABS_LET_PREC,
                         f"λ {' '.join(params)}. {pretty(ABS_LET_PREC, body)}")

    elif isinstance(term, Let):
        return parens_if(
            prec > ABS_LET_PREC,
            f"let {term.name}: {pretty(ABS_LET_PREC, term.type)} =\n"
            f"  {pretty(ABS_LET_PREC, term.bound)}\n"
            f"in\n\n"
            f"{pretty(ABS_LET_PREC, term.body)}",
        )

    elif isinstance(term, Pi):
        if term.param == "_":
            return parens_if(prec > PI_PREC,
                             f"{pretty(APP_PREC, term.domain)} → {pretty(PI_PREC, term.codomain)}")
        return parens_if(prec > PI_PREC, _pretty_pi(term))

    elif isinstance(term, Type):
        return "Type"
    elif isinstance(term, Nat):
        return "Nat"
    elif isinstance(term, Zero):
        return "0"
    elif isinstance(term, Suc):
        return "suc"
    elif isinstance(term, NatElim):
        return "natElim"
    elif isinstance(term, Eq):
        return "Eq"
    elif isinstance(term, Refl):
        return "refl"
    elif isinstance(term, EqElim):
        return "eqElim"
    else:
        raise TypeError(f"Unknown term: {term!r}")


def _pretty_pi(term: Pi) -> str:
    binders: List[Tuple[str, Term]] = [(term.param, term.domain)]
    body = term.codomain
    while isinstance(body, Pi) and body.param != "_":
        binders.append((body.param, body.domain))
        body = body.codomain
    domains = " ".join(f"({name}: {pretty(PI_PREC, domain)})" for name, domain in binders)
    return f"{domains} → {pretty(PI_PREC, body)}"


def _pretty_suc(prec: int, body: Term) -> str:
    # Collapse suc chains into numerals
    n = 1
    while isinstance(body, App) and isinstance(body.func, Suc):
        n += 1
        body = body.arg
    if isinstance(body, Zero):
        return str(n)
    return parens_if(prec > APP_PREC, f"{n}+ {pretty(APP_PREC + 1, body)}")


def pretty_value(env: Environment, value: Value) -> str:
    """Quote ``value`` under ``env`` and render it."""
    return pretty(ABS_LET_PREC, quote(env, value))
