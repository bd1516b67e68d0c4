"""Read-back of values into normal-form terms.

The environment passed to :func:`quote` is only consulted for its names:
every binder is renamed away from them before its closure is instantiated
with a fresh neutral variable.
"""

from __future__ import annotations

from .syntax import (
    Term, Var, App, Abs, Pi, Type, Nat, Zero, Suc, NatElim, Eq, Refl, EqElim, app,
)
from .core import (
    Lazy, Value, Environment, Spine, freshen,
    VType, VNat, VZero, VSuc, VEq, VRefl, VPi, VAbs, VVar, SApp, SNatElim, SEqElim,
)
from .evaluator import evaluate


def quote(env: Environment, value: Value) -> Term:
    """Quote a value back to a term in beta-normal form."""
    if isinstance(value, VVar):
        return quote_spine(env, Var(value.name), value.spine)

    elif isinstance(value, VAbs):
        name = freshen(env, value.name)
        var = Lazy.wrap(VVar(name))
        return Abs(name, quote(env.extend(name, var), value.func(var)))

    elif isinstance(value, VPi):
        name = freshen(env, value.name)
        var = Lazy.wrap(VVar(name))
        domain = quote(env, value.domain)
        return Pi(name, domain, quote(env.extend(name, var), value.codomain(var)))

    elif isinstance(value, VType):
        return Type()
    elif isinstance(value, VNat):
        return Nat()
    elif isinstance(value, VZero):
        return Zero()
    elif isinstance(value, VSuc):
        return App(Suc(), quote(env, value.n.force()))
    elif isinstance(value, VEq):
        return app(Eq(), quote(env, value.A.force()), quote(env, value.x.force()),
                   quote(env, value.y.force()))
    elif isinstance(value, VRefl):
        return app(Refl(), quote(env, value.A.force()), quote(env, value.x.force()))
    else:
        raise TypeError(f"Cannot quote {type(value).__name__}")


def quote_spine(env: Environment, head: Term, spine: Spine) -> Term:
    """Replay the pending eliminations of a neutral value around ``head``."""
    term = head
    for frame in spine:
        if isinstance(frame, SApp):
            term = App(term, quote(env, frame.arg.force()))
        elif isinstance(frame, SNatElim):
            term = app(NatElim(),
                       quote(env, frame.P.force()),
                       quote(env, frame.Pz.force()),
                       quote(env, frame.Ps.force()),
                       term)
        elif isinstance(frame, SEqElim):
            term = app(EqElim(),
                       quote(env, frame.A.force()),
                       quote(env, frame.x.force()),
                       quote(env, frame.P.force()),
                       quote(env, frame.Prefl.force()),
                       quote(env, frame.y.force()),
                       term)
        else:
            raise TypeError(f"Unknown spine frame: {frame!r}")
    return term


def normalize(env: Environment, term: Term) -> Term:
    """Normalize a term by evaluation and quotation."""
    return quote(env, evaluate(env, term))
