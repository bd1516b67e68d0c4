"""Evaluator for nbe-lang.

Maps terms to values under an environment, call-by-need: arguments and
let-bound terms are wrapped in :class:`~nbe_lang.core.Lazy` cells and only
computed when something forces them. Eliminators reduce as soon as their
scrutinee is a constructor and get stuck on neutral values otherwise.
"""

from __future__ import annotations
from typing import Callable

from .syntax import (
    Term, Var, App, Abs, Let, Type, Pi, Nat, Zero, Suc, NatElim, Eq, Refl, EqElim,
)
from .core import (
    Lazy, Value, Environment, VType, VNat, VZero, VSuc, VEq, VRefl, VPi, VAbs, VVar,
    SApp, SNatElim, SEqElim,
)
from .errors import EvalError, ErrorKind


def evaluate(env: Environment, term: Term) -> Value:
    """Evaluate a term to a value."""
    if isinstance(term, Var):
        cell = env.lookup(term.name)
        if cell is None:
            raise EvalError(f"Unbound variable during evaluation: {term.name}",
                            ErrorKind.UNBOUND_VARIABLE)
        return cell.force()

    elif isinstance(term, App):
        func = evaluate(env, term.func)
        return apply(func, delay(env, term.arg))

    elif isinstance(term, Abs):
        return VAbs(term.param, _closure(env, term.param, term.body))

    elif isinstance(term, Let):
        bound = delay(env, term.bound)
        return evaluate(env.extend(term.name, bound), term.body)

    elif isinstance(term, Type):
        return VType()

    elif isinstance(term, Pi):
        domain = evaluate(env, term.domain)
        return VPi(term.param, domain, _closure(env, term.param, term.codomain))

    elif isinstance(term, Nat):
        return VNat()

    elif isinstance(term, Zero):
        return VZero()

    elif isinstance(term, Suc):
        return VAbs("n", lambda n: VSuc(n))

    elif isinstance(term, NatElim):
        return VAbs("P", lambda P:
                    VAbs("Pz", lambda Pz:
                         VAbs("Ps", lambda Ps:
                              VAbs("n", lambda n: eliminate_nat(P, Pz, Ps, n.force())))))

    elif isinstance(term, Eq):
        return VAbs("A", lambda A:
                    VAbs("x", lambda x:
                         VAbs("y", lambda y: VEq(A, x, y))))

    elif isinstance(term, Refl):
        return VAbs("A", lambda A: VAbs("x", lambda x: VRefl(A, x)))

    elif isinstance(term, EqElim):
        return VAbs("A", lambda A:
                    VAbs("x", lambda x:
                         VAbs("P", lambda P:
                              VAbs("Prefl", lambda Prefl:
                                   VAbs("y", lambda y:
                                        VAbs("p", lambda p: eliminate_eq(A, x, P, Prefl, y, p.force())))))))

    else:
        raise TypeError(f"Unknown term: {term!r}")


def delay(env: Environment, term: Term) -> Lazy:
    """Defer evaluation of ``term`` until the result is forced."""
    return Lazy(lambda: evaluate(env, term))


def _closure(env: Environment, name: str, body: Term) -> Callable[[Lazy], Value]:
    def instantiate(arg: Lazy) -> Value:
        return evaluate(env.extend(name, arg), body)
    return instantiate


def apply(function: Value, argument: Lazy) -> Value:
    """Apply a function value to a (lazy) argument."""
    if isinstance(function, VAbs):
        return function.func(argument)
    elif isinstance(function, VVar):
        return function.push(SApp(argument))
    else:
        raise EvalError(f"Not a function: {type(function).__name__}", ErrorKind.NOT_A_FUNCTION)


def eliminate_nat(P: Lazy, Pz: Lazy, Ps: Lazy, n: Value) -> Value:
    """Reduce ``natElim P Pz Ps n``.

    On ``suc m`` the recursive result for ``m`` is deferred, so only as much
    of the induction unfolds as the continuation demands.
    """
    if isinstance(n, VZero):
        return Pz.force()
    elif isinstance(n, VSuc):
        predecessor = n.n
        step = apply(Ps.force(), Lazy.wrap(n))
        return apply(step, Lazy(lambda: eliminate_nat(P, Pz, Ps, predecessor.force())))
    elif isinstance(n, VVar):
        return n.push(SNatElim(P, Pz, Ps))
    else:
        raise EvalError(f"Not a natural number: {type(n).__name__}", ErrorKind.NOT_A_NUMBER)


def eliminate_eq(A: Lazy, x: Lazy, P: Lazy, Prefl: Lazy, y: Lazy, p: Value) -> Value:
    """Reduce ``eqElim A x P Prefl y p``."""
    if isinstance(p, VRefl):
        return Prefl.force()
    elif isinstance(p, VVar):
        return p.push(SEqElim(A, x, P, Prefl, y))
    else:
        raise EvalError(f"Not an equality proof: {type(p).__name__}", ErrorKind.NOT_AN_EQUALITY)
