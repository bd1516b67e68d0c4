"""Definitional equality of values, up to beta, eliminator reduction and eta.

Both sides are compared structurally and the comparison stops at the first
difference; neither side is quoted.
"""

from __future__ import annotations
from typing import Tuple

from .core import (
    Lazy, Value, Environment, Frame, fresh_binder,
    VType, VNat, VZero, VSuc, VEq, VRefl, VPi, VAbs, VVar, SApp, SNatElim, SEqElim,
)
from .evaluator import apply


def _fresh_var(env: Environment, name: str) -> Tuple[Environment, Lazy]:
    fresh = fresh_binder(env, name)
    var = Lazy.wrap(VVar(fresh))
    return env.extend(fresh, var), var


def conv(env: Environment, left: Value, right: Value) -> bool:
    """Decide whether two values are definitionally equal."""
    if isinstance(left, VType) and isinstance(right, VType):
        return True
    if isinstance(left, VNat) and isinstance(right, VNat):
        return True
    if isinstance(left, VZero) and isinstance(right, VZero):
        return True
    if isinstance(left, VSuc) and isinstance(right, VSuc):
        return conv(env, left.n.force(), right.n.force())
    if isinstance(left, VEq) and isinstance(right, VEq):
        return (conv(env, left.A.force(), right.A.force())
                and conv(env, left.x.force(), right.x.force())
                and conv(env, left.y.force(), right.y.force()))
    if isinstance(left, VRefl) and isinstance(right, VRefl):
        return (conv(env, left.A.force(), right.A.force())
                and conv(env, left.x.force(), right.x.force()))
    if isinstance(left, VVar) and isinstance(right, VVar):
        return conv_neutral(env, left, right)
    if isinstance(left, VPi) and isinstance(right, VPi):
        if not conv(env, left.domain, right.domain):
            return False
        inner, var = _fresh_var(env, left.name)
        return conv(inner, left.codomain(var), right.codomain(var))
    if isinstance(left, VAbs) and isinstance(right, VAbs):
        inner, var = _fresh_var(env, left.name)
        return conv(inner, left.func(var), right.func(var))

    # Eta: a function is equal to a lambda that applies it
    if isinstance(left, VAbs) and isinstance(right, VVar):
        inner, var = _fresh_var(env, left.name)
        return conv(inner, left.func(var), apply(right, var))
    if isinstance(left, VVar) and isinstance(right, VAbs):
        inner, var = _fresh_var(env, right.name)
        return conv(inner, apply(left, var), right.func(var))

    return False


def conv_neutral(env: Environment, left: VVar, right: VVar) -> bool:
    """Neutrals are equal when heads match and spines agree frame by frame."""
    if left.name != right.name or len(left.spine) != len(right.spine):
        return False
    return all(conv_frame(env, lhs, rhs) for lhs, rhs in zip(left.spine, right.spine))


def conv_frame(env: Environment, left: Frame, right: Frame) -> bool:
    if isinstance(left, SApp) and isinstance(right, SApp):
        return conv(env, left.arg.force(), right.arg.force())
    if isinstance(left, SNatElim) and isinstance(right, SNatElim):
        return (conv(env, left.P.force(), right.P.force())
                and conv(env, left.Pz.force(), right.Pz.force())
                and conv(env, left.Ps.force(), right.Ps.force()))
    if isinstance(left, SEqElim) and isinstance(right, SEqElim):
        return (conv(env, left.A.force(), right.A.force())
                and conv(env, left.x.force(), right.x.force())
                and conv(env, left.P.force(), right.P.force())
                and conv(env, left.Prefl.force(), right.Prefl.force())
                and conv(env, left.y.force(), right.y.force()))
    return False
