"""Tests for definitional equality."""

import itertools
from typing import Optional

from nbe_lang.syntax import *
from nbe_lang.core import *
from nbe_lang.evaluator import evaluate, apply
from nbe_lang.conversion import conv
from nbe_lang.prelude import DEFINITIONS, with_prelude


def value_of(term: Term, env: Optional[Environment] = None) -> Value:
    return evaluate(env if env is not None else Environment(), term)


def test_reflexivity_on_prelude():
    """Test that every prelude definition and its type is equal to itself."""
    env = Environment()
    for name, type_term, _body in DEFINITIONS:
        type_value = value_of(with_prelude(type_term))
        body_value = value_of(with_prelude(Var(name)))
        assert conv(env, type_value, type_value)
        assert conv(env, body_value, body_value)


def test_computation_is_respected():
    """Test that values equal up to evaluation are convertible."""
    left = value_of(with_prelude(app(Var("plus"), num(2), num(2))))
    right = value_of(num(4))
    assert conv(Environment(), left, right)
    assert not conv(Environment(), left, value_of(num(5)))


def test_eta():
    """Test that a neutral function equals its eta-expansion, in both orders."""
    env = Environment({"f": Lazy.wrap(VVar("f"))})
    f = VVar("f")
    expanded = VAbs("x", lambda v: apply(f, v))
    assert conv(env, f, expanded)
    assert conv(env, expanded, f)


def test_eta_against_non_function():
    """Test that eta does not apply to non-functions."""
    assert not conv(Environment(), VAbs("x", lambda v: VZero()), VZero())
    assert not conv(Environment(), VNat(), VAbs("x", lambda v: VNat()))


def test_lambda_bodies_compared_at_shared_variable():
    """Test comparing lambdas by instantiating both at one fresh variable."""
    identity = value_of(lam("x", Var("x")))
    renamed = value_of(lam("y", Var("y")))
    constant = value_of(lam("y", Zero()))
    assert conv(Environment(), identity, renamed)
    assert not conv(Environment(), identity, constant)


def test_wildcard_binders_stay_distinct():
    """Test that two wildcard-bound variables are never identified."""
    first = VAbs("_", lambda a: VAbs("_", lambda b: a.force()))
    second = VAbs("_", lambda a: VAbs("_", lambda b: b.force()))
    assert not conv(Environment(), first, second)
    assert conv(Environment(), first, first)


def test_pi_types():
    """Test comparing Pi types by domain and instantiated codomain."""
    dependent = value_of(pi(("A", Type()), ("x", Var("A")), Var("A")))
    renamed = value_of(pi(("B", Type()), ("y", Var("B")), Var("B")))
    different = value_of(pi(("A", Type()), ("x", Var("A")), Nat()))
    assert conv(Environment(), dependent, renamed)
    assert not conv(Environment(), dependent, different)
    assert not conv(Environment(), value_of(arrow(Nat(), Nat())), value_of(arrow(Type(), Nat())))


def test_neutral_spines():
    """Test comparing stuck terms frame by frame."""
    env = Environment({"f": Lazy.wrap(VVar("f")), "g": Lazy.wrap(VVar("g"))})
    f_zero = value_of(app(Var("f"), Zero()), env)
    assert conv(env, f_zero, value_of(app(Var("f"), Zero()), env))
    assert not conv(env, f_zero, value_of(app(Var("g"), Zero()), env))
    assert not conv(env, f_zero, value_of(app(Var("f"), num(1)), env))
    assert not conv(env, f_zero, value_of(Var("f"), env))


def test_different_frame_kinds_are_unequal():
    """Test that an application frame never equals an eliminator frame."""
    cell = Lazy.wrap(VZero())
    applied = VVar("n", (SApp(cell),))
    eliminated = VVar("n", (SNatElim(cell, cell, cell),))
    assert not conv(Environment(), applied, eliminated)


def test_constructors():
    """Test the canonical constructors."""
    env = Environment()
    assert conv(env, VType(), VType())
    assert not conv(env, VType(), VNat())
    assert not conv(env, VZero(), value_of(num(1)))
    refl_zero = value_of(app(Refl(), Nat(), Zero()))
    assert conv(env, refl_zero, value_of(app(Refl(), Nat(), app(lam("x", Var("x")), Zero()))))
    assert not conv(env, refl_zero, value_of(app(Refl(), Nat(), num(1))))
    eq = value_of(app(Eq(), Nat(), Zero(), Zero()))
    assert conv(env, eq, value_of(app(Eq(), Nat(), Zero(), Zero())))
    assert not conv(env, eq, value_of(app(Eq(), Nat(), Zero(), num(1))))


def test_symmetry():
    """Test that conv gives the same answer in both orders."""
    env = Environment({"f": Lazy.wrap(VVar("f"))})
    values = [
        value_of(num(2)),
        value_of(with_prelude(app(Var("plus"), num(1), num(1)))),
        value_of(lam("x", app(Var("f"), Var("x"))), env),
        VVar("f"),
        value_of(arrow(Nat(), Nat())),
    ]
    for left in values:
        for right in values:
            assert conv(env, left, right) == conv(env, right, left)


def test_transitivity():
    """Test that conv(a, b) and conv(b, c) imply conv(a, c)."""
    env = Environment({"f": Lazy.wrap(VVar("f"))})
    f = VVar("f")
    values = [
        value_of(with_prelude(app(Var("plus"), num(2), num(2))), env),
        value_of(num(4), env),
        value_of(with_prelude(app(Var("plus"), num(1), num(3))), env),
        f,
        value_of(lam("x", app(Var("f"), Var("x"))), env),
        value_of(lam("y", app(Var("f"), Var("y"))), env),
        value_of(num(3), env),
    ]
    # Each group is pairwise convertible, so the implication is not vacuous
    for group in (values[0:3], values[3:6]):
        for left, right in itertools.combinations(group, 2):
            assert conv(env, left, right)

    for a, b, c in itertools.product(values, repeat=3):
        if conv(env, a, b) and conv(env, b, c):
            assert conv(env, a, c)
