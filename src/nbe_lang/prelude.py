"""A small library of definitions and worked examples.

Definitions are plain terms; :func:`with_prelude` makes them available to
a body by wrapping it in annotated lets.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict

from .syntax import (
    Term, Var, Type, Nat, Zero, Suc, NatElim, Eq, Refl, EqElim,
    app, lam, let, pi, arrow, num,
)


def _eq(A: Term, x: Term, y: Term) -> Term:
    return app(Eq(), A, x, y)


A, B, f, x, y, m, n = (Var(name) for name in ("A", "B", "f", "x", "y", "m", "n"))

PLUS_TYPE = pi(Nat(), Nat(), Nat())
PLUS = lam("m", "n", app(NatElim(), lam("_", Nat()), n, lam("_", Suc()), m))

MULT_TYPE = pi(Nat(), Nat(), Nat())
MULT = lam("m", "n", app(NatElim(), lam("_", Nat()), Zero(), lam("_", app(Var("plus"), n)), m))

# (A B : Type) (f : A → B) (x y : A) → Eq A x y → Eq B (f x) (f y)
CONG_TYPE = pi(
    ("A", Type()),
    ("B", Type()),
    ("f", arrow(A, B)),
    ("x", A),
    ("y", A),
    _eq(A, x, y),
    _eq(B, app(f, x), app(f, y)),
)
CONG = lam(
    "A", "B", "f", "x",
    app(
        EqElim(),
        A,
        x,
        lam("y", "_", _eq(B, app(f, x), app(f, y))),
        app(Refl(), B, app(f, x)),
    ),
)

# (n : Nat) → Eq Nat (plus n 0) n
PLUS_IDENTITY_RIGHT_TYPE = pi(("n", Nat()), _eq(Nat(), app(Var("plus"), n, Zero()), n))
PLUS_IDENTITY_RIGHT = app(
    NatElim(),
    lam("n", _eq(Nat(), app(Var("plus"), n, Zero()), n)),
    app(Refl(), Nat(), Zero()),
    lam("n", app(Var("cong"), Nat(), Nat(), Suc(), app(Var("plus"), n, Zero()), n)),
)

DEFINITIONS = [
    ("plus", PLUS_TYPE, PLUS),
    ("mult", MULT_TYPE, MULT),
    ("cong", CONG_TYPE, CONG),
    ("plus-identity-right", PLUS_IDENTITY_RIGHT_TYPE, PLUS_IDENTITY_RIGHT),
]


def with_prelude(body: Term) -> Term:
    """Wrap ``body`` in lets binding every prelude definition."""
    return let(*DEFINITIONS, body)


@dataclass(frozen=True)
class Example:
    """A closed term together with the type it should be checked against."""
    term: Term
    expected_type: Term
    description: str


EXAMPLES: Dict[str, Example] = {
    "arithmetic": Example(
        with_prelude(app(Var("plus"), num(2), app(Var("mult"), num(8), num(5)))),
        Nat(),
        "plus 2 (mult 8 5) under the prelude; normalizes to 42",
    ),
    "identity": Example(
        lam("x", x),
        arrow(Nat(), Nat()),
        "the identity function on Nat",
    ),
    "cong": Example(
        let(("cong", CONG_TYPE, CONG), Var("cong")),
        CONG_TYPE,
        "congruence of equality, proved with eqElim",
    ),
    "plus-identity-right": Example(
        with_prelude(app(Var("plus-identity-right"), num(3))),
        _eq(Nat(), num(3), num(3)),
        "plus n 0 = n by induction, instantiated at 3",
    ),
    "ill-typed": Example(
        app(Zero(), Zero()),
        Nat(),
        "applying zero to zero; rejected by the checker",
    ),
}
