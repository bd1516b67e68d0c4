"""nbe-lang: a small dependently-typed core with normalization by evaluation.

The two entry points are :func:`normalize` and :func:`check`.
"""

from .syntax import (
    SourceLocation, Term, Var, App, Abs, Let, Type, Pi, Nat, Zero, Suc, NatElim, Eq, Refl, EqElim,
    app, lam, let, pi, arrow, num,
)
from .core import Lazy, Value, Environment
from .evaluator import evaluate, apply
from .quote import quote, normalize
from .conversion import conv
from .typechecker import Context, check, infer
from .pretty import pretty
from .errors import NbeError, TypeCheckError, EvalError

__version__ = "0.1.0"
