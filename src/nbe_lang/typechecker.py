"""Type checker for nbe-lang using bidirectional type checking.

``check`` pushes an expected type into a term, ``infer`` synthesizes one.
Types are values throughout: annotations and arguments are evaluated once
and compared with :func:`~nbe_lang.conversion.conv`, never re-quoted.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from .syntax import (
    Term, Var, App, Abs, Let, Type, Pi, Nat, Zero, Suc, NatElim, Eq, Refl, EqElim,
)
from .core import (
    Lazy, Value, Environment, fresh_binder,
    VType, VNat, VZero, VSuc, VEq, VRefl, VPi, VVar,
)
from .evaluator import evaluate, delay, apply
from .conversion import conv
from .pretty import pretty, pretty_value
from .errors import TypeCheckError, ErrorContext, ErrorKind, get_trace
from .error_reporting import suggest_similar_names


class Context:
    """Typing context mapping variable names to their types (as values)."""

    __slots__ = ("types",)

    def __init__(self, types: Optional[Dict[str, Value]] = None):
        self.types: Dict[str, Value] = dict(types) if types else {}

    def lookup(self, name: str) -> Optional[Value]:
        """Look up the type of a variable by name."""
        return self.types.get(name)

    def extend(self, name: str, type_val: Value) -> Context:
        """Extend context with a new binding."""
        ctx = Context.__new__(Context)
        ctx.types = {**self.types, name: type_val}
        return ctx

    def names(self) -> List[str]:
        return list(self.types)

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def __repr__(self) -> str:
        return f"Context({self.names()})"


def _bind(env: Environment, ctx: Context, name: str,
          type_val: Value) -> Tuple[Environment, Context, Lazy]:
    """Bind ``name`` to a fresh neutral variable of type ``type_val``.

    When the variable has to be renamed, the new name is only reserved:
    later binders are freshened away from it, but source terms cannot
    refer to it.
    """
    fresh = fresh_binder(env, name)
    var = Lazy.wrap(VVar(fresh))
    env, ctx = env.extend(name, var), ctx.extend(name, type_val)
    if fresh != name:
        env = env.reserve(fresh)
    return env, ctx, var


def _check_let(env: Environment, ctx: Context, term: Let) -> Tuple[Environment, Context]:
    """Check a let's annotation and bound term; return the extended scope."""
    check(env, ctx, term.type, VType())
    type_val = evaluate(env, term.type)
    check(env, ctx, term.bound, type_val)
    return env.extend(term.name, delay(env, term.bound)), ctx.extend(term.name, type_val)


def _trace_step(env: Environment, ctx: Context, description: str, term: Term) -> None:
    context = {name: pretty_value(env, ty) for name, ty in ctx.types.items()}
    get_trace().add_step(description, term.location, context)


def check(env: Environment, ctx: Context, term: Term, expected: Value) -> None:
    """Check that ``term`` has type ``expected``.

    Raises:
        TypeCheckError: if it does not. The error records the location of
            the innermost checked term that has one.
    """
    if get_trace().enabled:
        _trace_step(env, ctx, f"check {pretty(0, term)} : {pretty_value(env, expected)}", term)
    try:
        if isinstance(term, Let):
            env, ctx = _check_let(env, ctx, term)
            check(env, ctx, term.body, expected)
            return

        if isinstance(term, Abs) and isinstance(expected, VPi):
            env, ctx, var = _bind(env, ctx, term.param, expected.domain)
            check(env, ctx, term.body, expected.codomain(var))
            return

        inferred = infer(env, ctx, term)
        if not conv(env, inferred, expected):
            expected_str = pretty_value(env, expected)
            actual_str = pretty_value(env, inferred)
            raise TypeCheckError(
                f"Type mismatch: expected {expected_str}, but got {actual_str} "
                f"when checking {pretty(0, term)}",
                term,
                context=ErrorContext(kind=ErrorKind.TYPE_MISMATCH,
                                     expected=expected_str, actual=actual_str),
            )
    except TypeCheckError as e:
        e.attach(term)
        raise


def infer(env: Environment, ctx: Context, term: Term) -> Value:
    """Infer the type of a term."""
    trace = get_trace()
    if trace.enabled:
        _trace_step(env, ctx, f"infer {pretty(0, term)}", term)
    result = _infer(env, ctx, term)
    if trace.enabled:
        trace.add_step(f"inferred {pretty(0, term)}", term.location,
                       result=pretty_value(env, result))
    return result


def _infer(env: Environment, ctx: Context, term: Term) -> Value:
    if isinstance(term, Var):
        type_val = ctx.lookup(term.name)
        if type_val is None:
            names = ctx.names()
            raise TypeCheckError(
                f"Unknown variable: {term.name}",
                term,
                context=ErrorContext(kind=ErrorKind.UNKNOWN_VARIABLE, actual=term.name,
                                     available_names=names,
                                     similar_names=suggest_similar_names(term.name, names)),
            )
        return type_val

    elif isinstance(term, App):
        func_type = infer(env, ctx, term.func)
        if not isinstance(func_type, VPi):
            actual_str = pretty_value(env, func_type)
            raise TypeCheckError(
                f"Expected a function, but {pretty(0, term.func)} has type {actual_str}",
                term,
                context=ErrorContext(kind=ErrorKind.NOT_A_FUNCTION, actual=actual_str),
            )
        check(env, ctx, term.arg, func_type.domain)
        return func_type.codomain(delay(env, term.arg))

    elif isinstance(term, Abs):
        raise TypeCheckError(
            f"Cannot infer the type of a lambda: {pretty(0, term)}",
            term,
            context=ErrorContext(kind=ErrorKind.CANNOT_INFER),
        )

    elif isinstance(term, Let):
        env, ctx = _check_let(env, ctx, term)
        return infer(env, ctx, term.body)

    elif isinstance(term, Type):
        return VType()

    elif isinstance(term, Pi):
        check(env, ctx, term.domain, VType())
        domain = evaluate(env, term.domain)
        inner_env, inner_ctx, _ = _bind(env, ctx, term.param, domain)
        check(inner_env, inner_ctx, term.codomain, VType())
        return VType()

    elif isinstance(term, Nat):
        return VType()
    elif isinstance(term, Zero):
        return VNat()
    elif isinstance(term, Suc):
        return SUC_TYPE
    elif isinstance(term, NatElim):
        return NAT_ELIM_TYPE
    elif isinstance(term, Eq):
        return EQ_TYPE
    elif isinstance(term, Refl):
        return REFL_TYPE
    elif isinstance(term, EqElim):
        return EQ_ELIM_TYPE
    else:
        raise TypeError(f"Unknown term: {term!r}")


# Types of the built-in constants, built directly as values

def varrow(domain: Value, codomain: Value) -> VPi:
    """Non-dependent function type value."""
    return VPi("_", domain, lambda _: codomain)


def _ap(func: Lazy, *args: Lazy) -> Value:
    value = func.force()
    for arg in args:
        value = apply(value, arg)
    return value


SUC_TYPE = varrow(VNat(), VNat())

# (P : Nat → Type) → P 0 → ((n : Nat) → P n → P (suc n)) → (n : Nat) → P n
NAT_ELIM_TYPE = VPi("P", varrow(VNat(), VType()), lambda P: varrow(
    _ap(P, Lazy.wrap(VZero())),
    varrow(
        VPi("n", VNat(), lambda n: varrow(_ap(P, n), _ap(P, Lazy.wrap(VSuc(n))))),
        VPi("n", VNat(), lambda n: _ap(P, n)),
    ),
))

# (A : Type) → A → A → Type
EQ_TYPE = VPi("A", VType(), lambda A: varrow(A.force(), varrow(A.force(), VType())))

# (A : Type) (x : A) → Eq A x x
REFL_TYPE = VPi("A", VType(), lambda A: VPi("x", A.force(), lambda x: VEq(A, x, x)))

# (A : Type) (x : A) (P : (y : A) → Eq A x y → Type) → P x (refl A x) → (y : A) (p : Eq A x y) → P y p
EQ_ELIM_TYPE = VPi("A", VType(), lambda A: VPi("x", A.force(), lambda x: VPi(
    "P",
    VPi("y", A.force(), lambda y: varrow(VEq(A, x, y), VType())),
    lambda P: varrow(
        _ap(P, x, Lazy.wrap(VRefl(A, x))),
        VPi("y", A.force(), lambda y: VPi("p", VEq(A, x, y), lambda p: _ap(P, y, p))),
    ),
)))
