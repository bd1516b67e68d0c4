"""Abstract syntax for nbe-lang terms.

Terms are immutable and structurally shared. The eliminators and the
constructors of Nat and Eq are nullary constants; their arguments are
supplied through ordinary application.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union
from abc import ABC


@dataclass(frozen=True)
class SourceLocation:
    """Source code location information."""
    line: int
    column: int
    filename: Optional[str] = None


def _location() -> Any:
    """Location field, excluded from equality and repr."""
    return field(default=None, compare=False, repr=False)


class Term(ABC):
    """Base class for all terms."""
    location: Optional[SourceLocation]


@dataclass(frozen=True)
class Var(Term):
    """Variable reference."""
    name: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class App(Term):
    """Function application."""
    func: Term
    arg: Term
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Abs(Term):
    """Lambda abstraction (unannotated)."""
    param: str
    body: Term
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Let(Term):
    """Let binding with a type annotation."""
    name: str
    type: Term
    bound: Term
    body: Term
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Type(Term):
    """The sort of all types (Type : Type)."""
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Pi(Term):
    """Dependent function type."""
    param: str
    domain: Term
    codomain: Term
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Nat(Term):
    """Natural number type."""
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Zero(Term):
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Suc(Term):
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class NatElim(Term):
    """Induction principle for Nat (4 arguments)."""
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Eq(Term):
    """Propositional equality (3 arguments)."""
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class Refl(Term):
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class EqElim(Term):
    """The J eliminator for equality (6 arguments)."""
    location: Optional[SourceLocation] = _location()


# Sugared constructors

Binding = Tuple[str, Term, Term]
Domain = Union[Tuple[str, Term], Term]


def app(func: Term, *args: Term) -> Term:
    """Apply a function to any number of arguments, left to right."""
    for arg in args:
        func = App(func, arg)
    return func


def lam(*params_body: Union[str, Term]) -> Term:
    """Build nested lambdas: lam("x", "y", body)."""
    if len(params_body) < 2:
        raise ValueError("lam needs at least one parameter and a body")
    *params, body = params_body
    for param in reversed(params):
        body = Abs(param, body)
    return body


def let(*bindings_body: Union[Binding, Term]) -> Term:
    """Build nested lets from (name, type, bound) triples and a body."""
    if len(bindings_body) < 2:
        raise ValueError("let needs at least one binding and a body")
    *bindings, body = bindings_body
    for name, type_, bound in reversed(bindings):
        body = Let(name, type_, bound, body)
    return body


def pi(*domains_codomain: Union[Domain, Term]) -> Term:
    """Build nested Pi types.

    Each domain is either a ``(name, type)`` pair or a bare type, which
    binds the wildcard name ``_``.
    """
    if len(domains_codomain) < 2:
        raise ValueError("pi needs at least one domain and a codomain")
    *domains, codomain = domains_codomain
    for domain in reversed(domains):
        if isinstance(domain, tuple):
            name, domain_type = domain
            codomain = Pi(name, domain_type, codomain)
        else:
            codomain = Pi("_", domain, codomain)
    return codomain


def arrow(domain: Term, codomain: Term) -> Term:
    """Non-dependent function type."""
    return Pi("_", domain, codomain)


def num(n: int) -> Term:
    """Unary numeral: n applications of suc to zero."""
    if n < 0:
        raise ValueError(f"Numerals must be non-negative, got {n}")
    term: Term = Zero()
    for _ in range(n):
        term = App(Suc(), term)
    return term
