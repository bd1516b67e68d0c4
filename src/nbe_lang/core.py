"""Core semantic domain for nbe-lang.

This module defines the values produced by evaluation, the spine frames
pending on neutral values, the lazy cells that defer evaluation, and the
environments that map names to those cells. Values are kept separate from
terms so that binders can be represented by Python closures and never
need substitution.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterator, Optional, Tuple
from abc import ABC


class Lazy:
    """A deferred, memoized value.

    The thunk runs on the first call to :meth:`force`; later calls return
    the cached result.
    """

    __slots__ = ("_thunk", "_value")

    def __init__(self, thunk: Callable[[], Value]):
        self._thunk: Optional[Callable[[], Value]] = thunk
        self._value: Optional[Value] = None

    @classmethod
    def wrap(cls, value: Value) -> Lazy:
        """Create an already-forced cell."""
        cell = cls.__new__(cls)
        cell._thunk = None
        cell._value = value
        return cell

    @property
    def forced(self) -> bool:
        return self._thunk is None

    def force(self) -> Value:
        if self._thunk is not None:
            thunk = self._thunk
            self._value = thunk()
            self._thunk = None
        return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.forced:
            return f"Lazy({self._value!r})"
        return "Lazy(<pending>)"


class Value(ABC):
    """Base class for values during evaluation."""


@dataclass(frozen=True)
class VType(Value):
    """The sort Type."""


@dataclass(frozen=True)
class VNat(Value):
    """The type of natural numbers."""


@dataclass(frozen=True)
class VZero(Value):
    pass


@dataclass(frozen=True)
class VSuc(Value):
    n: Lazy


@dataclass(frozen=True)
class VEq(Value):
    """Equality type ``Eq A x y``."""
    A: Lazy
    x: Lazy
    y: Lazy


@dataclass(frozen=True)
class VRefl(Value):
    """Reflexivity proof ``refl A x``."""
    A: Lazy
    x: Lazy


@dataclass(frozen=True)
class VPi(Value):
    """Pi type value; the codomain is a closure over the defining environment."""
    name: str
    domain: Value
    codomain: Callable[[Lazy], Value]


@dataclass(frozen=True)
class VAbs(Value):
    """Lambda value."""
    name: str
    func: Callable[[Lazy], Value]


# Spine frames, one per elimination pending on a stuck variable
class Frame(ABC):
    """Base class for spine frames."""


@dataclass(frozen=True)
class SApp(Frame):
    arg: Lazy


@dataclass(frozen=True)
class SNatElim(Frame):
    P: Lazy
    Pz: Lazy
    Ps: Lazy


@dataclass(frozen=True)
class SEqElim(Frame):
    A: Lazy
    x: Lazy
    P: Lazy
    Prefl: Lazy
    y: Lazy


Spine = Tuple[Frame, ...]


@dataclass(frozen=True)
class VVar(Value):
    """Neutral value: a free variable and the eliminations pending on it.

    The spine is ordered innermost first, so ``f a b`` is
    ``VVar("f", (SApp(a), SApp(b)))``.
    """
    name: str
    spine: Spine = ()

    def push(self, frame: Frame) -> VVar:
        """Return this neutral with one more pending elimination."""
        return VVar(self.name, self.spine + (frame,))


# Environment
class Environment:
    """Persistent mapping from variable names to lazy values.

    Environments are never mutated; :meth:`extend` returns a new one, so
    evaluations of sibling subterms cannot observe each other's bindings.

    Besides its bindings an environment carries *reserved* names: names of
    free variables in scope that no source name refers to. They cannot be
    looked up, but ``name in env`` holds for them, so :func:`freshen` never
    hands them out again.
    """

    __slots__ = ("values", "reserved")

    def __init__(self, values: Optional[Dict[str, Lazy]] = None,
                 reserved: FrozenSet[str] = frozenset()):
        self.values: Dict[str, Lazy] = dict(values) if values else {}
        self.reserved: FrozenSet[str] = frozenset(reserved)

    def lookup(self, name: str) -> Optional[Lazy]:
        """Look up a variable by name."""
        return self.values.get(name)

    def extend(self, name: str, value: Lazy) -> Environment:
        """Extend environment with a new binding."""
        env = Environment.__new__(Environment)
        env.values = {**self.values, name: value}
        env.reserved = self.reserved
        return env

    def reserve(self, name: str) -> Environment:
        """Return an environment in which ``name`` is taken but unbound."""
        env = Environment.__new__(Environment)
        env.values = self.values
        env.reserved = self.reserved | {name}
        return env

    def __contains__(self, name: object) -> bool:
        return name in self.values or name in self.reserved

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Environment({list(self.values)})"


def freshen(env: Environment, name: str) -> str:
    """Prime ``name`` until it is neither bound nor reserved in ``env``.

    The wildcard ``_`` is returned unchanged.
    """
    if name == "_":
        return name
    while name in env:
        name += "'"
    return name


def fresh_binder(env: Environment, name: str) -> str:
    """Like :func:`freshen`, but the wildcard is renamed too.

    Used where the bound variable must stay distinct from every other one,
    even when nothing can refer to it by name.
    """
    return freshen(env, "_'" if name == "_" else name)
