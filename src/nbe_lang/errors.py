"""Error types for nbe-lang.

Two tiers:

- :class:`TypeCheckError` reports an ill-typed program. Drivers catch it
  and show it to the user.
- :class:`EvalError` reports a runtime tag mismatch during evaluation. A
  term that passed :func:`~nbe_lang.typechecker.check` never raises it, so
  seeing one means the checker or its caller is wrong.
"""

from typing import Optional

from .syntax import SourceLocation, Term
from .error_reporting import (
    NbeError,
    ErrorContext,
    ErrorKind,
    get_trace,
    enable_trace,
    disable_trace,
    clear_trace,
)

__all__ = [
    "NbeError",
    "TypeCheckError",
    "EvalError",
    "ErrorContext",
    "ErrorKind",
    "get_trace",
    "enable_trace",
    "disable_trace",
    "clear_trace",
]


class TypeCheckError(NbeError):
    """Type checking error carrying the offending term."""

    def __init__(self, message: str, term: Optional[Term] = None,
                 location: Optional[SourceLocation] = None,
                 context: Optional[ErrorContext] = None):
        if context is None:
            context = ErrorContext(location=location)
        elif location is not None:
            context.location = location
        super().__init__(message, context)
        self.term = term

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.context.kind

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.context.location

    def attach(self, term: Term) -> None:
        """Record ``term``'s location unless a more specific one is already set."""
        if self.term is None:
            self.term = term
        if self.context.location is None and term.location is not None:
            self.context.location = term.location


class EvalError(NbeError):
    """Evaluation error: a value's tag does not fit the operation."""

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message, ErrorContext(kind=kind))

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.context.kind
