"""Error reporting for nbe-lang.

This module provides:
- error categories and the context attached to each error
- suggestions for common mistakes
- the type derivation trace shown in verbose mode
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from enum import Enum, auto

from .syntax import SourceLocation
from .colors import Colors


class ErrorKind(Enum):
    """Categories of errors for suggestion generation."""
    UNKNOWN_VARIABLE = auto()
    NOT_A_FUNCTION = auto()
    TYPE_MISMATCH = auto()
    CANNOT_INFER = auto()
    # Invariant violations raised by the evaluator
    UNBOUND_VARIABLE = auto()
    NOT_A_NUMBER = auto()
    NOT_AN_EQUALITY = auto()


@dataclass
class ErrorContext:
    """Context information for an error."""
    location: Optional[SourceLocation] = None
    kind: Optional[ErrorKind] = None
    expected: Optional[str] = None
    actual: Optional[str] = None
    available_names: List[str] = field(default_factory=list)
    similar_names: List[str] = field(default_factory=list)


@dataclass
class TypeDerivation:
    """A step in type derivation for verbose output."""
    description: str
    location: Optional[SourceLocation]
    context: Dict[str, str]  # Variable name -> type
    result: Optional[str]


class TypeDerivationTrace:
    """Accumulates type derivation steps for verbose output."""

    def __init__(self):
        self.steps: List[TypeDerivation] = []
        self.enabled = False

    def add_step(self, description: str, location: Optional[SourceLocation] = None,
                 context: Optional[Dict[str, str]] = None, result: Optional[str] = None):
        """Add a derivation step."""
        if self.enabled:
            self.steps.append(TypeDerivation(
                description=description,
                location=location,
                context=context or {},
                result=result,
            ))

    def format(self) -> str:
        """Format the trace for display."""
        if not self.steps:
            return ""

        lines = [Colors.bold("Type Derivation Trace:")]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"{Colors.dim(f'Step {i}:')} {Colors.hint(step.description)}")

            if step.location:
                lines.append(f"  {Colors.dim('at')} {format_location(step.location)}")

            if step.context:
                lines.append(f"  {Colors.dim('context:')}")
                for var, ty in step.context.items():
                    lines.append(f"    {Colors.var_name(var)} : {Colors.type_name(ty)}")

            if step.result:
                lines.append(f"  {Colors.dim('result:')} {Colors.type_name(step.result)}")

        return "\n".join(lines)


# Global trace instance
_trace = TypeDerivationTrace()


def get_trace() -> TypeDerivationTrace:
    """Get the global type derivation trace."""
    return _trace


def enable_trace():
    """Enable type derivation tracing."""
    _trace.enabled = True


def disable_trace():
    """Disable type derivation tracing."""
    _trace.enabled = False


def clear_trace():
    """Clear the type derivation trace."""
    _trace.steps = []


def format_location(location: Optional[SourceLocation]) -> str:
    """Format a source location for display."""
    if not location:
        return "<unknown location>"

    parts = []
    if location.filename:
        parts.append(location.filename)
    parts.append(f"{location.line}:{location.column}")

    return ":".join(parts)


def suggest_similar_names(name: str, available_names: List[str], max_suggestions: int = 3) -> List[str]:
    """Find similar names using edit distance."""
    suggestions = []

    for available in available_names:
        distance = edit_distance(name, available)
        if 0 < distance <= 2:
            suggestions.append((distance, available))

    suggestions.sort(key=lambda x: x[0])
    return [name for _, name in suggestions[:max_suggestions]]


def edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        return edit_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def generate_suggestion(error_context: ErrorContext) -> Optional[str]:
    """Generate a helpful suggestion based on the error context."""
    if not error_context.kind:
        return None

    suggestions = []

    if error_context.kind == ErrorKind.UNKNOWN_VARIABLE:
        if error_context.similar_names:
            names = ", ".join(f"'{name}'" for name in error_context.similar_names[:3])
            suggestions.append(f"Did you mean: {names}?")

    elif error_context.kind == ErrorKind.TYPE_MISMATCH:
        expected = error_context.expected or ""
        actual = error_context.actual or ""
        if "→" in expected and "→" not in actual:
            suggestions.append("A function was expected here. Did you forget a lambda?")
        elif "→" in actual and "→" not in expected:
            suggestions.append("This looks like a function. Did you forget to apply an argument?")

    elif error_context.kind == ErrorKind.NOT_A_FUNCTION:
        if error_context.actual:
            suggestions.append(f"Only values of a Pi type can be applied, not values of type {error_context.actual}")

    elif error_context.kind == ErrorKind.CANNOT_INFER:
        suggestions.append("Lambdas have no parameter annotations; check them against a Pi type")
        suggestions.append("Example: let f: Nat → Nat = λ x. x in f")

    if suggestions:
        return "\n".join(f"{Colors.hint('Hint:')} {Colors.hint(s)}" for s in suggestions)

    return None


class NbeError(Exception):
    """Base class for all nbe-lang errors with enhanced reporting."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.context = context or ErrorContext()

    def format_error(self) -> str:
        """Format the error with location, suggestions and trace as rich markup."""
        parts = [Colors.error(f"Error: {self}")]
        if self.context.location:
            parts.append(f"{Colors.dim('at')} {format_location(self.context.location)}")

        suggestion = generate_suggestion(self.context)
        if suggestion:
            parts.append("")
            parts.append(suggestion)

        trace_output = get_trace().format()
        if trace_output:
            parts.append("")
            parts.append(trace_output)

        return "\n".join(parts)
