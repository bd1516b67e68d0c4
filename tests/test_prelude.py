"""Tests for the prelude definitions and the built-in examples."""

import pytest
from nbe_lang.syntax import *
from nbe_lang.core import *
from nbe_lang.evaluator import evaluate
from nbe_lang.quote import normalize
from nbe_lang.typechecker import Context, check
from nbe_lang.errors import TypeCheckError, ErrorKind
from nbe_lang.prelude import DEFINITIONS, EXAMPLES, with_prelude


def check_example(name: str) -> None:
    example = EXAMPLES[name]
    check(Environment(), Context(), example.term, evaluate(Environment(), example.expected_type))


def test_definition_names():
    """Test that the prelude defines its functions in dependency order."""
    assert [name for name, _, _ in DEFINITIONS] == ["plus", "mult", "cong", "plus-identity-right"]


def test_with_prelude_binds_everything():
    """Test that with_prelude wraps a body in one let per definition."""
    term = with_prelude(Var("x"))
    names = []
    while isinstance(term, Let):
        names.append(term.name)
        term = term.body
    assert names == [name for name, _, _ in DEFINITIONS]
    assert term == Var("x")


def test_prelude_type_checks():
    """Test that every prelude definition checks against its annotation."""
    check(Environment(), Context(), with_prelude(Zero()), VNat())


@pytest.mark.parametrize("name", sorted(name for name in EXAMPLES if name != "ill-typed"))
def test_examples_type_check(name):
    """Test that the well-typed examples check against their expected types."""
    check_example(name)


def test_ill_typed_example_is_rejected():
    """Test that the ill-typed example is reported as a type error."""
    with pytest.raises(TypeCheckError) as exc_info:
        check_example("ill-typed")
    assert exc_info.value.kind == ErrorKind.NOT_A_FUNCTION


def test_arithmetic_normal_form():
    """Test that the arithmetic example computes 42."""
    assert normalize(Environment(), EXAMPLES["arithmetic"].term) == num(42)


def test_identity_normal_form():
    """Test that the identity example is already normal."""
    assert normalize(Environment(), EXAMPLES["identity"].term) == lam("x", Var("x"))


def test_plus_identity_right_normal_form():
    """Test that the induction proof at 3 computes to a reflexivity proof.

    The step case receives the successor itself, so the outermost step
    builds its proof from suc (plus 3 0).
    """
    term = EXAMPLES["plus-identity-right"].term
    assert normalize(Environment(), term) == app(Refl(), Nat(), num(4))


def test_mult_by_zero_is_stuck_on_variable():
    """Test that mult recurses on its first argument."""
    env = Environment({"k": Lazy.wrap(VVar("k"))})
    assert normalize(env, with_prelude(app(Var("mult"), Zero(), Var("k")))) == Zero()
    stuck = normalize(env, with_prelude(app(Var("mult"), Var("k"), Zero())))
    assert isinstance(stuck, App)
