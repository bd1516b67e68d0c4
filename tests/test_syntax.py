"""Tests for the term model and its builders."""

import pytest
from nbe_lang.syntax import *


def test_app_nests_to_the_left():
    """Test that app applies arguments left to right."""
    term = app(Var("f"), Var("a"), Var("b"))
    assert term == App(App(Var("f"), Var("a")), Var("b"))
    assert app(Var("f")) == Var("f")


def test_lam_nests_to_the_right():
    """Test that lam binds parameters outermost first."""
    term = lam("x", "y", Var("x"))
    assert term == Abs("x", Abs("y", Var("x")))

    with pytest.raises(ValueError):
        lam(Var("x"))


def test_let_chain():
    """Test building a chain of let bindings."""
    term = let(("x", Nat(), Zero()), ("y", Nat(), Var("x")), Var("y"))
    assert term == Let("x", Nat(), Zero(), Let("y", Nat(), Var("x"), Var("y")))


def test_pi_named_and_anonymous_domains():
    """Test that bare domains bind the wildcard name."""
    term = pi(("A", Type()), Var("A"), Var("A"))
    assert term == Pi("A", Type(), Pi("_", Var("A"), Var("A")))
    assert arrow(Nat(), Nat()) == Pi("_", Nat(), Nat())


def test_numerals():
    """Test unary numerals."""
    assert num(0) == Zero()
    assert num(2) == App(Suc(), App(Suc(), Zero()))

    with pytest.raises(ValueError) as exc_info:
        num(-1)
    assert "non-negative" in str(exc_info.value)


def test_location_is_ignored_by_equality():
    """Test that source locations do not affect term equality."""
    here = SourceLocation(3, 7, "example")
    assert Var("x", location=here) == Var("x")
    assert Var("x", location=here).location == here
    assert hash(Zero(location=here)) == hash(Zero())
