"""Tests for Laterite expression tree definitions."""

import dataclasses
from fractions import Fraction

import pytest

from laterite.ast_nodes import (
    Expression,
    BinaryExpression,
    Add,
    Sub,
    Mul,
    Div,
    Pow,
    Neg,
    Rational,
    Variable,
    Call,
    Function,
    Let,
    children,
    walk,
    to_infix,
)
from laterite.failures import Span


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    @pytest.mark.parametrize("cls", [Add, Sub, Mul, Div, Pow])
    def test_binary_nodes(self, cls):
        node = cls(Variable("a"), Variable("b"))
        assert isinstance(node, BinaryExpression)
        assert isinstance(node, Expression)
        assert node.left == Variable("a")
        assert node.right == Variable("b")
        assert node.span is None

    def test_neg(self):
        node = Neg(Variable("x"))
        assert node.operand == Variable("x")

    def test_rational(self):
        node = Rational(Fraction(5, 4))
        assert node.value == Fraction(5, 4)

    def test_call(self):
        node = Call("f", (Variable("x"),))
        assert node.name == "f"
        assert node.arguments == (Variable("x"),)

    def test_function(self):
        node = Function("f", ("a",), Variable("a"), Call("f", (Rational(Fraction(1)),)))
        assert node.params == ("a",)
        assert node.body == Variable("a")

    def test_let(self):
        node = Let("x", Rational(Fraction(2)), Variable("x"))
        assert node.name == "x"
        assert node.then == Variable("x")

    def test_span_is_keyword_only(self):
        node = Variable("x", span=Span(0, 1))
        assert node.span == Span(0, 1)
        with pytest.raises(TypeError):
            Variable("x", Span(0, 1))


# ---------------------------------------------------------------------------
# Immutability and equality
# ---------------------------------------------------------------------------

class TestImmutability:
    def test_frozen(self):
        node = Add(Variable("a"), Variable("b"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.left = Variable("c")

    def test_equality_ignores_span(self):
        assert Variable("x", span=Span(0, 1)) == Variable("x", span=Span(3, 4))

    def test_different_operators_not_equal(self):
        assert Add(Variable("a"), Variable("b")) != Sub(Variable("a"), Variable("b"))

    def test_hashable(self):
        tree = Mul(Rational(Fraction(1, 2)), Call("f", (Variable("x"),)))
        assert hash(tree) == hash(Mul(Rational(Fraction(1, 2)), Call("f", (Variable("x"),))))


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

class TestTraversal:
    def test_children_of_leaf(self):
        assert children(Variable("x")) == ()

    def test_children_of_binary(self):
        a, b = Variable("a"), Variable("b")
        assert children(Div(a, b)) == (a, b)

    def test_children_of_call(self):
        a, b = Variable("a"), Variable("b")
        assert children(Call("f", (a, b))) == (a, b)

    def test_children_of_function_skip_params(self):
        body, then = Variable("a"), Variable("b")
        assert children(Function("f", ("a",), body, then)) == (body, then)

    def test_walk_preorder(self):
        a, b, c = Variable("a"), Variable("b"), Variable("c")
        tree = Add(Mul(a, b), Neg(c))
        assert list(walk(tree)) == [tree, Mul(a, b), a, b, Neg(c), c]


# ---------------------------------------------------------------------------
# Infix rendering
# ---------------------------------------------------------------------------

class TestToInfix:
    def test_binary(self):
        tree = Sub(Sub(Rational(Fraction(1)), Rational(Fraction(2))), Rational(Fraction(3)))
        assert to_infix(tree) == "((1 - 2) - 3)"

    def test_fraction_is_parenthesised(self):
        assert to_infix(Rational(Fraction(13, 4))) == "(13/4)"

    def test_call_and_neg(self):
        tree = Neg(Call("f", (Variable("x"), Variable("y"))))
        assert to_infix(tree) == "-@f(x, y)"

    def test_bindings(self):
        tree = Let("x", Rational(Fraction(2)), Pow(Variable("x"), Variable("x")))
        assert to_infix(tree) == "let x = 2 in (x ^ x)"
        tree = Function("f", ("a", "b"), Variable("a"), Variable("z"))
        assert to_infix(tree) == "func f(a, b) = a in z"

    def test_rejects_non_nodes(self):
        with pytest.raises(TypeError):
            to_infix("x")
