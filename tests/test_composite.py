"""Tests for composites: total order, evaluation, display."""

import itertools

import pytest

from symbolic_polynomials import (
    Ceil, DivisionByZero, Floor, Max, Min, MissingVariable, Polynomial, Variable,
    make_variable,
)


def _collect_composites(poly, into):
    for monomial in poly:
        for composite, _ in monomial.powers:
            into.append(composite)
            if not isinstance(composite, Variable):
                _collect_composites(composite.left, into)
                _collect_composites(composite.right, into)
    return into


class TestCompositeOrder:
    def setup_method(self):
        self.a = make_variable("a")
        self.b = make_variable("b")
        self.kinds = [
            Floor(self.a, self.b),
            Ceil(self.a, self.b),
            Min(self.a, self.b),
            Max(self.a, self.b),
            Variable("a"),
        ]

    def test_rank_table(self):
        # Listed in increasing rank
        for lower, higher in zip(self.kinds, self.kinds[1:]):
            assert lower < higher
            assert higher > lower
            assert lower.compare(higher) == -1
            assert higher.compare(lower) == 1

    def test_floor_ceil_antisymmetric(self):
        floor, ceil = Floor(self.a, self.b), Ceil(self.a, self.b)
        assert ceil > floor
        assert not floor > ceil
        assert floor.compare(ceil) == -ceil.compare(floor)

    def test_variables_reverse_identifier_order(self):
        assert Variable("a") > Variable("b")
        assert Variable("b") < Variable("a")
        assert Variable(0) > Variable(1)
        assert Variable("a") == Variable("a")

    def test_binary_lexicographic(self):
        a_sq = self.a * self.a
        assert Floor(a_sq, self.b) > Floor(self.a, self.b)
        assert Floor(self.a, self.a) > Floor(self.a, self.b)
        assert Max(self.a, self.b) == Max(self.a, self.b)
        assert Max(self.a, self.b) != Max(self.b, self.a)

    def test_structural_equality_and_hash(self):
        x = Floor(self.a * self.a, self.b)
        y = Floor(make_variable("a") * make_variable("a"), make_variable("b"))
        assert x is not y
        assert x == y
        assert hash(x) == hash(y)
        assert x != Ceil(self.a * self.a, self.b)

    def test_total_order_properties(self, random_composite):
        composites = []
        for _ in range(40):
            _collect_composites(random_composite(), composites)
        composites = composites[:60]
        assert len(composites) > 10

        for x, y in itertools.product(composites, repeat=2):
            outcomes = [x < y, x == y, x > y]
            assert outcomes.count(True) == 1
            assert x.compare(y) == -y.compare(x)

        for x, y, z in itertools.product(composites[:25], repeat=3):
            if x.compare(y) <= 0 and y.compare(z) <= 0:
                assert x.compare(z) <= 0


class TestCompositeEvaluate:
    def setup_method(self):
        self.a = make_variable("a")
        self.b = make_variable("b")
        self.values = {"a": 3, "b": 2}

    def test_variable(self):
        assert Variable("a").evaluate(self.values) == 3

    def test_missing_variable(self):
        with pytest.raises(MissingVariable) as info:
            Variable("z").evaluate(self.values)
        assert info.value.identifier == "z"
        assert "z" in str(info.value)

    def test_missing_variable_is_key_error(self):
        with pytest.raises(KeyError):
            Variable("z").evaluate({})

    def test_binary_kinds(self):
        nine = self.a * self.a
        four = self.b * self.b
        assert Floor(nine, four).evaluate(self.values) == 2
        assert Ceil(nine, four).evaluate(self.values) == 3
        assert Min(nine, four).evaluate(self.values) == 4
        assert Max(nine, four).evaluate(self.values) == 9

    def test_negative_operands(self):
        values = {"a": -7, "b": 2}
        assert Floor(self.a, self.b).evaluate(values) == -4
        assert Ceil(self.a, self.b).evaluate(values) == -3

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZero):
            Floor(self.a, self.b - 2).evaluate(self.values)
        with pytest.raises(DivisionByZero):
            Ceil(self.a, self.b - 2).evaluate(self.values)

    def test_collect_identifiers(self):
        seen = set()
        Max(self.a, Polynomial.constant(3)).collect_identifiers(seen)
        Floor(self.b, self.b).collect_identifiers(seen)
        assert seen == {"a", "b"}


class TestCompositeDisplay:
    def test_str(self):
        a, b = make_variable("a"), make_variable("b")
        assert str(Variable("a")) == "a"
        assert str(Floor(a * a, b * b)) == "floor(a^2, b^2)"
        assert str(Ceil(a, b + 1)) == "ceil(a, b + 1)"
        assert str(Min(a, b)) == "min(a, b)"
        assert str(Max(a, 2 * b)) == "max(a, 2b)"

    def test_repr(self):
        assert repr(Variable("a")) == "Variable('a')"
        a, b = make_variable("a"), make_variable("b")
        assert repr(Min(a, b)) == "Min(Polynomial(a), Polynomial(b))"
