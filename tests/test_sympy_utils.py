"""Tests for SymPy interop, with SymPy as an independent expansion oracle."""

import pytest
import sympy

from symbolic_polynomials import Polynomial, make_ceil, make_floor, make_max, make_min, make_variable
from symbolic_polynomials.sympy_utils import default_symbol, from_sympy, sympy_equal, to_sympy


class TestToSympy:
    def setup_method(self):
        self.a = make_variable("a")
        self.b = make_variable("b")
        self.sa = default_symbol("a")
        self.sb = default_symbol("b")

    def test_polynomial(self):
        p = (self.a + 1) * (self.b - 2)
        expected = sympy.expand((self.sa + 1) * (self.sb - 2))
        assert sympy.expand(to_sympy(p) - expected) == 0

    def test_zero(self):
        assert to_sympy(Polynomial()) == 0

    def test_composites(self):
        p = make_floor(self.a * self.a, self.b) + make_max(self.a, self.b)
        expr = to_sympy(p)
        assert expr.has(sympy.floor)
        assert expr.has(sympy.Max)
        assert expr.subs({self.sa: 7, self.sb: 2}) == p.evaluate({"a": 7, "b": 2})

    def test_ceil_and_min_values(self):
        p = make_ceil(self.a, self.b) * make_min(self.a, 3)
        values = {"a": -7, "b": 2}
        assert to_sympy(p).subs({self.sa: -7, self.sb: 2}) == p.evaluate(values)

    def test_custom_symbols(self):
        x = sympy.Symbol("x0")
        assert to_sympy(self.a * 2, lambda i: x) == 2 * x


class TestFromSympy:
    def setup_method(self):
        self.sa, self.sb = sympy.symbols("a b", integer=True)
        self.a = make_variable("a")
        self.b = make_variable("b")

    def test_polynomial(self):
        expr = (self.sa + 2 * self.sb) ** 3 - 4
        assert from_sympy(expr) == (self.a + 2 * self.b) ** 3 - 4

    def test_floor_ceiling(self):
        assert from_sympy(sympy.floor(self.sa ** 2 / self.sb ** 2)) == make_floor(self.a * self.a, self.b * self.b)
        assert from_sympy(sympy.ceiling(self.sa / 3)) == make_ceil(self.a, 3)

    def test_min_max(self):
        p = from_sympy(sympy.Max(self.sa, self.sb, 4))
        assert p.evaluate({"a": 1, "b": 2}) == 4
        assert p.evaluate({"a": 9, "b": 2}) == 9

    def test_identifier_mapping(self):
        p = from_sympy(self.sa * self.sb, lambda s: {"a": 0, "b": 1}[s.name])
        assert p == make_variable(0) * make_variable(1)

    @pytest.mark.parametrize("expr", [
        sympy.Rational(1, 2),
        sympy.Symbol("a") / 2,
        sympy.Symbol("a") ** -1,
        sympy.Symbol("a") ** sympy.Symbol("b"),
        sympy.sin(sympy.Symbol("a")),
    ])
    def test_rejects(self, expr):
        with pytest.raises(ValueError):
            from_sympy(expr)


class TestSympyOracle:
    def test_random_products_match_sympy(self, random_poly):
        for _ in range(20):
            p, q = random_poly(), random_poly()
            expected = sympy.expand(to_sympy(p) * to_sympy(q))
            assert sympy_equal(p * q, expected)
            assert from_sympy(expected) == p * q

    def test_round_trip(self, random_poly):
        for _ in range(20):
            p = random_poly()
            assert from_sympy(to_sympy(p)) == p

    def test_division_matches_sympy(self, random_poly):
        for _ in range(20):
            q = random_poly()
            if q.is_zero():
                continue
            p = q * random_poly() + 3
            quotient, remainder = p.div_rem(q)
            assert sympy_equal(quotient * q + remainder, to_sympy(p))

    def test_not_equal(self):
        a = make_variable("a")
        assert not sympy_equal(a + 1, default_symbol("a"))
