"""Unit tests for rational quantities and their arithmetic."""

from fractions import Fraction

import pytest

from mealplanner.errors import DivisionByZeroError, InvalidFormatError, ZeroDenominatorError
from mealplanner.normalize.quantity import (
    ZERO,
    RationalQuantity,
    add,
    compare,
    divide,
    is_zero,
    multiply,
    negate,
    normalize,
    quantity_to_decimal,
    subtract,
)

Q = RationalQuantity

SAMPLE_QUANTITIES = [
    Q(0, 0, 1),
    Q(0, 2, 4),
    Q(1, 5, 2),
    Q(2, -5, 2),
    Q(0, -1, 2),
    Q(3, 4, -6),
    Q(-1, -3, 4),
    Q(7, 0, 9),
    Q(0, 12, 4),
]


class TestRationalQuantity:
    """Tests for the RationalQuantity value type."""

    def test_zero_denominator_rejected(self):
        """Test that a zero denominator cannot be constructed."""
        with pytest.raises(ZeroDenominatorError):
            Q(1, 1, 0)

    def test_immutable(self):
        """Test that quantities cannot be mutated."""
        q = Q(1, 1, 2)
        with pytest.raises(AttributeError):
            q.whole = 2

    def test_fraction_round_trip(self):
        """Test conversion to and from Fraction."""
        assert Q(1, 1, 2).to_fraction() == Fraction(3, 2)
        assert Q.from_fraction(Fraction(7, 4)) == Q(1, 3, 4)
        assert Q.from_fraction(3) == Q(3, 0, 1)

    def test_float(self):
        """Test float conversion."""
        assert float(Q(2, 1, 4)) == 2.25

    def test_operators(self):
        """Test that operators delegate to the arithmetic functions."""
        assert Q(1, 1, 2) + Q(0, 1, 4) == Q(1, 3, 4)
        assert Q(1, 1, 2) - Q(0, 1, 2) == Q(1, 0, 1)
        assert Q(0, 1, 2) * 3 == Q(1, 1, 2)
        assert 3 * Q(0, 1, 2) == Q(1, 1, 2)
        assert Q(3, 0, 1) / 2 == Q(1, 1, 2)
        assert -Q(1, 1, 2) == Q(-1, -1, 2)

    def test_is_integral(self):
        assert Q(0, 4, 2).is_integral
        assert not Q(1, 1, 2).is_integral


class TestNormalize:
    """Tests for normalize function."""

    def test_reduce_fractions(self):
        """Test reducing fractions to lowest terms."""
        assert normalize(Q(0, 2, 4)) == Q(0, 1, 2)
        assert normalize(Q(0, 4, 8)) == Q(0, 1, 2)

    def test_move_excess_numerator(self):
        """Test moving an improper numerator into the whole part."""
        assert normalize(Q(0, 5, 2)) == Q(2, 1, 2)
        assert normalize(Q(1, 5, 2)) == Q(3, 1, 2)
        assert normalize(Q(0, 12, 4)) == Q(3, 0, 1)

    def test_zero_fraction(self):
        """Test that a zero numerator forces denominator 1."""
        assert normalize(Q(5, 0, 3)) == Q(5, 0, 1)
        assert normalize(Q(0, 0, 7)) == Q(0, 0, 1)

    def test_negative_numbers(self):
        """Test that whole and numerator share the sign of the value."""
        assert normalize(Q(0, -1, 2)) == Q(0, -1, 2)
        assert normalize(Q(2, -5, 2)) == Q(0, -1, 2)
        assert normalize(Q(0, -7, 2)) == Q(-3, -1, 2)
        assert normalize(Q(-1, 1, 2)) == Q(0, -1, 2)

    def test_negative_denominator(self):
        """Test that a negative denominator is made positive."""
        assert normalize(Q(0, 1, -2)) == Q(0, -1, 2)
        assert normalize(Q(3, 4, -6)) == Q(2, 1, 3)

    @pytest.mark.parametrize("q", SAMPLE_QUANTITIES)
    def test_idempotent(self, q):
        """Test that normalizing twice changes nothing."""
        assert normalize(normalize(q)) == normalize(q)

    @pytest.mark.parametrize("q", SAMPLE_QUANTITIES)
    def test_canonical_invariants(self, q):
        """Test the canonical form of every normalized value."""
        n = normalize(q)
        assert n.denom > 0
        assert abs(n.num) < n.denom
        if n.num == 0:
            assert n.denom == 1
        else:
            assert Fraction(abs(n.num), n.denom).denominator == n.denom
            assert n.whole == 0 or (n.whole > 0) == (n.num > 0)
        assert n.to_fraction() == q.to_fraction()


class TestAdd:
    """Tests for add function."""

    def test_same_denominator(self):
        assert add(Q(0, 1, 2), Q(0, 1, 2)) == Q(1, 0, 1)

    def test_different_denominators(self):
        assert add(Q(0, 1, 2), Q(0, 1, 4)) == Q(0, 3, 4)

    def test_mixed_numbers(self):
        """Test adding mixed numbers."""
        assert add(Q(1, 1, 2), Q(0, 1, 4)) == Q(1, 3, 4)
        assert add(Q(1, 1, 2), Q(2, 1, 4)) == Q(3, 3, 4)

    def test_all_zeros(self):
        assert add(Q(0, 0, 1), Q(0, 0, 1)) == Q(0, 0, 1)

    def test_whole_cups(self):
        """Test 2 cups + 1 cup = 3 cups."""
        assert add(Q(2, 0, 1), Q(1, 0, 1)) == Q(3, 0, 1)

    def test_thirds_stay_exact(self):
        """Test that thirds add up without drift."""
        third = Q(0, 1, 3)
        assert add(add(third, third), third) == Q(1, 0, 1)

    @pytest.mark.parametrize("q", SAMPLE_QUANTITIES)
    def test_identity(self, q):
        """Test that adding zero yields the normalized value."""
        assert add(q, ZERO) == normalize(q)

    @pytest.mark.parametrize("a", SAMPLE_QUANTITIES[:5])
    @pytest.mark.parametrize("b", SAMPLE_QUANTITIES[4:])
    def test_commutative(self, a, b):
        assert add(a, b) == add(b, a)


class TestSubtract:
    """Tests for subtract and negate."""

    def test_subtract(self):
        assert subtract(Q(1, 1, 2), Q(0, 1, 2)) == Q(1, 0, 1)

    def test_negative_result(self):
        """Test that a negative result keeps a negative numerator."""
        assert subtract(Q(0, 1, 4), Q(0, 1, 2)) == Q(0, -1, 4)
        assert subtract(Q(1, 0, 1), Q(2, 1, 2)) == Q(-1, -1, 2)

    def test_negate(self):
        assert negate(Q(1, 1, 2)) == Q(-1, -1, 2)

    def test_subtract_self_is_zero(self):
        assert subtract(Q(3, 2, 7), Q(3, 2, 7)) == ZERO


class TestMultiply:
    """Tests for multiply function."""

    def test_by_integers(self):
        assert multiply(Q(1, 1, 2), 2) == Q(3, 0, 1)
        assert multiply(Q(2, 0, 1), 3) == Q(6, 0, 1)

    def test_half_by_two(self):
        """Test 1/2 * 2 = 1."""
        assert multiply(Q(0, 1, 2), 2) == Q(1, 0, 1)

    def test_by_decimals(self):
        """Test scaling by float factors."""
        assert multiply(Q(2, 0, 1), 1.5) == Q(3, 0, 1)
        assert multiply(Q(2, 0, 1), 0.5) == Q(1, 0, 1)
        assert multiply(Q(1, 1, 3), 1.5) == Q(2, 0, 1)
        assert multiply(Q(10, 0, 1), 0.1) == Q(1, 0, 1)

    def test_by_tiny_float(self):
        """Test that a small non-zero float factor is not rounded away."""
        result = multiply(Q(1000, 0, 1), 4e-5)
        assert result != Q(0, 0, 1)
        assert float(result) == pytest.approx(0.04)

    def test_by_fraction(self):
        """Test that rational scale factors are exact."""
        assert multiply(Q(1, 1, 2), Fraction(2, 3)) == Q(1, 0, 1)
        assert multiply(Q(0, 3, 4), Q(0, 1, 3)) == Q(0, 1, 4)

    @pytest.mark.parametrize("q", SAMPLE_QUANTITIES)
    def test_by_one(self, q):
        assert multiply(q, 1) == normalize(q)

    @pytest.mark.parametrize("q", SAMPLE_QUANTITIES)
    def test_by_zero(self, q):
        assert multiply(q, 0) == Q(0, 0, 1)

    def test_rejects_non_finite(self):
        with pytest.raises(InvalidFormatError):
            multiply(Q(1, 0, 1), float("nan"))
        with pytest.raises(InvalidFormatError):
            multiply(Q(1, 0, 1), float("inf"))

    def test_rejects_non_numbers(self):
        with pytest.raises(InvalidFormatError):
            multiply(Q(1, 0, 1), "2")


class TestDivide:
    """Tests for divide function."""

    def test_by_integers(self):
        assert divide(Q(2, 0, 1), 2) == Q(1, 0, 1)
        assert divide(Q(1, 0, 1), 3) == Q(0, 1, 3)

    def test_by_fraction(self):
        assert divide(Q(1, 0, 1), Fraction(1, 2)) == Q(2, 0, 1)

    @pytest.mark.parametrize("zero", [0, 0.0, Fraction(0), Q(0, 0, 1)])
    def test_by_zero(self, zero):
        """Test that division by zero fails."""
        with pytest.raises(DivisionByZeroError):
            divide(Q(1, 0, 1), zero)

    def test_by_tiny_float(self):
        """Test that only an actual zero counts as division by zero."""
        assert float(divide(Q(1, 0, 1), 2e-5)) == pytest.approx(50_000)

    def test_division_error_is_zero_division(self):
        with pytest.raises(ZeroDivisionError):
            divide(Q(1, 0, 1), 0)


class TestCompare:
    """Tests for compare function."""

    def test_equal(self):
        assert compare(Q(1, 1, 2), Q(1, 1, 2)) == 0
        assert compare(Q(0, 2, 4), Q(0, 1, 2)) == 0

    def test_less_than(self):
        assert compare(Q(0, 1, 4), Q(0, 1, 2)) == -1
        assert compare(Q(0, -1, 2), ZERO) == -1

    def test_greater_than(self):
        assert compare(Q(2, 0, 1), Q(1, 7, 8)) == 1

    def test_close_values(self):
        """Test that values closer than float precision still compare exactly."""
        a = Q(0, 10**17, 10**17 + 1)
        b = Q(0, 10**17 + 1, 10**17 + 2)
        assert compare(a, b) == -1


class TestHelpers:
    def test_quantity_to_decimal(self):
        assert quantity_to_decimal(Q(1, 1, 2)) == 1.5
        assert quantity_to_decimal(Q(0, -1, 4)) == -0.25

    def test_is_zero(self):
        assert is_zero(ZERO)
        assert is_zero(Q(0, 0, 5))
        assert not is_zero(Q(0, 1, 5))
