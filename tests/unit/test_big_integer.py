"""Tests for BigInteger."""

import operator
import pickle

import pytest

from bignum import (
    BigDecimal,
    BigInteger,
    BigRational,
    DivisionByZeroError,
    IntegerOverflowError,
    InvalidArgumentError,
    NegativeNumberError,
    NumberFormatError,
    RoundingMode,
    RoundingNecessaryError,
)
from bignum.models import BigIntegerModel

pytestmark = pytest.mark.usefixtures("calculator")

BIG = "1234567891234567889999999"


class TestOf:
    """Tests for BigInteger.of()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (-123, "-123"),
            (10**30, "1" + "0" * 30),
            ("007", "7"),
            ("+5", "5"),
            ("-0", "0"),
            ("1.0", "1"),
            ("1e20", "1" + "0" * 20),
            ("12/4", "3"),
            (2.0, "2"),
            (-1e20, "-1" + "0" * 20),
        ],
    )
    def test_of(self, value, expected):
        """Ints, text, exact floats and whole fractions are accepted."""
        assert str(BigInteger.of(value)) == expected

    def test_of_returns_same_instance(self):
        """An existing BigInteger is returned as is."""
        n = BigInteger.of(5)
        assert BigInteger.of(n) is n

    @pytest.mark.parametrize("value", ["1.1", "7/9", 0.5])
    def test_of_inexact_raises(self, value):
        """Values with a fractional part raise RoundingNecessaryError."""
        with pytest.raises(RoundingNecessaryError):
            BigInteger.of(value)

    @pytest.mark.parametrize("value", ["", " 1", "1 ", "abc", "1..0", "--1", "0x10", "1/-2", "1e"])
    def test_of_malformed_raises(self, value):
        """Malformed text raises NumberFormatError."""
        with pytest.raises(NumberFormatError):
            BigInteger.of(value)

    def test_of_bool_rejected(self):
        """bool is not accepted as an integer."""
        with pytest.raises(TypeError):
            BigInteger.of(True)

    def test_of_infinite_float_rejected(self):
        """Infinite floats are rejected."""
        with pytest.raises(NumberFormatError):
            BigInteger.of(float("inf"))

    def test_of_fraction_zero_denominator(self):
        """A zero denominator raises DivisionByZeroError."""
        with pytest.raises(DivisionByZeroError):
            BigInteger.of("1/0")


class TestParse:
    """Tests for BigInteger.parse()."""

    @pytest.mark.parametrize(
        "text,base,expected",
        [
            ("ff", 16, "255"),
            ("FF", 16, "255"),
            ("-ff", 16, "-255"),
            ("+101", 2, "5"),
            ("0x1F", 16, "31"),
            ("-0b101", 2, "-5"),
            ("0o17", 8, "15"),
            ("000", 5, "0"),
            ("zz", 36, "1295"),
            ("123456789012345678901234567890", 10, "123456789012345678901234567890"),
        ],
    )
    def test_parse(self, text, base, expected):
        """Digits in any base, with optional sign and prefix."""
        assert str(BigInteger.parse(text, base)) == expected

    @pytest.mark.parametrize("text,base", [("", 10), ("-", 10), ("12", 2), ("1g", 16), ("0x", 16), ("1.5", 10)])
    def test_parse_invalid(self, text, base):
        """Empty text, stray characters and bare prefixes are rejected."""
        with pytest.raises(NumberFormatError):
            BigInteger.parse(text, base)

    @pytest.mark.parametrize("base", [1, 37, 0, -10])
    def test_parse_invalid_base(self, base):
        """Bases outside 2..36 are rejected."""
        with pytest.raises(InvalidArgumentError):
            BigInteger.parse("1", base)


class TestConstants:
    """Tests for zero(), one() and ten()."""

    def test_singletons(self):
        """The constants are cached instances."""
        assert BigInteger.zero() is BigInteger.zero()
        assert BigInteger.one() is BigInteger.one()
        assert BigInteger.ten() is BigInteger.ten()

    def test_values(self):
        """The constants have the expected values."""
        assert str(BigInteger.zero()) == "0"
        assert str(BigInteger.one()) == "1"
        assert str(BigInteger.ten()) == "10"


class TestArithmetic:
    """Tests for the named arithmetic methods."""

    def test_plus(self):
        """plus() carries across chunks."""
        assert str(BigInteger.of(BIG).plus(BIG)) == "2469135782469135779999998"

    def test_minus(self):
        """minus() can change sign."""
        assert str(BigInteger.of(5).minus(BIG)) == "-1234567891234567889999994"

    def test_multiplied_by(self):
        """multiplied_by() handles mixed signs."""
        assert str(BigInteger.of(BIG).multiplied_by("-" + BIG)) == "-1524157878067367851562259605883269630864220000001"

    @pytest.mark.parametrize(
        "a,b,mode,expected",
        [
            ("7", "2", RoundingMode.DOWN, "3"),
            ("7", "2", RoundingMode.UP, "4"),
            ("-7", "2", RoundingMode.FLOOR, "-4"),
            ("-7", "2", RoundingMode.CEILING, "-3"),
            ("10", "4", RoundingMode.HALF_EVEN, "2"),
            ("14", "4", RoundingMode.HALF_EVEN, "4"),
            ("12", "4", RoundingMode.UNNECESSARY, "3"),
        ],
    )
    def test_divided_by(self, a, b, mode, expected):
        """divided_by() rounds with the requested mode."""
        assert str(BigInteger.of(a).divided_by(b, mode)) == expected

    def test_divided_by_inexact(self):
        """The default UNNECESSARY mode rejects an inexact quotient."""
        with pytest.raises(RoundingNecessaryError):
            BigInteger.of(7).divided_by(2)

    def test_divided_by_zero(self):
        """Dividing by zero raises DivisionByZeroError."""
        with pytest.raises(DivisionByZeroError):
            BigInteger.of(7).divided_by(0)

    def test_quotient_and_remainder_truncate(self):
        """Quotient and remainder truncate toward zero."""
        q, r = BigInteger.of(-17).quotient_and_remainder(5)
        assert (str(q), str(r)) == ("-3", "-2")
        assert str(BigInteger.of(-17).quotient(5)) == "-3"
        assert str(BigInteger.of(-17).remainder(5)) == "-2"

    def test_quotient_by_zero(self):
        """quotient() and remainder() reject a zero divisor."""
        with pytest.raises(DivisionByZeroError):
            BigInteger.of(1).quotient(0)
        with pytest.raises(DivisionByZeroError):
            BigInteger.of(1).remainder(0)

    def test_mod(self):
        """mod() is never negative for a positive modulus."""
        assert str(BigInteger.of(-17).mod(5)) == "3"

    def test_mod_negative_modulus(self):
        """A negative modulus raises NegativeNumberError."""
        with pytest.raises(NegativeNumberError):
            BigInteger.of(17).mod(-5)

    def test_mod_pow(self):
        """mod_pow() reduces into the modulus."""
        assert str(BigInteger.of(4).mod_pow(13, 497)) == "445"

    def test_power(self):
        """power() of a large negative base and of zero."""
        assert str(BigInteger.of("-" + BIG).power(2)) == "1524157878067367851562259605883269630864220000001"
        assert str(BigInteger.of(0).power(0)) == "1"

    def test_power_negative_exponent(self):
        """Negative exponents work for units only."""
        assert str(BigInteger.of(-1).power(-3)) == "-1"
        with pytest.raises(RoundingNecessaryError):
            BigInteger.of(2).power(-1)

    def test_power_too_large(self):
        """Exponents above the limit are rejected."""
        with pytest.raises(InvalidArgumentError):
            BigInteger.of(2).power(1_000_001)

    def test_gcd(self):
        """gcd() ignores signs."""
        assert str(BigInteger.of(-12).gcd(18)) == "6"

    def test_sqrt(self):
        """sqrt() inverts squaring and rejects negatives."""
        assert str(BigInteger.of(BIG).power(2).sqrt()) == BIG
        with pytest.raises(NegativeNumberError):
            BigInteger.of(-1).sqrt()

    def test_abs_and_negated(self):
        """abs() and negated() never produce a negative zero."""
        assert str(BigInteger.of(-5).abs()) == "5"
        assert str(BigInteger.of(5).negated()) == "-5"
        assert str(BigInteger.zero().negated()) == "0"


class TestBits:
    """Tests for shifts, parity and bit length."""

    @pytest.mark.parametrize(
        "value,distance,expected",
        [
            (1, 10, 1024),
            (-3, 2, -12),
            (1024, -3, 128),
        ],
    )
    def test_shifted_left(self, value, distance, expected):
        """Shifting by a negative distance shifts the other way."""
        assert BigInteger.of(value).shifted_left(distance) == expected

    @pytest.mark.parametrize("value,distance", [(1024, 3), (1023, 3), (-1, 1), (-7, 2), (-8, 2), (5, 0)])
    def test_shifted_right_floors_like_int(self, value, distance):
        """shifted_right() floors like Python's >>."""
        assert BigInteger.of(value).shifted_right(distance) == value >> distance

    def test_parity(self):
        """is_odd() and is_even() on large, negative and zero values."""
        assert BigInteger.of(BIG).is_odd()
        assert BigInteger.of(-10).is_even()
        assert BigInteger.zero().is_even()

    @pytest.mark.parametrize("value", [0, 1, -1, 255, 256, -256, 2**100 - 1])
    def test_bit_length_matches_int(self, value):
        """get_bit_length() agrees with int.bit_length()."""
        assert BigInteger.of(value).get_bit_length() == value.bit_length()


class TestComparison:
    """Tests for compare_to() and the Python comparison protocol."""

    def test_compare_to(self):
        """compare_to() accepts integers, decimals and fractions."""
        assert BigInteger.of(BIG).compare_to(BIG) == 0
        assert BigInteger.of(-1).compare_to(0) == -1
        assert BigInteger.of(2).compare_to("1.5") == 1
        assert BigInteger.of(1).compare_to("3/2") == -1

    def test_predicates(self):
        """Sign predicates and comparisons against mixed inputs."""
        n = BigInteger.of(-3)
        assert n.is_negative()
        assert n.is_negative_or_zero()
        assert not n.is_zero()
        assert n.is_less_than(0)
        assert n.is_greater_than_or_equal_to("-3.0")
        assert n.sign == -1

    def test_equality_with_int(self):
        """Equality with int, and never with a string."""
        assert BigInteger.of(42) == 42
        assert BigInteger.of(42) != 43
        assert BigInteger.of(1) != "1"

    def test_equality_across_types(self):
        """An integer equals the same value as a decimal or fraction."""
        assert BigInteger.of(2) == BigDecimal.of("2.00")
        assert BigInteger.of(2) == BigRational.nd(4, 2)

    def test_hash_matches_int(self):
        """Hashes agree with int."""
        assert hash(BigInteger.of(BIG)) == hash(int(BIG))
        assert hash(BigInteger.of(-1)) == hash(-1)
        assert hash(BigInteger.of(-2**70)) == hash(-2**70)

    def test_ordering(self):
        """sorted() orders by value."""
        values = [BigInteger.of(v) for v in (3, -1, BIG, 0)]
        assert [str(v) for v in sorted(values)] == ["-1", "0", "3", BIG]


class TestMinMaxSum:
    """Tests for min(), max() and sum()."""

    def test_min_max(self):
        """min() and max() return the extreme value."""
        assert str(BigInteger.min(3, "-7", BIG)) == "-7"
        assert str(BigInteger.max(3, "-7", BIG)) == BIG

    def test_sum(self):
        """sum() accepts mixed inputs with an integral total."""
        assert str(BigInteger.sum(1, "2", 3.0)) == "6"

    @pytest.mark.parametrize("method", ["min", "max", "sum"])
    def test_empty_raises(self, method):
        """Aggregates need at least one value."""
        with pytest.raises(InvalidArgumentError):
            getattr(BigInteger, method)()


class TestConversions:
    """Tests for conversions to other types and to native values."""

    def test_to_big_decimal(self):
        """to_big_decimal() has scale zero."""
        d = BigInteger.of(-12).to_big_decimal()
        assert isinstance(d, BigDecimal)
        assert str(d) == "-12"
        assert d.scale == 0

    def test_to_big_rational(self):
        """to_big_rational() has denominator one."""
        r = BigInteger.of(7).to_big_rational()
        assert str(r.numerator) == "7"
        assert str(r.denominator) == "1"

    def test_to_scale(self):
        """to_scale() pads with zeros."""
        assert str(BigInteger.of(7).to_scale(2)) == "7.00"

    @pytest.mark.parametrize("value", [0, -(2**63), 2**63 - 1])
    def test_to_int(self, value):
        """to_int() accepts the full signed 64-bit range."""
        assert BigInteger.of(value).to_int() == value

    @pytest.mark.parametrize("value", [2**63, -(2**63) - 1, BIG])
    def test_to_int_overflow(self, value):
        """to_int() raises outside the signed 64-bit range."""
        with pytest.raises(IntegerOverflowError):
            BigInteger.of(value).to_int()

    def test_to_float(self):
        """to_float() rounds to the nearest double."""
        assert BigInteger.of(BIG).to_float() == float(int(BIG))

    def test_to_float_overflow(self):
        """to_float() raises when the value exceeds the double range."""
        with pytest.raises(IntegerOverflowError):
            BigInteger.of("1" + "0" * 400).to_float()

    @pytest.mark.parametrize("value,base,expected", [(255, 16, "ff"), (-5, 2, "-101"), (BIG, 10, BIG)])
    def test_to_base(self, value, base, expected):
        """to_base() formats in the requested base."""
        assert BigInteger.of(value).to_base(base) == expected

    def test_to_base_invalid(self):
        """Bases outside 2..36 are rejected."""
        with pytest.raises(InvalidArgumentError):
            BigInteger.of(5).to_base(1)

    def test_int_and_float_protocol(self):
        """int(), float(), bool() and indexing work."""
        n = BigInteger.of(BIG)
        assert int(n) == int(BIG)
        assert float(n) == float(int(BIG))
        assert not bool(BigInteger.zero())
        assert [10, 20, 30][BigInteger.of(1)] == 20

    def test_repr(self):
        """repr() shows the canonical text."""
        assert repr(BigInteger.of(-5)) == "BigInteger('-5')"

    def test_pickle_round_trip(self):
        """Pickling keeps the type and value."""
        n = BigInteger.of(BIG)
        restored = pickle.loads(pickle.dumps(n))
        assert restored == n
        assert isinstance(restored, BigInteger)


class TestOperators:
    """Tests for Python operators, which follow int semantics."""

    @pytest.mark.parametrize(
        "a,b",
        [(17, 5), (-17, 5), (17, -5), (-17, -5), (int(BIG), 97), (-int(BIG), 10**12 + 39)],
    )
    def test_floordiv_and_mod_match_int(self, a, b):
        """// and % floor like int, in both operand orders."""
        x = BigInteger.of(a)
        assert x // b == a // b
        assert x % b == a % b
        assert a // BigInteger.of(b) == a // b
        assert a % BigInteger.of(b) == a % b

    def test_arithmetic_operators(self):
        """Operators accept ints on either side."""
        x = BigInteger.of(10)
        assert x + 5 == 15
        assert 5 + x == 15
        assert x - 15 == -5
        assert 15 - x == 5
        assert x * x == 100
        assert 3 * x == 30
        assert x**3 == 1000
        assert -x == -10
        assert +x is x
        assert abs(BigInteger.of(-10)) == 10

    def test_floordiv_by_zero(self):
        """// by zero raises ZeroDivisionError."""
        with pytest.raises(ZeroDivisionError):
            BigInteger.of(1) // 0

    def test_operators_reject_strings(self):
        """Operators return NotImplemented for strings."""
        with pytest.raises(TypeError):
            BigInteger.of(1) + "1"  # type: ignore[operator]

    def test_mixed_with_decimal_widens(self):
        """Adding a decimal widens the result."""
        result = BigInteger.of(1) + BigDecimal.of("0.5")
        assert isinstance(result, BigDecimal)
        assert str(result) == "1.5"


@pytest.mark.usefixtures("default_digit_limit")
class TestLargeNativeIntegers:
    """Tests for conversions between BigInteger and ints past the interpreter's digit limit."""

    def test_of_int(self):
        """An int of 5001 digits is accepted and printed exactly."""
        assert str(BigInteger.of(10**5000)) == "1" + "0" * 5000

    def test_of_negative_int(self):
        """Sign and inner digits survive conversion of a large negative int."""
        assert str(BigInteger.of(-(10**5000) - 7)) == "-1" + "0" * 4999 + "7"

    @pytest.mark.parametrize(
        "value,expected",
        [
            (10**1000 + 5, "1" + "0" * 999 + "5"),
            (12345 * 10**2000 + 1, "12345" + "0" * 1999 + "1"),
        ],
        ids=["two_groups", "three_groups"],
    )
    def test_of_int_zero_padded_groups(self, value, expected):
        """Inner digit groups keep their leading zeros."""
        assert str(BigInteger.of(value)) == expected

    def test_int(self):
        """int() of a 5001-digit BigInteger returns the exact value."""
        assert int(BigInteger.of("1" + "0" * 5000)) == 10**5000

    def test_index(self):
        """operator.index() of a large negative BigInteger returns the exact value."""
        assert operator.index(BigInteger.of("-1" + "0" * 4999 + "7")) == -(10**5000) - 7

    def test_arithmetic_round_trip(self):
        """Arithmetic on a large value converts back to the matching int."""
        assert int(BigInteger.of(10**5000).plus(1)) == 10**5000 + 1
        assert BigInteger.of(10**5000).multiplied_by(10**5000) == 10**10000

    def test_wire_model_accepts_large_int(self):
        """The wire model encodes a large int as its decimal string."""
        assert BigIntegerModel.model_validate({"value": 10**5000}).value == "1" + "0" * 5000
