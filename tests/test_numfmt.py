import math

import pytest

from tinyfmt.numfmt import (
    BUFFER_SIZE,
    Flags,
    format_exponential,
    format_fixed,
    format_integer,
)

NO = Flags.NONE


@pytest.mark.parametrize(
    "value, negative, width, flags, spec",
    [
        (42, False, 0, NO, "%d"),
        (0, False, 0, NO, "%d"),
        (42, False, 5, NO, "%5d"),
        (42, False, 6, Flags.LEFT, "%-6d"),
        (42, True, 6, Flags.ZEROPAD, "%06d"),
        (5, False, 0, Flags.PLUS, "%+d"),
        (5, False, 0, Flags.SPACE, "% d"),
        (7, True, 4, NO, "%4d"),
    ],
)
def test_decimal_matches_python(value, negative, width, flags, spec):
    expected = spec % (-value if negative else value)
    assert format_integer(value, negative, 10, 0, width, flags) == expected


def test_precision_pads_with_zeros():
    result = format_integer(42, False, 10, 5, 0, Flags.PRECISION)
    assert result == "%.5d" % 42


@pytest.mark.parametrize(
    "value, flags, spec",
    [
        (255, NO, "%x"),
        (255, Flags.UPPERCASE, "%X"),
        (0xABC, Flags.UPPERCASE, "%X"),
        (255, Flags.HASH, "%#x"),
        (255, Flags.HASH | Flags.UPPERCASE, "%#X"),
        (42, Flags.HASH | Flags.ZEROPAD, "%#08x"),
    ],
)
def test_hex_matches_python(value, flags, spec):
    width = 8 if flags & Flags.ZEROPAD else 0
    assert format_integer(value, False, 16, 0, width, flags) == spec % value


def test_octal_matches_python():
    assert format_integer(8, False, 8, 0, 0, NO) == "%o" % 8


def test_binary_matches_format():
    assert format_integer(5, False, 2, 0, 0, NO) == format(5, "b")
    assert format_integer(5, False, 2, 0, 0, Flags.HASH) == format(5, "#b")


def test_zero_with_explicit_zero_precision_is_empty():
    assert format_integer(0, False, 10, 0, 0, Flags.PRECISION) == ""


def test_hash_dropped_for_zero():
    assert format_integer(0, False, 16, 0, 0, Flags.HASH) == "0"


def test_output_capped_by_buffer_size():
    result = format_integer(0, False, 10, 50, 0, Flags.PRECISION)
    assert len(result) == BUFFER_SIZE
    assert set(result) == {"0"}


def test_negative_magnitude_rejected():
    with pytest.raises(ValueError):
        format_integer(-1, False, 10, 0, 0, NO)


def test_bad_base_rejected():
    with pytest.raises(ValueError):
        format_integer(1, False, 1, 0, 0, NO)


@pytest.mark.parametrize(
    "value, precision, width, flags, spec",
    [
        (1.0, 0, 0, NO, "%f"),
        (3.14159, 2, 0, Flags.PRECISION, "%.2f"),
        (-2.71828, 3, 0, Flags.PRECISION, "%.3f"),
        (3.14159, 3, 8, Flags.PRECISION, "%8.3f"),
        (3.14159, 3, 8, Flags.PRECISION | Flags.LEFT, "%-8.3f"),
        (-3.14159, 3, 8, Flags.PRECISION | Flags.ZEROPAD, "%08.3f"),
        (1.5, 2, 0, Flags.PRECISION | Flags.PLUS, "%+.2f"),
        (1.5, 2, 0, Flags.PRECISION | Flags.SPACE, "% .2f"),
        (0.5, 12, 0, Flags.PRECISION, "%.12f"),
    ],
)
def test_fixed_matches_python(value, precision, width, flags, spec):
    assert format_fixed(value, precision, width, flags) == spec % value


@pytest.mark.parametrize(
    "value, precision",
    [(2.5, 0), (3.5, 0), (1.5, 0), (0.75, 1), (0.25, 1)],
)
def test_fixed_halfway_rounding(value, precision):
    expected = "%.*f" % (precision, value)
    assert format_fixed(value, precision, 0, Flags.PRECISION) == expected


@pytest.mark.parametrize(
    "value, flags, spec",
    [
        (math.nan, NO, "%f"),
        (math.inf, NO, "%f"),
        (-math.inf, NO, "%f"),
        (math.inf, Flags.PLUS, "%+f"),
    ],
)
def test_fixed_special_values(value, flags, spec):
    assert format_fixed(value, 0, 0, flags) == spec % value


def test_fixed_special_value_padded():
    assert format_fixed(math.inf, 0, 6, NO) == "%6f" % math.inf


def test_fixed_large_value_switches_to_exponential():
    value = 2.5e10
    assert format_fixed(value, 0, 0, NO) == format_exponential(value, 0, 0, NO)
    assert format_fixed(value, 0, 0, NO) == "%e" % value


@pytest.mark.parametrize(
    "value, precision, width, flags, spec",
    [
        (12345.678, 0, 0, NO, "%e"),
        (12345.678, 0, 0, Flags.UPPERCASE, "%E"),
        (-0.00321, 0, 0, NO, "%e"),
        (12345.678, 3, 0, Flags.PRECISION, "%.3e"),
        (12345.678, 0, 15, NO, "%15e"),
        (12345.678, 0, 15, Flags.LEFT, "%-15e"),
        (1.5e-10, 0, 0, NO, "%e"),
        (3.7e120, 0, 0, NO, "%e"),
    ],
)
def test_exponential_matches_python(value, precision, width, flags, spec):
    assert format_exponential(value, precision, width, flags) == spec % value


def test_exponential_nan():
    assert format_exponential(math.nan, 0, 0, NO) == "%e" % math.nan


def test_adaptive_small_value_keeps_exponent():
    value = 1.234e-5
    assert format_exponential(value, 0, 0, Flags.ADAPT_EXP) == format_exponential(
        value, 0, 0, NO
    )


def test_adaptive_falls_back_to_fixed():
    value = 1234.5
    result = format_exponential(value, 0, 0, Flags.ADAPT_EXP)
    assert "e" not in result
    assert float(result) == pytest.approx(value)


def test_adaptive_keeps_significant_digits():
    value = 1234.5
    result = format_exponential(value, 0, 0, Flags.ADAPT_EXP)
    digits = result.replace(".", "")
    assert len(digits) == 6


def test_adaptive_large_value_uses_exponent():
    value = 2.5e7
    result = format_exponential(value, 3, 0, Flags.ADAPT_EXP | Flags.PRECISION)
    assert result == "%.2e" % value