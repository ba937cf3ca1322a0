"""Number-to-text conversions used by the printf-style formatter.

Each function renders one converted argument and returns the text, honouring
the same flags, precision and width rules as the formatter, including its
32-character conversion buffer limit.
"""

from __future__ import annotations

import enum
import struct
import sys

BUFFER_SIZE = 32
DEFAULT_FLOAT_PRECISION = 6
MAX_FLOAT = 1e9

_DBL_MAX = sys.float_info.max
_MASK64 = (1 << 64) - 1
_POW10 = (
    1.0,
    10.0,
    100.0,
    1000.0,
    10000.0,
    100000.0,
    1000000.0,
    10000000.0,
    100000000.0,
    1000000000.0,
)


class Flags(enum.IntFlag):
    """Conversion flags gathered from a format specifier."""

    NONE = 0
    ZEROPAD = 1 << 0
    LEFT = 1 << 1
    PLUS = 1 << 2
    SPACE = 1 << 3
    HASH = 1 << 4
    UPPERCASE = 1 << 5
    CHAR = 1 << 6
    SHORT = 1 << 7
    LONG = 1 << 8
    LONG_LONG = 1 << 9
    PRECISION = 1 << 10
    ADAPT_EXP = 1 << 11


def _pad(text: str, width: int, flags: int) -> str:
    """Apply space padding the way the output stage does."""
    if flags & Flags.LEFT:
        return text.ljust(width)
    if not flags & Flags.ZEROPAD:
        return text.rjust(width)
    return text


def _emit(buf: list[str], width: int, flags: int) -> str:
    """Turn a reversed character buffer into padded text."""
    return _pad("".join(reversed(buf)), width, flags)


def _append_sign(buf: list[str], negative: bool, flags: int) -> None:
    if len(buf) >= BUFFER_SIZE:
        return
    if negative:
        buf.append("-")
    elif flags & Flags.PLUS:
        buf.append("+")
    elif flags & Flags.SPACE:
        buf.append(" ")


def _integer_layout(
    buf: list[str], negative: bool, base: int, precision: int, width: int, flags: int
) -> str:
    if not flags & Flags.LEFT:
        if width and flags & Flags.ZEROPAD and (negative or flags & (Flags.PLUS | Flags.SPACE)):
            width -= 1
        while len(buf) < precision and len(buf) < BUFFER_SIZE:
            buf.append("0")
        while flags & Flags.ZEROPAD and len(buf) < width and len(buf) < BUFFER_SIZE:
            buf.append("0")

    if flags & Flags.HASH:
        if not flags & Flags.PRECISION and buf and (len(buf) == precision or len(buf) == width):
            buf.pop()
            if buf and base == 16:
                buf.pop()
        if len(buf) < BUFFER_SIZE:
            if base == 16:
                buf.append("X" if flags & Flags.UPPERCASE else "x")
            elif base == 2:
                buf.append("b")
        if len(buf) < BUFFER_SIZE:
            buf.append("0")

    _append_sign(buf, negative, flags)
    return _emit(buf, width, flags)


def format_integer(
    value: int, negative: bool, base: int, precision: int, width: int, flags: int
) -> str:
    """Render the magnitude ``value`` in ``base``, with ``negative`` giving the sign."""
    if value < 0:
        raise ValueError("value must be a non-negative magnitude")
    if not 2 <= base <= 36:
        raise ValueError(f"unsupported base: {base}")
    flags = int(flags)

    if not value:
        flags &= ~Flags.HASH.value

    buf: list[str] = []
    if not flags & Flags.PRECISION or value:
        alpha = ord("A" if flags & Flags.UPPERCASE else "a")
        while True:
            value, digit = divmod(value, base)
            buf.append(chr(48 + digit) if digit < 10 else chr(alpha + digit - 10))
            if not value or len(buf) >= BUFFER_SIZE:
                break

    return _integer_layout(buf, negative, base, precision, width, flags)


def format_fixed(value: float, precision: int, width: int, flags: int) -> str:
    """Render ``value`` in fixed-point notation (``%f``)."""
    value = float(value)
    flags = int(flags)

    if value != value:
        return _pad("nan", width, flags)
    if value < -_DBL_MAX:
        return _pad("-inf", width, flags)
    if value > _DBL_MAX:
        return _pad("+inf" if flags & Flags.PLUS else "inf", width, flags)

    # Printing every whole digit of huge values would overflow the buffer.
    if value > MAX_FLOAT or value < -MAX_FLOAT:
        return format_exponential(value, precision, width, flags)

    negative = value < 0
    if negative:
        value = 0 - value

    if not flags & Flags.PRECISION:
        precision = DEFAULT_FLOAT_PRECISION

    buf: list[str] = []
    # Precision beyond 9 digits is emitted as trailing zeros.
    while len(buf) < BUFFER_SIZE and precision > 9:
        buf.append("0")
        precision -= 1
    precision = min(precision, 9)

    whole = int(value)
    tmp = (value - whole) * _POW10[precision]
    frac = int(tmp)
    diff = tmp - frac

    if diff > 0.5:
        frac += 1
        if frac >= _POW10[precision]:
            frac = 0
            whole += 1
    elif diff < 0.5:
        pass
    elif frac == 0 or frac & 1:
        frac += 1

    if precision == 0:
        diff = value - whole
        if (not diff < 0.5 or diff > 0.5) and whole & 1:
            whole += 1
    else:
        count = precision
        while len(buf) < BUFFER_SIZE:
            count -= 1
            buf.append(chr(48 + frac % 10))
            frac //= 10
            if not frac:
                break
        while len(buf) < BUFFER_SIZE and count != 0:
            count -= 1
            buf.append("0")
        if len(buf) < BUFFER_SIZE:
            buf.append(".")

    while len(buf) < BUFFER_SIZE:
        buf.append(chr(48 + whole % 10))
        whole //= 10
        if not whole:
            break

    if not flags & Flags.LEFT and flags & Flags.ZEROPAD:
        if width and (negative or flags & (Flags.PLUS | Flags.SPACE)):
            width -= 1
        while len(buf) < width and len(buf) < BUFFER_SIZE:
            buf.append("0")

    _append_sign(buf, negative, flags)
    return _emit(buf, width, flags)


def _float_bits(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _bits_float(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & _MASK64))[0]


def format_exponential(value: float, precision: int, width: int, flags: int) -> str:
    """Render ``value`` in exponential notation (``%e``), or ``%g`` with ADAPT_EXP."""
    value = float(value)
    flags = int(flags)

    if value != value or value > _DBL_MAX or value < -_DBL_MAX:
        return format_fixed(value, precision, width, flags)

    negative = value < 0
    if negative:
        value = -value

    if not flags & Flags.PRECISION:
        precision = DEFAULT_FLOAT_PRECISION

    # Estimate the decimal exponent from the binary one.
    bits = _float_bits(value)
    exp2 = ((bits >> 52) & 0x07FF) - 1023
    mantissa = _bits_float((bits & ((1 << 52) - 1)) | (1023 << 52))
    expval = int(0.1760912590558 + exp2 * 0.301029995663981 + (mantissa - 1.5) * 0.289529654602168)
    exp2 = int(expval * 3.321928094887362 + 0.5)
    z = expval * 2.302585092994046 - exp2 * 0.6931471805599453
    z2 = z * z
    scale = _bits_float((exp2 + 1023) << 52)
    scale *= 1 + 2 * z / (2 - z + (z2 / (6 + (z2 / (10 + z2 / 14)))))
    if value < scale:
        expval -= 1
        scale /= 10

    minwidth = 4 if -100 < expval < 100 else 5

    if flags & Flags.ADAPT_EXP:
        if 1e-4 <= value < 1e6:
            precision = precision - expval - 1 if precision > expval else 0
            flags |= Flags.PRECISION.value
            minwidth = 0
            expval = 0
        elif precision > 0 and flags & Flags.PRECISION:
            precision -= 1

    fwidth = width - minwidth if width > minwidth else 0
    if flags & Flags.LEFT and minwidth:
        fwidth = 0

    if expval:
        value /= scale

    text = format_fixed(
        -value if negative else value, precision, fwidth, flags & ~Flags.ADAPT_EXP.value
    )

    if minwidth:
        text += "E" if flags & Flags.UPPERCASE else "e"
        text += format_integer(
            abs(expval), expval < 0, 10, 0, minwidth - 1, Flags.ZEROPAD | Flags.PLUS
        )
        if flags & Flags.LEFT:
            text = text.ljust(width)
    return text