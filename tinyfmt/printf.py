"""A small printf-style formatter with C-like conversion rules.

Supported conversions are ``d i u x X o b c s p %`` and, when enabled,
``f F`` and ``e E g G``. Flags ``0 - + space #``, width and precision,
including ``*`` for both, and the length modifiers ``hh h l ll t j z``
are understood. Integers wrap to the width implied by the length
modifier: ``int`` is 32 bits, ``long`` and pointers are 64 bits, and
``char`` is unsigned.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TextIO

from tinyfmt.numfmt import (
    MAX_FLOAT,
    Flags,
    format_exponential,
    format_fixed,
    format_integer,
)

__all__ = ["Formatter", "sprintf", "snprintf", "fctprintf", "printf"]

_SPEC = re.compile(r"([-+ #0]*)(\d+|\*)?(\.(\d+|\*)?)?(ll|l|hh|h|[tjz])?", re.DOTALL)

_FLAG_CHARS = {
    "0": Flags.ZEROPAD,
    "-": Flags.LEFT,
    "+": Flags.PLUS,
    " ": Flags.SPACE,
    "#": Flags.HASH,
}

_LENGTHS = {
    "l": Flags.LONG,
    "ll": Flags.LONG | Flags.LONG_LONG,
    "h": Flags.SHORT,
    "hh": Flags.SHORT | Flags.CHAR,
    # ptrdiff_t, intmax_t and size_t are all as wide as long.
    "t": Flags.LONG,
    "j": Flags.LONG,
    "z": Flags.LONG,
}

_POINTER_WIDTH = 16


def _wrap(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def _as_int(arg: Any) -> int:
    if not isinstance(arg, int):
        raise TypeError(f"integer argument expected, got {type(arg).__name__}")
    return arg


def _as_float(arg: Any) -> float:
    if not isinstance(arg, (int, float)):
        raise TypeError(f"float argument expected, got {type(arg).__name__}")
    return float(arg)


class _Arguments:
    """Hands out the variadic arguments one at a time."""

    def __init__(self, args: Iterable[Any]) -> None:
        self._items: Iterator[Any] = iter(args)

    def next(self) -> Any:
        try:
            return next(self._items)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None


class _Sink:
    """Positional output; the position can be moved back to the start."""

    def __init__(self) -> None:
        self.idx = 0

    def write(self, text: str) -> None:
        for ch in text:
            self._put(ch, self.idx)
            self.idx += 1

    def reset(self) -> None:
        self.idx = 0

    def _put(self, ch: str, idx: int) -> None:
        raise NotImplementedError


class _BufferSink(_Sink):
    def __init__(self, maxlen: int | None = None) -> None:
        super().__init__()
        self._maxlen = maxlen
        self._cells: list[str] = []

    def _put(self, ch: str, idx: int) -> None:
        if self._maxlen is not None and idx >= self._maxlen:
            return
        if idx < len(self._cells):
            self._cells[idx] = ch
        else:
            self._cells.append(ch)

    def text(self) -> str:
        if self._maxlen is None:
            end = self.idx
        elif self._maxlen == 0:
            end = 0
        else:
            end = min(self.idx, self._maxlen - 1)
        return "".join(self._cells[:end])


class _CallbackSink(_Sink):
    def __init__(self, out: Callable[[str], Any]) -> None:
        super().__init__()
        self._out = out

    def _put(self, ch: str, idx: int) -> None:
        if ch != "\0":
            self._out(ch)


class Formatter:
    """Formats text from a printf-style format string.

    Float conversions are off by default, as in the configured build; with
    ``support_float`` false, ``%f`` and friends print the conversion letter
    and consume no argument.
    """

    def __init__(self, support_float: bool = False, support_exponential: bool = True) -> None:
        self.support_float = support_float
        self.support_exponential = support_exponential

    def format(self, fmt: str, *args: Any) -> str:
        """Return the formatted text."""
        sink = _BufferSink()
        self._render(sink, fmt, args)
        return sink.text()

    def snprintf(self, count: int, fmt: str, *args: Any) -> tuple[str, int]:
        """Format into at most ``count`` cells including the terminator.

        Returns the stored text and the length the full output would have.
        """
        if count < 0:
            raise ValueError("count must not be negative")
        sink = _BufferSink(count)
        self._render(sink, fmt, args)
        return sink.text(), sink.idx

    def fctprintf(self, out: Callable[[str], Any], fmt: str, *args: Any) -> int:
        """Send each output character to ``out``; return the character count."""
        sink = _CallbackSink(out)
        self._render(sink, fmt, args)
        return sink.idx

    def printf(self, fmt: str, *args: Any, stream: TextIO | None = None) -> int:
        """Write the formatted text to ``stream`` (standard output by default)."""
        target = sys.stdout if stream is None else stream
        return self.fctprintf(target.write, fmt, *args)

    def _render(self, sink: _Sink, fmt: str, args: Iterable[Any]) -> None:
        fmt = fmt.split("\0", 1)[0]
        arguments = _Arguments(args)
        pos = 0
        end = len(fmt)
        while pos < end:
            pct = fmt.find("%", pos)
            if pct < 0:
                sink.write(fmt[pos:])
                return
            sink.write(fmt[pos:pct])
            match = _SPEC.match(fmt, pct + 1)
            flag_text, width_text, dot, prec_text, length = match.groups()
            pos = match.end()

            flags = 0
            for ch in flag_text:
                flags |= int(_FLAG_CHARS[ch])

            width = 0
            if width_text == "*":
                requested = _as_int(arguments.next())
                if requested < 0:
                    flags |= int(Flags.LEFT)
                    width = -requested
                else:
                    width = requested
            elif width_text:
                width = int(width_text)

            precision = 0
            if dot:
                flags |= int(Flags.PRECISION)
                if prec_text == "*":
                    precision = max(_as_int(arguments.next()), 0)
                elif prec_text:
                    precision = int(prec_text)

            if length:
                flags |= int(_LENGTHS[length])

            if pos >= end:
                return
            spec = fmt[pos]
            pos += 1
            self._convert(sink, spec, flags, width, precision, arguments)

    def _convert(
        self,
        sink: _Sink,
        spec: str,
        flags: int,
        width: int,
        precision: int,
        arguments: _Arguments,
    ) -> None:
        if spec in "diuxXob":
            sink.write(self._integer(spec, flags, width, precision, arguments.next()))
        elif spec in "fF" and self.support_float:
            if spec == "F":
                flags |= int(Flags.UPPERCASE)
            value = _as_float(arguments.next())
            if (
                not self.support_exponential
                and value == value
                and abs(value) != float("inf")
                and (value > MAX_FLOAT or value < -MAX_FLOAT)
            ):
                # Without exponential support an oversized value restarts output.
                sink.reset()
                return
            sink.write(format_fixed(value, precision, width, flags))
        elif spec in "eEgG" and self.support_float and self.support_exponential:
            if spec in "gG":
                flags |= int(Flags.ADAPT_EXP)
            if spec in "EG":
                flags |= int(Flags.UPPERCASE)
            value = _as_float(arguments.next())
            sink.write(format_exponential(value, precision, width, flags))
        elif spec == "c":
            sink.write(self._pad(self._char(arguments.next()), width, flags))
        elif spec == "s":
            arg = arguments.next()
            if not isinstance(arg, str):
                raise TypeError(f"string argument expected, got {type(arg).__name__}")
            text = arg.split("\0", 1)[0]
            if flags & Flags.PRECISION:
                text = text[:precision]
            sink.write(self._pad(text, width, flags))
        elif spec == "p":
            arg = arguments.next()
            address = 0 if arg is None else _wrap(_as_int(arg), 64, signed=False)
            flags |= int(Flags.ZEROPAD | Flags.UPPERCASE)
            sink.write(format_integer(address, False, 16, precision, _POINTER_WIDTH, flags))
        else:
            sink.write(spec)

    @staticmethod
    def _pad(text: str, width: int, flags: int) -> str:
        return text.ljust(width) if flags & Flags.LEFT else text.rjust(width)

    @staticmethod
    def _char(arg: Any) -> str:
        if isinstance(arg, str) and len(arg) == 1:
            return arg
        return chr(_as_int(arg) & 0xFF)

    @staticmethod
    def _integer(spec: str, flags: int, width: int, precision: int, arg: Any) -> str:
        if spec in "xX":
            base = 16
        elif spec == "o":
            base = 8
        elif spec == "b":
            base = 2
        else:
            base = 10
            flags &= ~int(Flags.HASH)
        if spec == "X":
            flags |= int(Flags.UPPERCASE)
        signed = spec in "di"
        if not signed:
            flags &= ~int(Flags.PLUS | Flags.SPACE)
        if flags & Flags.PRECISION:
            flags &= ~int(Flags.ZEROPAD)

        raw = _as_int(arg)
        if flags & (Flags.LONG | Flags.LONG_LONG):
            value = _wrap(raw, 64, signed)
        elif flags & Flags.CHAR:
            value = _wrap(raw, 8, signed=False)
        elif flags & Flags.SHORT:
            value = _wrap(raw, 16, signed)
        else:
            value = _wrap(raw, 32, signed)

        return format_integer(abs(value), value < 0, base, precision, width, flags)


_DEFAULT = Formatter()


def sprintf(fmt: str, *args: Any) -> str:
    """Return the formatted text using the default formatter."""
    return _DEFAULT.format(fmt, *args)


def snprintf(count: int, fmt: str, *args: Any) -> tuple[str, int]:
    """Bounded formatting with the default formatter; see ``Formatter.snprintf``."""
    return _DEFAULT.snprintf(count, fmt, *args)


def fctprintf(out: Callable[[str], Any], fmt: str, *args: Any) -> int:
    """Send formatted characters to ``out`` with the default formatter."""
    return _DEFAULT.fctprintf(out, fmt, *args)


def printf(fmt: str, *args: Any, stream: TextIO | None = None) -> int:
    """Write formatted text to ``stream`` with the default formatter."""
    return _DEFAULT.printf(fmt, *args, stream=stream)