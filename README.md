# tinyfmt

`tinyfmt` is a compact printf-style formatter with C-like conversion rules,
plus a small levelled console logger built on it. It uses only the standard
library.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Formatting strings

The module `tinyfmt.printf` understands:

- conversions `d i u x X o b c s p %`, and `f F e E g G` when float support
  is switched on (see below);
- flags `0`, `-`, `+`, space and `#`;
- width and precision, either as digits or as `*` taken from the arguments
  (a negative `*` width means left alignment);
- length modifiers `hh`, `h`, `l`, `ll`, `t`, `j`, `z`.

Integers wrap to the size the length modifier implies: plain `int` is 32
bits, `h` is 16 bits, `hh` is an unsigned 8-bit char, and `l`, `ll`, `t`,
`j`, `z` are 64 bits. `%p` prints 16 upper-case hex digits, zero padded
(`None` counts as address 0). `%b` prints binary, and `%#b` adds a `0b`
prefix. An unknown conversion letter is printed as itself.

```python
from tinyfmt.printf import sprintf, snprintf, fctprintf, printf

sprintf("%5d|%-5d|", 42, 42)   # '   42|42   |'
sprintf("%#x", 255)            # '0xff'
sprintf("%#b", 5)              # '0b101'
sprintf("%.3s", "abcdef")      # 'abc'

# Bounded output: at most count cells including the terminator.
# Returns the stored text and the length the full output would have.
text, full_length = snprintf(4, "%d", 123456)   # ('123', 6)

# Every produced character goes to the callable; returns the count.
chars = []
fctprintf(chars.append, "%c%c", "h", 105)       # chars == ['h', 'i']

printf("value: %u\n", 7)                        # writes to standard output
printf("value: %u\n", 7, stream=some_file)      # or to any text stream
```

`%c` takes a one-character string or an integer; `%s` takes a string.
Too few arguments, or an argument of the wrong kind, raises `TypeError`;
a negative `count` for `snprintf` raises `ValueError`.

### Floating point

The module-level functions use a default `Formatter` with float support off:
`%f`, `%e` and `%g` then print just the conversion letter and consume no
argument. Make your own `Formatter` to turn them on:

```python
from tinyfmt.printf import Formatter

fmt = Formatter(support_float=True, support_exponential=True)
fmt.format("%.2f", 3.14159)
fmt.snprintf(8, "%e", 12345.678)
```

Fixed-point output rounds half to even, limits real fraction digits to 9
(further precision is filled with zeros), and hands values beyond ±1e9 to
exponential notation when that is enabled.

### Building blocks

`tinyfmt.numfmt` holds the per-argument renderers used above —
`format_integer`, `format_fixed` and `format_exponential` — and the `Flags`
enumeration they take. Each returns the rendered text, with the same
32-character conversion limit as the formatter.

## Logging

```python
import sys
from tinyfmt.log import LogLevel, TinyLogger, parse_level

logger = TinyLogger(parse_level("debug"), sys.stdout)
logger.error("disk %s missing\n", "vda")
logger.warn("retrying\n")
logger.info("hello [%s]\n", "v1")
logger.debug("state=%d\n", 3)
logger.log("plain message\n")
```

Each message is prefixed with `[LEVEL][file:line] `, where file and line are
those of the caller. `error`, `warn`, `info` and `debug` wrap the message in
red, yellow, green and blue ANSI colours; `log` is uncoloured and shown at
every level except `none`. A message is written only if the logger's level
is at least the message's level. The levels are `none`, `error`, `warn`,
`info`, `debug` and `all` (`LogLevel`); `TinyLogger` accepts a `LogLevel`,
an integer or a level name, and `parse_level` raises `ValueError` for an
unknown name. Each call returns the number of characters written. Without a
stream, messages go to standard output.

## Demo

```
tinyfmt-demo --log debug --vm-version 1.0
```

prints one message at each log level, then a warning that the system is
shutting down, showing which messages the chosen `--log` level (default
`info`) lets through. `--vm-version` (default `null`) is shown in the
greeting.

## What it does not do

The logger only writes text to a stream; it does not drive any device, and
"shutting down" in the demo is just a message. The formatter has no
positional arguments, no `%n`, and no locale handling.