"""Printf-style formatting with C-like rules, and a levelled console logger."""

__version__ = "0.1.0"
__all__ = ["numfmt", "printf", "log"]