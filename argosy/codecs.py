"""
Argosy value codecs.

Raw argument values are stored as strings and decoded on read through an
explicit table keyed by the requested type. Built in:

- str:   passthrough
- int:   decimal, or prefixed binary/octal/hexadecimal ("0b101", "0o17", "0x1f")
- float: anything float() accepts ("3.14", "1e-3", "inf")

Asking for a type with no decoder is a programming error (TypeError). A
decoder that rejects its input raises DecodeError, which is distinct from a
value that was never supplied.

Extra decoders are added with the register() decorator:

    >>> import pathlib
    >>> @register(pathlib.Path)
    ... def _path(raw):
    ...     return pathlib.Path(raw)
"""
import builtins
import re

_decoders = {}

_PREFIXED = re.compile(r"[+-]?0[bBoOxX][0-9a-fA-F_]+")


class DecodeError(ValueError):
    """
    A raw string could not be decoded into the requested type.
    """

    def __init__(self, raw, type, /):
        super().__init__(f"cannot decode {raw!r} as {type.__name__}")
        self.raw = raw
        self.type = type


def register(type, /):
    """
    Return a decorator that installs a decoder for `type`.

    The decoder receives the raw string and returns the typed value; raising
    ValueError (or ArithmeticError) signals undecodable input. Registering a
    type twice replaces the previous decoder.
    """
    if not isinstance(type, builtins.type):
        raise TypeError("register() argument must be a type")

    def wrapper(decoder):
        if not callable(decoder):
            raise TypeError("@register() must be applied to a callable")
        _decoders[type] = decoder
        return decoder

    return wrapper


def decoder(type, /):
    """
    Return the decoder registered for `type`.

    Raises
    - TypeError: when no decoder is registered (programming error).
    """
    try:
        return _decoders[type]
    except (KeyError, TypeError):
        raise TypeError(f"no decoder registered for {type!r}") from None


def convert(raw, type=str, /):
    """
    Decode a raw string into `type`.

    Raises
    - TypeError: unknown target type or non-string input.
    - DecodeError: the decoder rejected the raw string.
    """
    if not isinstance(raw, str):
        raise TypeError("convert() first argument must be a string")
    function = decoder(type)
    try:
        return function(raw)
    except (ValueError, ArithmeticError):
        raise DecodeError(raw, type) from None


@register(str)
def _string(raw):
    return raw


@register(int)
def _integer(raw):
    if _PREFIXED.fullmatch(raw.strip()):
        return int(raw, 0)
    return int(raw)


@register(float)
def _floating(raw):
    return float(raw)


__all__ = (
    "DecodeError",
    "register",
    "decoder",
    "convert",
)
