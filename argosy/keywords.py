r"""
Argosy keywords and single-token value decoding.

Overview
- Keyword: identity of a named argument, a primary name plus an optional
  abbreviation (e.g., "--output" / "-o").
  • Equality holds when any slot of one keyword equals any slot of the other
    (primary/primary, primary/abbreviation, abbreviation/primary,
    abbreviation/abbreviation when both are present).
  • A keyword compares against a bare string with the same either-slot rule,
    which is what exact-token dispatch relies on.
  • Keywords are deliberately unhashable: either-slot equality is not
    transitive, so they cannot key a dict or a set.

- Normalization
  • normalized(): long form gets two dashes, abbreviation gets one dash.
    Leading dashes the caller typed are dropped first, so "flag", "-flag"
    and "--flag" all normalize to "--flag".
  • stripped(): the dash-free spelling, used as the scope-wide identity of a
    registration and by lookups that accept "d", "-d" or "--double" alike.

- decode(keyword, token, following)
  Classify one token against one keyword, primary form first, then the
  abbreviation form, returning the first Match:
  • whitespace:   "--name" "value"   → value is the following token (2 consumed)
  • equals:       "--name=value"     → value after '='
  • colon:        "--name:value"     → value after ':'
  • concatenated: "--namevalue"      → remainder verbatim
  An exact token with no following token does not match.

Quick example:
    >>> keyword = Keyword("double", "d").normalized()
    >>> keyword
    Keyword('--double', '-d')
    >>> decode(keyword, "-d:3.14")
    Match(form=<Form.COLON: ':'>, spelling='-d', value='3.14', width=1)
"""
import enum
from typing import NamedTuple

from .utils import *


def _bare(text, /):
    """
    Drop leading dashes; keep the text as-is when it is made of dashes only.
    """
    return text.lstrip("-") or text


class Keyword:
    """
    Primary name plus optional abbreviation identifying a named argument.

    Parameters
    - primary: str
      Long name, stored verbatim (normalize with normalized()).
    - abbreviation: str | None
      Optional short name, stored verbatim.

    Raises
    - TypeError: when a slot is not a string.
    - ValueError: when a slot is an empty string.
    """
    __slots__ = ("_primary", "_abbreviation")

    def __init__(self, primary, abbreviation=None, /):
        if not isinstance(primary, str):
            raise TypeError("keyword primary must be a string")
        elif not primary:
            raise ValueError("keyword primary cannot be empty")

        if abbreviation is not None:
            if not isinstance(abbreviation, str):
                raise TypeError("keyword abbreviation must be a string")
            elif not abbreviation:
                raise ValueError("keyword abbreviation cannot be empty")

        self._primary = primary
        self._abbreviation = abbreviation

    primary = mirror("primary")
    abbreviation = mirror("abbreviation")

    @classmethod
    def of(cls, object, /):
        """
        Coerce a Keyword, a bare string or a (primary, abbreviation) tuple.
        """
        if isinstance(object, Keyword):
            return object
        elif isinstance(object, str):
            return cls(object)
        elif isinstance(object, tuple) and 1 <= len(object) <= 2:
            return cls(*object)
        raise TypeError("keyword must be a Keyword, a string or a (primary, abbreviation) tuple")

    @property
    def forms(self):
        """
        Spellings in matching order: primary first, then the abbreviation.
        """
        if self._abbreviation is None:
            return (self._primary,)
        return self._primary, self._abbreviation

    def matches(self, token, /):
        return token == self._primary or (self._abbreviation is not None and token == self._abbreviation)

    def normalized(self):
        """
        Return the two-dash long form / one-dash abbreviation form of this keyword.

        Raises
        - ValueError: when a slot is empty once its dashes are dropped, or holds whitespace.
        """
        for form in self.forms:
            if not form.lstrip("-"):
                raise ValueError(f"keyword {form!r} has no name after its dashes")
            elif any(char.isspace() for char in form):
                raise ValueError(f"keyword {form!r} cannot contain whitespace")

        abbreviation = self._abbreviation
        return type(self)(
            "--" + self._primary.lstrip("-"),
            "-" + abbreviation.lstrip("-") if abbreviation is not None else None,
        )

    def stripped(self):
        abbreviation = self._abbreviation
        return type(self)(_bare(self._primary), _bare(abbreviation) if abbreviation is not None else None)

    def __eq__(self, other):
        if isinstance(other, str):
            return self.matches(other)
        elif not isinstance(other, Keyword):
            return NotImplemented
        return (
            self._primary == other._primary or
            (other._abbreviation is not None and self._primary == other._abbreviation) or
            (self._abbreviation is not None and self._abbreviation == other._primary) or
            (self._abbreviation is not None and self._abbreviation == other._abbreviation)
        )

    __hash__ = None

    def __str__(self):
        return ", ".join(self.forms)

    def __repr__(self):
        if self._abbreviation is None:
            return f"{type(self).__name__}({self._primary!r})"
        return f"{type(self).__name__}({self._primary!r}, {self._abbreviation!r})"

    def __rich_repr__(self):
        yield self._primary
        yield "abbreviation", self._abbreviation, None


class Form(enum.Enum):
    """
    Encoding a keyed value was supplied with.
    """
    WHITESPACE = " "
    EQUALS = "="
    COLON = ":"
    CONCATENATED = ""


class Match(NamedTuple):
    """
    Result of decoding one token against one keyword.

    - form: how the value was attached to the keyword.
    - spelling: the keyword form that matched (primary or abbreviation).
    - value: the raw value string (may be empty for "--name=").
    - width: number of tokens consumed (2 for the whitespace form, else 1).
    """
    form: Form
    spelling: str
    value: str
    width: int


def decode(keyword, token, following=Unset, /):
    """
    Classify a token against a keyword's forms and extract its raw value.

    Parameters
    - keyword: Keyword (already normalized by the caller when needed).
    - token: str, the token under inspection.
    - following: str | Unset, the next token in the stream (whitespace form only).

    Returns
    - Match for the first form that applies (primary before abbreviation).
    - None when the token does not carry a value for this keyword.
    """
    for spelling in keyword.forms:
        if token == spelling:
            # The value would be the next token; at the end of the stream there is none.
            if following is Unset:
                continue
            return Match(Form.WHITESPACE, spelling, following, 2)

        if len(token) > len(spelling) and token.startswith(spelling):
            remainder = token[len(spelling):]
            match remainder[0]:
                case "=":
                    return Match(Form.EQUALS, spelling, remainder[1:], 1)
                case ":":
                    return Match(Form.COLON, spelling, remainder[1:], 1)
                case _:
                    return Match(Form.CONCATENATED, spelling, remainder, 1)

    return None


__all__ = (
    "Keyword",
    "Form",
    "Match",
    "decode",
)
