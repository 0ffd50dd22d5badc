r"""
Argosy argument entries.

One registered schema item is an Entry tagged with an EntryKind:

- SUBCOMMAND  verbatim name, owns a child engine; satisfied when dispatched to.
- FLAG        normalized keyword; satisfied is its value.
- MANDATORY   normalized keyword; raw string value, required by every parse.
- OPTIONAL    normalized keyword; raw string value, absent unless supplied.
- POSITIONAL  verbatim bare name; raw string value assigned by position.

Every entry keeps the keyword it was registered with (spelling) next to the
form it matches with (keyword). Flags accept both; keyed values only match
their normalized forms, since prefix decoding against a dash-less spelling
would swallow ordinary words.

State
- satisfied/raw are mutated by the engine during a parse and cleared by
  reset(). Values are decoded lazily by value(type) through argosy.codecs.
"""
import enum

from . import codecs
from .keywords import Keyword, decode
from .utils import *


class EntryKind(enum.Enum):
    SUBCOMMAND = "subcommand"
    FLAG = "flag"
    MANDATORY = "mandatory"
    OPTIONAL = "optional"
    POSITIONAL = "positional"

    @property
    def keyed(self):
        """
        Whether entries of this kind take their value from a keyword token.
        """
        return self in (EntryKind.MANDATORY, EntryKind.OPTIONAL)

    @property
    def valued(self):
        """
        Whether entries of this kind carry a raw string value.
        """
        return self in (EntryKind.MANDATORY, EntryKind.OPTIONAL, EntryKind.POSITIONAL)

    @property
    def normalized(self):
        """
        Whether keywords of this kind are dash-normalized at registration.
        """
        return self in (EntryKind.FLAG, EntryKind.MANDATORY, EntryKind.OPTIONAL)


class Entry:
    """
    A single registered argument of any kind.

    Parameters
    - kind: EntryKind
    - keyword: Keyword | str | tuple for flags and keyed values; a bare str
      name for positionals and subcommands.
    - description: str | Unset, help text handed to usage renderers.
    - engine: child engine, required for (and only for) subcommands.

    Raises
    - TypeError / ValueError: malformed keyword, name or description.
    """
    __slots__ = ("_kind", "_keyword", "_spelling", "_description", "_satisfied", "_raw", "_engine")

    def __init__(self, kind, keyword, description=Unset, /, *, engine=Unset):
        if not isinstance(kind, EntryKind):
            raise TypeError("entry kind must be an EntryKind")

        if kind.normalized:
            spelling = Keyword.of(keyword)
            keyword = spelling.normalized()
        elif isinstance(keyword, str):
            spelling = keyword = Keyword(keyword)
        else:
            raise TypeError(f"{kind.value} name must be a string")

        if not isinstance(description, str | Unset):
            raise TypeError(f"{kind.value} description must be a string")

        if (kind is EntryKind.SUBCOMMAND) is (engine is Unset):
            raise TypeError("an engine must be given for subcommands and only for them")

        self._kind = kind
        self._keyword = keyword
        self._spelling = spelling
        self._description = coalesce(description)
        self._satisfied = False
        self._raw = Unset
        self._engine = coalesce(engine)

    kind = mirror("kind")
    keyword = mirror("keyword")
    spelling = mirror("spelling")
    description = mirror("description")
    satisfied = mirror("satisfied")
    engine = mirror("engine")

    @property
    def raw(self):
        """
        Raw string value, None until the entry is satisfied (flags and subcommands always None).
        """
        return coalesce(self._raw)

    @property
    def name(self):
        return self._keyword.primary

    def reset(self):
        """
        Return to the never-parsed state (subcommands also reset their engine).
        """
        self._satisfied = False
        self._raw = Unset
        if self._engine is not None:
            self._engine.reset()

    def satisfy(self, raw=Unset, /):
        """
        Mark the entry as present in the input, storing its raw value if it carries one.
        """
        if self._kind.valued:
            if not isinstance(raw, str):
                raise TypeError(f"{self._kind.value} value must be a string")
        elif raw is not Unset:
            raise TypeError(f"{self._kind.value} cannot take a value")
        self._satisfied = True
        self._raw = raw

    def matches(self, token, /):
        """
        Exact token match used for dispatch and flag extraction.
        """
        if self._kind is EntryKind.FLAG:
            return self._keyword.matches(token) or self._spelling.matches(token)
        return self._keyword.matches(token)

    def decode(self, token, following=Unset, /):
        """
        Try to read a keyed value out of token (see argosy.keywords.decode).
        """
        if not self._kind.keyed:
            raise TypeError(f"{self._kind.value} entries do not take keyed values")
        return decode(self._keyword, token, following)

    def refers(self, query, /):
        """
        Whether a lookup query designates this entry.

        Positionals answer to their exact name. Everything else compares
        dash-insensitively, so "d", "-d" and "--double" all refer to an
        optional registered as ("double", "d").
        """
        if self._kind is EntryKind.POSITIONAL:
            if isinstance(query, Keyword):
                return query.matches(self.name)
            return query == self.name
        return self._keyword.stripped() == Keyword.of(query).stripped()

    def value(self, type=str, /):
        """
        Decode the stored raw value, or return None when the entry was not satisfied.

        Raises
        - TypeError: entry kind carries no value, or no decoder for type.
        - argosy.codecs.DecodeError: the raw value does not decode as type.
        """
        if not self._kind.valued:
            raise TypeError(f"{self._kind.value} entries do not carry a value")
        if not self._satisfied:
            return None
        return codecs.convert(self._raw, type)

    def __repr__(self):
        return f"{type(self).__name__}({self._kind.value}, {str(self._keyword)!r}, satisfied={self._satisfied!r})"

    def __rich_repr__(self):
        yield "kind", self._kind.value
        yield "keyword", str(self._keyword)
        yield "description", self._description, None
        yield "satisfied", self._satisfied
        if self._kind.valued:
            yield "raw", self.raw


__all__ = (
    "EntryKind",
    "Entry",
)
