r"""
Argosy parsing engine.

Overview
- Engine owns an ordered registry of entries per kind plus a scope-wide
  keyword index. Schema builders call the add_* methods once, then callers run
  parse(tokens) and read results through value(keyword, type) and flag(keyword).

- Registration (schema-build time)
  • add_subcommand(name, descr) -> child Engine (own, disjoint keyword scope)
  • add_flag / add_mandatory_argument / add_optional_argument / add_argument
  • add_positional(name, descr)
  Keywords clashing inside one scope raise DuplicateKeywordError, whatever
  their kinds; the same keyword in a child scope never clashes with the parent.

- Parsing (runtime), in this order
  1. reset every entry (and every child engine) to the never-parsed state.
  2. dispatch: when the first token names a subcommand, the rest of the stream
     goes to its engine and this level stops. No match is not an error.
  3. keyed values: scan left to right; each token is decoded against the
     mandatory then optional keywords in registration order (whitespace, '=',
     ':' or concatenated form) and the first entry that decodes it wins;
     matched tokens are removed and the scan resumes at the same position.
  4. mandatory completeness check.
  5. flags: tokens equal to a flag keyword are removed, anywhere in the stream.
  6. positionals: leftovers must match the registered positionals one to one.

- Faults (argosy.faults)
  • MissingMandatoryError, UnknownArgumentsError, MissingPositionalsError are
    raised through trigger(); the engine never exits the process.
  • UndecodableValueError is raised by value() when a stored value does not
    decode to the requested type.

Concurrency
- An engine is single-threaded state. Sequential parse() calls are
  independent thanks to the reset step; overlapping or re-entrant calls on one
  engine (including from another thread) are undefined behavior.

Quick example:
    >>> engine = Engine("tool")
    >>> engine.add_flag(("verbose", "v"), "talk more").add_optional_argument(("level", "l"), "level")
    Engine('tool')
    >>> engine.parse(["-v", "--level=3"])
    Engine('tool')
    >>> engine.flag("verbose"), engine.value("level", int)
    (True, 3)
"""
import difflib
import logging
import shlex
import sys
from collections.abc import Iterable
from itertools import chain
from pathlib import Path

from .codecs import DecodeError
from .entries import Entry, EntryKind
from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


def _view(kind, name, /):
    """
    Read-only tuple view over the entries of one kind.
    """
    def getter(self):
        return tuple(self._entries[kind])

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


def _counter(kind, /):
    def getter(self):
        return len(self._entries[kind])

    getter.__name__ = getter.__qualname__ = kind.value + "_count"
    return property(getter)


class Engine:
    """
    Argument registry and parser for one command level.

    Parameters
    - name: str | Unset
      Program or subcommand name, shown in diagnostics. The root falls back to
      the running script's name.
    - description: str | Unset
      Help text for usage renderers.
    - colorful: bool (keyword-only, default True)
      Render faults with colors.
    - fancy: bool (keyword-only, default False)
      Render faults inside a panel.

    Rendering switches propagate to child engines created by add_subcommand().
    """

    def __init__(self, name=Unset, /, description=Unset, *, colorful=True, fancy=False):
        if not isinstance(name, str | Unset):
            raise TypeError("engine name must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError("engine name cannot be empty")

        if not isinstance(description, str | Unset):
            raise TypeError("engine description must be a string")

        if not isinstance(colorful, bool) or not isinstance(fancy, bool):
            raise TypeError("engine 'colorful' and 'fancy' must be booleans")

        self._name = coalesce(name)
        self._description = coalesce(description)
        self._colorful = colorful
        self._fancy = fancy
        self._entries = {kind: [] for kind in EntryKind}
        self._keywords = []
        self._route = (coalesce(name, Path(sys.argv[0]).name),)

    name = mirror("name")
    description = mirror("description")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    subcommands = _view(EntryKind.SUBCOMMAND, "subcommands")
    flags = _view(EntryKind.FLAG, "flags")
    mandatories = _view(EntryKind.MANDATORY, "mandatories")
    optionals = _view(EntryKind.OPTIONAL, "optionals")
    positionals = _view(EntryKind.POSITIONAL, "positionals")

    subcommand_count = _counter(EntryKind.SUBCOMMAND)
    flag_count = _counter(EntryKind.FLAG)
    mandatory_count = _counter(EntryKind.MANDATORY)
    optional_count = _counter(EntryKind.OPTIONAL)
    positional_count = _counter(EntryKind.POSITIONAL)

    @property
    def selected(self):
        """
        The subcommand entry the last parse dispatched to, or None.
        """
        return next((entry for entry in self._entries[EntryKind.SUBCOMMAND] if entry.satisfied), None)

    # ---------------------------------------------------------------- registration

    def _register(self, entry, /):
        """
        Append an entry after checking its keyword against this scope's index.
        """
        if entry.kind is not EntryKind.POSITIONAL:
            identity = entry.keyword.stripped()
            for existing in self._keywords:
                if existing == identity:
                    raise DuplicateKeywordError(entry.spelling, existing)
            self._keywords.append(identity)

        self._entries[entry.kind].append(entry)
        logger.debug("registered %s %r on %r", entry.kind.value, str(entry.keyword), self._route[0])
        return entry

    def add_subcommand(self, name, description=Unset, /):
        """
        Register a subcommand and return its (empty) child engine.
        """
        engine = type(self)(name, description, colorful=self._colorful, fancy=self._fancy)
        self._register(Entry(EntryKind.SUBCOMMAND, engine.name, description, engine=engine))
        return engine

    def add_flag(self, keyword, description=Unset, /):
        self._register(Entry(EntryKind.FLAG, keyword, description))
        return self

    def add_mandatory_argument(self, keyword, description=Unset, /):
        self._register(Entry(EntryKind.MANDATORY, keyword, description))
        return self

    def add_optional_argument(self, keyword, description=Unset, /):
        self._register(Entry(EntryKind.OPTIONAL, keyword, description))
        return self

    def add_argument(self, keyword, description=Unset, /, optional=True):
        """
        Register a keyed value, optional unless optional=False.
        """
        if optional:
            return self.add_optional_argument(keyword, description)
        return self.add_mandatory_argument(keyword, description)

    def add_positional(self, name, description=Unset, /):
        """
        Register a positional slot; positionals fill in registration order.
        """
        self._register(Entry(EntryKind.POSITIONAL, name, description))
        return self

    def subcommand(self, name, /):
        """
        Return the child engine registered under name, or None.
        """
        entry = self._dispatch(name)
        return entry.engine if entry is not None else None

    # ---------------------------------------------------------------- parsing

    def reset(self):
        logger.debug("resetting %r", self._route[-1])
        for entry in chain.from_iterable(self._entries.values()):
            entry.reset()

    def parse(self, tokens=Unset, /):
        """
        Parse a token stream against the registered schema.

        Parameters
        - tokens:
          • Unset: read sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence, program name already stripped.

        Returns
        - the engine itself, with entries updated in place.

        Raises
        - TypeError: when tokens is not a string or an iterable of strings.
        - MissingMandatoryError, UnknownArgumentsError, MissingPositionalsError.
        """
        if tokens is Unset:
            tokens = sys.argv[1:]
        elif isinstance(tokens, str):
            tokens = shlex.split(tokens)
        elif isinstance(tokens, Iterable):
            tokens = list(tokens)
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")

        # Tokens travel with their 1-based input position for diagnostics.
        self._parse(list(enumerate(tokens, 1)), self._route[:1])
        return self

    def _parse(self, tokens, route, /):
        self.reset()
        self._route = route
        logger.debug("parsing %d token(s) at %r", len(tokens), " ".join(route))

        if tokens and (entry := self._dispatch(tokens[0][1])) is not None:
            entry.satisfy()
            logger.debug("dispatching to subcommand %r", entry.name)
            entry.engine._parse(tokens[1:], route + (entry.name,))
            return

        self._reduce_keyed(tokens)
        self._check_mandatories()
        self._reduce_flags(tokens)
        self._assign_positionals(tokens)

    def _dispatch(self, token, /):
        return next((entry for entry in self._entries[EntryKind.SUBCOMMAND] if entry.matches(token)), None)

    def _resolve(self, token, following, /):
        """
        Find the keyed entry a token supplies a value for, or None.

        Mandatories are tried before optionals, each in registration order;
        the first entry that decodes the token takes it.
        """
        for entry in chain(self._entries[EntryKind.MANDATORY], self._entries[EntryKind.OPTIONAL]):
            if (match := entry.decode(token, following)) is not None:
                return entry, match
        return None

    def _reduce_keyed(self, tokens, /):
        index = 0
        while index < len(tokens):
            following = tokens[index + 1][1] if index + 1 < len(tokens) else Unset
            if (found := self._resolve(tokens[index][1], following)) is None:
                index += 1
                continue

            entry, match = found
            if entry.satisfied:
                logger.debug("%r given again, keeping the last value", str(entry.keyword))
            entry.satisfy(match.value)
            logger.debug("%r = %r (%s form)", str(entry.keyword), match.value, match.form.name.lower())
            # Removal shifts the stream left: stay on the same index.
            del tokens[index:index + match.width]

    def _check_mandatories(self):
        missing = [entry for entry in self._entries[EntryKind.MANDATORY] if not entry.satisfied]
        if not missing:
            return

        names = tuple(entry.name for entry in missing)
        self._trigger(MissingMandatoryError(
            "missing mandatory argument%s %s" % ("s" * (len(names) > 1), ", ".join(map(repr, names))),
            title="missing mandatory argument",
            code=FaultCode.MISSING_MANDATORY,
            missing=names,
            hint="add %s (for example: %s=<value>)" % (
                "them" if len(names) > 1 else "it", names[0]
            ),
        ))

    def _reduce_flags(self, tokens, /):
        index = 0
        while index < len(tokens):
            token = tokens[index][1]
            entry = next((entry for entry in self._entries[EntryKind.FLAG] if entry.matches(token)), None)
            if entry is None:
                index += 1
                continue
            entry.satisfy()
            logger.debug("flag %r set", str(entry.keyword))
            del tokens[index]

    def _assign_positionals(self, tokens, /):
        positionals = self._entries[EntryKind.POSITIONAL]

        if len(tokens) > len(positionals):
            # Dash-led leftovers are the likeliest culprits; otherwise blame the overflow.
            unknown = [item for item in tokens if item[1].startswith("-")] or tokens[len(positionals):]
            position, token = unknown[0]
            suggestions = difflib.get_close_matches(token, self._spellings(), 3)
            try:
                hint = "did you mean %r? run '%s --help' to see all arguments" % (suggestions[0], " ".join(self._route))
            except IndexError:
                hint = "remove the extra input; run '%s --help' to see valid forms" % " ".join(self._route)
            self._trigger(UnknownArgumentsError(
                "unknown argument %r at %s position" % (token, ordinal(position)),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENTS,
                position=position,
                leftover=tuple(token for _, token in unknown),
                suggestions=suggestions,
                hint=hint,
            ))

        if len(tokens) < len(positionals):
            names = tuple(entry.name for entry in positionals[len(tokens):])
            self._trigger(MissingPositionalsError(
                "missing positional argument%s %s" % ("s" * (len(names) > 1), ", ".join(map(repr, names))),
                title="missing positional argument",
                code=FaultCode.MISSING_POSITIONALS,
                missing=names,
                hint="add the missing values in order; run '%s --help' to see the expected order" % " ".join(self._route),
            ))

        for entry, (position, token) in zip(positionals, tokens):
            entry.satisfy(token)
            logger.debug("positional %r = %r (%s position)", entry.name, token, ordinal(position))
        tokens.clear()

    def _spellings(self):
        """
        Every token spelling this level recognizes, for suggestions.
        """
        for kind in (EntryKind.SUBCOMMAND, EntryKind.FLAG, EntryKind.MANDATORY, EntryKind.OPTIONAL):
            for entry in self._entries[kind]:
                yield from entry.keyword.forms

    def _trigger(self, fault, /, **options):
        trigger(fault, route=self._route, colorful=self._colorful, fancy=self._fancy, docs=getdoc(fault.options["code"]), **options)

    # ---------------------------------------------------------------- lookups

    def value(self, keyword, type=str, /):
        """
        Typed value of an optional, mandatory or positional entry.

        Lookup order is optionals, mandatories, then positionals (by exact
        name). Keyword queries are dash-insensitive: "d", "-d" and "--double"
        all find an entry registered as ("double", "d").

        Returns
        - the decoded value, or None when nothing matches or the entry was not supplied.

        Raises
        - TypeError: no decoder is registered for type.
        - UndecodableValueError: the supplied text does not decode as type.
        """
        for entry in chain(
            self._entries[EntryKind.OPTIONAL],
            self._entries[EntryKind.MANDATORY],
            self._entries[EntryKind.POSITIONAL],
        ):
            if entry.refers(keyword):
                break
        else:
            return None

        try:
            return entry.value(type)
        except DecodeError as error:
            self._trigger(UndecodableValueError(
                "value %r of %r is not a valid %s" % (error.raw, entry.name, type.__name__),
                title="undecodable value",
                code=FaultCode.UNDECODABLE_VALUE,
                keyword=entry.name,
                raw=error.raw,
                type=type,
                hint="pass %s a value of type %s" % (entry.name, type.__name__),
            ))

    def flag(self, keyword, /):
        """
        Whether a flag was given; False when no such flag is registered.
        """
        return next((entry.satisfied for entry in self._entries[EntryKind.FLAG] if entry.refers(keyword)), False)

    def __repr__(self):
        if self._name is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({self._name!r})"

    def __rich_repr__(self):
        yield self._name
        yield "description", self._description, None
        for kind in EntryKind:
            if entries := self._entries[kind]:
                yield kind.value + "s", tuple(entries)


__all__ = (
    "Engine",
)
