"""
Argosy faults (schema and parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault. Codes are
  grouped by domain to keep copy consistent and make logs/searches predictable.
- SchemaError / DuplicateKeywordError: registration-time programming errors.
  They derive from ValueError and are never rendered for end users.
- ParseException and subclasses: recoverable, input-dependent failures that
  carry message + options and know how to render themselves with rich.
- trigger(): central entry point to surface a parse fault (merge options, raise).
- report(): print a parse fault to the stderr console.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message names the ordinal position of the
  offending token when one exists (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The engine raises parse faults through trigger(fault, **ctx); it never exits
  the process. Callers catch ParseException and decide (report(), exit code, …).
- Subcommand-not-found is ordinary control flow and has no fault.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from pathlib import Path
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - schema (101xx)
      • DUPLICATE_KEYWORD
    - keyed values (111xx)
      • MISSING_MANDATORY, UNDECODABLE_VALUE
    - leftovers (112xx)
      • UNKNOWN_ARGUMENTS, MISSING_POSITIONALS

    normalize() allows host remapping to custom labels while keeping codes stable.
    """
    # --- schema errors (101xx) ---
    DUPLICATE_KEYWORD   = 10101

    # --- keyed value errors (111xx) ---
    MISSING_MANDATORY   = 11101
    UNDECODABLE_VALUE   = 11102

    # --- leftover token errors (112xx) ---
    UNKNOWN_ARGUMENTS   = 11201
    MISSING_POSITIONALS = 11202

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SchemaError(ValueError):
    """
    A registration call violated the schema (programming error).
    """
    code = Unset


class DuplicateKeywordError(SchemaError):
    """
    A keyword clashes with one already registered in the same scope.
    """
    code = FaultCode.DUPLICATE_KEYWORD

    def __init__(self, keyword, existing, /):
        super().__init__(f"keyword {str(keyword)!r} is already in use by {str(existing)!r}")
        self.keyword = keyword
        self.existing = existing


class ParseException(Exception):
    """
    base of every recoverable parse failure.

    options (all optional, filled in by the engine through trigger())
    - code: FaultCode
    - title: short, lowercase title
    - hint: one actionable sentence
    - route: tuple of command names from the program down to the failing level
    - position: 1-based position of the offending token, when there is one
    - colorful / fancy: rendering switches
    - plus fault-specific payload (leftover, missing, keyword, raw, type, …)
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        route = self.options.get("route") or (Path(sys.argv[0]).name,)
        code = self.options.get("code")
        title = self.options.get("title") or type(self).__name__

        header = Text.assemble(
            "[ ",
            text(getattr(main, "__prog__", " ".join(route)), "prog-name"),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "?", "code"),
            " | ",
            text(title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")

        body = [message]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        if docs := self.options.get("docs"):
            body.append(text(docs))

        if fancy:
            return Panel(Group(*body), title=header, title_align="left", width=console.width - 4)

        return Group(header, *body)

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownArgumentsError(ParseException): ...
class MissingPositionalsError(ParseException): ...
class MissingMandatoryError(ParseException): ...
class UndecodableValueError(ParseException): ...


def trigger(fault, /, **options):
    """
    surface a parse fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - ParseException.__trigger__ raises; nothing here writes output or exits.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def report(fault, /, *, file=Unset):
    """
    print a parse fault through rich.

    by default the shared stderr console is used; pass file= to render into
    another stream (plain text when the stream is not a terminal).
    """
    if not isinstance(fault, ParseException):
        raise TypeError("report() argument must be a parse exception")
    if file is Unset:
        console.print(fault)
    else:
        Console(file=file).print(fault)


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "SchemaError",
    "DuplicateKeywordError",
    "ParseException",
    "UnknownArgumentsError",
    "MissingPositionalsError",
    "MissingMandatoryError",
    "UndecodableValueError",
    "trigger",
    "report",
    "getdoc",
)
