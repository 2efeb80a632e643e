"""
clasp faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for user-facing issues.
- ArgumentsException / ArgumentsWarning: base types that carry a message plus
  options and know how to render themselves (rich) in a lowercased, actionable way.
- trigger(): central entry point to surface any fault (raise errors, emit warnings).
- getdoc(): optional description lookup for a code from the host application.

Messages
- str(fault) is the stable one-line message returned by Parser.process():
  • "Invalid argument: <token>"
  • "Missing argument: <name>"
- Rich rendering adds a header with program name, code and title, and a hint line.

Integration
- The parser raises faults through trigger(); process() turns them into a
  (success, error) result, invoke() renders them on standard error.
"""
import copy
import inspect
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console(stderr=True, highlight=False)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - parse errors (211xx): INVALID_ARGUMENT, MISSING_ARGUMENT
    - warnings (221xx): REPEATED_OPTION

    normalize() lets the host remap codes to custom labels through a
    __codes__ mapping in __main__.
    """
    # --- parse errors (21xxx) ---
    INVALID_ARGUMENT = 21101
    MISSING_ARGUMENT = 21102

    # --- warnings (22xxx) ---
    REPEATED_OPTION  = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title):
    """
    Shared rich rendering for errors and warnings.

    header: [ <prog> — <code> | <Title> ]
    body:   <message>
    hint:    → <hint>
    """
    main = __import__("__main__")
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", False)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = getattr(main, "__prog__", None) or fault.options.get("prog") or "clasp"
    parts = [
        "[ ", text(prog, "prog-name"),
        " — ", text(fault.options["code"].normalize() if "code" in fault.options else "", "code"),
        " | ", text(fault.options.get("title", "").title(), title),
        " ]",
    ]
    renders = [Text.assemble(*parts), text(fault.message, "message")]
    if hint := fault.options.get("hint"):
        renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
    return Group(*renders)


class ArgumentsException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title")

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidArgumentError(ArgumentsException): ...
class MissingArgumentError(ArgumentsException): ...


class ArgumentsWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title")

    def __trigger__(self):
        warnings.warn(self, stacklevel=len(inspect.stack()))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RepeatedOptionWarning(ArgumentsWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - errors are raised; warnings go through the warnings machinery.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode members and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentsException",
    "InvalidArgumentError",
    "MissingArgumentError",
    "ArgumentsWarning",
    "RepeatedOptionWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
