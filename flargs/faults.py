"""
Flargs faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every token-related message includes the ordinal position
  so users can learn by trying (“at third position”, etc.).
- Path-aware messages: flag faults name the dotted command path that was active
  (e.g., 'git.remote.add') so users see which scope the lookup ran in.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The parser raises faults directly; it never renders anything itself.
- invoke() catches them and calls trigger(fault, **ctx): in non-shell mode exceptions
  are re-raised, in shell mode they are rendered via rich and the process exits.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across flargs (stable identifiers).

    grouping (by high-level domain)
    - flags (1111x)
      • UNKNOWN_FLAG
    - positionals / completeness (1112x)
      • UNEXPECTED_PARAM, MISSING_REQUIRED
    - values (1112x)
      • INVALID_BOOLEAN_LITERAL, INVALID_NUMBER_LITERAL
    - warnings (12xxx)
      • DANGLING_FLAG

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired (e.g., to shorter labels).
    """
    # --- flag errors (11xxx) ---
    UNKNOWN_FLAG                = 11112

    # --- positional/param errors (11xxx) ---
    UNEXPECTED_PARAM            = 11121
    MISSING_REQUIRED            = 11125

    # --- value errors (11xxx) ---
    INVALID_BOOLEAN_LITERAL     = 11126
    INVALID_NUMBER_LITERAL      = 11127

    # --- warnings (12xxx) ---
    DANGLING_FLAG               = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(self, styles, title):
    """
    Build the rich renderable shared by errors and warnings.

    The header reads "[ prog — code | title ]", followed by the message and a
    single hint line. When the fault carries fancy=True the body is framed in a Panel.
    """
    main = __import__("__main__")
    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))
    colorful = self.options.get("colorful", False)
    fancy = self.options.get("fancy", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    try:
        label = self.options["schema"].name
    except KeyError:
        label = "flargs"
    prog = text(getattr(main, "__prog__", label), styler("prog-name"))
    code = self.options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if code else "", styler("code")),
        " | ",
        text(str(self.options.get("title", "")).title(), styler(title)),
        " ]"
    )
    message = text(self.message, styler(title.replace("title", "message")))
    hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

    if fancy:
        width = console.width - 4
        try:
            width = int(width * self.options["ratio"])
        except KeyError:
            width = None
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class CommandException(Exception):
    """
    Base class of every fatal parse fault.

    Carries a lowercased message plus read-only options (title, code, hint,
    token, index, path, argument, ...) and can render itself with rich.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message or "")
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownFlagError(CommandException): ...
class InvalidBooleanLiteralError(CommandException): ...
class InvalidNumberLiteralError(CommandException): ...
class UnexpectedParamError(CommandException): ...
class MissingRequiredError(CommandException): ...


class CommandWarning(ABC, Warning):
    """
    Base class of every non-fatal parse fault.

    Warnings are collected on the result during parsing and surfaced by invoke():
    printed in shell mode, emitted through warnings.warn otherwise.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message or "")
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DanglingFlagWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised
      and warnings are emitted through the warnings module.

    typical options
    - schema, shell, fancy, colorful, title, code, hint, docs, and any other
      context the reporter may want to show (e.g., token/index/path/argument).
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
    "CommandException",
    "UnknownFlagError",
    "InvalidBooleanLiteralError",
    "InvalidNumberLiteralError",
    "UnexpectedParamError",
    "MissingRequiredError",
    "CommandWarning",
    "DanglingFlagWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
