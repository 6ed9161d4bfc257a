"""
Seahorse faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves through rich.
- FlagError family: the flag-resolution taxonomy (not found, undefined, type,
  value type, argument). These are stored in a Context and raised only when a
  handler asks for the value; the dispatcher never raises them on its own.
- ActionError: the failure a result-carrying handler hands back to the dispatcher.
- trigger(): central entry point to surface a fault (shell mode prints and exits,
  otherwise exceptions are raised and warnings are warned).

Integration
- Handlers catch FlagError subclasses to decide between fatal and recoverable.
- App.run() triggers ActionError in shell mode; App.run_with_result() raises it.
"""
import copy
import inspect
import sys
import warnings
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
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - flag resolution (112xx)
      • FLAG_NOT_FOUND, FLAG_UNDEFINED, FLAG_TYPE, FLAG_VALUE_TYPE, FLAG_ARGUMENT
    - delegated errors (11131)
      • ACTION_ERROR
    - warnings (12xxx)
      • REPEATED_FLAG

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- flag resolution errors (112xx) ---
    FLAG_NOT_FOUND              = 11201
    FLAG_UNDEFINED              = 11202
    FLAG_TYPE                   = 11203
    FLAG_VALUE_TYPE             = 11204
    FLAG_ARGUMENT               = 11205

    # --- delegated errors (11xxx) ---
    ACTION_ERROR                = 11131

    # --- warnings (12xxx) ---
    REPEATED_FLAG               = 12115

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title_style, message_style):
    """
    shared rich rendering for exceptions and warnings.

    layout
    - header: "[ prog — code | title ]"
    - body:   message
    - footer: " → hint" (only when a hint was given)
    wrapped in a Panel when the 'fancy' option is set.
    """
    main = __import__("__main__")
    options = fault.options

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

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

    prog = text(getattr(main, "__prog__", options.get("prog") or "seahorse"), styler("prog-name"))

    parts = ["[ ", prog]
    if code := options.get("code"):
        parts += [" — ", text(code.normalize(), styler("code"))]
    parts += [" | ", text(str(options.get("title") or fault.kind).title(), styler(title_style)), " ]"]
    header = Text.assemble(*parts)

    renders = [text(fault.message, styler(message_style))]
    if hint := options.get("hint"):
        renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if fancy:
        return Panel(Group(*renders), title=header, title_align="left", width=console.width - 4)
    return Group(header, *renders)


class CommandException(Exception):
    """
    Base class of every seahorse error.

    Carries
    - message: one-sentence, lowercased description.
    - options: read-only mapping of rendering/context options (code, title, hint,
      prog, shell, colorful, fancy, and anything a reporter may want to show).
    """
    kind = "error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*((message,) if message is not Unset else ()))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else self.kind

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error-title", "error-message")

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class FlagError(CommandException):
    """
    Base class of the flag-resolution taxonomy.

    Subclasses are created while a Context is built and stored per occurrence;
    Context accessors raise them when the handler asks for the value. 'kind'
    holds the short taxonomy name ("NotFound", "Undefined", ...).
    """
    kind = "FlagError"

    @property
    def flag(self):
        """name of the flag this fault is about (None when unknown)."""
        return self.options.get("flag")


class FlagNotFoundError(FlagError):
    """The flag is declared but was not given on this invocation."""
    kind = "NotFound"


class FlagUndefinedError(FlagError):
    """The flag name was never declared on the command."""
    kind = "Undefined"


class FlagTypeError(FlagError):
    """The value exists but was requested through the accessor of another type."""
    kind = "TypeError"


class FlagValueTypeError(FlagError):
    """The value is present but does not parse as the declared type."""
    kind = "ValueTypeError"


class FlagArgumentError(FlagError):
    """A value-taking flag was given without a following value."""
    kind = "ArgumentError"


class ActionError(CommandException):
    """
    Failure reported by a handler.

    A result action returns (or raises) an ActionError; the dispatcher prints its
    message to stderr and exits with a non-zero status (App.run), or re-raises it
    to the caller (App.run_with_result).
    """
    kind = "action error"

    def __init__(self, message=Unset, /, **options):
        options.setdefault("code", FaultCode.ACTION_ERROR)
        super().__init__(message, **options)


class CommandWarning(Warning):
    """
    Base class of every seahorse warning (non-fatal, soft feedback).
    """
    kind = "warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*((message,) if message is not Unset else ()))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else self.kind

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",

            # body
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning-title", "warning-message")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RepeatedFlagWarning(CommandWarning):
    """A non-repeatable flag was given more than once; only the first occurrence counts."""
    kind = "repeated flag"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, errors are rendered to stderr and the process exits with
      status 1; otherwise errors are raised and warnings go through warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "CommandException",
    "FlagError",
    "FlagNotFoundError",
    "FlagUndefinedError",
    "FlagTypeError",
    "FlagValueTypeError",
    "FlagArgumentError",
    "ActionError",
    "CommandWarning",
    "RepeatedFlagWarning",
    "FaultCode",
    "trigger",
)
