"""
Seahorse invocation context.

A Context is the resolved, per-invocation view a handler receives:
- args: positional arguments (every recognized flag occurrence and its value removed).
- flags: read-only mapping of flag name → Resolution (see seahorse.flags.resolve).
- help_text: the precomputed help of the command being run.

Flags are resolved one at a time, in declaration order, against a working copy of
the tokens; the tokens a flag consumed are removed before the next flag is located.

Accessors
- bool_flag(name): never raises; False unless the flag was given.
- string_flag / int_flag / uint_flag / float_flag(name): first occurrence; raise
  FlagUndefinedError, then the stored resolution fault (FlagNotFoundError,
  FlagValueTypeError, FlagArgumentError), then FlagTypeError when a value did
  resolve but the accessor does not match its type.
- *_flag_vec(name): every occurrence in encounter order ([] when absent).
- help(): print the precomputed help verbatim.
"""
from types import MappingProxyType

from loguru import logger
from rich.text import Text

from .faults import *
from .flags import FlagType, Flag, resolve
from .help import show
from .utils import *


class Context:
    """
    Resolved view of one invocation, handed to exactly one handler.

    Parameters
    - tokens: Iterable[str]
      normalized tokens left after command resolution (no program name).
    - flags: Iterable[Flag]
      flags declared on the command being run.
    - help: str | Text | Unset
      precomputed help for the command (rendered verbatim by help()).
    - **options:
      fault options forwarded to warnings raised while resolving
      (prog, shell, colorful, fancy).
    """

    def __init__(self, tokens, flags=(), help=Unset, /, **options):
        working = list(tokens)
        resolutions = {}

        for flag in flags:
            if not isinstance(flag, Flag):
                raise TypeError("context flags must be flags")
            if flag.name in resolutions:
                raise ValueError(f"flag name {flag.name!r} is already in use")

            resolution = resolve(working, flag)
            resolutions[flag.name] = resolution

            # consumed indices are sorted; delete from the highest so lower ones stay valid
            for index in reversed(resolution.consumed):
                del working[index]

            if not flag.multiple and resolution.found and (extra := [token for token in working if token in flag.tokens]):
                trigger(RepeatedFlagWarning(
                    "flag %r was given %d times but only the first is used" % (flag.name, len(extra) + 1),
                    title="repeated flag",
                    code=FaultCode.REPEATED_FLAG,
                    flag=flag.name,
                    hint="declare the flag as repeatable or pass --%s once" % flag.name,
                ), **options)

        self._args = working
        self._flags = resolutions
        self._help = Text.from_ansi(help) if isinstance(help, str) else coalesce(help, Text(""))
        logger.debug("context built: args={!r}, flags={!r}", self._args, list(self._flags))

    @property
    def args(self):
        return list(self._args)

    @property
    def flags(self):
        return MappingProxyType(self._flags)

    @property
    def help_text(self):
        return self._help.plain

    def _resolution(self, name):
        try:
            return self._flags[name]
        except KeyError:
            raise FlagUndefinedError(
                "flag %r is not defined for this command" % name,
                title="undefined flag",
                code=FaultCode.FLAG_UNDEFINED,
                flag=name,
                hint="declare the flag on the command before reading it",
            ) from None

    def _checked(self, resolution, type):
        """
        Raise FlagTypeError when a resolved value is read with the wrong accessor.

        Only called once every stored outcome is known to be a value, so a
        missing or malformed flag reports that fault instead.
        """
        if resolution.flag.type is not type:
            name = resolution.flag.name
            raise FlagTypeError(
                "flag %r holds a %s value, not a %s" % (name, resolution.flag.type.name.lower(), type.name.lower()),
                title="flag type mismatch",
                code=FaultCode.FLAG_TYPE,
                flag=name,
                hint="read it with %s_flag()" % resolution.flag.type.name.lower(),
            )

    def _value(self, name, type):
        resolution = self._resolution(name)
        outcome = resolution.outcomes[0]
        if isinstance(outcome, FlagError):
            raise outcome
        self._checked(resolution, type)
        return outcome.value

    def _values(self, name, type):
        resolution = self._resolution(name)
        if not resolution.found:
            return []
        for outcome in resolution.outcomes:
            if isinstance(outcome, FlagError):
                raise outcome
        self._checked(resolution, type)
        return [outcome.value for outcome in resolution.outcomes]

    def bool_flag(self, name):
        """
        Return True when the bool flag was given; never raises.
        """
        try:
            return self._value(name, FlagType.BOOL)
        except FlagError:
            return False

    def bool_flag_vec(self, name):
        """
        Return one True per occurrence of the bool flag (e.g. to count -v -v -v); never raises.
        """
        try:
            return self._values(name, FlagType.BOOL)
        except FlagError:
            return []

    def string_flag(self, name):
        return self._value(name, FlagType.STRING)

    def string_flag_vec(self, name):
        return self._values(name, FlagType.STRING)

    def int_flag(self, name):
        return self._value(name, FlagType.INT)

    def int_flag_vec(self, name):
        return self._values(name, FlagType.INT)

    def uint_flag(self, name):
        return self._value(name, FlagType.UINT)

    def uint_flag_vec(self, name):
        return self._values(name, FlagType.UINT)

    def float_flag(self, name):
        return self._value(name, FlagType.FLOAT)

    def float_flag_vec(self, name):
        return self._values(name, FlagType.FLOAT)

    def help(self):
        """
        Print the precomputed help to stdout, verbatim.
        """
        show(self._help)

    def __repr__(self):
        return f"context(args={self._args!r}, flags={tuple(self._flags)!r})"


__all__ = (
    "Context",
)
