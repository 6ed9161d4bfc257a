r"""
Seahorse flag specifications, matching, and resolution.

Overview
- Specs
  • FlagType: the value kind of a flag (BOOL, STRING, INT, UINT, FLOAT).
  • FlagValue: a typed value tagged with its FlagType (bool is an int in Python,
    so the tag is kept explicitly).
  • Flag: a named option with zero or more short aliases, an optional
    description, and an optional "multiple" (repeatable) marker.

- Pure functions over a normalized token list
  • locate(tokens, flag): indices of the tokens that designate the flag.
  • resolve(tokens, flag): per-occurrence values or faults, plus the consumed indices.

Token grammar (post-normalization)
- "--{name}" designates the flag by its long name.
- "-{alias}" designates the flag by any alias (aliases may be multi-character).
- value-taking flags read the token immediately following the designator.

Consumption
- BOOL consumes 1 token per occurrence; STRING/INT/UINT/FLOAT consume 2
  (designator + value). A designator at the end of input consumes only itself.

Validation highlights
- Names and aliases must be non-empty, must not start with '-', and must not
  contain '=' or whitespace.
- Aliases are unique within a flag.

Quick example:
    >>> from seahorse.flags import Flag, FlagType, resolve
    >>> age = Flag("age", FlagType.INT, "age of the person").alias("a")
    >>> resolve(["bob", "-a", "42"], age).outcomes
    (FlagValue(type=<FlagType.INT: 3>, value=42),)
"""
import builtins
import re
from enum import Enum
from typing import NamedTuple

from loguru import logger

from .faults import *
from .utils import *

_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?|inf|infinity|nan)", re.IGNORECASE)
_INT_MIN = -(2 ** 63)
_INT_MAX = 2 ** 63 - 1
_UINT_MAX = 2 ** 64 - 1


class FlagType(Enum):
    """
    Value kind of a flag.

    The value is the placeholder shown in help next to the flag's names
    (BOOL flags take no value and show none).
    """
    BOOL = 1
    STRING = 2
    INT = 3
    UINT = 4
    FLOAT = 5

    @property
    def placeholder(self):
        return "" if self is FlagType.BOOL else "<%s>" % self.name.lower()


class FlagValue(NamedTuple):
    """
    A successfully resolved flag value, tagged with its kind.
    """
    type: FlagType
    value: bool | str | int | float


class Resolution(NamedTuple):
    """
    The outcome of resolving one flag against a token list.

    Fields
    - flag: the Flag that was resolved.
    - outcomes: one entry per occurrence, in encounter order; each entry is a
      FlagValue or a FlagError instance. An absent flag has exactly one outcome,
      a FlagNotFoundError.
    - consumed: sorted indices of every token the flag consumed.
    """
    flag: "Flag"
    outcomes: tuple
    consumed: tuple

    @property
    def found(self):
        return bool(self.consumed)


def _sanitize_name(cls, name, what):
    """
    Internal: validate a flag name or alias and return it unchanged.

    Rules
    - must be a string (TypeError otherwise);
    - must be non-empty, must not start with '-', must not contain '=' or whitespace
      (ValueError otherwise).
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} {what} must be a string")
    if not name:
        raise ValueError(f"{cls.__typename__} {what} cannot be empty")
    if name.startswith("-"):
        raise ValueError(f"{cls.__typename__} {what} {name!r} cannot start with '-'")
    if "=" in name or re.search(r"\s", name):
        raise ValueError(f"{cls.__typename__} {what} {name!r} cannot contain '=' or whitespace")
    return name


class Flag(metaclass=Introspectable):
    """
    Named option specification.

    A Flag is immutable once attached to a command; before that, aliases can be
    accumulated builder-style:

        Flag("age", FlagType.INT).alias("a").alias("ag")

    Properties
    - name: long name (designated as "--{name}").
    - type: FlagType of the value.
    - descr: short description for help, or None.
    - aliases: tuple of short names (designated as "-{alias}").
    - multiple: whether every occurrence is collected (repeatable flag).
    - tokens: every token spelling that designates this flag.
    """

    __introspectable__ = (
        "name",
        "type",
        "descr",
        "aliases",
        "multiple",
    )

    def __init__(self, name, type=FlagType.BOOL, /, descr=Unset, *, aliases=(), multiple=False):
        cls = builtins.type(self)
        self._name = _sanitize_name(cls, name, "name")

        if not isinstance(type, FlagType):
            raise TypeError(f"{cls.__typename__} 'type' must be a flag-type")
        self._type = type

        if not isinstance(descr, str | Unset):
            raise TypeError(f"{cls.__typename__} 'descr' must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
        self._descr = coalesce(descr)

        if isinstance(aliases, str):
            raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
        self._aliases = []
        self._sealed = False
        for alias in aliases:
            self.alias(alias)

        self._multiple = bool(multiple)

    @property
    def tokens(self):
        return ("--" + self._name, *("-" + alias for alias in self._aliases))

    def alias(self, name, /):
        """
        Add a short alias (designated as "-{name}") and return the flag.

        Raises TypeError once the flag is attached to a command.
        """
        cls = builtins.type(self)
        if self._sealed:
            raise TypeError(f"{cls.__typename__} {self._name!r} is attached and cannot be modified")
        if _sanitize_name(cls, name, "alias") in self._aliases:
            raise ValueError(f"{cls.__typename__} aliases cannot contain duplicates")
        self._aliases.append(name)
        return self

    def repeatable(self):
        """
        Mark the flag as repeatable (every occurrence is collected) and return it.
        """
        if self._sealed:
            raise TypeError(f"{builtins.type(self).__typename__} {self._name!r} is attached and cannot be modified")
        self._multiple = True
        return self

    def seal(self):
        """
        Internal: freeze the flag when a command takes ownership of it.
        """
        self._sealed = True
        return self

    def parse(self, text, /):
        """
        Convert one value token into a FlagValue, or return a FlagValueTypeError.

        BOOL flags never read a value token; calling parse() on them is a misuse.
        """
        if self._type is FlagType.BOOL:
            raise TypeError("bool flags do not take a value")

        fault = FlagValueTypeError(
            "value %r of flag %r is not a valid %s" % (text, self._name, self._type.name.lower()),
            title="invalid flag value",
            code=FaultCode.FLAG_VALUE_TYPE,
            flag=self._name,
            input=text,
            hint="pass a %s after --%s" % (self._type.placeholder, self._name),
        )

        match self._type:
            case FlagType.STRING:
                return FlagValue(self._type, text)
            case FlagType.INT | FlagType.UINT:
                if not _INT.fullmatch(text):
                    return fault
                value = int(text)
                low, high = (_INT_MIN, _INT_MAX) if self._type is FlagType.INT else (0, _UINT_MAX)
                if not low <= value <= high:
                    return fault
                return FlagValue(self._type, value)
            case FlagType.FLOAT:
                if not _FLOAT.fullmatch(text):
                    return fault
                return FlagValue(self._type, float(text))

        raise RuntimeError("unreachable")


def locate(tokens, flag, /):
    """
    Return the indices of the tokens that designate 'flag'.

    - Non-repeatable flags: at most one index, the leftmost occurrence.
    - Repeatable flags: every occurrence, left to right.

    No normalization is performed: tokens are expected to be normalized already.
    """
    spellings = set(flag.tokens)
    indices = [index for index, token in enumerate(tokens) if token in spellings]
    return indices if flag.multiple else indices[:1]


def resolve(tokens, flag, /):
    """
    Resolve 'flag' against a normalized token list.

    Behavior
    - absent: a single FlagNotFoundError outcome and nothing consumed.
    - BOOL: each occurrence yields FlagValue(BOOL, True) and consumes itself.
    - STRING/INT/UINT/FLOAT: each occurrence reads the following token:
      • no following token → FlagArgumentError (only the designator is consumed);
      • unparsable value   → FlagValueTypeError (designator and value consumed);
      • otherwise          → FlagValue of the declared type.

    For repeatable flags, a value token already consumed as the value of an earlier
    occurrence is never treated as a new occurrence.

    Returns
    - Resolution(flag, outcomes, consumed)
    """
    outcomes = []
    consumed = []

    for index in locate(tokens, flag):
        if index in consumed:
            # this designator was eaten as the value of a previous occurrence
            continue
        consumed.append(index)

        if flag.type is FlagType.BOOL:
            outcomes.append(FlagValue(FlagType.BOOL, True))
            continue

        if index + 1 >= len(tokens):
            outcomes.append(FlagArgumentError(
                "flag %r requires a value but none was given" % tokens[index],
                title="missing flag value",
                code=FaultCode.FLAG_ARGUMENT,
                flag=flag.name,
                input=tokens[index],
                hint="pass a %s after %s" % (flag.type.placeholder, tokens[index]),
            ))
            continue

        consumed.append(index + 1)
        outcomes.append(flag.parse(tokens[index + 1]))

    if not outcomes:
        outcomes.append(FlagNotFoundError(
            "flag %r was not given" % flag.name,
            title="flag not found",
            code=FaultCode.FLAG_NOT_FOUND,
            flag=flag.name,
            hint="pass --%s %s" % (flag.name, flag.type.placeholder) if flag.type is not FlagType.BOOL else "pass --%s" % flag.name,
        ))

    resolution = Resolution(flag, tuple(outcomes), tuple(sorted(consumed)))
    logger.debug("resolved flag {!r}: {!r}", flag.name, resolution.outcomes)
    return resolution


__all__ = (
    "FlagType",
    "FlagValue",
    "Flag",
    "Resolution",
    "locate",
    "resolve",
)
