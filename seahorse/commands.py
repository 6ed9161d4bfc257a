"""
Seahorse command layer: declare, compose, resolve, and run commands.

What this module provides
- Command: a named node of the command tree with:
  • Aliases (alternate names matched exactly, case-sensitive).
  • Flags (seahorse.flags.Flag), unique by name and by token spelling.
  • Children (subcommands), unique by name and alias among siblings.
  • At most one handler: a plain action or a result action.
  • Rendering options (colorful, fancy) inherited from the parent when unset.

Dispatch
    tokens → normalize → resolve (peel command names) → help? → Context → handler

- The deepest matched command runs; unmatched leading tokens are positional
  arguments of that command.
- "-h" / "--help" among the remaining tokens prints the help of the deepest
  matched command instead of dispatching.
- A command without a handler prints its help and returns (not an error).
- A result action hands back (or raises) an ActionError; run() renders it to
  stderr and exits with status 1, run_with_result() raises it.

Quick start
    from seahorse import Command, Flag, FlagType

    app = Command("tool")

    @app.command(flags=[Flag("loud").alias("l")])
    def hello(context):
        "say hello"
        text = "hello " + " ".join(context.args)
        print(text.upper() if context.bool_flag("loud") else text)

    app.run(["tool", "hello", "world", "-l"])

Construction mistakes (duplicate names, reserved help tokens, a second
handler) fail immediately with TypeError/ValueError; they never surface at
dispatch time.
"""
import inspect
import shlex
import sys
from collections.abc import Iterable

from loguru import logger

from .context import Context
from .faults import *
from .flags import Flag, _sanitize_name
from .help import render, show
from .tokens import HELP_TOKENS, normalize, wants_help
from .utils import *


def _process_strings(self, **strings):
    """
    Validate optional text fields (str | Unset), trim them, and store them as "_{name}".

    Errors
    - TypeError: when a value is not str | Unset.
    - ValueError: when a string becomes empty after trimming.
    """
    cls = type(self)
    for name, object in strings.items():
        if not isinstance(object, str | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif isinstance(object, str) and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        setattr(self, "_" + name, coalesce(object))


def _attach_to_parent(self, parent):
    """
    Register this command under its parent, enforcing unique names and aliases.

    Every name is checked before any is claimed, so a rejected command leaves
    the parent untouched.
    """
    if self._parent is not None:
        raise ValueError(f"{type(self).__typename__} {self._name!r} is already attached to {self._parent.name!r}")

    typeof = "subcommand" if parent.parent else "command"
    for name in (self._name, *self._aliases):
        if name in parent._children:
            raise ValueError(f"{type(self).__typename__} {typeof} name {name!r} is already in use")

    for name in (self._name, *self._aliases):
        parent._children[name] = self
    self._parent = parent
    logger.debug("attached {} {!r} under {!r}", typeof, self._name, parent.name)


def _from_callable(source, /, *args, **kwargs):
    """
    Wrap a callable into a new Command.

    - name defaults to the callable's __name__;
    - descr defaults to its docstring;
    - result=True registers it as a result action instead of a plain action.
    """
    name = kwargs.pop("name", Unset)
    if not args and "descr" not in kwargs:
        kwargs["descr"] = inspect.getdoc(source) or Unset
    kwargs["action_with_result" if kwargs.pop("result", False) else "action"] = source
    return Command(coalesce(name, getattr(source, "__name__", Unset)), *args, **kwargs)


class Command(metaclass=Introspectable):
    """
    Named node of the command tree.

    Properties
    - name, descr, usage, aliases: identity and help text.
    - flags: read-only mapping flag name → Flag.
    - children: read-only mapping name or alias → Command.
    - commands: distinct children in registration order.
    - parent: the command this one is attached to, or None.
    - colorful, fancy: rendering options (inherited when unset).
    - root, path: the topmost ancestor, and the ancestry from root to self.
    """

    __introspectable__ = (
        "name",
        "descr",
        "usage",
        "aliases",
        "flags",
        "children",
        "parent",
    )

    __displayable__ = (
        "name",
        "descr",
        "aliases",
        "flags",
        "commands",
    )

    clustering = False

    def __init__(
            self,
            name,
            /,
            descr=Unset,
            usage=Unset,
            *,
            aliases=(),
            flags=(),
            commands=(),
            action=Unset,
            action_with_result=Unset,
            colorful=Unset,
            fancy=Unset
    ):
        cls = type(self)
        self._name = _sanitize_name(cls, name, "name")
        _process_strings(self, descr=descr, usage=usage)

        for option, value in (("colorful", colorful), ("fancy", fancy)):
            if not isinstance(value, bool | Unset):
                raise TypeError(f"{cls.__typename__} {option!r} must be a boolean")
        self._colorful = colorful
        self._fancy = fancy

        self._aliases = []
        self._flags = {}
        self._children = {}
        self._parent = None
        self._action = Unset
        self._result = False

        for kind, argument in (("aliases", aliases), ("flags", flags), ("commands", commands)):
            if isinstance(argument, str) or not isinstance(argument, Iterable):
                raise TypeError(f"{cls.__typename__} {kind!r} must be an iterable")

        for alias in aliases:
            self.alias(alias)
        for flag in flags:
            self.flag(flag)
        for command in commands:
            if not isinstance(command, Command):
                raise TypeError(f"{cls.__typename__} 'commands' must be an iterable of commands")
            self.command(command)

        if action is not Unset and action_with_result is not Unset:
            raise TypeError(f"{cls.__typename__} cannot have both 'action' and 'action_with_result'")
        if action is not Unset:
            self.action(action)
        if action_with_result is not Unset:
            self.action_with_result(action_with_result)

    @property
    def commands(self):
        return tuple(dict.fromkeys(self._children.values()))

    @property
    def colorful(self):
        return bool(coalesce(self._colorful, self._parent.colorful if self._parent else False))

    @property
    def fancy(self):
        return bool(coalesce(self._fancy, self._parent.fancy if self._parent else False))

    @property
    def root(self):
        """
        Return the topmost command in the current command hierarchy.
        """
        child, parent = self, self._parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    def alias(self, name, /):
        """
        Add an alternate name and return the command.

        Raises ValueError when the alias duplicates one of this command's names
        or, once attached, a sibling's name or alias.
        """
        cls = type(self)
        if _sanitize_name(cls, name, "alias") == self._name or name in self._aliases:
            raise ValueError(f"{cls.__typename__} aliases cannot contain duplicates")
        if self._parent is not None:
            if name in self._parent._children:
                raise ValueError(f"{cls.__typename__} command name {name!r} is already in use")
            self._parent._children[name] = self
        self._aliases.append(name)
        return self

    def flag(self, flag, /):
        """
        Declare a flag on this command and return the command.

        Rules
        - flag names are unique within a command;
        - no two flags may share a token spelling ("--name" or "-alias");
        - "--help" and "-h" are reserved for help.

        The flag is sealed: its aliases can no longer change.
        """
        cls = type(self)
        if not isinstance(flag, Flag):
            raise TypeError(f"{cls.__typename__} flags must be flags")
        if flag.name in self._flags:
            raise ValueError(f"{cls.__typename__} flag name {flag.name!r} is already in use")

        taken = {token for other in self._flags.values() for token in other.tokens}
        for token in flag.tokens:
            if token in HELP_TOKENS:
                raise ValueError(f"{cls.__typename__} flag token {token!r} is reserved for help")
            if token in taken:
                raise ValueError(f"{cls.__typename__} flag token {token!r} is already in use")

        self._flags[flag.name] = flag.seal()
        return self

    def command(self, source=Unset, /, *args, **kwargs):
        """
        Create or attach a subcommand under this command.

        Invocation modes
        - Attach: command(existing_command) -> Command
        - Wrap: command(callable, ...) -> Command whose action is the callable
          (name defaults to __name__, descr to the docstring; result=True makes
          it a result action).
        - Decorator: @self.command(...) applied to a callable.

        Returns
        - the attached Command, or a decorator in decorator mode.
        """
        @rename("command")
        def wrapper(source, /):
            if isinstance(source, Command):
                if args or kwargs:
                    raise TypeError("command() cannot override an existing command")
                child = source
            elif callable(source):
                child = _from_callable(source, *args, **kwargs)
            else:
                raise TypeError("@command() must be applied to a callable or a command")
            _attach_to_parent(child, self)
            return child

        return wrapper(source) if source is not Unset else wrapper

    def _handler(self, callback, result):
        cls = type(self)
        if not callable(callback):
            raise TypeError(f"{cls.__typename__} action must be callable")
        if self._action is not Unset:
            raise TypeError(f"{cls.__typename__} action cannot be overridden")
        self._action = callback
        self._result = result
        return callback

    def action(self, callback, /):
        """
        Register the handler of this command (set once); usable as a decorator.

        The handler receives the Context; its return value is ignored.
        """
        return self._handler(callback, False)

    def action_with_result(self, callback, /):
        """
        Register a result-carrying handler (set once); usable as a decorator.

        The handler receives the Context and returns None on success or an
        ActionError on failure (raising the ActionError is equivalent).
        """
        return self._handler(callback, True)

    def resolve(self, tokens, /):
        """
        Peel leading command names off a token list.

        Returns
        - (chain, remaining): chain starts with this command and ends with the
          deepest matched one; remaining holds the unconsumed tokens.
        """
        chain = [self]
        remaining = list(tokens)
        while remaining and (child := chain[-1]._children.get(remaining[0])):
            chain.append(child)
            del remaining[0]
        logger.debug("resolved command chain {!r}, remaining {!r}", [command.name for command in chain], remaining)
        return tuple(chain), remaining

    def help(self):
        """
        Print the help of this command to stdout.
        """
        show(render(self))

    def _dispatch(self, tokens, /, *, shell):
        chain, remaining = self.resolve(tokens)
        command = chain[-1]

        if wants_help(remaining) or command._action is Unset:
            logger.debug("printing help of {!r}", command.name)
            return command.help()

        options = {
            "prog": " ".join(step.name for step in command.path),
            "shell": shell,
            "colorful": command.colorful,
            "fancy": command.fancy,
        }
        context = Context(remaining, command._flags.values(), render(command), **options)

        logger.debug("dispatching {!r} with {!r}", command.name, context)
        if not command._result:
            command._action(context)
            return

        try:
            result = command._action(context)
        except ActionError as error:
            result = error
        if result is None:
            return
        if not isinstance(result, ActionError):
            raise TypeError(f"{type(command).__typename__} result action must return None or an action error")
        logger.debug("action of {!r} failed: {}", command.name, result)
        trigger(result, **options)

    def _tokens(self, args):
        if args is Unset:
            return sys.argv[1:]
        if isinstance(args, str):
            return shlex.split(args)
        if isinstance(args, Iterable):
            return list(args)[1:]
        raise TypeError("run() argument must be a string or an iterable of strings")

    def run(self, args=Unset, /):
        """
        Execute this command.

        Parameters
        - args:
          • Unset: read tokens from sys.argv (the program name is dropped).
          • str: shell-like argument line, split with shlex.split; it holds
            no program name.
          • Iterable[str]: argv-style tokens; the first one is the program
            name and is dropped, as with sys.argv.

        A failing result action is rendered to stderr and the process exits
        with status 1.
        """
        self._dispatch(normalize(self._tokens(args), cluster=self.clustering), shell=True)

    def run_with_result(self, args=Unset, /):
        """
        Same as run(), but a failing result action raises its ActionError.
        """
        self._dispatch(normalize(self._tokens(args), cluster=self.clustering), shell=False)


__all__ = (
    "Command",
)
