"""
Seahorse application: the root command plus program metadata.

An App is a Command that also carries what only the top of the tree shows in
help (display name, author, version), an optional hand-written help text, and
the opt-in short-flag clustering switch used when normalizing tokens.

    from seahorse import App, Flag, FlagType, ActionError

    app = App("cli", "demo tool", "cli [name...] [flags]", author="Jane Doe", version="1.0.0")
    app.flag(Flag("count", FlagType.INT, "repeat count").alias("c"))

    @app.action_with_result
    def greet(context):
        if not context.args:
            return ActionError("nobody to greet")
        for _ in range(context.int_flag("count")):
            print("hello", *context.args)

    if __name__ == "__main__":
        app.run()
"""
from .commands import Command, _process_strings
from .utils import *


class App(Command):
    """
    Root command of a program.

    Parameters (beyond Command's)
    - display_name: str | Unset
      shown in the Name section of help instead of name.
    - author, version: str | Unset
      shown in the Author and Version sections of help.
    - custom_help: str | Unset
      replaces the generated help text verbatim.
    - clustering: bool
      expand "-abc" into "-a -b -c" before dispatch (off by default).
    """

    __introspectable__ = Command.__introspectable__ + (
        "display_name",
        "author",
        "version",
        "custom_help",
        "clustering",
    )

    __displayable__ = Command.__displayable__ + (
        "author",
        "version",
    )

    def __init__(
            self,
            name,
            /,
            descr=Unset,
            usage=Unset,
            *,
            display_name=Unset,
            author=Unset,
            version=Unset,
            custom_help=Unset,
            clustering=False,
            **options
    ):
        super().__init__(name, descr, usage, **options)
        _process_strings(self, display_name=display_name, author=author, version=version)

        if not isinstance(custom_help, str | Unset):
            raise TypeError(f"{type(self).__typename__} 'custom_help' must be a string")
        self._custom_help = coalesce(custom_help)
        self._clustering = bool(clustering)


__all__ = (
    "App",
)
