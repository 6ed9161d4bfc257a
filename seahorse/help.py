"""
Seahorse help rendering.

Builds the help of a command (or app) from the same structure used for parsing.

Layout (sections without content are skipped)

    Name:
        <display name or name>

    Author:
        <author>

    Description:
        <descr>

    Usage:
        <usage>

    Flags:
        -a, --age <int>  : age of the person
        -h, --help       : Show help

    Commands:
        hello, h : say hello

    Version:
        <version>

The label column of Flags and Commands is as wide as the longest label of the
group. Values (names, descriptions) may carry ANSI escapes produced by
seahorse.color; they are decoded so widths are measured on visible text.

Palette keys (honored only when the command is colorful)
- section-label, program-name, flag-name, placeholder, command-name, description
Define a mapping named __styles__ in __main__ to override any palette entry.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

INDENT = "    "
HELP_LABEL = "-h, --help"
HELP_DESCR = "Show help"


def _palette(colorful):
    styles = defaultdict(str, {
        "section-label": "bold #FFFFFF",
        "program-name": "bold #FF4D94",
        "flag-name": "bold #22C55E",
        "placeholder": "bold #FFD600",
        "command-name": "bold #36C5F0",
        "description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _text(fragment, style=""):
    text = Text.from_ansi(str(fragment))
    if style:
        text.stylize(style)
    return text


def _table(rows, styler, style):
    """
    Align (label, descr) rows on the longest label; returns a Text block.
    """
    width = max(len(label) for label, _ in rows)
    block = Text()
    for index, (label, descr) in enumerate(rows):
        if index:
            block.append("\n")
        block.append(INDENT).append(label if isinstance(label, Text) else _text(label, styler(style)))
        if descr:
            block.append(" " * (width - len(label))).append(" : ")
            block.append(_text(descr, styler("description")))
    return block


def _flag_label(flag, styler):
    label = Text(", ").join(_text(token, styler("flag-name")) for token in (*flag.tokens[1:], flag.tokens[0]))
    if placeholder := flag.type.placeholder:
        label.append(" ").append(placeholder, styler("placeholder"))
    return label


def render(command, /):
    """
    Return the help of 'command' as a rich Text.

    An App built with custom_help returns that text verbatim instead.
    """
    if custom := getattr(command, "custom_help", None):
        return Text.from_ansi(custom)

    styler = _palette(command.colorful)
    sections = []

    def section(label, body):
        text = Text()
        text.append(label, styler("section-label")).append(":\n")
        if isinstance(body, str):
            body = Text(INDENT).append(_text(body, styler("description")))
        sections.append(text.append(body))

    if name := getattr(command, "display_name", None) or (command.name if command.parent is None else None):
        section("Name", Text(INDENT).append(_text(name, styler("program-name"))))
    if author := getattr(command, "author", None):
        section("Author", author)
    if command.descr:
        section("Description", command.descr)
    if command.usage:
        section("Usage", command.usage)

    rows = [(_flag_label(flag, styler), flag.descr) for flag in command.flags.values()]
    rows.append((_text(HELP_LABEL, styler("flag-name")), HELP_DESCR))
    section("Flags", _table(rows, styler, "flag-name"))

    if command.commands:
        rows = [(", ".join((child.name, *child.aliases)), child.descr) for child in command.commands]
        section("Commands", _table(rows, styler, "command-name"))

    if version := getattr(command, "version", None):
        section("Version", version)

    return Text("\n\n").join(sections)


def show(help, /, *, stderr=False):
    """
    Print a rendered help verbatim (no highlighting, no re-wrapping).
    """
    Console(stderr=stderr, highlight=False).print(help, soft_wrap=True)


__all__ = (
    "render",
    "show",
)
