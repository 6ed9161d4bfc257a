"""
Seahorse ANSI color helpers.

Stateless functions wrapping any printable value in the 16-color ANSI escapes
(foreground 30-37, background 40-47) followed by a reset:

    >>> red("Hello")
    '\\x1b[31mHello\\x1b[0m'
    >>> bg_blue(42)
    '\\x1b[44m42\\x1b[0m'

The escapes come from rich styles rendered for the standard color system, so
the output does not depend on the terminal. Empty text stays empty. The
results can be used as command or flag descriptions; help decodes them.
"""
from rich.color import ColorSystem
from rich.style import Style

from .utils import rename

_COLORS = (
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
)


def _painter(name, style):
    @rename(name)
    def paint(text, /):
        return style.render(str(text), color_system=ColorSystem.STANDARD)
    paint.__doc__ = f"Return 'text' wrapped in the {name.replace("_", " ")} ANSI escape."
    return paint


black = _painter("black", Style(color="black"))
red = _painter("red", Style(color="red"))
green = _painter("green", Style(color="green"))
yellow = _painter("yellow", Style(color="yellow"))
blue = _painter("blue", Style(color="blue"))
magenta = _painter("magenta", Style(color="magenta"))
cyan = _painter("cyan", Style(color="cyan"))
white = _painter("white", Style(color="white"))

bg_black = _painter("bg_black", Style(bgcolor="black"))
bg_red = _painter("bg_red", Style(bgcolor="red"))
bg_green = _painter("bg_green", Style(bgcolor="green"))
bg_yellow = _painter("bg_yellow", Style(bgcolor="yellow"))
bg_blue = _painter("bg_blue", Style(bgcolor="blue"))
bg_magenta = _painter("bg_magenta", Style(bgcolor="magenta"))
bg_cyan = _painter("bg_cyan", Style(bgcolor="cyan"))
bg_white = _painter("bg_white", Style(bgcolor="white"))


__all__ = _COLORS + tuple("bg_" + name for name in _COLORS)
