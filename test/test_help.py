"""
Help rendering tests (sections, alignment, colored fragments).

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from contextlib import redirect_stdout
from unittest import TestCase

from seahorse import Command, Flag, FlagType, color
from seahorse.help import render, show


class TestHelp(TestCase):

    def testSubcommandHasNoNameSection(self):
        app = Command("app")
        hello = app.command(Command("hello", "say hello", "app hello [name]"))
        self.assertEqual(render(hello).plain, "\n".join((
            "Description:",
            "    say hello",
            "",
            "Usage:",
            "    app hello [name]",
            "",
            "Flags:",
            "    -h, --help : Show help",
        )))

    def testPlaceholders(self):
        command = Command("app", flags=[
            Flag("s", FlagType.STRING),
            Flag("i", FlagType.INT),
            Flag("u", FlagType.UINT),
            Flag("f", FlagType.FLOAT),
        ])
        plain = render(command).plain
        for label in ("--s <string>", "--i <int>", "--u <uint>", "--f <float>"):
            self.assertIn(label, plain)

    def testColoredFragmentsAreAlignedOnVisibleText(self):
        command = Command("app", flags=[
            Flag("danger", FlagType.BOOL, color.red("careful")),
        ])
        plain = render(command).plain
        self.assertIn("    --danger   : careful", plain)
        self.assertNotIn("\x1b", plain)

    def testColorfulKeepsPlainText(self):
        flags = [Flag("age", FlagType.INT, "age").alias("a")]
        plain = render(Command("app", "demo", flags=flags)).plain
        colorful = render(Command("app", "demo", flags=flags, colorful=True))
        self.assertEqual(colorful.plain, plain)
        self.assertTrue(colorful.spans)

    def testShowPrintsVerbatim(self):
        with redirect_stdout(io.StringIO()) as stdout:
            show(render(Command("app")))
        self.assertEqual(stdout.getvalue(), "Name:\n    app\n\nFlags:\n    -h, --help : Show help\n")


if __name__ == "__main__":
    unittest.main()
