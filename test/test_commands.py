"""
Command behavioral tests (construction rules, resolution, dispatch, faults).

Scope
- Fail-fast construction: duplicate names and aliases, flag collisions,
  reserved help tokens, handler overrides.
- Command chain resolution across nested subcommands and aliases.
- Dispatch: handler invocation, help fallback, help override.
- Result actions: ActionError under run() (exit 1) and run_with_result() (raise).

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Command, Flag, FlagType, ActionError).
"""
import io
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import TestCase
from unittest.mock import patch

from seahorse import ActionError, Command, Flag, FlagType


class TestCommandConstruction(TestCase):

    def testDuplicateChildNames(self):
        with self.assertRaises(ValueError):
            Command("app", commands=[Command("hello"), Command("hello")])

    def testDuplicateChildAlias(self):
        app = Command("app", commands=[Command("hello", aliases=["h"])])
        with self.assertRaises(ValueError):
            app.command(Command("h"))
        with self.assertRaises(ValueError):
            app.command(Command("other", aliases=["hello"]))
        self.assertEqual(set(app.children), {"hello", "h"})

    def testAliasAddedAfterAttach(self):
        app = Command("app")
        hello = app.command(Command("hello"))
        world = app.command(Command("world"))
        hello.alias("hi")
        self.assertIs(app.children["hi"], hello)
        with self.assertRaises(ValueError):
            world.alias("hi")

    def testSelfDuplicateAlias(self):
        with self.assertRaises(ValueError):
            Command("hello", aliases=["hello"])
        with self.assertRaises(ValueError):
            Command("hello", aliases=["h", "h"])

    def testAttachTwice(self):
        hello = Command("hello")
        Command("one", commands=[hello])
        with self.assertRaises(ValueError):
            Command("two", commands=[hello])

    def testInvalidNames(self):
        for name in ("", "-hello", "he llo"):
            with self.assertRaises(ValueError, msg=name):
                Command(name)
        with self.assertRaises(TypeError):
            Command(None)

    def testDuplicateFlagName(self):
        with self.assertRaises(ValueError):
            Command("app", flags=[Flag("bye"), Flag("bye", FlagType.STRING)])

    def testDuplicateFlagToken(self):
        with self.assertRaises(ValueError):
            Command("app", flags=[Flag("bye").alias("b"), Flag("bold").alias("b")])

    def testReservedHelpTokens(self):
        with self.assertRaises(ValueError):
            Command("app", flags=[Flag("help")])
        with self.assertRaises(ValueError):
            Command("app", flags=[Flag("hint").alias("h")])

    def testSecondHandler(self):
        app = Command("app", action=lambda context: None)
        with self.assertRaises(TypeError):
            app.action(lambda context: None)
        with self.assertRaises(TypeError):
            app.action_with_result(lambda context: None)

    def testBothHandlers(self):
        with self.assertRaises(TypeError):
            Command("app", action=print, action_with_result=print)

    def testNonCallableHandler(self):
        with self.assertRaises(TypeError):
            Command("app", action="print")

    def testInvalidDescr(self):
        with self.assertRaises(ValueError):
            Command("app", "  ")
        with self.assertRaises(TypeError):
            Command("app", 42)

    def testCommandDecorator(self):
        app = Command("app")

        @app.command(flags=[Flag("loud").alias("l")])
        def hello(context):
            """say hello"""

        self.assertIs(app.children["hello"], hello)
        self.assertEqual(hello.name, "hello")
        self.assertEqual(hello.descr, "say hello")
        self.assertIn("loud", hello.flags)
        self.assertIs(hello.parent, app)

    def testCommandFromCallable(self):
        app = Command("app")

        def greet(context):
            pass

        child = app.command(greet, "greets", name="hi", aliases=["g"])
        self.assertEqual((child.name, child.descr, child.aliases), ("hi", "greets", ("g",)))
        self.assertIs(app.children["g"], child)

    def testCommandOverridesRejected(self):
        with self.assertRaises(TypeError):
            Command("app").command(Command("hello"), "descr")
        with self.assertRaises(TypeError):
            Command("app").command(42)

    def testInheritedOptions(self):
        app = Command("app", colorful=True, fancy=True)
        child = app.command(Command("child"))
        plain = app.command(Command("plain", colorful=False))
        self.assertTrue(child.colorful)
        self.assertTrue(child.fancy)
        self.assertFalse(plain.colorful)
        self.assertFalse(Command("alone").colorful)

    def testPathAndRoot(self):
        app = Command("app")
        leaf = app.command(Command("remote")).command(Command("add"))
        self.assertIs(leaf.root, app)
        self.assertEqual([step.name for step in leaf.path], ["app", "remote", "add"])

    def testReadOnlyViews(self):
        app = Command("app", flags=[Flag("x")])
        with self.assertRaises(TypeError):
            app.flags["y"] = Flag("y")  # type: ignore[index]
        with self.assertRaises(AttributeError):
            app.name = "other"  # type: ignore[misc]

    def testRepr(self):
        app = Command("app", commands=[Command("hello")])
        self.assertTrue(repr(app).startswith("command(name='app'"))
        self.assertIn("hello", repr(app))


class TestCommandResolution(TestCase):

    def setUp(self):
        self.app = Command("app")
        remote = self.app.command(Command("remote", aliases=["r"]))
        remote.command(Command("add"))

    def testNestedChain(self):
        chain, remaining = self.app.resolve(["remote", "add", "origin"])
        self.assertEqual([command.name for command in chain], ["app", "remote", "add"])
        self.assertEqual(remaining, ["origin"])

    def testAliasChain(self):
        chain, remaining = self.app.resolve(["r", "add"])
        self.assertEqual([command.name for command in chain], ["app", "remote", "add"])
        self.assertEqual(remaining, [])

    def testStopsAtDeepestMatch(self):
        chain, remaining = self.app.resolve(["remote", "zzz", "add"])
        self.assertEqual([command.name for command in chain], ["app", "remote"])
        self.assertEqual(remaining, ["zzz", "add"])

    def testCaseSensitive(self):
        chain, remaining = self.app.resolve(["Remote"])
        self.assertEqual(len(chain), 1)
        self.assertEqual(remaining, ["Remote"])


class TestCommandDispatch(TestCase):

    def setUp(self):
        self.calls = []
        self.app = Command("app")
        self.app.command(Command(
            "hello",
            "say hello",
            aliases=["h"],
            flags=[Flag("bool").alias("b"), Flag("string", FlagType.STRING)],
            action=self.calls.append,
        ))

    def testRoundTrip(self):
        self.app.run(["prog", "hello", "world", "--bool", "--string", "hi"])
        context, = self.calls
        self.assertEqual(context.args, ["world"])
        self.assertTrue(context.bool_flag("bool"))
        self.assertEqual(context.string_flag("string"), "hi")

    def testInlineValue(self):
        self.app.run(["prog", "h", "--string=a=b"])
        self.assertEqual(self.calls[0].string_flag("string"), "a=b")

    def testShellString(self):
        self.app.run("hello 'big world' -b")
        self.assertEqual(self.calls[0].args, ["big world"])
        self.assertTrue(self.calls[0].bool_flag("bool"))

    def testReadsSysArgv(self):
        with patch.object(sys, "argv", ["prog", "hello", "x"]):
            self.app.run()
        self.assertEqual(self.calls[0].args, ["x"])

    def testFirstTokenIsProgramName(self):
        self.app.run(["hello", "hello", "x"])
        self.assertEqual(self.calls[0].args, ["x"])
        with redirect_stdout(io.StringIO()) as stdout:
            self.app.run(["hello"])
        self.assertEqual(len(self.calls), 1)
        self.assertIn("Commands:", stdout.getvalue())

    def testInvalidArgs(self):
        with self.assertRaises(TypeError):
            self.app.run(42)
        with self.assertRaises(TypeError):
            self.app.run(["prog", "hello", 1])

    def testNoHandlerPrintsHelp(self):
        with redirect_stdout(io.StringIO()) as stdout:
            self.app.run(["prog", "unknown"])
        self.assertEqual(self.calls, [])
        self.assertIn("Commands:", stdout.getvalue())
        self.assertIn("hello, h : say hello", stdout.getvalue())

    def testHelpOverride(self):
        with redirect_stdout(io.StringIO()) as stdout:
            self.app.run(["prog", "hello", "world", "--help"])
        self.assertEqual(self.calls, [])
        self.assertIn("say hello", stdout.getvalue())
        self.assertIn("--string <string>", stdout.getvalue())
        self.assertNotIn("Commands:", stdout.getvalue())

    def testContextCarriesHelp(self):
        self.app.run(["prog", "hello"])
        self.assertIn("Flags:", self.calls[0].help_text)
        self.assertIn("-b, --bool", self.calls[0].help_text)

    def testPlainActionResultIgnored(self):
        app = Command("app", action=lambda context: ActionError("ignored"))
        app.run(["prog"])


class TestResultActions(TestCase):

    def setUp(self):
        self.app = Command("app")

        @self.app.action_with_result
        def greet(context):
            if not context.args:
                return ActionError("nobody to greet")
            if context.args == ["raise"]:
                raise ActionError("raised failure")
            if context.args == ["bogus"]:
                return 42
            return None

    def testSuccess(self):
        self.app.run(["prog", "bob"])
        self.app.run_with_result(["prog", "bob"])

    def testRunExitsWithStatusOne(self):
        with redirect_stderr(io.StringIO()) as stderr, self.assertRaises(SystemExit) as caught:
            self.app.run(["prog"])
        self.assertEqual(caught.exception.code, 1)
        self.assertIn("nobody to greet", stderr.getvalue())

    def testRaisedErrorIsTreatedAlike(self):
        with redirect_stderr(io.StringIO()) as stderr, self.assertRaises(SystemExit):
            self.app.run(["prog", "raise"])
        self.assertIn("raised failure", stderr.getvalue())

    def testRunWithResultRaises(self):
        with self.assertRaises(ActionError) as caught:
            self.app.run_with_result(["prog"])
        self.assertEqual(caught.exception.message, "nobody to greet")
        self.assertEqual(caught.exception.options["prog"], "app")
        with self.assertRaises(ActionError):
            self.app.run_with_result(["prog", "raise"])

    def testInvalidResult(self):
        with self.assertRaises(TypeError):
            self.app.run_with_result(["prog", "bogus"])


if __name__ == "__main__":
    unittest.main()
