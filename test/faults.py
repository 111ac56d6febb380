"""
Faults module behavioral tests (messages, codes, rendering and trigger policy).

Scope
- Validate one-line messages and hints of every fault.
- Validate fault codes and host remapping through __main__.__codes__.
- Validate trigger(): raise outside shell mode, exit statuses inside shell mode.

Conventions
- Test method names follow CamelCase per project convention.
- Console output is captured with rich.console.Console(file=io.StringIO()).
"""

from __future__ import annotations

import io
import pickle
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argtree import (
    ArgKind,
    CommandNode,
    FaultCode,
    HelpRequested,
    MissingArgValueError,
    MissingValueError,
    ParseError,
    UnexpectedArgValueError,
    UnknownArgError,
    UnknownCommandError,
    invoke,
    trigger,
)


def schema():
    return (
        CommandNode("wsm", "workspace multiplexer")
        .add_subcommand(
            CommandNode("add", "add a workspace")
            .add_arg("n", "name", ArgKind.VALUE, "custom name")
        )
    )


def capture():
    return Console(file=io.StringIO(), width=100)


class TestMessages(TestCase):
    """Behavioral tests for fault messages."""

    def testUnknownCommand(self):
        self.assertEqual(str(UnknownCommandError(["wsm"], "ad")), "Unknown command 'ad' at 'wsm'")

    def testUnknownArg(self):
        self.assertEqual(str(UnknownArgError(["wsm", "add"], "x")), "Unknown argument 'x' at 'wsm add'")

    def testMissingArgValue(self):
        self.assertEqual(
            str(MissingArgValueError(["wsm", "add"], "name")),
            "Missing value for argument 'name' at 'wsm add'",
        )

    def testUnexpectedArgValue(self):
        self.assertEqual(
            str(UnexpectedArgValueError(["wsm"], "print")),
            "Unexpected value for flag argument 'print' at 'wsm'",
        )

    def testMissingValue(self):
        self.assertEqual(
            str(MissingValueError(["wsm", "add"], "path")),
            "Missing value for command 'path' at 'wsm add'",
        )

    def testHelpRequested(self):
        self.assertEqual(str(HelpRequested(["wsm", "add"])), "Help requested at 'wsm add'")

    def testAllAreParseErrors(self):
        for fault in (
                UnknownCommandError(["wsm"], "x"),
                UnknownArgError(["wsm"], "x"),
                MissingArgValueError(["wsm"], "x"),
                UnexpectedArgValueError(["wsm"], "x"),
                MissingValueError(["wsm"], "x"),
                HelpRequested(["wsm"]),
        ):
            with self.subTest(fault=fault):
                self.assertIsInstance(fault, ParseError)
                self.assertEqual(fault.path, ("wsm",))

    def testSuggestionHint(self):
        fault = UnknownCommandError(["wsm"], "ad", suggestions=["add"])
        self.assertIn("did you mean 'add'?", fault.hint)

    def testHintWithoutSuggestion(self):
        self.assertIn("wsm add --help", UnknownArgError(["wsm", "add"], "x").hint)

    def testEqualityIncludesType(self):
        self.assertEqual(UnknownArgError(["a"], "x"), UnknownArgError(("a",), "x"))
        self.assertNotEqual(UnknownArgError(["a"], "x"), MissingArgValueError(["a"], "x"))

    def testPickleRoundTrip(self):
        for fault in (HelpRequested(["wsm"]), UnknownArgError(["wsm"], "x", suggestions=["y"])):
            with self.subTest(fault=fault):
                restored = pickle.loads(pickle.dumps(fault))
                self.assertEqual(restored, fault)
                self.assertEqual(restored.suggestions, fault.suggestions)


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testCodesPerFault(self):
        self.assertIs(UnknownArgError.code, FaultCode.UNKNOWN_ARG)
        self.assertIs(HelpRequested.code, FaultCode.HELP_REQUESTED)

    def testNormalizeDefaultsToNumber(self):
        with mock.patch.object(sys.modules["__main__"], "__codes__", {}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_ARG.normalize(), "11112")

    def testNormalizeHonorsHostMapping(self):
        codes = {FaultCode.UNKNOWN_ARG: "E-ARG"}
        with mock.patch.object(sys.modules["__main__"], "__codes__", codes, create=True):
            self.assertEqual(FaultCode.UNKNOWN_ARG.normalize(), "E-ARG")


class TestRender(TestCase):
    """Behavioral tests for the rich rendering of faults."""

    def testPlainRender(self):
        console = capture()
        console.print(UnknownArgError(["wsm", "add"], "x").render())
        output = console.file.getvalue()
        self.assertIn("Unknown Argument", output)
        self.assertIn("Unknown argument 'x' at 'wsm add'", output)
        self.assertIn(" → ", output)

    def testFancyRenderIsPanel(self):
        console = capture()
        console.print(UnknownArgError(["wsm"], "x").render(fancy=True))
        self.assertIn("Unknown argument 'x' at 'wsm'", console.file.getvalue())


class TestTrigger(TestCase):
    """Behavioral tests for trigger() and invoke() in shell mode."""

    def testNonShellReraises(self):
        with self.assertRaises(UnknownArgError):
            trigger(UnknownArgError(["wsm"], "x"), schema())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"), schema(), shell=True)

    def testHelpExitsWithZero(self):
        console = capture()
        with self.assertRaises(SystemExit) as context:
            trigger(HelpRequested(["wsm", "add"]), schema(), shell=True, output=console)
        self.assertEqual(context.exception.code, 0)
        self.assertIn("Command: add", console.file.getvalue())

    def testFaultExitsWithOne(self):
        console = capture()
        with self.assertRaises(SystemExit) as context:
            trigger(MissingArgValueError(["wsm", "add"], "name"), schema(), shell=True, output=console)
        self.assertEqual(context.exception.code, 1)
        output = console.file.getvalue()
        self.assertIn("Missing value for argument 'name' at 'wsm add'", output)
        self.assertIn("-n, --name: custom name (value)", output)

    def testInvokeShellHelp(self):
        console = capture()
        with self.assertRaises(SystemExit) as context:
            invoke(schema(), "wsm --help", output=console)
        self.assertEqual(context.exception.code, 0)
        self.assertIn("Command: wsm", console.file.getvalue())

    def testInvokeShellFault(self):
        console = capture()
        with self.assertRaises(SystemExit) as context:
            invoke(schema(), "wsm add --bogus", output=console)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("Unknown argument 'bogus' at 'wsm add'", console.file.getvalue())

    def testInvokeReadsSysArgv(self):
        with mock.patch.object(sys, "argv", ["/usr/bin/wsm", "add", "-n", "x", "./dir"]):
            command = invoke(schema(), shell=False)
        self.assertEqual(command.path, ("wsm", "add"))
        self.assertEqual(command.get_value("name"), "x")
        self.assertEqual(command.positional, ("./dir",))


if __name__ == "__main__":
    unittest.main()
