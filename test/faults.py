"""
Faults module behavioral tests (errors, warnings, trigger and rendering).

Scope
- Validate stable one-line messages and option merging through trigger().
- Validate that errors raise and warnings go through the warnings machinery.
- Validate rich rendering (header with program name, code and title; hint line).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from clasp import (
    ArgumentsException,
    InvalidArgumentError,
    MissingArgumentError,
    RepeatedOptionWarning,
    FaultCode,
    trigger,
    getdoc,
)


def render(fault):
    console = Console(file=io.StringIO(), width=200, highlight=False)
    console.print(fault)
    return console.file.getvalue()


class TestFaults(TestCase):
    """Behavioral tests for fault objects and trigger()."""

    def testMessage(self):
        fault = InvalidArgumentError("Invalid argument: -z", token="-z")
        self.assertEqual(str(fault), "Invalid argument: -z")
        self.assertEqual(fault.options["token"], "-z")

    def testOptionsAreReadOnly(self):
        fault = MissingArgumentError("Missing argument: source")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "x"

    def testTriggerRaisesWithMergedOptions(self):
        with self.assertRaises(InvalidArgumentError) as context:
            trigger(InvalidArgumentError("Invalid argument: x", token="x"), prog="tool")
        self.assertEqual(context.exception.options["prog"], "tool")
        self.assertEqual(context.exception.options["token"], "x")
        self.assertEqual(str(context.exception), "Invalid argument: x")

    def testTriggerKeepsHierarchy(self):
        with self.assertRaises(ArgumentsException):
            trigger(MissingArgumentError("Missing argument: x"))

    def testTriggerWarns(self):
        with self.assertWarns(RepeatedOptionWarning) as context:
            trigger(RepeatedOptionWarning("repeated"), prog="tool")
        self.assertEqual(context.warning.options["prog"], "tool")

    def testTriggerRequiresTriggerable(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testRenderError(self):
        output = render(InvalidArgumentError(
            "Invalid argument: -z",
            title="invalid argument",
            code=FaultCode.INVALID_ARGUMENT,
            prog="tool",
            hint="run 'tool --help'",
        ))
        self.assertIn("[ tool — 21101 | Invalid Argument ]", output)
        self.assertIn("Invalid argument: -z", output)
        self.assertIn("→ run 'tool --help'", output)

    def testRenderWarningWithoutHint(self):
        output = render(RepeatedOptionWarning("repeated", code=FaultCode.REPEATED_OPTION, prog="tool"))
        self.assertIn("22101", output)
        self.assertNotIn("→", output)

    def testRenderDefaultsProgramName(self):
        output = render(MissingArgumentError("Missing argument: x"))
        self.assertIn("[ clasp", output)


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode and getdoc()."""

    def testNormalizeDefaultsToValue(self):
        self.assertEqual(FaultCode.MISSING_ARGUMENT.normalize(), "21102")

    def testGetdocWithoutHostDocs(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_ARGUMENT))

    def testGetdocValidatesCode(self):
        with self.assertRaises(TypeError):
            getdoc(21101)


if __name__ == "__main__":
    unittest.main()
