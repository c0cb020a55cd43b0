"""
Entry point tests (invoke).

Scope
- Validate prompt normalization (string, iterable, argv).
- Validate fault surfacing in library mode (raise/warn) and shell mode (render/exit).
- Validate the version banner.

Conventions
- Test method names follow CamelCase per project convention.
- Faults render through a patched stderr console; the banner through a redirected stdout.
"""

from __future__ import annotations

import contextlib
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from flargs import (
    Command,
    Flag,
    invoke,
    UnknownFlagError,
    DanglingFlagWarning,
)


def _schema():
    return Command(
        "tool",
        flags=[Flag("verbose", type=bool), Flag("jobs", "j", type=int)],
        commands=[Command("build", flags=[Flag("target")])],
        version="1.2.3",
    )


class TestPrompt(TestCase):
    """Prompt normalization."""

    def testStringPromptIsShellSplit(self):
        result = invoke(_schema(), "build --target 'a b'")
        self.assertEqual(result["_"]["target"], "a b")

    def testIterablePromptIsTrimmed(self):
        result = invoke(_schema(), ["  --jobs ", "", " 3"])
        self.assertEqual(result["_"]["jobs"], 3)

    def testDefaultsToArgv(self):
        with mock.patch.object(sys, "argv", ["prog", "-j", "2"]):
            self.assertEqual(invoke(_schema())["_"]["jobs"], 2)

    def testNonStringItemRejected(self):
        with self.assertRaises(TypeError):
            invoke(_schema(), ["--jobs", 3])

    def testInvalidPromptRejected(self):
        with self.assertRaises(TypeError):
            invoke(_schema(), 42)


class TestLibraryMode(TestCase):
    """Faults raise, warnings warn."""

    def testFaultRaisedWithRuntimeOptions(self):
        schema = _schema()
        with self.assertRaises(UnknownFlagError) as context:
            invoke(schema, "--nope")
        self.assertIs(context.exception.options["schema"], schema)
        self.assertFalse(context.exception.options["shell"])
        self.assertEqual(context.exception.options["token"], "--nope")

    def testWarningEmitted(self):
        with self.assertWarns(DanglingFlagWarning):
            result = invoke(_schema(), "--jobs")
        self.assertNotIn("jobs", result["_"])


class TestShellMode(TestCase):
    """Faults render to stderr and exit."""

    def testFaultExits(self):
        stderr = io.StringIO()
        with mock.patch("flargs.faults.console", Console(file=stderr, width=200)), self.assertRaises(SystemExit) as context:
            invoke(_schema(), "--nope", shell=True)
        self.assertEqual(context.exception.code, 1)
        output = stderr.getvalue()
        self.assertIn("Unknown Flag", output)
        self.assertIn("11112", output)
        self.assertIn("--nope", output)

    def testFancyFaultExits(self):
        stderr = io.StringIO()
        with mock.patch("flargs.faults.console", Console(file=stderr, width=200)), self.assertRaises(SystemExit):
            invoke(_schema(), "--nope", shell=True, fancy=True, colorful=True)
        self.assertIn("Unknown Flag", stderr.getvalue())

    def testWarningPrintedWithoutExit(self):
        stderr = io.StringIO()
        with mock.patch("flargs.faults.console", Console(file=stderr, width=200)):
            result = invoke(_schema(), "--jobs", shell=True)
        self.assertNotIn("jobs", result["_"])
        self.assertIn("Flag Without Value", stderr.getvalue())


class TestVersion(TestCase):
    """Version banner."""

    def testBannerPrinted(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            result = invoke(_schema(), "--version")
        self.assertIs(result["_"]["version"], True)
        self.assertIn("1.2.3", stdout.getvalue())

    def testShorthandPrintsBanner(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            invoke(_schema(), ["-v"], fancy=True)
        self.assertIn("1.2.3", stdout.getvalue())

    def testNoBannerWithoutFlag(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            invoke(_schema(), "build")
        self.assertEqual(stdout.getvalue(), "")

    def testExplicitFalseSuppressesBanner(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            invoke(_schema(), "--version false")
        self.assertEqual(stdout.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
