# python
"""
Options module behavioral tests (registry rules and parse engine).

Scope
- Validate registration: name rules, collisions, shared short/long definitions.
- Validate parsing: flags, single and multiple options, long pairs, separators.
- Validate faults: unrecognized, duplicated, missing and unexpected arguments.
- Validate the stop-at-first-non-option policy and the shell runner.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Options, Opt, Kind and the fault classes).
"""

from __future__ import annotations

import io
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

import uniopts.faults
from uniopts import (
    Options,
    Opt,
    Kind,
    InvalidOptionError,
    DuplicateOptionError,
    MissingValueError,
    UnexpectedValueError,
    EmptyValueWarning,
    ParseFault,
)


def _options(**settings):
    return (
        Options(**settings)
        .flag("h", "help", "print this help menu")
        .single("c", "config", "PATH", "configuration file")
        .multiple("i", "include", "DIR", "search path")
    )


class TestRegistry(TestCase):
    """Behavioral tests for option registration."""

    def testRegisterReturnsOpt(self):
        options = Options()
        opt = options.register(Opt(Kind.FLAG, "v", "verbose"))
        self.assertIs(options.lookup("v"), opt)
        self.assertIs(options.lookup("verbose"), opt)

    def testBuildersChain(self):
        options = _options()
        self.assertEqual(len(options), 3)
        self.assertEqual([opt.kind for opt in options], [Kind.FLAG, Kind.SINGLE, Kind.MULTIPLE])

    def testOrderIsInsertionOrder(self):
        options = Options().flag("", "zeta").flag("a", "").flag("m", "middle")
        self.assertEqual([opt.names for opt in options.opts], [("zeta",), ("a",), ("m", "middle")])

    def testLookupMissing(self):
        self.assertIsNone(_options().lookup("nope"))
        with self.assertRaises(KeyError):
            _options()["nope"]

    def testContains(self):
        options = _options()
        self.assertIn("c", options)
        self.assertIn("config", options)
        self.assertNotIn("conf", options)

    def testShortOnlyAndLongOnly(self):
        options = Options().flag("x", "").single("", "output", "FILE")
        self.assertEqual(options["x"].long, "")
        self.assertEqual(options["output"].short, "")

    def testBothNamesEmptyRejected(self):
        with self.assertRaises(ValueError):
            Options().flag("", "")

    def testShortMustBeOneCluster(self):
        with self.assertRaises(ValueError):
            Options().flag("ab", "")

    def testShortMultiCodepointClusterAccepted(self):
        options = Options().flag("e\u0301", "").flag("\U0001F468\u200d\U0001F469", "family")
        self.assertIn("e\u0301", options)
        self.assertIn("family", options)

    def testShortHyphenRejected(self):
        with self.assertRaises(ValueError):
            Options().flag("-", "")

    def testLongSingleCodepointRejected(self):
        with self.assertRaises(ValueError):
            Options().flag("", "h")
        with self.assertRaises(ValueError):
            Options().flag("", "é")

    def testLongWithEqualsRejected(self):
        with self.assertRaises(ValueError):
            Options().single("", "a=b", "X")

    def testTwoCodepointLongAccepted(self):
        self.assertIn("ab", Options().flag("", "ab"))

    def testDuplicateShortRejected(self):
        options = _options()
        with self.assertRaises(ValueError):
            options.flag("h", "hello")

    def testDuplicateLongRejected(self):
        options = _options()
        with self.assertRaises(ValueError):
            options.single("x", "config", "PATH")

    def testFailedRegistrationLeavesRegistryUntouched(self):
        options = _options()
        with self.assertRaises(ValueError):
            options.flag("q", "help")
        self.assertNotIn("q", options)
        self.assertEqual(len(options), 3)

    def testNonStringNamesRejected(self):
        with self.assertRaises(TypeError):
            Options().flag(1, "one")
        with self.assertRaises(TypeError):
            Opt("flag", "a", "bb")

    def testOptIsImmutable(self):
        opt = Opt(Kind.SINGLE, "c", "config", "PATH", "configuration file")
        with self.assertRaises(AttributeError):
            opt.kind = Kind.FLAG
        with self.assertRaises(AttributeError):
            opt.short = "d"


class TestParse(TestCase):
    """Behavioral tests for the parse engine."""

    def testEmptyVector(self):
        matches = _options().parse([])
        self.assertEqual(matches.remaining, ())
        self.assertFalse(matches.contains("h"))

    def testFlagVisibleUnderBothNames(self):
        matches = _options().parse(["-h"])
        self.assertTrue(matches.contains("h"))
        self.assertTrue(matches.contains("help"))
        self.assertIsNone(matches.value("help"))
        self.assertEqual(matches.values("h"), [])

    def testSingleSpacedValue(self):
        matches = _options().parse(["--config", "app.toml"])
        self.assertEqual(matches.value("c"), "app.toml")
        self.assertEqual(matches.value("config"), "app.toml")

    def testSingleAttachedValue(self):
        matches = _options().parse(["-capp.toml"])
        self.assertEqual(matches.value("config"), "app.toml")

    def testShortEqualsIsKeptInValue(self):
        matches = _options().parse(["-c=app.toml"])
        self.assertEqual(matches.value("c"), "=app.toml")

    def testSingleLongPair(self):
        matches = _options().parse(["--config=a=b"])
        self.assertEqual(matches.value("c"), "a=b")

    def testValueMayLookLikeNothingSpecial(self):
        matches = _options().parse(["-c", "-"])
        self.assertEqual(matches.value("c"), "-")

    def testMultipleCollectsInOrder(self):
        matches = _options().parse(["-i", "a", "-i", "b"])
        self.assertEqual(matches.values("i"), ["a", "b"])
        self.assertEqual(matches.values("include"), matches.values("i"))
        self.assertEqual(matches.value("include"), "a")
        self.assertEqual(matches.count("i"), 2)

    def testMultipleMixesForms(self):
        matches = _options().parse(["-ia", "--include", "b", "--include=c", "-i", "d"])
        self.assertEqual(matches.values("include"), ["a", "b", "c", "d"])

    def testPositionalsInterleaved(self):
        matches = _options().parse(["one", "-h", "two", "-c", "x", "three"])
        self.assertEqual(matches.remaining, ("one", "two", "three"))
        self.assertTrue(matches.contains("help"))
        self.assertEqual(matches.value("config"), "x")

    def testSeparatorPassesEverythingThrough(self):
        matches = _options().parse(["-h", "--", "-c", "--include=x", "--", "-"])
        self.assertEqual(matches.remaining, ("-c", "--include=x", "--", "-"))
        self.assertFalse(matches.contains("config"))

    def testSeparatorIsNotAValue(self):
        with self.assertRaises(MissingValueError) as caught:
            _options().parse(["-c", "--", "x"])
        self.assertEqual(caught.exception.name, "c")

    def testUnicodeOptions(self):
        options = Options().flag("é", "été").multiple("😮", "wow", "X")
        matches = options.parse(["-é", "-😮a", "--wow=b", "--wow", "c"])
        self.assertTrue(matches.contains("été"))
        self.assertEqual(matches.values("😮"), ["a", "b", "c"])

    def testDefaultsToSysArgv(self):
        with mock.patch("sys.argv", ["prog", "-h", "file"]):
            matches = _options().parse()
        self.assertTrue(matches.contains("h"))
        self.assertEqual(matches.remaining, ("file",))

    def testRegistryReusableAcrossParses(self):
        options = _options()
        first = options.parse(["-h"])
        second = options.parse(["-c", "x"])
        self.assertTrue(first.contains("h"))
        self.assertFalse(second.contains("h"))
        self.assertEqual(second.value("c"), "x")


class TestParseFaults(TestCase):
    """Faults raised by the parse engine."""

    def assertFault(self, arguments, kind, name, **settings):
        with self.assertRaises(kind) as caught:
            _options(**settings).parse(arguments)
        self.assertEqual(caught.exception.name, name)
        self.assertIsInstance(caught.exception, ParseFault)
        return caught.exception

    def testMissingValueAtEnd(self):
        fault = self.assertFault(["-h", "-c"], MissingValueError, "c")
        self.assertEqual(str(fault), "the option 'c' requires an argument")

    def testMissingValueBeforeOption(self):
        self.assertFault(["--include", "-h"], MissingValueError, "include")

    def testDuplicateFlag(self):
        fault = self.assertFault(["-h", "-h"], DuplicateOptionError, "h")
        self.assertEqual(str(fault), "the option 'h' is already specified")

    def testDuplicateFlagAcrossNames(self):
        self.assertFault(["-h", "--help"], DuplicateOptionError, "help")

    def testDuplicateSingle(self):
        self.assertFault(["-c", "a", "-c", "b"], DuplicateOptionError, "c")

    def testDuplicateSingleLongPair(self):
        self.assertFault(["-c", "a", "--config=b"], DuplicateOptionError, "config")

    def testUnrecognizedShort(self):
        fault = self.assertFault(["-x"], InvalidOptionError, "x")
        self.assertEqual(str(fault), "the option 'x' is unrecognized")

    def testUnrecognizedLong(self):
        self.assertFault(["file", "--bar"], InvalidOptionError, "bar")

    def testUnrecognizedLongPair(self):
        self.assertFault(["--bar=1"], InvalidOptionError, "bar")

    def testNoPrefixMatching(self):
        self.assertFault(["--conf", "x"], InvalidOptionError, "conf")

    def testNoMergedFlags(self):
        # -hx is -h with an attached value 'x', which a flag never consumes
        matches = _options().parse(["-hx"])
        self.assertEqual(matches.remaining, ("x",))

    def testFlagRejectsInlineValue(self):
        fault = self.assertFault(["--help=yes"], UnexpectedValueError, "help")
        self.assertEqual(str(fault), "the option 'help' doesn't accept any arguments")

    def testFlagRejectsEmptyInlineValue(self):
        self.assertFault(["--help="], UnexpectedValueError, "help")

    def testEmptyInlineValueIsRecordedWithWarning(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            matches = _options().parse(["--config="])
        self.assertEqual(matches.value("config"), "")
        self.assertTrue(any(issubclass(w.category, EmptyValueWarning) for w in caught))


class TestStopAtFirstNonOption(TestCase):
    """Behavioral tests for the stop-at-first-non-option policy."""

    def testRemainingKeepsOriginalForms(self):
        options = Options(stop_at_first_non_option=True).flag("h", "help")
        matches = options.parse(["foo", "--bar"])
        self.assertEqual(matches.remaining, ("foo", "--bar"))

    def testWithoutPolicyTheSameVectorFails(self):
        with self.assertRaises(InvalidOptionError) as caught:
            Options().flag("h", "help").parse(["foo", "--bar"])
        self.assertEqual(caught.exception.name, "bar")

    def testOptionsBeforeFirstValueStillParsed(self):
        options = _options(stop_at_first_non_option=True)
        matches = options.parse(["-h", "-c", "x", "run", "-h", "-ix", "--config=y", "--", "-"])
        self.assertTrue(matches.contains("h"))
        self.assertEqual(matches.value("c"), "x")
        self.assertEqual(matches.remaining, ("run", "-h", "-i", "x", "--config=y", "--", "-"))

    def testPolicyIsAMutableSetting(self):
        options = _options()
        options.stop_at_first_non_option = True
        self.assertEqual(options.parse(["a", "-z"]).remaining, ("a", "-z"))


class TestRun(TestCase):
    """Shell runner: faults are printed and the process exits."""

    def setUp(self):
        self.output = io.StringIO()
        patcher = mock.patch.object(uniopts.faults, "console", Console(file=self.output, width=100, color_system=None))
        patcher.start()
        self.addCleanup(patcher.stop)

    def testSuccessReturnsMatches(self):
        matches = _options().run(["-h"])
        self.assertTrue(matches.contains("help"))
        self.assertEqual(self.output.getvalue(), "")

    def testFaultExitsWithStatusTwo(self):
        with self.assertRaises(SystemExit) as caught:
            _options(prog="tool").run(["--nope"])
        self.assertEqual(caught.exception.code, 2)
        output = self.output.getvalue()
        self.assertIn("the option 'nope' is unrecognized", output)
        self.assertIn("tool", output)

    def testWarningIsPrintedNotRaised(self):
        matches = _options().run(["--include="])
        self.assertEqual(matches.values("include"), [""])
        self.assertIn("empty inline value", self.output.getvalue())


if __name__ == "__main__":
    unittest.main()
