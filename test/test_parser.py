"""
Parser module behavioral tests (tokenization, resolution, outcomes).

Scope
- Validate the resolution rules: bare flags, explicit values, empty values,
  allow-nothing fallbacks, defaults for omitted flags.
- Validate fatal outcomes: unknown flags, incorrect values, missing required
  values, and that nothing is committed when a parse fails.
- Validate the help short-circuits and the prefix handling.

Conventions
- Test method names follow CamelCase per project convention.
- Parsing goes through Registry.parse; no process exit is involved.
"""
import unittest
from unittest import TestCase

from nflag import (
    Registry,
    Config,
    Status,
    ParseOutcome,
    UnknownFlagError,
    IncorrectValueError,
    RequiredValueError,
    UnresolvedValueError,
    FaultCode,
    tokenize,
)


class TestTokenize(TestCase):
    """Splitting raw tokens into name and value."""

    def testWithoutValue(self):
        self.assertEqual(tokenize("--name", "--"), ("name", None))

    def testEmptyValue(self):
        self.assertEqual(tokenize("--name=", "--"), ("name", ""))

    def testSplitsOnFirstEquals(self):
        self.assertEqual(tokenize("--expr=a=b", "--"), ("expr", "a=b"))

    def testPrefixRemovedEverywhere(self):
        self.assertEqual(tokenize("--na--me=1", "--"), ("name", "1"))
        self.assertEqual(tokenize("/out=/tmp", "/"), ("out", "/tmp"))


class TestResolution(TestCase):
    """Resolved outcomes and committed values."""

    def testStringRoundTrip(self):
        registry = Registry()
        registry.register("name", type="string", default="x")
        outcome = registry.parse(["--name=hello"])
        self.assertIs(outcome.status, Status.RESOLVED)
        self.assertEqual(registry.get_as_string("name"), "hello")

        registry = Registry()
        registry.register("name", type="string", default="x")
        registry.parse([])
        self.assertEqual(registry.get_as_string("name"), "x")

    def testBareBoolean(self):
        registry = Registry()
        registry.register("verbose")
        registry.parse(["--verbose"])
        self.assertIs(registry.get_as_bool("verbose"), True)

        registry = Registry()
        registry.register("verbose")
        registry.parse([])
        self.assertIs(registry.get_as_bool("verbose"), False)

    def testExplicitBoolean(self):
        registry = Registry()
        registry.register("verbose", default=True)
        registry.parse(["--verbose=false"])
        self.assertIs(registry.get_as_bool("verbose"), False)

    def testLastOccurrenceWins(self):
        registry = Registry()
        registry.register("level", type="int")
        registry.parse(["--level=1", "--level=2"])
        self.assertEqual(registry.get_as_int("level"), 2)

    def testFloatValue(self):
        registry = Registry()
        registry.register("ratio", type="float64", default=1.0)
        registry.parse(["--ratio=2.5"])
        self.assertEqual(registry.get_as_float("ratio"), 2.5)

    def testValueContainingEquals(self):
        registry = Registry()
        registry.register("expr", type="string")
        registry.parse(["--expr=a=b"])
        self.assertEqual(registry.get_as_string("expr"), "a=b")

    def testBareValueFlagFallsBackToDefault(self):
        registry = Registry()
        registry.register("count", type="int", default=5)
        registry.parse(["--count"])
        self.assertEqual(registry.get_as_int("count"), 5)

    def testExplicitEmptyFallsBackToDefault(self):
        registry = Registry()
        registry.register("name", type="string", default="x")
        registry.parse(["--name="])
        self.assertEqual(registry.get_as_string("name"), "x")

    def testAllowNothingWithoutDefault(self):
        registry = Registry()
        registry.register("name", type="string", allow_nothing=True)
        registry.parse(["--name"])
        self.assertEqual(registry.get_as_string("name"), "")

    def testEmptyBooleanWithDefaultIsTrue(self):
        registry = Registry()
        registry.register("verbose", default=False)
        registry.parse(["--verbose="])
        self.assertIs(registry.get_as_bool("verbose"), True)

    def testRequiredProvided(self):
        registry = Registry()
        registry.register("count", type="int", required=True)
        outcome = registry.parse(["--count=4"])
        self.assertTrue(outcome.resolved)
        self.assertEqual(registry.get_as_int("count"), 4)

    def testCustomPrefix(self):
        registry = Registry(Config(prefix="/"))
        registry.register("out", type="string")
        registry.register("force")
        registry.parse(["/out=/tmp/file", "/force"])
        self.assertEqual(registry.get_as_string("out"), "/tmp/file")
        self.assertIs(registry.get_as_bool("force"), True)

    def testPrefixRemovedInsideName(self):
        registry = Registry()
        registry.register("name", type="string")
        registry.parse(["--na--me=v"])
        self.assertEqual(registry.get_as_string("name"), "v")

    def testOutcomeValuesReadOnly(self):
        registry = Registry()
        registry.register("verbose")
        outcome = registry.parse([])
        self.assertIsInstance(outcome, ParseOutcome)
        self.assertEqual(dict(outcome.values), {"verbose": False})
        with self.assertRaises(TypeError):
            outcome.values["verbose"] = True


class TestFatal(TestCase):
    """Fatal outcomes and the faults they carry."""

    def testRequiredWithoutDefault(self):
        registry = Registry()
        registry.register("count", type="int", required=True)
        outcome = registry.parse([])
        self.assertTrue(outcome.fatal)
        self.assertIsInstance(outcome.fault, RequiredValueError)
        self.assertIs(outcome.fault.code, FaultCode.REQUIRED_VALUE)
        self.assertEqual(outcome.fault.flag, "count")
        self.assertIn("--count", str(outcome.fault))
        self.assertTrue(outcome.help)
        with self.assertRaises(UnresolvedValueError):
            registry.get("count")

    def testRequiredWithDefaultStillRequired(self):
        registry = Registry()
        registry.register("count", type="int", default=3, required=True)
        outcome = registry.parse([])
        self.assertIsInstance(outcome.fault, RequiredValueError)

    def testBareValueFlagWithoutAllowNothing(self):
        registry = Registry()
        registry.register("count", type="int")
        outcome = registry.parse(["--count"])
        self.assertIsInstance(outcome.fault, RequiredValueError)
        self.assertTrue(outcome.help)

    def testEmptyBooleanWithoutAllowNothing(self):
        registry = Registry()
        registry.register("verbose")
        outcome = registry.parse(["--verbose="])
        self.assertIsInstance(outcome.fault, RequiredValueError)

    def testUnknownFlag(self):
        registry = Registry()
        registry.register("verbose")
        outcome = registry.parse(["--bogus=1"])
        self.assertIs(outcome.status, Status.FATAL)
        self.assertIsInstance(outcome.fault, UnknownFlagError)
        self.assertEqual(outcome.fault.flag, "bogus")
        self.assertIn("--bogus", str(outcome.fault))
        self.assertFalse(outcome.help)

    def testIncorrectValue(self):
        registry = Registry()
        registry.register("n", type="int")
        outcome = registry.parse(["--n=notanumber"])
        self.assertIsInstance(outcome.fault, IncorrectValueError)
        self.assertEqual(outcome.fault.options["value"], "notanumber")
        self.assertIn("--n", str(outcome.fault))
        self.assertFalse(outcome.help)

    def testIntegerOverflow(self):
        registry = Registry()
        registry.register("n", type="int")
        outcome = registry.parse(["--n=99999999999999999999"])
        self.assertIsInstance(outcome.fault, IncorrectValueError)

    def testFirstFaultWins(self):
        registry = Registry()
        registry.register("count", type="int", required=True)
        outcome = registry.parse(["--zzz", "--count=x"])
        self.assertIsInstance(outcome.fault, UnknownFlagError)

    def testMissingRequiredReportedInSortedOrder(self):
        registry = Registry()
        registry.register("beta", type="int", required=True)
        registry.register("alpha", type="int", required=True)
        outcome = registry.parse([])
        self.assertEqual(outcome.fault.flag, "alpha")

    def testNothingCommittedOnFault(self):
        registry = Registry()
        registry.register("name", type="string", default="d")
        registry.register("n", type="int")
        outcome = registry.parse(["--name=z", "--n=bad"])
        self.assertTrue(outcome.fatal)
        self.assertEqual(len(outcome.values), 0)
        with self.assertRaises(UnresolvedValueError):
            registry.get("name")

    def testMessageUsesConfiguredPrefix(self):
        registry = Registry(Config(prefix="/"))
        outcome = registry.parse(["/bogus"])
        self.assertEqual(outcome.fault.options["input"], "/bogus")
        self.assertIn("/bogus", str(outcome.fault))


class TestHelp(TestCase):
    """Help short-circuit behavior."""

    def testHelpFirstArgument(self):
        registry = Registry()
        registry.register("verbose")
        outcome = registry.parse(["--help", "--bogus"])
        self.assertIs(outcome.status, Status.HELP_REQUESTED)
        self.assertIsNone(outcome.fault)
        self.assertTrue(outcome.help)
        with self.assertRaises(UnresolvedValueError):
            registry.get("verbose")

    def testHelpWithCustomPrefix(self):
        registry = Registry(Config(prefix="/"))
        outcome = registry.parse(["/help"])
        self.assertIs(outcome.status, Status.HELP_REQUESTED)

    def testHelpNotFirstIsAFlag(self):
        registry = Registry()
        registry.register("verbose")
        outcome = registry.parse(["--verbose", "--help"])
        self.assertIsInstance(outcome.fault, UnknownFlagError)
        self.assertEqual(outcome.fault.flag, "help")

    def testShowHelpOnEmptyArguments(self):
        registry = Registry(Config(show_help=True))
        registry.register("count", type="int", required=True)
        outcome = registry.parse([])
        self.assertIs(outcome.status, Status.HELP_REQUESTED)
        self.assertIsNone(outcome.fault)

    def testEmptyArgumentsWithoutShowHelp(self):
        registry = Registry()
        registry.register("verbose")
        outcome = registry.parse([])
        self.assertTrue(outcome.resolved)
        self.assertFalse(outcome.help)


if __name__ == "__main__":
    unittest.main()
