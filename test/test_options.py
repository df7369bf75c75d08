"""
Options module behavioral tests (registration defaults and value binding).

Scope
- Validate registration-time defaults (negated, optional, required, bare flags).
- Validate coercion normalization: functions, regular expressions, defaults.
- Validate the binding rules for Unset/Boolean slots and Other slots.
- Validate last-write-wins overwrite and duplicate-key sharing.
- Validate that coercion failures reach the publisher.

Conventions
- Test method names follow CamelCase per project convention.
- Options are registered through Command.option() and driven through publish().
"""

from __future__ import annotations

import re
import unittest
from unittest import TestCase

from herald import Command
from herald.options import bind_option
from herald.values import Boolean, Other


class TestRegistration(TestCase):
    """Behavioral tests for defaults installed at registration time."""

    def setUp(self) -> None:
        self.tool = Command("tool")

    def testNegatedDefaultsToTrue(self):
        self.tool.option("--no-color")
        self.assertIs(self.tool.values["color"], True)

    def testNegatedIgnoresExplicitDefault(self):
        self.tool.option("--no-color", "disable colors", "yes")
        self.assertIs(self.tool.values["color"], True)

    def testRequiredWithDefault(self):
        self.tool.option("-c, --count <n>", "how many", int, 1)
        self.assertEqual(self.tool.values["count"], 1)

    def testOptionalWithDefaultAsThirdArgument(self):
        self.tool.option("--level [n]", "level", "low")
        self.assertEqual(self.tool.values["level"], "low")

    def testRequiredWithoutDefaultStaysUnset(self):
        self.tool.option("--name <name>")
        self.assertNotIn("name", self.tool.values)

    def testBareFlagDefaultIsNotPreassigned(self):
        self.tool.option("-v, --verbose", "chatty", "loud")
        self.assertNotIn("verbose", self.tool.values)

    def testNoneDefaultIsPreassigned(self):
        self.tool.option("--name <name>", "name", None)
        self.assertIn("name", self.tool.values)
        self.assertIsNone(self.tool.values["name"])

    def testOptionAppendedInOrder(self):
        self.tool.option("-a, --alpha")
        self.tool.option("--no-beta")
        self.tool.option("--gamma <g>")
        self.assertEqual([option.name for option in self.tool.options], ["alpha", "beta", "gamma"])

    def testOptionReturnsNone(self):
        self.assertIsNone(self.tool.option("--x"))

    def testBindOptionReturnsDescriptor(self):
        option = bind_option(self.tool, "--dry-run", "simulate")
        self.assertEqual(option.key, "dryRun")
        self.assertIs(self.tool.options[-1], option)

    def testHandlerSubscribedUnderCanonicalName(self):
        self.tool.option("--no-color")
        self.assertTrue(self.tool.publish("color"))
        self.assertFalse(self.tool.publish("no-color"))


class TestBinding(TestCase):
    """Behavioral tests for event-driven binding."""

    def setUp(self) -> None:
        self.tool = Command("tool")

    def testNegatedFlagPresenceBindsFalse(self):
        self.tool.option("--no-color")
        self.tool.publish("color", None)
        self.assertIs(self.tool.values["color"], False)

    def testBareFlagPresenceBindsTrue(self):
        self.tool.option("-v, --verbose")
        self.tool.publish("verbose")
        self.assertIs(self.tool.values["verbose"], True)

    def testBareFlagPresenceUsesTruthyDefault(self):
        self.tool.option("--mode", "mode", "fast")
        self.tool.publish("mode")
        self.assertEqual(self.tool.values["mode"], "fast")

    def testBareFlagKeepsFalsyOtherDefault(self):
        self.tool.option("--level [n]", "level", 0)
        self.assertEqual(self.tool.values["level"], 0)
        self.tool.publish("level")
        # 0 is bound as Other, so a bare flag leaves it alone
        self.assertEqual(self.tool.values["level"], 0)

    def testOptionalBareFlagOverBooleanDefault(self):
        self.tool.option("--level [n]", "level", False)
        self.tool.publish("level")
        self.assertIs(self.tool.values["level"], True)

    def testCoercionFunction(self):
        self.tool.option("-c, --count <n>", "how many", int, 1)
        self.tool.publish("count", "5")
        self.assertEqual(self.tool.values["count"], 5)

    def testCoercionReceivesFallback(self):
        seen = []

        def collect(value, fallback):
            seen.append(fallback)
            return fallback + [value]

        self.tool.option("--tag <tag>", "tags", collect, [])
        self.tool.publish("tag", "a")
        self.tool.publish("tag", "b")
        self.assertEqual(self.tool.values["tag"], ["a", "b"])
        self.assertEqual(seen, [[], ["a"]])

    def testCoercionFallbackIsNoneWithoutDefault(self):
        seen = []

        def collect(value, fallback):
            seen.append(fallback)
            return value

        self.tool.option("--name <name>", "name", collect)
        self.tool.publish("name", "x")
        self.assertEqual(seen, [None])

    def testCoercionFallbackUsesDefaultForBareFlag(self):
        seen = []

        def collect(value, fallback):
            seen.append(fallback)
            return value

        self.tool.option("--name", "name", collect, "anon")
        self.tool.publish("name", "x")
        self.assertEqual(seen, ["anon"])

    def testCoercionNotCalledWithoutValue(self):
        calls = []
        self.tool.option("--level [n]", "level", lambda value: calls.append(value) or value)
        self.tool.publish("level")
        self.assertEqual(calls, [])
        self.assertIs(self.tool.values["level"], True)

    def testOneArgumentLambdaCoercion(self):
        self.tool.option("--name <name>", "name", lambda value: value.upper())
        self.tool.publish("name", "ada")
        self.assertEqual(self.tool.values["name"], "ADA")

    def testDefaultedSecondParameterReceivesFallback(self):
        seen = []

        def collect(value, memo=None):
            seen.append(memo)
            return (memo or []) + [value]

        self.tool.option("--tag <t>", "tags", collect, ["x"])
        self.tool.publish("tag", "a")
        self.assertEqual(seen, [["x"]])
        self.assertEqual(self.tool.values["tag"], ["x", "a"])

    def testSingleParameterCoercionGetsValueOnly(self):
        self.tool.option("--ratio <r>", "ratio", lambda value, *, scale=10: float(value) * scale, 1.0)
        self.tool.publish("ratio", "0.5")
        self.assertEqual(self.tool.values["ratio"], 5.0)

    def testRegularExpressionCoercion(self):
        self.tool.option("--num <n>", "number", re.compile(r"\d+"))
        self.tool.publish("num", "abc123")
        self.assertEqual(self.tool.values["num"], "123")
        self.tool.publish("num", "abc")
        self.assertEqual(self.tool.values["num"], "123")

    def testRegularExpressionFallsBackToDefault(self):
        self.tool.option("--num <n>", "number", re.compile(r"\d+"), "0")
        self.tool.publish("num", "none")
        self.assertEqual(self.tool.values["num"], "0")

    def testRegularExpressionWithoutFallbackLeavesUnset(self):
        self.tool.option("--num <n>", "number", re.compile(r"\d+"))
        self.tool.publish("num", "none")
        self.assertNotIn("num", self.tool.values)

    def testLastWriteWins(self):
        self.tool.option("--name <name>")
        self.tool.publish("name", "first")
        self.tool.publish("name", "second")
        self.assertEqual(self.tool.values["name"], "second")

    def testBareFlagKeepsOtherValue(self):
        self.tool.option("--name [name]")
        self.tool.publish("name", "ada")
        self.tool.publish("name")
        self.assertEqual(self.tool.values["name"], "ada")

    def testExplicitValueOnNegatedOption(self):
        self.tool.option("--no-color")
        self.tool.publish("color", "auto")
        self.assertEqual(self.tool.values["color"], "auto")

    def testBooleanSlotReplacedByPresence(self):
        self.tool.option("-v, --verbose")
        self.tool.publish("verbose")
        self.tool.publish("verbose")
        self.assertIs(self.tool.values["verbose"], True)

    def testSlotStates(self):
        self.tool.option("--no-color")
        self.tool.option("--count <n>", "count", int)
        self.tool.publish("count", "2")
        self.assertEqual(self.tool._values.slot("color"), Boolean(True))
        self.assertEqual(self.tool._values.slot("count"), Other(2))

    def testCoercionErrorPropagates(self):
        self.tool.option("-c, --count <n>", "how many", int, 1)
        with self.assertRaises(ValueError):
            self.tool.publish("count", "five")
        self.assertEqual(self.tool.values["count"], 1)

    def testDuplicateKeysShareSlot(self):
        self.tool.option("--name <name>")
        self.tool.option("-n, --name <nick>", "nick", str.upper)
        self.assertEqual(len(self.tool.options), 2)
        self.tool.publish("name", "ada")
        # both handlers run in registration order and write the same slot
        self.assertEqual(self.tool.values["name"], "ADA")


if __name__ == "__main__":
    unittest.main()
