"""
Entry behavioral tests.

Scope
- Construction per kind: keyword normalization, verbatim names, validation.
- Satisfied/raw state transitions (satisfy, reset) and lazy decoding.
- Token matching (dispatch/flags) and lookup matching (refers).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from argosy import Engine, Entry, EntryKind, Keyword

KEY = "my_key"
ABBR = "my_abbr"
DESC = "my_desc"
VALUE = "my_value"


class TestEntryConstruction(TestCase):

    def testFlagKeywordIsNormalized(self):
        entry = Entry(EntryKind.FLAG, (KEY, ABBR), DESC)
        self.assertEqual(entry.keyword.forms, ("--" + KEY, "-" + ABBR))
        self.assertEqual(entry.spelling.forms, (KEY, ABBR))
        self.assertEqual(entry.name, "--" + KEY)
        self.assertEqual(entry.description, DESC)
        self.assertFalse(entry.satisfied)
        self.assertIsNone(entry.raw)

    def testKeyedKeywordIsNormalized(self):
        for kind in (EntryKind.MANDATORY, EntryKind.OPTIONAL):
            with self.subTest(kind=kind):
                entry = Entry(kind, Keyword(KEY, ABBR), DESC)
                self.assertEqual(entry.keyword.forms, ("--" + KEY, "-" + ABBR))

    def testPositionalNameIsVerbatim(self):
        entry = Entry(EntryKind.POSITIONAL, KEY, DESC)
        self.assertEqual(entry.keyword.primary, KEY)
        self.assertIsNone(entry.keyword.abbreviation)
        self.assertEqual(entry.name, KEY)
        self.assertIsNone(entry.raw)

    def testSubcommandNameIsVerbatim(self):
        engine = Engine(KEY)
        entry = Entry(EntryKind.SUBCOMMAND, KEY, DESC, engine=engine)
        self.assertEqual(entry.name, KEY)
        self.assertIs(entry.engine, engine)

    def testDescriptionDefaultsToNone(self):
        self.assertIsNone(Entry(EntryKind.FLAG, KEY).description)

    def testDescriptionMustBeString(self):
        with self.assertRaises(TypeError):
            Entry(EntryKind.FLAG, KEY, 1)

    def testKindMustBeEntryKind(self):
        with self.assertRaises(TypeError):
            Entry("flag", KEY)

    def testEngineOnlyForSubcommands(self):
        with self.assertRaises(TypeError):
            Entry(EntryKind.SUBCOMMAND, KEY)
        with self.assertRaises(TypeError):
            Entry(EntryKind.FLAG, KEY, engine=Engine())

    def testNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            Entry(EntryKind.POSITIONAL, (KEY, ABBR))
        with self.assertRaises(TypeError):
            Entry(EntryKind.SUBCOMMAND, Keyword(KEY), engine=Engine())

    def testReadOnlyState(self):
        entry = Entry(EntryKind.FLAG, KEY)
        with self.assertRaises(AttributeError):
            entry.satisfied = True


class TestEntryState(TestCase):

    def testFlagSatisfy(self):
        entry = Entry(EntryKind.FLAG, KEY)
        entry.satisfy()
        self.assertTrue(entry.satisfied)
        entry.reset()
        self.assertFalse(entry.satisfied)

    def testFlagRejectsValue(self):
        with self.assertRaises(TypeError):
            Entry(EntryKind.FLAG, KEY).satisfy(VALUE)

    def testValuedEntriesRequireValue(self):
        with self.assertRaises(TypeError):
            Entry(EntryKind.OPTIONAL, KEY).satisfy()

    def testOptionalUpdateValue(self):
        entry = Entry(EntryKind.OPTIONAL, (KEY, ABBR), DESC)
        self.assertIsNone(entry.value())
        entry.satisfy(VALUE)
        self.assertEqual(entry.raw, VALUE)
        self.assertEqual(entry.value(), VALUE)
        entry.reset()
        self.assertIsNone(entry.raw)
        self.assertIsNone(entry.value())

    def testMandatoryUpdateValue(self):
        entry = Entry(EntryKind.MANDATORY, (KEY, ABBR), DESC)
        entry.satisfy("3")
        self.assertEqual(entry.value(int), 3)
        self.assertEqual(entry.value(float), 3.0)

    def testPositionalUpdateValue(self):
        entry = Entry(EntryKind.POSITIONAL, KEY, DESC)
        entry.satisfy(VALUE)
        self.assertTrue(entry.satisfied)
        self.assertEqual(entry.value(), VALUE)

    def testFlagHasNoValue(self):
        with self.assertRaises(TypeError):
            Entry(EntryKind.FLAG, KEY).value()

    def testSubcommandResetClearsChildEngine(self):
        engine = Engine(KEY).add_flag("x")
        entry = Entry(EntryKind.SUBCOMMAND, KEY, engine=engine)
        engine.parse(["x"])
        entry.satisfy()
        self.assertTrue(engine.flag("x"))
        entry.reset()
        self.assertFalse(entry.satisfied)
        self.assertFalse(engine.flag("x"))


class TestEntryMatching(TestCase):

    def testFlagMatchesNormalizedAndRegisteredSpellings(self):
        entry = Entry(EntryKind.FLAG, ("flag", "f"))
        for token in ("--flag", "-f", "flag", "f"):
            with self.subTest(token=token):
                self.assertTrue(entry.matches(token))
        self.assertFalse(entry.matches("x"))
        self.assertFalse(entry.matches("--f"))

    def testKeyedMatchesNormalizedSpellingsOnly(self):
        entry = Entry(EntryKind.OPTIONAL, ("opt", "o"))
        self.assertTrue(entry.matches("--opt"))
        self.assertTrue(entry.matches("-o"))
        self.assertFalse(entry.matches("opt"))

    def testDecodeOnlyForKeyedEntries(self):
        entry = Entry(EntryKind.OPTIONAL, ("opt", "o"))
        self.assertEqual(entry.decode("-o=1").value, "1")
        with self.assertRaises(TypeError):
            Entry(EntryKind.POSITIONAL, KEY).decode(KEY)

    def testRefersIsDashInsensitive(self):
        entry = Entry(EntryKind.OPTIONAL, ("double", "d"))
        for query in ("d", "-d", "--double", "double", Keyword("double"), ("x", "d")):
            with self.subTest(query=query):
                self.assertTrue(entry.refers(query))
        self.assertFalse(entry.refers("x"))

    def testPositionalRefersByExactName(self):
        entry = Entry(EntryKind.POSITIONAL, "input")
        self.assertTrue(entry.refers("input"))
        self.assertTrue(entry.refers(Keyword("input")))
        self.assertFalse(entry.refers("--input"))


if __name__ == "__main__":
    unittest.main()
