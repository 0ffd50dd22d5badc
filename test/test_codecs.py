"""
Codec table tests.

Scope
- Built-in decoders (str passthrough, int, float).
- Decode failures (DecodeError) versus unknown target types (TypeError).
- Registration of extra decoders.
"""
import unittest
from unittest import TestCase

from argosy import codecs
from argosy.codecs import DecodeError, convert, decoder, register


class TestBuiltinDecoders(TestCase):

    def testStringPassthrough(self):
        self.assertEqual(convert("value"), "value")
        self.assertEqual(convert("", str), "")

    def testInteger(self):
        self.assertEqual(convert("42", int), 42)
        self.assertEqual(convert("-7", int), -7)
        self.assertEqual(convert("08", int), 8)

    def testPrefixedInteger(self):
        self.assertEqual(convert("0x1f", int), 31)
        self.assertEqual(convert("0o17", int), 15)
        self.assertEqual(convert("-0b101", int), -5)

    def testFloat(self):
        self.assertEqual(convert("3.14", float), 3.14)
        self.assertEqual(convert("1e-3", float), 0.001)

    def testUndecodableRaisesDecodeError(self):
        with self.assertRaises(DecodeError) as context:
            convert("3.14", int)
        self.assertEqual(context.exception.raw, "3.14")
        self.assertIs(context.exception.type, int)
        self.assertIsInstance(context.exception, ValueError)

        with self.assertRaises(DecodeError):
            convert("abc", float)

    def testUnknownTypeIsProgrammingError(self):
        with self.assertRaises(TypeError):
            convert("1", bool)
        with self.assertRaises(TypeError):
            decoder(bool)

    def testRawMustBeString(self):
        with self.assertRaises(TypeError):
            convert(1, int)


class TestRegister(TestCase):

    def setUp(self):
        self.addCleanup(codecs._decoders.pop, complex, None)

    def testRegisteredDecoderIsUsed(self):
        @register(complex)
        def _complex(raw):
            return complex(raw)

        self.assertIs(decoder(complex), _complex)
        self.assertEqual(convert("1+2j", complex), 1 + 2j)

    def testRegisteredDecoderValueErrorBecomesDecodeError(self):
        register(complex)(complex)
        with self.assertRaises(DecodeError):
            convert("not-a-number", complex)

    def testRegisterValidation(self):
        with self.assertRaises(TypeError):
            register("complex")
        with self.assertRaises(TypeError):
            register(complex)("not callable")


if __name__ == "__main__":
    unittest.main()
